from __future__ import annotations

from typing import Any, Callable, Generic, List, Optional, TypeVar

from .config import Settings
from .inputs import InputLoader, example_identifier, puzzle_identifier
from .report import Reporter
from .results_store import FileResultsStore, ResultsCache
from .schemas import (
    SKIP,
    ExampleSpec,
    ProblemIdentity,
    RunReport,
    StepResult,
    TimedEvaluation,
)
from .timing import time_evaluation
from .validator import validate

A = TypeVar("A")

SolveFn = Callable[[List[str]], A]


class Problem(Generic[A]):
    """One Advent of Code puzzle part bound to its solving function.

    ``execute`` runs the example (unless it is ``SKIP``), checks it against the
    expected solution, then runs the puzzle input and records the result in
    the results cache. Nothing is evaluated when the puzzle input is missing.
    """

    def __init__(
        self,
        year: int,
        day: int,
        part: int,
        example: ExampleSpec,
        solve: SolveFn[A],
        *,
        name: Optional[str] = None,
        settings: Optional[Settings] = None,
        loader: Optional[InputLoader] = None,
        cache: Optional[ResultsCache] = None,
        reporter: Optional[Reporter] = None,
    ) -> None:
        self.identity = ProblemIdentity(year=year, day=day, part=part)
        self.example = example
        self.solve = solve
        self.name = name or getattr(solve, "__name__", type(solve).__name__)
        self.settings = settings
        self.loader = loader
        self.cache = cache
        self.reporter = reporter

    @property
    def year(self) -> int:
        return self.identity.year

    @property
    def day(self) -> int:
        return self.identity.day

    @property
    def part(self) -> int:
        return self.identity.part

    def __str__(self) -> str:
        return f"Day {self.day}: {self.name} ({self.year})"

    def _settings(self) -> Settings:
        if self.settings is None:
            self.settings = Settings()
        return self.settings

    def _reporter(self) -> Reporter:
        if self.reporter is None:
            self.reporter = Reporter()
        return self.reporter

    def _loader(self) -> InputLoader:
        if self.loader is None:
            self.loader = InputLoader(self._settings().input_dir, reporter=self._reporter())
        return self.loader

    def _cache(self) -> ResultsCache:
        if self.cache is None:
            self.cache = ResultsCache(FileResultsStore(self._settings().results_file))
        return self.cache

    def _evaluate(
        self, step: str, data: List[str], reporter: Reporter
    ) -> StepResult[A]:
        try:
            evaluation = time_evaluation(self.solve, data)
        except Exception as exc:  # noqa: BLE001
            reporter.solving_error(step, exc)
            return StepResult(
                step=step, failure="SOLVING_ERROR", detail=f"{type(exc).__name__}: {exc}"
            )
        return StepResult(step=step, evaluation=evaluation)

    def _solve_example(self, reporter: Reporter) -> StepResult[A]:
        example = self.example
        data = self._loader().load("examples", self.year, example_identifier(self.day, example.kind))
        if data is None:
            return StepResult(step="example", failure="READ_FAILURE")
        step = self._evaluate("example", data, reporter)
        evaluation = step.evaluation
        if step.failure is not None or evaluation is None:
            return step
        if validate(evaluation, example.solution) == "MISMATCH":
            reporter.mismatch(example.solution, evaluation)
            return StepResult(
                step="example",
                evaluation=evaluation,
                failure="EXAMPLE_MISMATCH",
                detail=f"expected {example.solution!r}, got {evaluation.result!r}",
            )
        reporter.success("example", evaluation)
        return step

    def _solve_puzzle(self, data: List[str], reporter: Reporter) -> StepResult[A]:
        step = self._evaluate("puzzle", data, reporter)
        if step.failure is None and step.evaluation is not None:
            reporter.success("puzzle", step.evaluation)
        return step

    def run(self, print_result: Optional[bool] = None) -> RunReport[A]:
        settings = self._settings()
        if print_result is None:
            print_result = settings.print_results
        reporter = self._reporter() if print_result else self._reporter().muted()
        report: RunReport[A] = RunReport(identity=self.identity)

        puzzle_input = self._loader().load("puzzles", self.year, puzzle_identifier(self.day))
        if puzzle_input is None:
            report.steps.append(StepResult(step="puzzle", failure="READ_FAILURE"))
            return report

        if settings.clear_screen:
            reporter.clear()
        reporter.info(str(self))

        if self.example.kind == "skip":
            reporter.info("No example provided, evaluating puzzle input...")
        else:
            reporter.info("Evaluating example input...")
            example_step = self._solve_example(reporter)
            report.steps.append(example_step)
            if not example_step.ok:
                return report
            reporter.info("Evaluating puzzle input...")

        puzzle_step = self._solve_puzzle(puzzle_input, reporter)
        report.steps.append(puzzle_step)
        outcome = report.outcome
        if outcome is None:
            return report
        try:
            report.persisted = self._cache().persist(self.identity, outcome)
        except OSError as exc:
            reporter.error(f"when writing results: {exc}", force=True)
        return report

    def execute(self, print_result: Optional[bool] = None) -> Optional[TimedEvaluation[A]]:
        return self.run(print_result).outcome


def problem(
    year: int,
    day: int,
    part: int,
    example: ExampleSpec = SKIP,
    *,
    name: Optional[str] = None,
    **kwargs: Any,
) -> Callable[[SolveFn[A]], Problem[A]]:
    def wrap(solve: SolveFn[A]) -> Problem[A]:
        return Problem(year, day, part, example, solve, name=name, **kwargs)

    return wrap

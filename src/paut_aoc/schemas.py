from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, List, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

A = TypeVar("A")

RECORD_SEPARATOR = ";"
RECORD_FIELDS = 7

FailureKind = Literal["READ_FAILURE", "SOLVING_ERROR", "EXAMPLE_MISMATCH"]
ExampleVerdict = Literal["MATCH", "MISMATCH"]


class ProblemIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int = Field(ge=2015)
    day: int = Field(ge=1, le=25)
    part: Literal[1, 2]

    @property
    def key(self) -> tuple[int, int, int]:
        return (self.year, self.day, self.part)


@dataclass(frozen=True)
class Primary:
    solution: Any
    kind: Literal["primary"] = field(default="primary", init=False)


@dataclass(frozen=True)
class Secondary:
    solution: Any
    kind: Literal["secondary"] = field(default="secondary", init=False)


@dataclass(frozen=True)
class Skip:
    kind: Literal["skip"] = field(default="skip", init=False)


SKIP = Skip()

ExampleSpec = Union[Primary, Secondary, Skip]


@dataclass(frozen=True)
class TimedEvaluation(Generic[A]):
    result: A
    duration: float


@dataclass
class StepResult(Generic[A]):
    step: Literal["example", "puzzle"]
    evaluation: Optional[TimedEvaluation[A]] = None
    failure: Optional[FailureKind] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None and self.evaluation is not None


@dataclass
class RunReport(Generic[A]):
    identity: ProblemIdentity
    steps: List[StepResult[A]] = field(default_factory=list)
    persisted: bool = False

    @property
    def outcome(self) -> Optional[TimedEvaluation[A]]:
        if not self.steps:
            return None
        last = self.steps[-1]
        if last.step != "puzzle" or not last.ok:
            return None
        return last.evaluation

    @property
    def failure(self) -> Optional[FailureKind]:
        for step in self.steps:
            if step.failure is not None:
                return step.failure
        return None


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n").replace("\r", "\\r")


def _unescape(text: str) -> str:
    out: List[str] = []
    chars = iter(text)
    for char in chars:
        if char != "\\":
            out.append(char)
            continue
        nxt = next(chars, "")
        if nxt == "n":
            out.append("\n")
        elif nxt == "r":
            out.append("\r")
        else:
            out.append(nxt)
    return "".join(out)


class RecordParseError(ValueError):
    pass


class ResultRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    day: int
    part: int
    solution: str
    duration: float = Field(ge=0.0)
    recorded_at: datetime
    submitted: bool = False

    @property
    def key(self) -> tuple[int, int, int]:
        return (self.year, self.day, self.part)

    def raw(self) -> str:
        fields = [
            str(self.year),
            str(self.day),
            str(self.part),
            _escape(self.solution),
            repr(float(self.duration)),
            self.recorded_at.isoformat(),
            "true" if self.submitted else "false",
        ]
        return RECORD_SEPARATOR.join(fields)

    @classmethod
    def parse(cls, line: str) -> "ResultRecord":
        parts = line.rstrip("\r\n").split(RECORD_SEPARATOR)
        if len(parts) < RECORD_FIELDS:
            raise RecordParseError(f"expected {RECORD_FIELDS} fields, got {len(parts)}")
        year, day, part = parts[:3]
        duration, recorded_at, submitted = parts[-3:]
        solution = RECORD_SEPARATOR.join(parts[3:-3])
        if submitted not in {"true", "false"}:
            raise RecordParseError(f"invalid submitted flag: {submitted!r}")
        try:
            return cls(
                year=int(year),
                day=int(day),
                part=int(part),
                solution=_unescape(solution),
                duration=float(duration),
                recorded_at=datetime.fromisoformat(recorded_at),
                submitted=submitted == "true",
            )
        except ValueError as exc:
            raise RecordParseError(str(exc)) from exc

    def as_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

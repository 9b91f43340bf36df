from __future__ import annotations

import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import Settings
from .dates import (
    FIRST_YEAR,
    LAST_DAY,
    available_days,
    available_years,
    date_for,
    resolve_year,
    today,
)
from .harness import Problem
from .inputs import InputLoader
from .report import Reporter
from .results_store import FileResultsStore, ResultsCache
from .schemas import ProblemIdentity, ResultRecord
from .utils import canonical_dumps, format_duration, read_json

app = typer.Typer(help="Advent of Code execution harness")
results_app = typer.Typer(help="Results cache commands")
app.add_typer(results_app, name="results")
console = Console()

CONFIG_OPTION = typer.Option(None, "--config", exists=True, dir_okay=False)
JSON_OPTION = typer.Option(False, "--json")
ATTR_OPTION = typer.Option("problem", "--attr", help="Name of the Problem in the module.")
QUIET_OPTION = typer.Option(False, "--quiet", "-q")
YEAR_OPTION = typer.Option(None, "--year", min=FIRST_YEAR)
PART_OPTION = typer.Option(None, "--part", min=1, max=2)


@app.callback()
def main() -> None:
    pass


def _load_settings(config: Optional[Path]) -> Settings:
    if config is None:
        return Settings()
    data = read_json(config)
    return Settings(**data)


def _cache(settings: Settings) -> ResultsCache:
    return ResultsCache(FileResultsStore(settings.results_file))


def _import_solution(path: Path) -> ModuleType:
    module_name = f"paut_aoc_solution_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise typer.BadParameter(f"cannot import {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


def _records_table(records: List[ResultRecord]) -> Table:
    table = Table(title="Results")
    for column in ("Year", "Day", "Part", "Solution", "Time", "Recorded", "Submitted"):
        table.add_column(column)
    for record in records:
        table.add_row(
            str(record.year),
            str(record.day),
            str(record.part),
            record.solution,
            format_duration(record.duration),
            record.recorded_at.isoformat(timespec="seconds"),
            "yes" if record.submitted else "no",
        )
    return table


@app.command("run")
def run_cmd(
    solution_file: Path = typer.Argument(..., exists=True, dir_okay=False),
    attr: str = ATTR_OPTION,
    quiet: bool = QUIET_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
) -> None:
    settings = _load_settings(config)
    module = _import_solution(solution_file)
    target = getattr(module, attr, None)
    if not isinstance(target, Problem):
        raise typer.BadParameter(f"{solution_file} has no Problem named {attr!r}")
    reporter = Reporter(console)
    target.settings = settings
    target.reporter = target.reporter or reporter
    target.loader = target.loader or InputLoader(settings.input_dir, reporter=target.reporter)
    target.cache = target.cache or _cache(settings)
    outcome = target.execute(print_result=not quiet and settings.print_results)
    if outcome is None:
        raise typer.Exit(code=1)


@results_app.command("list")
def results_list(
    as_json: bool = JSON_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
) -> None:
    records = sorted(_cache(_load_settings(config)).records(), key=lambda r: r.key)
    if as_json:
        typer.echo(canonical_dumps([record.as_json() for record in records]).decode("utf-8"))
        return
    console.print(_records_table(records))


@results_app.command("get")
def results_get(
    day: int = typer.Argument(..., min=1, max=25),
    part: Optional[int] = PART_OPTION,
    year: Optional[int] = YEAR_OPTION,
    as_json: bool = JSON_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
) -> None:
    settings = _load_settings(config)
    resolved_year = resolve_year(year, settings)
    cache = _cache(settings)
    parts = [part] if part is not None else [1, 2]
    records = []
    for candidate in parts:
        record = cache.get(ProblemIdentity(year=resolved_year, day=day, part=candidate))
        if record is not None:
            records.append(record)
    if not records:
        console.print(f"No results stored for day {day} ({resolved_year})")
        raise typer.Exit(code=1)
    if as_json:
        typer.echo(canonical_dumps([record.as_json() for record in records]).decode("utf-8"))
        return
    console.print(_records_table(records))


@results_app.command("mark-submitted")
def results_mark_submitted(
    year: int = typer.Argument(..., min=FIRST_YEAR),
    day: int = typer.Argument(..., min=1, max=25),
    part: int = typer.Argument(..., min=1, max=2),
    config: Optional[Path] = CONFIG_OPTION,
) -> None:
    identity = ProblemIdentity(year=year, day=day, part=part)
    record = _cache(_load_settings(config)).mark_submitted(identity)
    if record is None:
        console.print(f"No result stored for {year} day {day} part {part}")
        raise typer.Exit(code=1)
    console.print({"year": year, "day": day, "part": part, "submitted": record.submitted})


@app.command("dates")
def dates_cmd(
    year: Optional[int] = YEAR_OPTION,
    as_json: bool = JSON_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
) -> None:
    current = today()
    resolved_year = resolve_year(year, _load_settings(config), current)
    if resolved_year == current.year and current.month == 12:
        days = available_days(current)
    elif resolved_year < current.year:
        days = list(range(1, LAST_DAY + 1))
    else:
        days = []
    payload = {
        "today": current.isoformat(),
        "years": available_years(current),
        "year": resolved_year,
        "days": days,
        "release_dates": [date_for(day, resolved_year).isoformat() for day in days],
    }
    if as_json:
        typer.echo(canonical_dumps(payload).decode("utf-8"))
        return
    console.print(payload)


if __name__ == "__main__":
    app()

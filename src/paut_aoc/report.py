from __future__ import annotations

import traceback
from pathlib import Path
from typing import Any, List, Optional

from rich.console import Console
from rich.markup import escape

from .schemas import TimedEvaluation
from .utils import format_duration

PACKAGE_DIR = Path(__file__).resolve().parent


def tiny_stack(exc: BaseException) -> List[str]:
    """Traceback frames that belong to the solving code, harness frames dropped."""
    frames = traceback.extract_tb(exc.__traceback__)
    lines: List[str] = []
    for frame in frames:
        if Path(frame.filename).resolve().parent == PACKAGE_DIR:
            continue
        lines.append(f"{frame.filename}:{frame.lineno} in {frame.name}")
    return lines


class Reporter:
    def __init__(self, console: Optional[Console] = None, enabled: bool = True) -> None:
        self.console = console or Console(highlight=False)
        self.enabled = enabled

    def muted(self) -> "Reporter":
        return Reporter(self.console, enabled=False)

    def _print(self, text: str = "", force: bool = False) -> None:
        if self.enabled or force:
            self.console.print(text)

    def clear(self) -> None:
        if self.enabled:
            self.console.clear()

    def info(self, message: str) -> None:
        self._print(f"[[cyan]+[/cyan]] {escape(message)}")

    def error(self, message: str, force: bool = False) -> None:
        self._print(f"[[red]![/red]] [red]Something went wrong[/red] {escape(message)}", force)

    def success(self, name: str, evaluation: TimedEvaluation[Any]) -> None:
        self._print(f"[[green]o[/green]] [green]{escape(name.capitalize())} solution found![/green]")
        self._print(f"    Output: [yellow]{escape(str(evaluation.result))}[/yellow]")
        self._print(f"    Time: {format_duration(evaluation.duration)}")
        self._print()

    def mismatch(self, expected: Any, evaluation: TimedEvaluation[Any]) -> None:
        self._print("[[red]![/red]] [red]Example failed![/red]")
        self._print(f"    Expected: [cyan]{escape(str(expected))}[/cyan]")
        self._print(f"    Actual:   [yellow]{escape(str(evaluation.result))}[/yellow]")
        self._print(f"    Time: {format_duration(evaluation.duration)}")

    def solving_error(self, name: str, exc: BaseException) -> None:
        self.error(f"when solving the {name} problem:")
        self._print(f"[[red]![/red]] {escape(type(exc).__name__)}: {escape(str(exc))}")
        for line in tiny_stack(exc):
            self._print(f"      {escape(line)}")

    def read_error(self, identifier: str, folder: str, year: int, exc: BaseException) -> None:
        # read failures are reported even when progress output is off
        self.error(f"when reading {identifier} in {folder}/{year}:", force=True)
        self._print(f"    {escape(str(exc))}", force=True)

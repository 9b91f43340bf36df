from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, List

import pytest
from rich.console import Console

from paut_aoc.config import Settings
from paut_aoc.inputs import InputLoader
from paut_aoc.report import Reporter
from paut_aoc.results_store import MemoryResultsStore, ResultsCache

InputWriter = Callable[[str, int, str, List[str]], Path]


@pytest.fixture
def console_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def reporter(console_buffer: io.StringIO) -> Reporter:
    console = Console(file=console_buffer, force_terminal=False, color_system=None, width=200)
    return Reporter(console)


@pytest.fixture
def input_root(tmp_path: Path) -> Path:
    root = tmp_path / "input"
    root.mkdir()
    return root


@pytest.fixture
def write_input(input_root: Path) -> InputWriter:
    def _write(category: str, year: int, identifier: str, lines: List[str]) -> Path:
        path = input_root / category / str(year) / identifier
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def loader(input_root: Path, reporter: Reporter) -> InputLoader:
    return InputLoader(input_root, reporter=reporter)


@pytest.fixture
def memory_store() -> MemoryResultsStore:
    return MemoryResultsStore()


@pytest.fixture
def memory_cache(memory_store: MemoryResultsStore) -> ResultsCache:
    return ResultsCache(memory_store)


@pytest.fixture
def settings(tmp_path: Path, input_root: Path) -> Settings:
    return Settings(input_dir=input_root, results_file=tmp_path / "results.txt")

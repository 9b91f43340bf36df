from __future__ import annotations

from pathlib import Path
from typing import List, Literal, Optional

from .report import Reporter
from .utils import split_lines

Category = Literal["examples", "puzzles"]


def puzzle_identifier(day: int) -> str:
    return f"{day}.txt"


def example_identifier(day: int, variant: Literal["primary", "secondary"]) -> str:
    return f"{day}-{variant}.txt"


class InputLoader:
    def __init__(self, root: Path, reporter: Optional[Reporter] = None) -> None:
        self.root = Path(root)
        self.reporter = reporter or Reporter()

    def path_for(self, category: Category, year: int, identifier: str) -> Path:
        return self.root / category / str(year) / identifier

    def load(self, category: Category, year: int, identifier: str) -> Optional[List[str]]:
        path = self.path_for(category, year, identifier)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            self.reporter.read_error(identifier, category, year, exc)
            return None
        return split_lines(text)

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def default_results_file() -> Path:
    return Path.home() / ".paut" / "aoc" / "results.txt"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PAUT_AOC_")

    input_dir: Path = Path("input")
    results_file: Path = Field(default_factory=default_results_file)
    print_results: bool = True
    clear_screen: bool = False
    default_year: Optional[int] = None

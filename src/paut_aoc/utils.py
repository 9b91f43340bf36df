from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

import orjson


def canonical_dumps(data: Any) -> bytes:
    return orjson.dumps(data, option=orjson.OPT_SORT_KEYS)


def read_json(path: Path) -> Any:
    return orjson.loads(path.read_bytes())


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def now_local() -> datetime:
    return datetime.now()


def format_duration(seconds: float) -> str:
    return f"{seconds:2.6f} s"


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, tolerating ``\\r\\n`` and a trailing newline."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]

"""Durable best-known results, one `;`-separated record per line.

The read-modify-write in :meth:`ResultsCache.persist` is not locked. Two
processes persisting the same key at once can lose one of the writes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Protocol, Tuple

from .schemas import ProblemIdentity, RecordParseError, ResultRecord, TimedEvaluation
from .utils import ensure_dir, now_local, split_lines


class ResultsStore(Protocol):
    def read(self) -> Optional[str]: ...

    def write(self, text: str) -> None: ...

    def append(self, text: str) -> None: ...


class FileResultsStore:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def write(self, text: str) -> None:
        ensure_dir(self.path.parent)
        self.path.write_text(text, encoding="utf-8")

    def append(self, text: str) -> None:
        ensure_dir(self.path.parent)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(text)


class MemoryResultsStore:
    def __init__(self, text: Optional[str] = None) -> None:
        self.text = text
        self.writes = 0

    def read(self) -> Optional[str]:
        return self.text

    def write(self, text: str) -> None:
        self.text = text
        self.writes += 1

    def append(self, text: str) -> None:
        self.text = (self.text or "") + text
        self.writes += 1


def should_replace(existing: ResultRecord, solution: str, duration: float) -> bool:
    return existing.submitted and existing.solution == solution and existing.duration > duration


class ResultsCache:
    def __init__(self, store: ResultsStore) -> None:
        self.store = store

    def _lines(self) -> List[str]:
        text = self.store.read()
        if not text:
            return []
        return split_lines(text)

    def _find(self, lines: List[str], key: Tuple[int, int, int]) -> Optional[Tuple[int, ResultRecord]]:
        for idx, line in enumerate(lines):
            try:
                record = ResultRecord.parse(line)
            except RecordParseError:
                continue
            if record.key == key:
                return idx, record
        return None

    def _write_lines(self, lines: List[str]) -> None:
        self.store.write("".join(f"{line}\n" for line in lines))

    def _append(self, record: ResultRecord) -> None:
        text = self.store.read()
        prefix = "\n" if text and not text.endswith("\n") else ""
        self.store.append(f"{prefix}{record.raw()}\n")

    def records(self) -> List[ResultRecord]:
        records: List[ResultRecord] = []
        for line in self._lines():
            try:
                records.append(ResultRecord.parse(line))
            except RecordParseError:
                continue
        return records

    def get(self, identity: ProblemIdentity) -> Optional[ResultRecord]:
        found = self._find(self._lines(), identity.key)
        return found[1] if found else None

    def persist(self, identity: ProblemIdentity, evaluation: TimedEvaluation[Any]) -> bool:
        """Record a confirmed outcome; returns True when the store was changed."""
        solution = str(evaluation.result)
        lines = self._lines()
        found = self._find(lines, identity.key)
        if found is None:
            self._append(
                ResultRecord(
                    year=identity.year,
                    day=identity.day,
                    part=identity.part,
                    solution=solution,
                    duration=evaluation.duration,
                    recorded_at=now_local(),
                    submitted=False,
                )
            )
            return True
        idx, existing = found
        if not should_replace(existing, solution, evaluation.duration):
            return False
        lines[idx] = existing.model_copy(
            update={"duration": evaluation.duration, "recorded_at": now_local()}
        ).raw()
        self._write_lines(lines)
        return True

    def mark_submitted(self, identity: ProblemIdentity) -> Optional[ResultRecord]:
        lines = self._lines()
        found = self._find(lines, identity.key)
        if found is None:
            return None
        idx, existing = found
        if existing.submitted:
            return existing
        updated = existing.model_copy(update={"submitted": True})
        lines[idx] = updated.raw()
        self._write_lines(lines)
        return updated

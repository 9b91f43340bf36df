from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from paut_aoc.results_store import (
    FileResultsStore,
    MemoryResultsStore,
    ResultsCache,
    should_replace,
)
from paut_aoc.schemas import ProblemIdentity, ResultRecord, TimedEvaluation

IDENTITY = ProblemIdentity(year=2023, day=1, part=1)


def _record(solution: str = "42", duration: float = 1.5, submitted: bool = True) -> ResultRecord:
    return ResultRecord(
        year=2023,
        day=1,
        part=1,
        solution=solution,
        duration=duration,
        recorded_at=datetime(2023, 12, 1, 6, 0, 0),
        submitted=submitted,
    )


def _seeded(record: ResultRecord) -> tuple[ResultsCache, MemoryResultsStore]:
    store = MemoryResultsStore(record.raw() + "\n")
    return ResultsCache(store), store


def test_persist_appends_new_record_unsubmitted(memory_cache: ResultsCache) -> None:
    changed = memory_cache.persist(IDENTITY, TimedEvaluation(result=42, duration=0.25))
    assert changed is True
    record = memory_cache.get(IDENTITY)
    assert record is not None
    assert record.solution == "42"
    assert record.duration == 0.25
    assert record.submitted is False


def test_persist_twice_keeps_single_record(memory_cache: ResultsCache) -> None:
    evaluation = TimedEvaluation(result=42, duration=0.25)
    memory_cache.persist(IDENTITY, evaluation)
    assert memory_cache.persist(IDENTITY, evaluation) is False
    assert len(memory_cache.records()) == 1


def test_faster_identical_submitted_solution_replaces_record() -> None:
    cache, _ = _seeded(_record(duration=1.5))
    assert cache.persist(IDENTITY, TimedEvaluation(result=42, duration=0.5)) is True
    record = cache.get(IDENTITY)
    assert record is not None
    assert record.duration == 0.5
    assert record.submitted is True
    assert len(cache.records()) == 1


def test_equal_or_slower_duration_leaves_record() -> None:
    original = _record(duration=1.5)
    for duration in (1.5, 2.0):
        cache, store = _seeded(original)
        assert cache.persist(IDENTITY, TimedEvaluation(result=42, duration=duration)) is False
        assert store.writes == 0
        assert cache.get(IDENTITY) == original


def test_different_solution_never_replaces() -> None:
    original = _record(duration=1.5)
    cache, store = _seeded(original)
    assert cache.persist(IDENTITY, TimedEvaluation(result=41, duration=0.001)) is False
    assert store.writes == 0
    assert cache.get(IDENTITY) == original


def test_unsubmitted_record_is_not_replaced() -> None:
    original = _record(duration=1.5, submitted=False)
    cache, _ = _seeded(original)
    assert cache.persist(IDENTITY, TimedEvaluation(result=42, duration=0.1)) is False
    assert cache.get(IDENTITY) == original


def test_formatted_differently_is_not_an_improvement() -> None:
    assert not should_replace(_record(solution="42"), "42.0", 0.1)
    assert should_replace(_record(solution="42"), "42", 0.1)


def test_overwrite_touches_only_matching_line() -> None:
    other = ResultRecord(
        year=2022,
        day=5,
        part=2,
        solution="CMZ",
        duration=0.3,
        recorded_at=datetime(2022, 12, 5),
        submitted=True,
    )
    target = _record(duration=2.0)
    store = MemoryResultsStore(f"{other.raw()}\n{target.raw()}\nnot a record\n")
    cache = ResultsCache(store)
    cache.persist(IDENTITY, TimedEvaluation(result=42, duration=1.0))
    lines = (store.text or "").splitlines()
    assert lines[0] == other.raw()
    assert ResultRecord.parse(lines[1]).duration == 1.0
    assert lines[2] == "not a record"


def test_key_match_is_exact() -> None:
    day_twelve = ResultRecord(
        year=2023,
        day=12,
        part=1,
        solution="7",
        duration=1.0,
        recorded_at=datetime(2023, 12, 12),
        submitted=True,
    )
    cache, _ = _seeded(day_twelve)
    assert cache.get(IDENTITY) is None
    cache.persist(IDENTITY, TimedEvaluation(result=42, duration=0.2))
    assert len(cache.records()) == 2


def test_mark_submitted_sets_flag_once() -> None:
    cache, _ = _seeded(_record(submitted=False))
    record = cache.mark_submitted(IDENTITY)
    assert record is not None and record.submitted is True
    assert cache.get(IDENTITY).submitted is True  # type: ignore[union-attr]
    assert cache.mark_submitted(ProblemIdentity(year=2023, day=2, part=1)) is None


def test_file_store_sequential_persists_do_not_corrupt(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "results.txt"
    cache = ResultsCache(FileResultsStore(path))
    for day in range(1, 4):
        for part in (1, 2):
            identity = ProblemIdentity(year=2023, day=day, part=part)
            cache.persist(identity, TimedEvaluation(result=day * 10 + part, duration=0.5))
    cache.mark_submitted(ProblemIdentity(year=2023, day=2, part=1))
    cache.persist(ProblemIdentity(year=2023, day=2, part=1), TimedEvaluation(result=21, duration=0.1))
    cache.persist(ProblemIdentity(year=2023, day=2, part=1), TimedEvaluation(result=21, duration=0.1))

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 6
    records = [ResultRecord.parse(line) for line in lines]
    assert len({record.key for record in records}) == 6
    improved = cache.get(ProblemIdentity(year=2023, day=2, part=1))
    assert improved is not None
    assert improved.duration == 0.1
    assert improved.submitted is True


def test_file_store_appends_after_missing_trailing_newline(tmp_path: Path) -> None:
    path = tmp_path / "results.txt"
    path.write_text(_record().raw(), encoding="utf-8")
    cache = ResultsCache(FileResultsStore(path))
    cache.persist(ProblemIdentity(year=2023, day=2, part=1), TimedEvaluation(result=1, duration=0.1))
    assert len(cache.records()) == 2


def test_missing_file_reads_as_empty(tmp_path: Path) -> None:
    cache = ResultsCache(FileResultsStore(tmp_path / "absent.txt"))
    assert cache.records() == []
    assert cache.get(IDENTITY) is None


@pytest.mark.parametrize("solution", ["#..#\x0c.##.", "a\u2028b", "x\x0by\x1cz\x85"])
def test_solutions_with_unicode_line_breaks_stay_one_record(solution: str) -> None:
    store = MemoryResultsStore()
    cache = ResultsCache(store)
    evaluation = TimedEvaluation(result=solution, duration=0.5)
    cache.persist(IDENTITY, evaluation)
    assert cache.persist(IDENTITY, evaluation) is False
    assert len((store.text or "").split("\n")) == 2
    record = cache.get(IDENTITY)
    assert record is not None
    assert record.solution == solution

    cache.mark_submitted(IDENTITY)
    cache.persist(IDENTITY, TimedEvaluation(result=solution, duration=0.1))
    records = cache.records()
    assert len(records) == 1
    assert records[0].duration == 0.1
    assert records[0].solution == solution

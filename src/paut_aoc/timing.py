from __future__ import annotations

import time
from typing import Callable, List, TypeVar

from .schemas import TimedEvaluation

A = TypeVar("A")


def time_evaluation(solve: Callable[[List[str]], A], data: List[str]) -> TimedEvaluation[A]:
    # exceptions from solve propagate to the harness unchanged
    start = time.perf_counter()
    result = solve(data)
    duration = time.perf_counter() - start
    return TimedEvaluation(result=result, duration=max(duration, 0.0))

from __future__ import annotations

from typing import Any

from .schemas import ExampleVerdict, TimedEvaluation


def validate(evaluation: TimedEvaluation[Any], expected: Any) -> ExampleVerdict:
    if evaluation.result == expected:
        return "MATCH"
    return "MISMATCH"

from .harness import Problem, problem
from .schemas import SKIP, Primary, ProblemIdentity, ResultRecord, Secondary, Skip

__all__ = [
    "Primary",
    "Problem",
    "ProblemIdentity",
    "ResultRecord",
    "SKIP",
    "Secondary",
    "Skip",
    "problem",
]

from .due_selector import DueCandidate, DueSelector
from .scheduling_policy import REVIEW_INTERVALS, SchedulingPolicy
from .streak_calculator import StreakCalculator, StreakSummary

__all__ = [
    "REVIEW_INTERVALS",
    "DueCandidate",
    "DueSelector",
    "SchedulingPolicy",
    "StreakCalculator",
    "StreakSummary",
]

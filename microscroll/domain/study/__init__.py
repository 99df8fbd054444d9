"""Study domain module."""

from .entities.card_progress import MAX_LEVEL, CardProgress
from .entities.study_session import SessionMode, SessionStatus, StudySession
from .exceptions import SessionAlreadyEndedError
from .services.due_selector import DueCandidate, DueSelector
from .services.scheduling_policy import REVIEW_INTERVALS, SchedulingPolicy
from .services.streak_calculator import StreakCalculator, StreakSummary

__all__ = [
    "MAX_LEVEL",
    "REVIEW_INTERVALS",
    "CardProgress",
    "DueCandidate",
    "DueSelector",
    "SchedulingPolicy",
    "SessionAlreadyEndedError",
    "SessionMode",
    "SessionStatus",
    "StreakCalculator",
    "StreakSummary",
    "StudySession",
]

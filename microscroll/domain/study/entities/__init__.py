from .card_progress import MAX_LEVEL, CardProgress
from .study_session import SessionMode, SessionStatus, StudySession

__all__ = [
    "MAX_LEVEL",
    "CardProgress",
    "SessionMode",
    "SessionStatus",
    "StudySession",
]

from .card_progress_repository import CardProgressRepository
from .card_repository import CardRepository
from .deck_repository import DeckRepository
from .study_session_repository import StudySessionRepository

__all__ = [
    "CardProgressRepository",
    "CardRepository",
    "DeckRepository",
    "StudySessionRepository",
]

"""Ports the study use cases depend on."""

from .card_progress_repository import CardProgressRepositoryProtocol
from .card_repository import CardRepositoryProtocol
from .deck_access import DeckAccess, DeckAccessProtocol
from .study_session_repository import SessionTotals, StudySessionRepositoryProtocol

__all__ = [
    "CardProgressRepositoryProtocol",
    "CardRepositoryProtocol",
    "DeckAccess",
    "DeckAccessProtocol",
    "SessionTotals",
    "StudySessionRepositoryProtocol",
]

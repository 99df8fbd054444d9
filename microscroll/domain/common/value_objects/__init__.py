"""Common value objects shared across all domain modules."""

from .content_hash import ContentHash
from .ids import (
    CardId,
    CardProgressId,
    DeckId,
    StudySessionId,
    UserId,
)

__all__ = [
    # IDs
    "CardId",
    "CardProgressId",
    "ContentHash",
    "DeckId",
    "StudySessionId",
    "UserId",
]

"""Protocol for the deck store's authorization capability."""

from enum import StrEnum
from typing import Protocol

from microscroll.domain.common.value_objects import DeckId, UserId


class DeckAccess(StrEnum):
    OWNER = "owner"
    PUBLIC = "public"
    DENIED = "denied"
    NOT_FOUND = "not_found"

    @property
    def allowed(self) -> bool:
        return self in (DeckAccess.OWNER, DeckAccess.PUBLIC)


class DeckAccessProtocol(Protocol):
    """Single entry point for every deck ownership/visibility check."""

    def can_access_deck(self, user_id: UserId, deck_id: DeckId) -> DeckAccess:
        """
        Resolve how a user may see a deck.

        Args:
            user_id: The requesting user
            deck_id: The deck ID

        Returns:
            OWNER or PUBLIC when readable, DENIED for someone else's private
            deck, NOT_FOUND when the deck does not exist
        """
        ...

    def find_title(self, deck_id: DeckId) -> str | None:
        """Title of a deck, None when it does not exist."""
        ...

    def count_owned(self, user_id: UserId) -> int:
        """Count decks owned by a user."""
        ...

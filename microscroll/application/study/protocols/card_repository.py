"""Protocol for read-only card lookups used by the study engine."""

from typing import Protocol

from microscroll.domain.common.value_objects import CardId, DeckId, UserId
from microscroll.domain.study.services.due_selector import DueCandidate


class CardRepositoryProtocol(Protocol):
    """Protocol for Card repository operations in study context."""

    def find_deck_id(self, card_id: CardId) -> DeckId | None:
        """
        Find the deck a card belongs to.

        Args:
            card_id: The card ID

        Returns:
            The owning deck ID, or None if the card does not exist
        """
        ...

    def find_due_candidates(
        self, user_id: UserId, deck_id: DeckId | None = None
    ) -> list[DueCandidate]:
        """
        Load cards joined with the user's progress.

        Args:
            user_id: The learner
            deck_id: Restrict to one deck; None means every deck the user owns

        Returns:
            One candidate per card, with progress fields empty for cards the
            user never reviewed
        """
        ...

    def count_owned(self, user_id: UserId) -> int:
        """Count cards in decks owned by a user."""
        ...

    def count_in_deck(self, deck_id: DeckId) -> int:
        """Count cards in a deck."""
        ...

"""Protocol for CardProgress repository."""

from typing import Protocol

from microscroll.domain.common.value_objects import CardId, DeckId, UserId
from microscroll.domain.study.entities.card_progress import CardProgress


class CardProgressRepositoryProtocol(Protocol):
    """Protocol for CardProgress repository operations."""

    def find(self, user_id: UserId, card_id: CardId) -> CardProgress | None:
        """
        Find a user's progress on a card.

        Args:
            user_id: The learner
            card_id: The card ID

        Returns:
            CardProgress if the user ever reviewed the card, None otherwise
        """
        ...

    def save(self, progress: CardProgress) -> CardProgress:
        """
        Stage a progress record (create or update) in the current transaction.

        Updates are version-checked when the transaction is flushed.

        Args:
            progress: The progress entity to save

        Returns:
            Saved progress entity with database-generated values
        """
        ...

    def count_mastered(self, user_id: UserId, deck_id: DeckId | None = None) -> int:
        """Count progress records at the top mastery level."""
        ...

    def sum_reviews(self, user_id: UserId, deck_id: DeckId | None = None) -> int:
        """Sum review counts over a user's progress records."""
        ...

    def count_reviewed(self, user_id: UserId, deck_id: DeckId | None = None) -> int:
        """Count cards the user has reviewed at least once."""
        ...

    def average_mastery(self, user_id: UserId, deck_id: DeckId | None = None) -> float:
        """Mean mastery level over reviewed cards, 0.0 when none were reviewed."""
        ...

"""
CardProgress entity: one learner's mastery state for one card.
"""

from dataclasses import dataclass
from datetime import datetime

from microscroll.domain.common.entity import Entity
from microscroll.domain.common.exceptions import InvariantViolationError
from microscroll.domain.common.value_objects import CardId, CardProgressId, UserId

# Top rung of the mastery ladder
MAX_LEVEL = 5


@dataclass
class CardProgress(Entity[CardProgressId]):
    """
    Per-(user, card) progress record.

    Business Rules:
    - correct_count + incorrect_count == review_count
    - mastery_level stays within 0..MAX_LEVEL
    - A card without next_review_date is due immediately
    """

    id: CardProgressId
    user_id: UserId
    card_id: CardId
    review_count: int = 0
    correct_count: int = 0
    incorrect_count: int = 0
    mastery_level: int = 0
    last_reviewed: datetime | None = None
    next_review_date: datetime | None = None
    # Row version the entity was read at; 0 until first persisted
    version: int = 0

    def __post_init__(self) -> None:
        """Validate invariants."""
        if min(self.review_count, self.correct_count, self.incorrect_count) < 0:
            raise InvariantViolationError("CardProgress", "counts must be non-negative")
        if self.correct_count + self.incorrect_count != self.review_count:
            raise InvariantViolationError(
                "CardProgress", "correct and incorrect counts must add up to review count"
            )
        if not 0 <= self.mastery_level <= MAX_LEVEL:
            raise InvariantViolationError(
                "CardProgress", f"mastery level must be between 0 and {MAX_LEVEL}"
            )

    @property
    def is_mastered(self) -> bool:
        """Whether the card sits on the top rung of the ladder."""
        return self.mastery_level == MAX_LEVEL

    @property
    def accuracy(self) -> float:
        """Share of correct reviews, 0.0 for a card that was never reviewed."""
        if self.review_count == 0:
            return 0.0
        return self.correct_count / self.review_count

    def is_due(self, now: datetime) -> bool:
        """A card is due when it has no scheduled date or the date has passed."""
        return self.next_review_date is None or self.next_review_date <= now

    @classmethod
    def start(cls, user_id: UserId, card_id: CardId) -> "CardProgress":
        """Create the implicit level-0 record for a card that was never reviewed."""
        return cls(
            id=CardProgressId.generate(),
            user_id=user_id,
            card_id=card_id,
        )

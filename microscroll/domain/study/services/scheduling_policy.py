"""
Scheduling policy for the discrete mastery ladder.

Correct answers climb one rung and push the next review further out;
incorrect answers drop one rung and bring the card back the same day.
"""

from dataclasses import replace
from datetime import datetime, timedelta

from microscroll.domain.study.entities.card_progress import MAX_LEVEL, CardProgress

# Review interval per mastery level, index == level
REVIEW_INTERVALS: tuple[timedelta, ...] = (
    timedelta(minutes=10),
    timedelta(days=1),
    timedelta(days=3),
    timedelta(days=7),
    timedelta(days=14),
    timedelta(days=30),
)


class SchedulingPolicy:
    """Pure function from (progress, outcome, now) to the next progress state."""

    @staticmethod
    def interval(level: int) -> timedelta:
        """Return the review interval for a mastery level, clamped to the ladder."""
        return REVIEW_INTERVALS[max(0, min(level, MAX_LEVEL))]

    def next(self, progress: CardProgress, correct: bool, now: datetime) -> CardProgress:
        """
        Compute the progress state after one review.

        Args:
            progress: Current progress (a fresh level-0 record for new cards)
            correct: Whether the learner answered correctly
            now: Review timestamp (timezone-aware)

        Returns:
            A new CardProgress; the input is left untouched
        """
        if correct:
            level = min(progress.mastery_level + 1, MAX_LEVEL)
            next_review = now + self.interval(level)
            # Reviewing a card early never pulls its schedule forward
            if progress.next_review_date is not None and progress.next_review_date > next_review:
                next_review = progress.next_review_date
            return replace(
                progress,
                review_count=progress.review_count + 1,
                correct_count=progress.correct_count + 1,
                mastery_level=level,
                last_reviewed=now,
                next_review_date=next_review,
            )

        return replace(
            progress,
            review_count=progress.review_count + 1,
            incorrect_count=progress.incorrect_count + 1,
            mastery_level=max(progress.mastery_level - 1, 0),
            last_reviewed=now,
            next_review_date=now + self.interval(0),
        )

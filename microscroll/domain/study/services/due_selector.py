"""
Due card selection.

Works on candidate rows (a card plus its optional progress) so it can be
tested without a database and recomputed from scratch on every request.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from itertools import islice

from microscroll.domain.common.value_objects import CardId, DeckId

_NEVER = datetime.min.replace(tzinfo=UTC)


@dataclass(frozen=True)
class DueCandidate:
    """A card visible to the learner together with its scheduling state."""

    card_id: CardId
    deck_id: DeckId
    order: int
    front: str = ""
    back: str = ""
    mastery_level: int = 0
    review_count: int = 0
    last_reviewed: datetime | None = None
    next_review_date: datetime | None = None

    def is_due(self, now: datetime) -> bool:
        return self.next_review_date is None or self.next_review_date <= now


class DueSelector:
    """
    Filters and orders due cards.

    Ordering, in priority order:
    1. Lowest mastery level first (struggling cards)
    2. Least recently reviewed first, never-reviewed cards before all others
    3. Deck order, then card id for a stable result
    """

    def select(
        self,
        candidates: Iterable[DueCandidate],
        now: datetime,
        limit: int | None = None,
    ) -> Iterator[DueCandidate]:
        """
        Yield the due candidates in review order.

        Each call re-reads the candidates, so the generator holds no cursor
        between requests.
        """
        due = sorted((c for c in candidates if c.is_due(now)), key=self._priority)
        if limit is not None:
            yield from islice(due, limit)
        else:
            yield from due

    @staticmethod
    def _priority(candidate: DueCandidate) -> tuple[int, datetime, int, int]:
        return (
            candidate.mastery_level,
            candidate.last_reviewed or _NEVER,
            candidate.order,
            candidate.card_id.value,
        )

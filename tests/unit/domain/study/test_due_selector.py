"""Unit tests for due card selection and ordering."""

from datetime import UTC, datetime, timedelta

from microscroll.domain.common.value_objects import CardId, DeckId
from microscroll.domain.study import DueCandidate, DueSelector

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
DECK = DeckId(1)


def candidate(card_id: int, order: int = 0, **kwargs: object) -> DueCandidate:
    return DueCandidate(
        card_id=CardId(card_id), deck_id=DECK, order=order, **kwargs  # type: ignore[arg-type]
    )


class TestDueSelector:
    def test_never_reviewed_cards_are_due(self) -> None:
        cards = [candidate(1, order=0), candidate(2, order=1)]

        selected = list(DueSelector().select(cards, NOW))

        assert [c.card_id.value for c in selected] == [1, 2]

    def test_future_cards_are_excluded(self) -> None:
        cards = [
            candidate(
                1,
                mastery_level=2,
                last_reviewed=NOW - timedelta(days=1),
                next_review_date=NOW + timedelta(seconds=1),
            ),
            candidate(
                2,
                mastery_level=2,
                last_reviewed=NOW - timedelta(days=3),
                next_review_date=NOW,
            ),
        ]

        selected = list(DueSelector().select(cards, NOW))

        assert [c.card_id.value for c in selected] == [2]
        assert all(c.next_review_date is None or c.next_review_date <= NOW for c in selected)

    def test_orders_by_level_then_recency_then_deck_order(self) -> None:
        past = NOW - timedelta(hours=1)
        cards = [
            candidate(1, order=0, mastery_level=3, last_reviewed=past, next_review_date=past),
            candidate(2, order=1, mastery_level=1, last_reviewed=past, next_review_date=past),
            candidate(
                3,
                order=2,
                mastery_level=1,
                last_reviewed=past - timedelta(days=2),
                next_review_date=past,
            ),
            candidate(4, order=5),
            candidate(5, order=4),
        ]

        selected = list(DueSelector().select(cards, NOW))

        # Level 0 never-reviewed cards by deck order, then level 1 oldest first, then level 3
        assert [c.card_id.value for c in selected] == [5, 4, 3, 2, 1]

    def test_card_id_breaks_remaining_ties(self) -> None:
        cards = [candidate(9, order=0), candidate(3, order=0)]

        selected = list(DueSelector().select(cards, NOW))

        assert [c.card_id.value for c in selected] == [3, 9]

    def test_limit_and_restartable(self) -> None:
        cards = [candidate(i, order=i) for i in range(1, 6)]
        selector = DueSelector()

        first = [c.card_id.value for c in selector.select(cards, NOW, limit=2)]
        second = [c.card_id.value for c in selector.select(cards, NOW, limit=2)]

        assert first == second == [1, 2]

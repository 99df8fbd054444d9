"""Unit tests for the mastery ladder scheduling policy."""

from datetime import UTC, datetime, timedelta

import pytest

from microscroll.domain.common.exceptions import InvariantViolationError
from microscroll.domain.common.value_objects import CardId, CardProgressId, UserId
from microscroll.domain.study import MAX_LEVEL, REVIEW_INTERVALS, CardProgress, SchedulingPolicy

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def progress(**kwargs: object) -> CardProgress:
    base = CardProgress.start(UserId(1), CardId(10))
    for key, value in kwargs.items():
        setattr(base, key, value)
    return base


class TestIntervals:
    def test_intervals_increase_with_level(self) -> None:
        assert list(REVIEW_INTERVALS) == sorted(REVIEW_INTERVALS)
        assert len(REVIEW_INTERVALS) == MAX_LEVEL + 1

    def test_interval_is_clamped_to_ladder(self) -> None:
        assert SchedulingPolicy.interval(-3) == REVIEW_INTERVALS[0]
        assert SchedulingPolicy.interval(MAX_LEVEL + 4) == timedelta(days=30)


class TestCorrectAnswer:
    """Correct answers climb the ladder."""

    def test_first_correct_review_of_new_card(self) -> None:
        """A never-reviewed card lands on level 1, due in one day."""
        result = SchedulingPolicy().next(progress(), correct=True, now=NOW)

        assert result.mastery_level == 1
        assert result.next_review_date == NOW + timedelta(days=1)
        assert result.last_reviewed == NOW
        assert result.review_count == 1
        assert result.correct_count == 1
        assert result.incorrect_count == 0

    def test_level_is_capped_at_max(self) -> None:
        start = progress(
            mastery_level=MAX_LEVEL, review_count=5, correct_count=5, next_review_date=NOW
        )
        result = SchedulingPolicy().next(start, correct=True, now=NOW)

        assert result.mastery_level == MAX_LEVEL
        assert result.is_mastered
        assert result.next_review_date == NOW + timedelta(days=30)

    def test_early_review_never_pulls_schedule_forward(self) -> None:
        """Reviewing a level-4 card early keeps its later due date."""
        far_future = NOW + timedelta(days=60)
        start = progress(
            mastery_level=4, review_count=4, correct_count=4, next_review_date=far_future
        )
        result = SchedulingPolicy().next(start, correct=True, now=NOW)

        assert result.mastery_level == 5
        assert result.next_review_date == far_future

    def test_input_is_not_mutated(self) -> None:
        start = progress()
        SchedulingPolicy().next(start, correct=True, now=NOW)

        assert start.review_count == 0
        assert start.mastery_level == 0


class TestIncorrectAnswer:
    """Incorrect answers demote by one rung and bring the card back soon."""

    def test_demotes_one_level(self) -> None:
        start = progress(mastery_level=3, review_count=3, correct_count=3)
        result = SchedulingPolicy().next(start, correct=False, now=NOW)

        assert result.mastery_level == 2
        assert result.next_review_date == NOW + REVIEW_INTERVALS[0]
        assert result.review_count == 4
        assert result.correct_count == 3
        assert result.incorrect_count == 1

    def test_level_zero_stays_at_zero(self) -> None:
        result = SchedulingPolicy().next(progress(), correct=False, now=NOW)

        assert result.mastery_level == 0
        assert result.accuracy == 0.0

    def test_incorrect_never_increases_mastery(self) -> None:
        policy = SchedulingPolicy()
        for level in range(MAX_LEVEL + 1):
            start = progress(mastery_level=level, review_count=1, correct_count=1)
            assert policy.next(start, correct=False, now=NOW).mastery_level <= level


class TestCardProgressInvariants:
    def test_counts_must_add_up(self) -> None:
        with pytest.raises(InvariantViolationError):
            CardProgress(
                id=CardProgressId.generate(),
                user_id=UserId(1),
                card_id=CardId(1),
                review_count=2,
                correct_count=3,
            )

    def test_level_must_stay_on_ladder(self) -> None:
        with pytest.raises(InvariantViolationError):
            CardProgress(
                id=CardProgressId.generate(),
                user_id=UserId(1),
                card_id=CardId(1),
                mastery_level=MAX_LEVEL + 1,
            )

    def test_sequence_keeps_invariants(self) -> None:
        policy = SchedulingPolicy()
        state = progress()
        for index, correct in enumerate([True, True, False, True, True, True, True, False]):
            state = policy.next(state, correct=correct, now=NOW + timedelta(days=index))
            assert state.correct_count <= state.review_count
            assert 0 <= state.mastery_level <= MAX_LEVEL

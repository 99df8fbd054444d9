"""Unit tests for the StudySession aggregate."""

from datetime import UTC, datetime, timedelta

import pytest

from microscroll.domain.common.exceptions import InvariantViolationError, ValidationError
from microscroll.domain.common.value_objects import ContentHash, DeckId, UserId
from microscroll.domain.study import (
    SessionAlreadyEndedError,
    SessionMode,
    SessionStatus,
    StudySession,
)
from microscroll.domain.study.events import StudySessionEnded

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def active_session(mode: SessionMode = SessionMode.NORMAL) -> StudySession:
    return StudySession.start(UserId(1), DeckId(7), mode, NOW)


class TestStart:
    def test_new_session_is_active_with_zero_counters(self) -> None:
        session = active_session()

        assert session.status == SessionStatus.ACTIVE
        assert session.is_active
        assert session.ended_at is None
        assert session.cards_studied == 0
        assert session.correct_answers == 0
        assert session.total_time == 0
        assert session.accuracy == 0.0


class TestRecordReview:
    def test_counters_and_streak(self) -> None:
        session = active_session()

        session.record_review(correct=True, time_spent=4)
        session.record_review(correct=True, time_spent=3)
        session.record_review(correct=False, time_spent=5)
        session.record_review(correct=True, time_spent=2)

        assert session.cards_studied == 4
        assert session.correct_answers == 3
        assert session.total_time == 14
        assert session.streak == 1
        assert session.max_streak == 2

    def test_negative_time_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            active_session().record_review(correct=True, time_spent=-1)

    def test_ended_session_rejects_reviews(self) -> None:
        session = active_session()
        session.end(cards_studied=0, correct_answers=0, total_time=0, now=NOW)

        with pytest.raises(SessionAlreadyEndedError):
            session.record_review(correct=True)


class TestEnd:
    """Ending reconciles counters and freezes the session."""

    def test_counters_take_the_larger_value(self) -> None:
        session = active_session()
        for _ in range(3):
            session.record_review(correct=True, time_spent=10)

        session.end(cards_studied=2, correct_answers=1, total_time=45, now=NOW)

        assert session.cards_studied == 3
        assert session.correct_answers == 3
        assert session.total_time == 45

    def test_end_sets_status_and_timestamp(self) -> None:
        session = active_session()
        ended_at = NOW + timedelta(minutes=5)

        session.end(cards_studied=20, correct_answers=18, total_time=120, now=ended_at, streak=7)

        assert session.status == SessionStatus.ENDED
        assert session.ended_at == ended_at
        assert session.cards_studied == 20
        assert session.correct_answers == 18
        assert session.streak == 7
        assert session.max_streak == 7

    def test_second_end_is_rejected_and_counters_unchanged(self) -> None:
        session = active_session()
        session.end(cards_studied=5, correct_answers=4, total_time=30, now=NOW)

        with pytest.raises(SessionAlreadyEndedError):
            session.end(cards_studied=50, correct_answers=40, total_time=300, now=NOW)

        assert session.cards_studied == 5
        assert session.correct_answers == 4
        assert session.total_time == 30

    def test_inconsistent_counters_are_rejected(self) -> None:
        session = active_session()

        with pytest.raises(ValidationError):
            session.end(cards_studied=3, correct_answers=4, total_time=0, now=NOW)
        assert session.is_active

    def test_end_records_event(self) -> None:
        session = active_session(SessionMode.SPEED)
        session.end(cards_studied=2, correct_answers=2, total_time=8, now=NOW)

        events = session.collect_events()

        assert len(events) == 1
        event = events[0]
        assert isinstance(event, StudySessionEnded)
        assert event.mode == "speed"
        assert event.cards_studied == 2
        assert session.collect_events() == []


class TestSpeedSummary:
    def test_summary_is_created_ended(self) -> None:
        session = StudySession.from_speed_summary(
            user_id=UserId(1),
            deck_id=DeckId(7),
            cards_played=20,
            correct_answers=18,
            total_time=120,
            max_streak=7,
            submission_hash=ContentHash.compute("batch"),
            now=NOW,
            submission_id="abc",
        )

        assert session.mode == SessionMode.SPEED
        assert session.status == SessionStatus.ENDED
        assert session.ended_at == NOW
        assert session.max_streak == 7
        assert session.submission_id == "abc"

    def test_summary_with_too_many_correct_answers(self) -> None:
        with pytest.raises(ValidationError):
            StudySession.from_speed_summary(
                user_id=UserId(1),
                deck_id=DeckId(7),
                cards_played=2,
                correct_answers=3,
                total_time=10,
                max_streak=1,
                submission_hash=ContentHash.compute("batch"),
                now=NOW,
            )

    def test_ended_session_requires_timestamp(self) -> None:
        session = active_session()

        with pytest.raises(InvariantViolationError):
            StudySession(
                id=session.id,
                user_id=session.user_id,
                deck_id=session.deck_id,
                mode=session.mode,
                status=SessionStatus.ENDED,
                started_at=NOW,
            )

"""
StudySession aggregate root.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from microscroll.domain.common.aggregate_root import AggregateRoot
from microscroll.domain.common.exceptions import InvariantViolationError, ValidationError
from microscroll.domain.common.value_objects import (
    ContentHash,
    DeckId,
    StudySessionId,
    UserId,
)
from microscroll.domain.study.events import StudySessionEnded
from microscroll.domain.study.exceptions import SessionAlreadyEndedError


class SessionMode(StrEnum):
    NORMAL = "normal"
    SPEED = "speed"
    GHOST = "ghost"


class SessionStatus(StrEnum):
    ACTIVE = "active"
    ENDED = "ended"


@dataclass
class StudySession(AggregateRoot[StudySessionId]):
    """
    One learner's pass over a deck.

    State machine: active -> ended (terminal). Counters only grow while the
    session is active and are frozen once it has ended.

    Business Rules:
    - correct_answers <= cards_studied
    - max_streak >= streak
    - An ended session has an ended_at timestamp
    - Speed-mode summaries are created already ended and carry a
      submission hash for deduplication
    """

    # Identity
    id: StudySessionId
    user_id: UserId
    deck_id: DeckId
    mode: SessionMode
    status: SessionStatus

    # Time tracking
    started_at: datetime
    ended_at: datetime | None = None

    # Running counters
    cards_studied: int = 0
    correct_answers: int = 0
    total_time: int = 0
    streak: int = 0
    max_streak: int = 0

    submission_id: str | None = None
    submission_hash: ContentHash | None = None
    version: int = 0

    def __post_init__(self) -> None:
        """Validate invariants."""
        counters = (
            self.cards_studied,
            self.correct_answers,
            self.total_time,
            self.streak,
            self.max_streak,
        )
        if min(counters) < 0:
            raise InvariantViolationError("StudySession", "counters must be non-negative")
        if self.correct_answers > self.cards_studied:
            raise InvariantViolationError(
                "StudySession", "correct answers cannot exceed cards studied"
            )
        if self.max_streak < self.streak:
            raise InvariantViolationError("StudySession", "max streak cannot be below streak")
        if self.status == SessionStatus.ENDED and self.ended_at is None:
            raise InvariantViolationError("StudySession", "ended session requires ended_at")

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    @property
    def accuracy(self) -> float:
        if self.cards_studied == 0:
            return 0.0
        return self.correct_answers / self.cards_studied

    def record_review(self, correct: bool, time_spent: int = 0) -> None:
        """
        Fold one review outcome into the running counters.

        Raises:
            SessionAlreadyEndedError: If the session is not active
            ValidationError: If time_spent is negative
        """
        self._ensure_active()
        if time_spent < 0:
            raise ValidationError("Time spent cannot be negative", field="time_spent")

        self.cards_studied += 1
        self.total_time += time_spent
        if correct:
            self.correct_answers += 1
            self.streak += 1
            self.max_streak = max(self.max_streak, self.streak)
        else:
            self.streak = 0

    def end(
        self,
        cards_studied: int,
        correct_answers: int,
        total_time: int,
        now: datetime,
        streak: int | None = None,
    ) -> None:
        """
        Finalize the session.

        The client may report totals at batch granularity, so every counter
        becomes the larger of the accumulated and the submitted value.

        Raises:
            SessionAlreadyEndedError: If the session has already ended
            ValidationError: If the submitted counters are inconsistent
        """
        self._ensure_active()
        if min(cards_studied, correct_answers, total_time, streak or 0) < 0:
            raise ValidationError("Session counters cannot be negative")
        if correct_answers > cards_studied:
            raise ValidationError(
                "Correct answers cannot exceed cards studied",
                field="correct_answers",
                value=correct_answers,
            )

        self.cards_studied = max(self.cards_studied, cards_studied)
        self.correct_answers = max(self.correct_answers, correct_answers)
        self.total_time = max(self.total_time, total_time)
        if streak is not None:
            self.streak = streak
            self.max_streak = max(self.max_streak, streak)
        self.status = SessionStatus.ENDED
        self.ended_at = now

        self._record_event(
            StudySessionEnded(
                session_id=self.id,
                user_id=self.user_id,
                deck_id=self.deck_id,
                mode=self.mode.value,
                cards_studied=self.cards_studied,
                correct_answers=self.correct_answers,
                total_time=self.total_time,
            )
        )

    def _ensure_active(self) -> None:
        if not self.is_active:
            raise SessionAlreadyEndedError(self.id)

    @classmethod
    def start(
        cls,
        user_id: UserId,
        deck_id: DeckId,
        mode: SessionMode,
        now: datetime,
    ) -> "StudySession":
        """Factory method for opening a new session with zeroed counters."""
        return cls(
            id=StudySessionId.generate(),
            user_id=user_id,
            deck_id=deck_id,
            mode=mode,
            status=SessionStatus.ACTIVE,
            started_at=now,
        )

    @classmethod
    def from_speed_summary(
        cls,
        user_id: UserId,
        deck_id: DeckId,
        cards_played: int,
        correct_answers: int,
        total_time: int,
        max_streak: int,
        submission_hash: ContentHash,
        now: datetime,
        submission_id: str | None = None,
    ) -> "StudySession":
        """
        Factory method for a standalone speed-mode summary row.

        The row never passes through the active state.

        Raises:
            ValidationError: If the summary counters are inconsistent
        """
        if correct_answers > cards_played:
            raise ValidationError(
                "Correct answers cannot exceed cards played",
                field="correct_answers",
                value=correct_answers,
            )
        if min(cards_played, total_time, max_streak) < 0:
            raise ValidationError("Speed summary counters cannot be negative")

        return cls(
            id=StudySessionId.generate(),
            user_id=user_id,
            deck_id=deck_id,
            mode=SessionMode.SPEED,
            status=SessionStatus.ENDED,
            started_at=now,
            ended_at=now,
            cards_studied=cards_played,
            correct_answers=correct_answers,
            total_time=total_time,
            streak=max_streak,
            max_streak=max_streak,
            submission_id=submission_id,
            submission_hash=submission_hash,
        )

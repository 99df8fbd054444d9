"""Pydantic schemas for study session, review and due card endpoints."""

from datetime import datetime

from pydantic import Field

from microscroll.application.study.use_cases.dtos import EndedSession, ReviewOutcome
from microscroll.domain.study.entities.card_progress import CardProgress
from microscroll.domain.study.entities.study_session import (
    SessionMode,
    SessionStatus,
    StudySession,
)
from microscroll.domain.study.services.due_selector import DueCandidate
from microscroll.infrastructure.study.schemas.base import CamelModel


class StudySessionCreateRequest(CamelModel):
    """Schema for opening a study session."""

    deck_id: int = Field(..., gt=0, description="Deck to study")
    mode: SessionMode = Field(SessionMode.NORMAL, description="normal, speed or ghost")


class StudySessionEndRequest(CamelModel):
    """Schema for ending a study session with its final counters."""

    cards_studied: int = Field(..., ge=0)
    correct_answers: int = Field(..., ge=0)
    total_time: int = Field(..., ge=0, description="Seconds")
    streak: int | None = Field(None, ge=0, description="Final in-session streak")


class ReviewRequest(CamelModel):
    """Schema for reviewing one card, optionally inside a session."""

    session_id: int | None = Field(None, gt=0, description="Active session, if any")
    card_id: int = Field(..., gt=0)
    correct: bool
    time_spent: int = Field(0, ge=0, description="Seconds")


class CardResultItem(CamelModel):
    """Schema for one itemized speed-mode result."""

    card_id: int = Field(..., gt=0)
    correct: bool
    time_spent: int = Field(0, ge=0)

    def to_dto(self) -> ReviewOutcome:
        return ReviewOutcome(card_id=self.card_id, correct=self.correct, time_spent=self.time_spent)


class SpeedResultsRequest(CamelModel):
    """Schema for a speed-mode batch submission."""

    deck_id: int = Field(..., gt=0)
    cards_played: int = Field(..., ge=0)
    correct_answers: int = Field(..., ge=0)
    total_time: int = Field(..., ge=0)
    max_streak: int = Field(..., ge=0)
    card_results: list[CardResultItem] = Field(default_factory=list)
    submission_id: str | None = Field(
        None, min_length=1, max_length=128, description="Client idempotency key"
    )


class StudySessionSchema(CamelModel):
    """Schema for StudySession response."""

    id: int
    user_id: int
    deck_id: int
    mode: SessionMode
    status: SessionStatus
    cards_studied: int
    correct_answers: int
    total_time: int
    streak: int
    max_streak: int
    started_at: datetime
    ended_at: datetime | None

    @classmethod
    def from_domain(cls, session: StudySession) -> "StudySessionSchema":
        return cls(
            id=session.id.value,
            user_id=session.user_id.value,
            deck_id=session.deck_id.value,
            mode=session.mode,
            status=session.status,
            cards_studied=session.cards_studied,
            correct_answers=session.correct_answers,
            total_time=session.total_time,
            streak=session.streak,
            max_streak=session.max_streak,
            started_at=session.started_at,
            ended_at=session.ended_at,
        )


class EndedStudySessionSchema(StudySessionSchema):
    """Finalized session plus the recomputed account streak."""

    current_streak: int
    longest_streak: int

    @classmethod
    def from_result(cls, ended: EndedSession) -> "EndedStudySessionSchema":
        session = StudySessionSchema.from_domain(ended.session)
        return cls(
            **session.model_dump(),
            current_streak=ended.streaks.current,
            longest_streak=ended.streaks.longest,
        )


class CardProgressSchema(CamelModel):
    """Schema for CardProgress response."""

    card_id: int
    review_count: int
    correct_count: int
    incorrect_count: int
    mastery_level: int
    is_mastered: bool
    last_reviewed: datetime | None
    next_review_date: datetime | None

    @classmethod
    def from_domain(cls, progress: CardProgress) -> "CardProgressSchema":
        return cls(
            card_id=progress.card_id.value,
            review_count=progress.review_count,
            correct_count=progress.correct_count,
            incorrect_count=progress.incorrect_count,
            mastery_level=progress.mastery_level,
            is_mastered=progress.is_mastered,
            last_reviewed=progress.last_reviewed,
            next_review_date=progress.next_review_date,
        )


class DueCardSchema(CamelModel):
    """Schema for one due card."""

    card_id: int
    deck_id: int
    front: str
    back: str
    order: int
    mastery_level: int
    review_count: int
    last_reviewed: datetime | None
    next_review_date: datetime | None

    @classmethod
    def from_domain(cls, candidate: DueCandidate) -> "DueCardSchema":
        return cls(
            card_id=candidate.card_id.value,
            deck_id=candidate.deck_id.value,
            front=candidate.front,
            back=candidate.back,
            order=candidate.order,
            mastery_level=candidate.mastery_level,
            review_count=candidate.review_count,
            last_reviewed=candidate.last_reviewed,
            next_review_date=candidate.next_review_date,
        )


class DueCardsSchema(CamelModel):
    cards: list[DueCardSchema]
    total: int


class SpeedResultsAckSchema(CamelModel):
    """Schema for the speed-mode acknowledgement."""

    session_id: int
    deck_id: int
    cards_played: int
    correct_answers: int
    total_time: int
    max_streak: int
    cards_updated: int
    duplicate: bool

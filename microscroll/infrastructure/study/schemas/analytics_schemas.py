"""Pydantic schemas for analytics endpoints."""

import datetime

from microscroll.application.study.use_cases.dtos import DeckAnalytics
from microscroll.infrastructure.study.schemas.base import CamelModel
from microscroll.infrastructure.study.schemas.study_schemas import StudySessionSchema


class UserStatsSchema(CamelModel):
    total_decks: int
    total_cards: int
    cards_studied_today: int
    current_streak: int
    longest_streak: int
    total_study_time: int
    average_accuracy: float
    mastered_cards: int
    total_reviewed: int
    due_for_review: int
    total_sessions: int
    mastery_percent: int


class DailyActivitySchema(CamelModel):
    date: datetime.date
    cards_studied: int
    time_spent: int
    sessions: int


class DeckAnalyticsSchema(CamelModel):
    """Schema for per-deck analytics."""

    deck_id: int
    title: str
    total_cards: int
    cards_studied: int
    total_study_time: int
    average_accuracy: float
    mastered_cards: int
    due_for_review: int
    current_streak: int
    longest_streak: int
    total_sessions: int
    mastery_percent: int
    recent_sessions: list[StudySessionSchema]

    @classmethod
    def from_result(cls, analytics: DeckAnalytics) -> "DeckAnalyticsSchema":
        return cls(
            deck_id=analytics.deck_id,
            title=analytics.title,
            total_cards=analytics.total_cards,
            cards_studied=analytics.cards_studied,
            total_study_time=analytics.total_study_time,
            average_accuracy=analytics.average_accuracy,
            mastered_cards=analytics.mastered_cards,
            due_for_review=analytics.due_for_review,
            current_streak=analytics.current_streak,
            longest_streak=analytics.longest_streak,
            total_sessions=analytics.total_sessions,
            mastery_percent=analytics.mastery_percent,
            recent_sessions=[
                StudySessionSchema.from_domain(session) for session in analytics.recent_sessions
            ],
        )

"""DTOs for study analytics, all derived on read."""

from dataclasses import dataclass, field
from datetime import date

from microscroll.domain.study.entities.study_session import StudySession


@dataclass
class UserStats:
    total_decks: int = 0
    total_cards: int = 0
    cards_studied_today: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    total_study_time: int = 0
    average_accuracy: float = 0.0
    mastered_cards: int = 0
    total_reviewed: int = 0
    due_for_review: int = 0
    total_sessions: int = 0
    mastery_percent: int = 0


@dataclass
class DailyActivity:
    """One calendar day of the weekly breakdown."""

    date: date
    cards_studied: int = 0
    time_spent: int = 0
    sessions: int = 0


@dataclass
class DeckAnalytics:
    """UserStats-like projection scoped to a single deck."""

    deck_id: int
    title: str = ""
    total_cards: int = 0
    cards_studied: int = 0
    total_study_time: int = 0
    average_accuracy: float = 0.0
    mastered_cards: int = 0
    due_for_review: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    total_sessions: int = 0
    mastery_percent: int = 0
    recent_sessions: list[StudySession] = field(default_factory=list)

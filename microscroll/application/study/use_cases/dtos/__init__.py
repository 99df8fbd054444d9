"""DTOs for study use cases."""

from microscroll.application.study.use_cases.dtos.analytics_dtos import (
    DailyActivity,
    DeckAnalytics,
    UserStats,
)
from microscroll.application.study.use_cases.dtos.study_dtos import (
    DueCards,
    EndedSession,
    ReviewOutcome,
    SessionCounters,
    SpeedResultsAck,
    SpeedResultsSubmission,
)

__all__ = [
    "DailyActivity",
    "DeckAnalytics",
    "DueCards",
    "EndedSession",
    "ReviewOutcome",
    "SessionCounters",
    "SpeedResultsAck",
    "SpeedResultsSubmission",
    "UserStats",
]

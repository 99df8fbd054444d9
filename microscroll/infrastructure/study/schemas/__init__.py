from .analytics_schemas import DailyActivitySchema, DeckAnalyticsSchema, UserStatsSchema
from .study_schemas import (
    CardProgressSchema,
    CardResultItem,
    DueCardSchema,
    DueCardsSchema,
    EndedStudySessionSchema,
    ReviewRequest,
    SpeedResultsAckSchema,
    SpeedResultsRequest,
    StudySessionCreateRequest,
    StudySessionEndRequest,
    StudySessionSchema,
)

__all__ = [
    "CardProgressSchema",
    "CardResultItem",
    "DailyActivitySchema",
    "DeckAnalyticsSchema",
    "DueCardSchema",
    "DueCardsSchema",
    "EndedStudySessionSchema",
    "ReviewRequest",
    "SpeedResultsAckSchema",
    "SpeedResultsRequest",
    "StudySessionCreateRequest",
    "StudySessionEndRequest",
    "StudySessionSchema",
    "UserStatsSchema",
]

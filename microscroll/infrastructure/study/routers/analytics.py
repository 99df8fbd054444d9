"""API routes for study analytics."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from microscroll.application.study.use_cases.analytics_use_case import StudyAnalyticsUseCase
from microscroll.core import container
from microscroll.exceptions import MicroscrollError
from microscroll.infrastructure.common.di import inject_use_case
from microscroll.infrastructure.common.results import unwrap_or_raise
from microscroll.infrastructure.common.schemas import ApiResponse
from microscroll.infrastructure.identity.dependencies import CurrentUserId
from microscroll.infrastructure.study.schemas import (
    DailyActivitySchema,
    DeckAnalyticsSchema,
    UserStatsSchema,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("", response_model=ApiResponse[UserStatsSchema], status_code=status.HTTP_200_OK)
def get_user_analytics(
    user_id: CurrentUserId,
    use_case: StudyAnalyticsUseCase = Depends(inject_use_case(container.study_analytics_use_case)),
) -> ApiResponse[UserStatsSchema]:
    """Account-wide statistics, recomputed on every call."""
    try:
        stats = use_case.get_user_analytics(user_id)
        return ApiResponse(data=UserStatsSchema.model_validate(stats))
    except Exception as e:
        logger.error(f"Failed to compute analytics for user {user_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/weekly",
    response_model=ApiResponse[list[DailyActivitySchema]],
    status_code=status.HTTP_200_OK,
)
def get_weekly_breakdown(
    user_id: CurrentUserId,
    use_case: StudyAnalyticsUseCase = Depends(inject_use_case(container.study_analytics_use_case)),
) -> ApiResponse[list[DailyActivitySchema]]:
    """Seven daily entries ending today, oldest first."""
    try:
        days = use_case.get_weekly_breakdown(user_id)
        return ApiResponse(data=[DailyActivitySchema.model_validate(day) for day in days])
    except Exception as e:
        logger.error(f"Failed to compute weekly breakdown: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/deck/{deck_id}",
    response_model=ApiResponse[DeckAnalyticsSchema | None],
    status_code=status.HTTP_200_OK,
)
def get_deck_analytics(
    deck_id: Annotated[int, Path(gt=0)],
    user_id: CurrentUserId,
    use_case: StudyAnalyticsUseCase = Depends(inject_use_case(container.study_analytics_use_case)),
) -> ApiResponse[DeckAnalyticsSchema | None]:
    """
    Statistics for one deck.

    data is null when the deck is accessible but the caller never studied it.
    """
    try:
        analytics = unwrap_or_raise(use_case.get_deck_analytics(user_id, deck_id))
        if analytics is None:
            return ApiResponse(data=None)
        return ApiResponse(data=DeckAnalyticsSchema.from_result(analytics))
    except MicroscrollError:
        raise
    except Exception as e:
        logger.error(f"Failed to compute analytics for deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e

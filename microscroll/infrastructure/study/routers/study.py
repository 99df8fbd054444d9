"""API routes for study sessions, reviews, due cards and speed-mode results."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, status

from microscroll.application.study.use_cases.due_cards_use_case import DueCardsUseCase
from microscroll.application.study.use_cases.dtos import SessionCounters, SpeedResultsSubmission
from microscroll.application.study.use_cases.review_card_use_case import ReviewCardUseCase
from microscroll.application.study.use_cases.speed_results_use_case import SpeedResultsUseCase
from microscroll.application.study.use_cases.study_session_use_case import StudySessionUseCase
from microscroll.config import get_settings
from microscroll.core import container
from microscroll.domain.study.entities.study_session import SessionMode
from microscroll.exceptions import MicroscrollError
from microscroll.infrastructure.common.di import inject_use_case
from microscroll.infrastructure.common.rate_limit import limiter
from microscroll.infrastructure.common.results import unwrap_or_raise
from microscroll.infrastructure.common.schemas import ApiResponse
from microscroll.infrastructure.identity.dependencies import CurrentUserId
from microscroll.infrastructure.study.schemas import (
    CardProgressSchema,
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

logger = logging.getLogger(__name__)

settings = get_settings()

router = APIRouter(prefix="/study", tags=["study"])

_UNEXPECTED = "An unexpected error occurred. Please try again later."


@router.post(
    "/sessions",
    response_model=ApiResponse[StudySessionSchema],
    status_code=status.HTTP_201_CREATED,
)
def create_session(
    request: StudySessionCreateRequest,
    user_id: CurrentUserId,
    use_case: StudySessionUseCase = Depends(inject_use_case(container.study_session_use_case)),
) -> ApiResponse[StudySessionSchema]:
    """
    Open a study session on a deck the caller owns or that is public.

    Returns:
        The new active session with zeroed counters
    """
    try:
        session = unwrap_or_raise(
            use_case.create_session(user_id=user_id, deck_id=request.deck_id, mode=request.mode)
        )
        return ApiResponse(data=StudySessionSchema.from_domain(session))
    except MicroscrollError:
        raise
    except Exception as e:
        logger.error(
            f"Failed to create study session for deck {request.deck_id}: {e!s}", exc_info=True
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_UNEXPECTED
        ) from e


@router.patch(
    "/sessions/{session_id}",
    response_model=ApiResponse[EndedStudySessionSchema],
    status_code=status.HTTP_200_OK,
)
def end_session(
    session_id: Annotated[int, Path(gt=0)],
    request: StudySessionEndRequest,
    user_id: CurrentUserId,
    use_case: StudySessionUseCase = Depends(inject_use_case(container.study_session_use_case)),
) -> ApiResponse[EndedStudySessionSchema]:
    """
    End an active session.

    Each counter is reconciled to the larger of the accumulated and the
    submitted value. Ending an already-ended session returns 409.
    """
    try:
        counters = SessionCounters(
            cards_studied=request.cards_studied,
            correct_answers=request.correct_answers,
            total_time=request.total_time,
            streak=request.streak,
        )
        ended = unwrap_or_raise(use_case.end_session(session_id, user_id, counters))
        return ApiResponse(data=EndedStudySessionSchema.from_result(ended))
    except MicroscrollError:
        raise
    except Exception as e:
        logger.error(f"Failed to end study session {session_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_UNEXPECTED
        ) from e


@router.get(
    "/sessions",
    response_model=ApiResponse[list[StudySessionSchema]],
    status_code=status.HTTP_200_OK,
)
def list_sessions(
    user_id: CurrentUserId,
    deck_id: int | None = Query(None, alias="deckId", gt=0),
    mode: SessionMode | None = Query(None),
    limit: int = Query(settings.SESSIONS_DEFAULT_LIMIT, ge=1, le=100),
    offset: int = Query(0, ge=0),
    use_case: StudySessionUseCase = Depends(inject_use_case(container.study_session_use_case)),
) -> ApiResponse[list[StudySessionSchema]]:
    """List the caller's sessions, newest first."""
    try:
        sessions = use_case.list_sessions(
            user_id=user_id, deck_id=deck_id, mode=mode, limit=limit, offset=offset
        )
        return ApiResponse(data=[StudySessionSchema.from_domain(s) for s in sessions])
    except Exception as e:
        logger.error(f"Failed to list study sessions: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_UNEXPECTED
        ) from e


@router.post(
    "/review",
    response_model=ApiResponse[CardProgressSchema],
    status_code=status.HTTP_200_OK,
)
def review_card(
    request: ReviewRequest,
    user_id: CurrentUserId,
    use_case: ReviewCardUseCase = Depends(inject_use_case(container.review_card_use_case)),
) -> ApiResponse[CardProgressSchema]:
    """
    Record one review, counted in the given session when sessionId is set.

    Returns:
        The card's updated progress
    """
    try:
        progress = unwrap_or_raise(
            use_case.record_review(
                session_id=request.session_id,
                user_id=user_id,
                card_id=request.card_id,
                correct=request.correct,
                time_spent=request.time_spent,
            )
        )
        return ApiResponse(data=CardProgressSchema.from_domain(progress))
    except MicroscrollError:
        raise
    except Exception as e:
        logger.error(f"Failed to record review of card {request.card_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_UNEXPECTED
        ) from e


@router.get(
    "/due",
    response_model=ApiResponse[DueCardsSchema],
    status_code=status.HTTP_200_OK,
)
def get_due_cards(
    user_id: CurrentUserId,
    deck_id: int | None = Query(None, alias="deckId", gt=0),
    limit: int | None = Query(None, ge=1, le=settings.DUE_CARDS_MAX_LIMIT),
    use_case: DueCardsUseCase = Depends(inject_use_case(container.due_cards_use_case)),
) -> ApiResponse[DueCardsSchema]:
    """
    Cards due for review, struggling and least recently seen first.

    Without deckId the queue spans every deck the caller owns.
    """
    try:
        due = unwrap_or_raise(use_case.get_due_cards(user_id, deck_id=deck_id, limit=limit))
        return ApiResponse(
            data=DueCardsSchema(
                cards=[DueCardSchema.from_domain(card) for card in due.cards],
                total=due.total,
            )
        )
    except MicroscrollError:
        raise
    except Exception as e:
        logger.error(f"Failed to compute due cards: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_UNEXPECTED
        ) from e


@router.post(
    "/speed-results",
    response_model=ApiResponse[SpeedResultsAckSchema],
    status_code=status.HTTP_200_OK,
)
@limiter.limit("30/minute")  # type: ignore[misc]
def submit_speed_results(
    request: Request,
    payload: SpeedResultsRequest,
    user_id: CurrentUserId,
    use_case: SpeedResultsUseCase = Depends(inject_use_case(container.speed_results_use_case)),
) -> ApiResponse[SpeedResultsAckSchema]:
    """
    Submit a speed-mode batch.

    Safe to retry: an identical batch is acknowledged with duplicate=true and
    applied only once.
    """
    try:
        submission = SpeedResultsSubmission(
            deck_id=payload.deck_id,
            cards_played=payload.cards_played,
            correct_answers=payload.correct_answers,
            total_time=payload.total_time,
            max_streak=payload.max_streak,
            card_results=[item.to_dto() for item in payload.card_results],
            submission_id=payload.submission_id,
        )
        ack = unwrap_or_raise(use_case.submit_speed_results(user_id, submission))
        return ApiResponse(data=SpeedResultsAckSchema.model_validate(ack))
    except MicroscrollError:
        raise
    except Exception as e:
        logger.error(
            f"Failed to submit speed results for deck {payload.deck_id}: {e!s}", exc_info=True
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_UNEXPECTED
        ) from e

"""Use case for recording a single card review, with or without a study session."""

from collections.abc import Callable
from datetime import datetime

import structlog

from microscroll.application.common.result import Failure, Result, Success
from microscroll.application.common.unit_of_work import ConcurrentUpdateError, UnitOfWork
from microscroll.application.study.errors import StudyError
from microscroll.application.study.protocols.card_progress_repository import (
    CardProgressRepositoryProtocol,
)
from microscroll.application.study.protocols.card_repository import CardRepositoryProtocol
from microscroll.application.study.protocols.deck_access import DeckAccessProtocol
from microscroll.application.study.protocols.study_session_repository import (
    StudySessionRepositoryProtocol,
)
from microscroll.config import get_settings
from microscroll.domain.common.exceptions import ValidationError
from microscroll.domain.common.value_objects import CardId, StudySessionId, UserId
from microscroll.domain.study.entities.card_progress import CardProgress
from microscroll.domain.study.entities.study_session import StudySession
from microscroll.domain.study.services.scheduling_policy import SchedulingPolicy
from microscroll.utils import utc_now

logger = structlog.get_logger(__name__)


class ReviewCardUseCase:
    """Applies one review outcome to a card's progress and, if given, its session."""

    def __init__(
        self,
        session_repository: StudySessionRepositoryProtocol,
        progress_repository: CardProgressRepositoryProtocol,
        card_repository: CardRepositoryProtocol,
        deck_access: DeckAccessProtocol,
        uow: UnitOfWork,
        scheduling_policy: SchedulingPolicy,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.session_repository = session_repository
        self.progress_repository = progress_repository
        self.card_repository = card_repository
        self.deck_access = deck_access
        self.uow = uow
        self.scheduling_policy = scheduling_policy
        self.clock = clock

        self.retries = get_settings().STUDY_CONFLICT_RETRIES

    def record_review(
        self,
        session_id: int | None,
        user_id: int,
        card_id: int,
        correct: bool,
        time_spent: int = 0,
    ) -> Result[CardProgress, StudyError]:
        """
        Record a review atomically.

        This method:
        1. Resolves where the review happens: the caller's active session when
           session_id is given, otherwise any deck the caller may read
        2. Checks the card belongs to that session's deck (or exists at all)
        3. Applies the scheduling policy to the card's progress
        4. Folds the outcome into the session counters and in-session streak
        5. Commits both writes together

        A concurrent writer on the same progress row or session invalidates
        the transaction; it is rolled back and replayed from a fresh read.

        Args:
            session_id: Session the review belongs to, or None for a standalone review
            user_id: ID of the learner
            card_id: Reviewed card
            correct: Whether the answer was correct
            time_spent: Seconds spent on the card

        Returns:
            The card's updated progress
        """
        user_id_vo = UserId(user_id)
        card_id_vo = CardId(card_id)

        def work() -> Result[CardProgress, StudyError]:
            session: StudySession | None = None
            if session_id is not None:
                session = self.session_repository.find_by_id(StudySessionId(session_id))
                if session is None:
                    return Failure(StudyError.not_found("Study session"))
                if session.user_id != user_id_vo:
                    return Failure(StudyError.forbidden("Study session"))
                if not session.is_active:
                    return Failure(StudyError.conflict("Study session has already ended"))
                if self.card_repository.find_deck_id(card_id_vo) != session.deck_id:
                    return Failure(StudyError.not_found("Card"))
            else:
                deck_id = self.card_repository.find_deck_id(card_id_vo)
                if deck_id is None:
                    return Failure(StudyError.not_found("Card"))
                if not self.deck_access.can_access_deck(user_id_vo, deck_id).allowed:
                    return Failure(StudyError.forbidden("Deck"))
                if time_spent < 0:
                    return Failure(StudyError.validation("Time spent cannot be negative"))

            progress = self.progress_repository.find(user_id_vo, card_id_vo)
            if progress is None:
                progress = CardProgress.start(user_id_vo, card_id_vo)

            if session is not None:
                try:
                    session.record_review(correct, time_spent)
                except ValidationError as e:
                    return Failure(StudyError.validation(e.message))

            updated = self.scheduling_policy.next(progress, correct, self.clock())
            saved = self.progress_repository.save(updated)
            if session is not None:
                self.session_repository.save(session)
            return Success(saved)

        try:
            result = self.uow.execute(work, attempts=self.retries)
        except ConcurrentUpdateError:
            logger.warning(
                "card_review_conflict",
                session_id=session_id,
                card_id=card_id,
                attempts=self.retries,
            )
            return Failure(StudyError.conflict("Card was reviewed concurrently, please retry"))

        if result.is_success:
            progress = result.unwrap()
            logger.debug(
                "card_reviewed",
                session_id=session_id,
                card_id=card_id,
                correct=correct,
                mastery_level=progress.mastery_level,
            )
        return result

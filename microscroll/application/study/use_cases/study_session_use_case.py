"""Use case for the study session lifecycle: open, end, list."""

from collections.abc import Callable
from datetime import datetime

import structlog

from microscroll.application.common.result import Failure, Result, Success
from microscroll.application.common.unit_of_work import ConcurrentUpdateError, UnitOfWork
from microscroll.application.study.errors import StudyError
from microscroll.application.study.protocols.deck_access import DeckAccess, DeckAccessProtocol
from microscroll.application.study.protocols.study_session_repository import (
    StudySessionRepositoryProtocol,
)
from microscroll.application.study.use_cases.dtos import EndedSession, SessionCounters
from microscroll.config import get_settings
from microscroll.domain.common.domain_event import DomainEvent
from microscroll.domain.common.exceptions import ValidationError
from microscroll.domain.common.value_objects import DeckId, StudySessionId, UserId
from microscroll.domain.study.entities.study_session import SessionMode, StudySession
from microscroll.domain.study.services.streak_calculator import (
    StreakCalculator,
    StreakSummary,
)
from microscroll.utils import utc_now

logger = structlog.get_logger(__name__)


class StudySessionUseCase:
    """Opens, finalizes and lists study sessions."""

    def __init__(
        self,
        session_repository: StudySessionRepositoryProtocol,
        deck_access: DeckAccessProtocol,
        uow: UnitOfWork,
        streak_calculator: StreakCalculator,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.session_repository = session_repository
        self.deck_access = deck_access
        self.uow = uow
        self.streak_calculator = streak_calculator
        self.clock = clock

        settings = get_settings()
        self.zone = settings.study_zone
        self.retries = settings.STUDY_CONFLICT_RETRIES

    def create_session(
        self, user_id: int, deck_id: int, mode: SessionMode
    ) -> Result[StudySession, StudyError]:
        """
        Open a new active session with zeroed counters.

        Args:
            user_id: ID of the learner
            deck_id: Deck to study; must be owned by the learner or public
            mode: normal, speed or ghost

        Returns:
            The persisted session, or NOT_FOUND / FORBIDDEN for the deck
        """
        user_id_vo = UserId(user_id)
        deck_id_vo = DeckId(deck_id)

        access = self.deck_access.can_access_deck(user_id_vo, deck_id_vo)
        if access == DeckAccess.NOT_FOUND:
            return Failure(StudyError.not_found("Deck"))
        if not access.allowed:
            return Failure(StudyError.forbidden("Deck"))

        def work() -> Result[StudySession, StudyError]:
            session = StudySession.start(user_id_vo, deck_id_vo, mode, self.clock())
            return Success(self.session_repository.save(session))

        result = self.uow.execute(work)
        if result.is_success:
            logger.info(
                "study_session_started",
                session_id=result.unwrap().id.value,
                deck_id=deck_id,
                mode=mode.value,
            )
        return result

    def end_session(
        self, session_id: int, user_id: int, counters: SessionCounters
    ) -> Result[EndedSession, StudyError]:
        """
        Finalize an active session and recompute the account streak.

        Each counter becomes the larger of what reviews accumulated and what
        the client submitted. Ending an ended session is a CONFLICT and leaves
        the stored counters untouched.
        """
        user_id_vo = UserId(user_id)
        events: list[DomainEvent] = []

        def work() -> Result[StudySession, StudyError]:
            session = self.session_repository.find_by_id(StudySessionId(session_id))
            if session is None:
                return Failure(StudyError.not_found("Study session"))
            if session.user_id != user_id_vo:
                return Failure(StudyError.forbidden("Study session"))
            if not session.is_active:
                return Failure(StudyError.conflict("Study session has already ended"))

            try:
                session.end(
                    cards_studied=counters.cards_studied,
                    correct_answers=counters.correct_answers,
                    total_time=counters.total_time,
                    now=self.clock(),
                    streak=counters.streak,
                )
            except ValidationError as e:
                return Failure(StudyError.validation(e.message))

            saved = self.session_repository.save(session)
            events[:] = session.collect_events()
            return Success(saved)

        try:
            result = self.uow.execute(work, attempts=self.retries)
        except ConcurrentUpdateError:
            logger.warning("study_session_end_conflict", session_id=session_id)
            return Failure(StudyError.conflict("Study session was modified concurrently"))

        if result.is_failure:
            return Failure(result.unwrap_error())

        session = result.unwrap()
        streaks = self.account_streaks(user_id_vo)
        for event in events:
            logger.info("study_session_ended", current_streak=streaks.current, **event.to_dict())
        return Success(EndedSession(session=session, streaks=streaks))

    def list_sessions(
        self,
        user_id: int,
        deck_id: int | None = None,
        mode: SessionMode | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[StudySession]:
        """List the caller's sessions, newest first."""
        return self.session_repository.find_by_user(
            UserId(user_id),
            deck_id=DeckId(deck_id) if deck_id is not None else None,
            mode=mode,
            limit=limit,
            offset=offset,
        )

    def account_streaks(self, user_id: UserId) -> StreakSummary:
        """Consecutive-day streaks over the user's whole session history."""
        started_at = self.session_repository.find_start_times(user_id)
        return self.streak_calculator.from_timestamps(started_at, self.clock(), self.zone)

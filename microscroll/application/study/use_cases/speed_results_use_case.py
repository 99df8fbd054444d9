"""Use case for idempotent speed-mode batch submissions."""

from collections.abc import Callable
from datetime import datetime, timedelta

import structlog

from microscroll.application.common.result import Failure, Result, Success
from microscroll.application.common.unit_of_work import ConcurrentUpdateError, UnitOfWork
from microscroll.application.study.errors import StudyError
from microscroll.application.study.protocols.card_progress_repository import (
    CardProgressRepositoryProtocol,
)
from microscroll.application.study.protocols.card_repository import CardRepositoryProtocol
from microscroll.application.study.protocols.deck_access import DeckAccess, DeckAccessProtocol
from microscroll.application.study.protocols.study_session_repository import (
    StudySessionRepositoryProtocol,
)
from microscroll.application.study.use_cases.dtos import SpeedResultsAck, SpeedResultsSubmission
from microscroll.config import get_settings
from microscroll.domain.common.exceptions import ValidationError
from microscroll.domain.common.value_objects import CardId, ContentHash, DeckId, UserId
from microscroll.domain.study.entities.card_progress import CardProgress
from microscroll.domain.study.entities.study_session import StudySession
from microscroll.domain.study.services.scheduling_policy import SchedulingPolicy
from microscroll.utils import utc_now

logger = structlog.get_logger(__name__)


class SpeedResultsUseCase:
    """Records a speed-mode summary and its itemized results as one unit."""

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

        settings = get_settings()
        self.retries = settings.STUDY_CONFLICT_RETRIES
        self.dedup_window = timedelta(minutes=settings.SPEED_DEDUP_WINDOW_MINUTES)

    @staticmethod
    def compute_submission_hash(user_id: int, submission: SpeedResultsSubmission) -> ContentHash:
        """
        Dedup key of a batch: user, deck, optional submission id, summary, items.

        Item order is part of the key since results are applied in order.
        """
        items = [
            [item.card_id, item.correct, item.time_spent] for item in submission.card_results
        ]
        return ContentHash.compute_from_parts(
            user_id,
            submission.deck_id,
            submission.submission_id,
            submission.cards_played,
            submission.correct_answers,
            submission.total_time,
            submission.max_streak,
            items,
        )

    def submit_speed_results(
        self, user_id: int, submission: SpeedResultsSubmission
    ) -> Result[SpeedResultsAck, StudyError]:
        """
        Apply a speed-mode batch exactly once.

        The summary is stored as an already-ended speed session and every
        itemized result goes through the scheduling policy, in order, in the
        same transaction. Replaying a batch under the same submission id, or an
        identical batch without one inside SPEED_DEDUP_WINDOW_MINUTES, returns
        the original acknowledgement with duplicate=True and changes nothing.
        Reusing a submission id for a different batch is a CONFLICT.

        Args:
            user_id: ID of the learner
            submission: Summary counters plus optional itemized results

        Returns:
            Acknowledgement describing the stored summary
        """
        user_id_vo = UserId(user_id)
        deck_id_vo = DeckId(submission.deck_id)

        access = self.deck_access.can_access_deck(user_id_vo, deck_id_vo)
        if access == DeckAccess.NOT_FOUND:
            return Failure(StudyError.not_found("Deck"))
        if not access.allowed:
            return Failure(StudyError.forbidden("Deck"))

        if submission.correct_answers > submission.cards_played:
            return Failure(StudyError.validation("Correct answers cannot exceed cards played"))

        submission_hash = self.compute_submission_hash(user_id, submission)

        def work() -> Result[SpeedResultsAck, StudyError]:
            now = self.clock()
            existing = self._find_existing(user_id_vo, submission, submission_hash, now)
            if existing is not None:
                if existing.submission_hash != submission_hash:
                    return Failure(
                        StudyError.conflict("Submission id was already used for a different batch")
                    )
                return Success(self._ack(existing, submission, duplicate=True))

            try:
                session = StudySession.from_speed_summary(
                    user_id=user_id_vo,
                    deck_id=deck_id_vo,
                    cards_played=submission.cards_played,
                    correct_answers=submission.correct_answers,
                    total_time=submission.total_time,
                    max_streak=submission.max_streak,
                    submission_hash=submission_hash,
                    now=now,
                    submission_id=submission.submission_id,
                )
            except ValidationError as e:
                return Failure(StudyError.validation(e.message))

            # Repeated card ids are applied one after the other
            progress_by_card: dict[CardId, CardProgress] = {}
            for item in submission.card_results:
                card_id = CardId(item.card_id)
                if card_id not in progress_by_card:
                    if self.card_repository.find_deck_id(card_id) != deck_id_vo:
                        return Failure(StudyError.not_found("Card"))
                    progress_by_card[card_id] = self.progress_repository.find(
                        user_id_vo, card_id
                    ) or CardProgress.start(user_id_vo, card_id)
                progress_by_card[card_id] = self.scheduling_policy.next(
                    progress_by_card[card_id], item.correct, now
                )

            for progress in progress_by_card.values():
                self.progress_repository.save(progress)
            saved = self.session_repository.save(session)
            return Success(self._ack(saved, submission, duplicate=False))

        try:
            result = self.uow.execute(work, attempts=self.retries)
        except ConcurrentUpdateError:
            logger.warning("speed_results_conflict", deck_id=submission.deck_id)
            return Failure(StudyError.conflict("Speed results were submitted concurrently"))

        if result.is_success:
            ack = result.unwrap()
            logger.info(
                "speed_results_duplicate" if ack.duplicate else "speed_results_recorded",
                session_id=ack.session_id,
                deck_id=ack.deck_id,
                cards_updated=ack.cards_updated,
            )
        return result

    def _find_existing(
        self,
        user_id: UserId,
        submission: SpeedResultsSubmission,
        submission_hash: ContentHash,
        now: datetime,
    ) -> StudySession | None:
        # A submission id is a permanent key; bare content only matches recent retries
        if submission.submission_id:
            return self.session_repository.find_by_submission_id(
                user_id, submission.submission_id
            )
        return self.session_repository.find_by_submission_hash(
            user_id, submission_hash, since=now - self.dedup_window
        )

    @staticmethod
    def _ack(
        session: StudySession, submission: SpeedResultsSubmission, duplicate: bool
    ) -> SpeedResultsAck:
        return SpeedResultsAck(
            session_id=session.id.value,
            deck_id=session.deck_id.value,
            cards_played=session.cards_studied,
            correct_answers=session.correct_answers,
            total_time=session.total_time,
            max_streak=session.max_streak,
            cards_updated=len({item.card_id for item in submission.card_results}),
            duplicate=duplicate,
        )

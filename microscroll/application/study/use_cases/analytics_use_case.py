"""Use case for study analytics derived from session and progress history."""

from collections.abc import Callable
from datetime import datetime, timedelta

import structlog

from microscroll.application.common.result import Failure, Result, Success
from microscroll.application.study.errors import StudyError
from microscroll.application.study.protocols.card_progress_repository import (
    CardProgressRepositoryProtocol,
)
from microscroll.application.study.protocols.card_repository import CardRepositoryProtocol
from microscroll.application.study.protocols.deck_access import DeckAccess, DeckAccessProtocol
from microscroll.application.study.protocols.study_session_repository import (
    StudySessionRepositoryProtocol,
)
from microscroll.application.study.use_cases.dtos import DailyActivity, DeckAnalytics, UserStats
from microscroll.config import get_settings
from microscroll.domain.common.value_objects import DeckId, UserId
from microscroll.domain.study.entities.card_progress import MAX_LEVEL
from microscroll.domain.study.services.streak_calculator import StreakCalculator
from microscroll.utils import start_of_local_day, utc_now

logger = structlog.get_logger(__name__)

WEEK_DAYS = 7
RECENT_SESSIONS = 10
ACCURACY_DIGITS = 4


def _accuracy(correct_answers: int, cards_studied: int) -> float:
    if cards_studied == 0:
        return 0.0
    return round(correct_answers / cards_studied, ACCURACY_DIGITS)


def _mastery_percent(average_level: float) -> int:
    """Average mastery level as a whole percentage of the top rung."""
    return round(average_level * 100 / MAX_LEVEL)


class StudyAnalyticsUseCase:
    """
    Read-only aggregates over a learner's study history.

    Nothing is stored incrementally: every figure is recomputed on read.
    Calendar days are taken in STUDY_TIMEZONE.
    """

    def __init__(
        self,
        session_repository: StudySessionRepositoryProtocol,
        progress_repository: CardProgressRepositoryProtocol,
        card_repository: CardRepositoryProtocol,
        deck_access: DeckAccessProtocol,
        streak_calculator: StreakCalculator,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.session_repository = session_repository
        self.progress_repository = progress_repository
        self.card_repository = card_repository
        self.deck_access = deck_access
        self.streak_calculator = streak_calculator
        self.clock = clock

        self.zone = get_settings().study_zone

    def get_user_analytics(self, user_id: int) -> UserStats:
        """Account-wide statistics; all zeros for a learner without history."""
        user_id_vo = UserId(user_id)
        now = self.clock()

        totals = self.session_repository.totals(user_id_vo)
        today = self.session_repository.find_started_since(
            user_id_vo, start_of_local_day(now, self.zone)
        )
        streaks = self.streak_calculator.from_timestamps(
            self.session_repository.find_start_times(user_id_vo), now, self.zone
        )
        candidates = self.card_repository.find_due_candidates(user_id_vo)

        return UserStats(
            total_decks=self.deck_access.count_owned(user_id_vo),
            total_cards=self.card_repository.count_owned(user_id_vo),
            cards_studied_today=sum(session.cards_studied for session in today),
            current_streak=streaks.current,
            longest_streak=streaks.longest,
            total_study_time=totals.total_time,
            average_accuracy=_accuracy(totals.correct_answers, totals.cards_studied),
            mastered_cards=self.progress_repository.count_mastered(user_id_vo),
            total_reviewed=self.progress_repository.sum_reviews(user_id_vo),
            due_for_review=sum(1 for candidate in candidates if candidate.is_due(now)),
            total_sessions=totals.sessions,
            mastery_percent=_mastery_percent(
                self.progress_repository.average_mastery(user_id_vo)
            ),
        )

    def get_weekly_breakdown(self, user_id: int) -> list[DailyActivity]:
        """Seven zero-filled daily entries ending today, oldest first."""
        now = self.clock()
        today = now.astimezone(self.zone).date()
        days = [today - timedelta(days=offset) for offset in range(WEEK_DAYS - 1, -1, -1)]
        activity = {day: DailyActivity(date=day) for day in days}

        week_start = start_of_local_day(now - timedelta(days=WEEK_DAYS - 1), self.zone)
        for session in self.session_repository.find_started_since(UserId(user_id), week_start):
            entry = activity.get(session.started_at.astimezone(self.zone).date())
            if entry is None:
                continue
            entry.cards_studied += session.cards_studied
            entry.time_spent += session.total_time
            entry.sessions += 1

        return [activity[day] for day in days]

    def get_deck_analytics(
        self, user_id: int, deck_id: int
    ) -> Result[DeckAnalytics | None, StudyError]:
        """
        Statistics scoped to one deck.

        Returns:
            NOT_FOUND when the deck does not exist, FORBIDDEN when it is not
            readable, Success(None) when the learner has no history on it
        """
        user_id_vo = UserId(user_id)
        deck_id_vo = DeckId(deck_id)

        access = self.deck_access.can_access_deck(user_id_vo, deck_id_vo)
        if access == DeckAccess.NOT_FOUND:
            return Failure(StudyError.not_found("Deck"))
        if not access.allowed:
            return Failure(StudyError.forbidden("Deck"))

        totals = self.session_repository.totals(user_id_vo, deck_id_vo)
        reviewed = self.progress_repository.count_reviewed(user_id_vo, deck_id_vo)
        if totals.sessions == 0 and reviewed == 0:
            logger.debug("deck_analytics_without_history", deck_id=deck_id)
            return Success(None)

        now = self.clock()
        streaks = self.streak_calculator.from_timestamps(
            self.session_repository.find_start_times(user_id_vo, deck_id_vo), now, self.zone
        )
        candidates = self.card_repository.find_due_candidates(user_id_vo, deck_id_vo)

        return Success(
            DeckAnalytics(
                deck_id=deck_id,
                title=self.deck_access.find_title(deck_id_vo) or "",
                total_cards=self.card_repository.count_in_deck(deck_id_vo),
                cards_studied=totals.cards_studied,
                total_study_time=totals.total_time,
                average_accuracy=_accuracy(totals.correct_answers, totals.cards_studied),
                mastered_cards=self.progress_repository.count_mastered(user_id_vo, deck_id_vo),
                due_for_review=sum(1 for candidate in candidates if candidate.is_due(now)),
                current_streak=streaks.current,
                longest_streak=streaks.longest,
                total_sessions=totals.sessions,
                mastery_percent=_mastery_percent(
                    self.progress_repository.average_mastery(user_id_vo, deck_id_vo)
                ),
                recent_sessions=self.session_repository.find_by_user(
                    user_id_vo, deck_id=deck_id_vo, limit=RECENT_SESSIONS
                ),
            )
        )

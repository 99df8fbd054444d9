"""Use case for the due card queue."""

from collections.abc import Callable
from datetime import datetime

from microscroll.application.common.result import Failure, Result, Success
from microscroll.application.study.errors import StudyError
from microscroll.application.study.protocols.card_repository import CardRepositoryProtocol
from microscroll.application.study.protocols.deck_access import DeckAccess, DeckAccessProtocol
from microscroll.application.study.use_cases.dtos import DueCards
from microscroll.config import get_settings
from microscroll.domain.common.value_objects import DeckId, UserId
from microscroll.domain.study.services.due_selector import DueSelector
from microscroll.utils import utc_now


class DueCardsUseCase:
    """Read-only projection of the cards a learner should review next."""

    def __init__(
        self,
        card_repository: CardRepositoryProtocol,
        deck_access: DeckAccessProtocol,
        due_selector: DueSelector,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.card_repository = card_repository
        self.deck_access = deck_access
        self.due_selector = due_selector
        self.clock = clock

        settings = get_settings()
        self.default_limit = settings.DUE_CARDS_DEFAULT_LIMIT
        self.max_limit = settings.DUE_CARDS_MAX_LIMIT

    def get_due_cards(
        self, user_id: int, deck_id: int | None = None, limit: int | None = None
    ) -> Result[DueCards, StudyError]:
        """
        Compute the due queue from scratch.

        Args:
            user_id: ID of the learner
            deck_id: Restrict to one accessible deck; None covers every deck
                the learner owns
            limit: Page size, defaults to DUE_CARDS_DEFAULT_LIMIT and is
                capped at DUE_CARDS_MAX_LIMIT

        Returns:
            The first `limit` due cards in review order and the total due count
        """
        user_id_vo = UserId(user_id)
        deck_id_vo = DeckId(deck_id) if deck_id is not None else None

        if deck_id_vo is not None:
            access = self.deck_access.can_access_deck(user_id_vo, deck_id_vo)
            if access == DeckAccess.NOT_FOUND:
                return Failure(StudyError.not_found("Deck"))
            if not access.allowed:
                return Failure(StudyError.forbidden("Deck"))

        page_size = min(limit or self.default_limit, self.max_limit)
        candidates = self.card_repository.find_due_candidates(user_id_vo, deck_id_vo)
        now = self.clock()

        cards = list(self.due_selector.select(candidates, now, limit=page_size))
        total = sum(1 for candidate in candidates if candidate.is_due(now))
        return Success(DueCards(cards=cards, total=total))

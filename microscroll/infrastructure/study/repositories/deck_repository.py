"""Repository answering deck visibility questions."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from microscroll.application.study.protocols.deck_access import DeckAccess
from microscroll.domain.common.value_objects import DeckId, UserId
from microscroll.models import Deck as DeckORM


class DeckRepository:
    """Read-only access to decks, implementing DeckAccessProtocol."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def can_access_deck(self, user_id: UserId, deck_id: DeckId) -> DeckAccess:
        """
        Resolve how a user may see a deck.

        Args:
            user_id: The requesting user
            deck_id: The deck ID

        Returns:
            OWNER, PUBLIC, DENIED or NOT_FOUND
        """
        deck = self.db.get(DeckORM, deck_id.value)
        if deck is None:
            return DeckAccess.NOT_FOUND
        if deck.user_id == user_id.value:
            return DeckAccess.OWNER
        if deck.is_public:
            return DeckAccess.PUBLIC
        return DeckAccess.DENIED

    def find_title(self, deck_id: DeckId) -> str | None:
        return self.db.execute(
            select(DeckORM.title).where(DeckORM.id == deck_id.value)
        ).scalar_one_or_none()

    def count_owned(self, user_id: UserId) -> int:
        stmt = select(func.count(DeckORM.id)).where(DeckORM.user_id == user_id.value)
        return self.db.execute(stmt).scalar() or 0

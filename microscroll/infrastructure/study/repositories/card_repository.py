"""Repository for card lookups used by the study engine."""

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session

from microscroll.domain.common.value_objects import CardId, DeckId, UserId
from microscroll.domain.study.services.due_selector import DueCandidate
from microscroll.models import Card as CardORM
from microscroll.models import CardProgress as CardProgressORM
from microscroll.models import Deck as DeckORM
from microscroll.utils import ensure_utc


class CardRepository:
    """Read-only card queries."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_deck_id(self, card_id: CardId) -> DeckId | None:
        stmt = select(CardORM.deck_id).where(CardORM.id == card_id.value)
        deck_id = self.db.execute(stmt).scalar_one_or_none()
        return DeckId(deck_id) if deck_id is not None else None

    def find_due_candidates(
        self, user_id: UserId, deck_id: DeckId | None = None
    ) -> list[DueCandidate]:
        """
        Load cards left-joined with the user's progress.

        Args:
            user_id: The learner
            deck_id: Restrict to one deck; None means every deck the user owns

        Returns:
            One candidate per card
        """
        stmt = select(CardORM, CardProgressORM).outerjoin(
            CardProgressORM,
            and_(
                CardProgressORM.card_id == CardORM.id,
                CardProgressORM.user_id == user_id.value,
            ),
        )
        if deck_id is not None:
            stmt = stmt.where(CardORM.deck_id == deck_id.value)
        else:
            owned = select(DeckORM.id).where(DeckORM.user_id == user_id.value)
            stmt = stmt.where(CardORM.deck_id.in_(owned))

        return [
            DueCandidate(
                card_id=CardId(card.id),
                deck_id=DeckId(card.deck_id),
                order=card.order,
                front=card.front,
                back=card.back,
                mastery_level=progress.mastery_level if progress else 0,
                review_count=progress.review_count if progress else 0,
                last_reviewed=ensure_utc(progress.last_reviewed) if progress else None,
                next_review_date=ensure_utc(progress.next_review_date) if progress else None,
            )
            for card, progress in self.db.execute(stmt).all()
        ]

    def count_owned(self, user_id: UserId) -> int:
        stmt = (
            select(func.count(CardORM.id))
            .join(DeckORM, DeckORM.id == CardORM.deck_id)
            .where(DeckORM.user_id == user_id.value)
        )
        return self.db.execute(stmt).scalar() or 0

    def count_in_deck(self, deck_id: DeckId) -> int:
        stmt = select(func.count(CardORM.id)).where(CardORM.deck_id == deck_id.value)
        return self.db.execute(stmt).scalar() or 0

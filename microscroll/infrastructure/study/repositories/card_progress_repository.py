"""Repository for CardProgress domain entities."""

import logging

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from microscroll.domain.common.value_objects import CardId, DeckId, UserId
from microscroll.domain.study.entities.card_progress import MAX_LEVEL, CardProgress
from microscroll.infrastructure.study.mappers.card_progress_mapper import CardProgressMapper
from microscroll.models import Card as CardORM
from microscroll.models import CardProgress as CardProgressORM

logger = logging.getLogger(__name__)


class CardProgressRepository:
    """Repository for CardProgress domain entities. Never commits."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = CardProgressMapper()

    def find(self, user_id: UserId, card_id: CardId) -> CardProgress | None:
        """
        Find a user's progress on a card.

        Args:
            user_id: The learner
            card_id: The card ID

        Returns:
            CardProgress entity if the card was reviewed, None otherwise
        """
        stmt = select(CardProgressORM).where(
            CardProgressORM.user_id == user_id.value,
            CardProgressORM.card_id == card_id.value,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, progress: CardProgress) -> CardProgress:
        """
        Stage a progress record (create or update).

        An update whose entity was read at an older row version raises
        StaleDataError before anything is written.

        The row is flushed so that version mismatches and duplicate first
        reviews surface inside the caller's unit of work.

        Args:
            progress: The progress entity to save

        Returns:
            Saved progress entity with database-generated values
        """
        if progress.id.is_transient:
            orm_model = self.mapper.to_orm(progress)
            self.db.add(orm_model)
        else:
            existing = self.db.get(CardProgressORM, progress.id.value)
            if not existing:
                raise ValueError(f"CardProgress {progress.id.value} not found")
            if existing.version != progress.version:
                raise StaleDataError(
                    f"CardProgress {progress.id.value} is at version {existing.version}, "
                    f"read at {progress.version}"
                )
            orm_model = self.mapper.to_orm(progress, existing)

        self.db.flush()
        logger.debug(f"Staged progress for card {progress.card_id.value} (v{orm_model.version})")
        return self.mapper.to_domain(orm_model)

    def count_mastered(self, user_id: UserId, deck_id: DeckId | None = None) -> int:
        stmt = self._scoped(
            select(func.count(CardProgressORM.id)).where(
                CardProgressORM.mastery_level == MAX_LEVEL
            ),
            user_id,
            deck_id,
        )
        return self.db.execute(stmt).scalar() or 0

    def sum_reviews(self, user_id: UserId, deck_id: DeckId | None = None) -> int:
        stmt = self._scoped(
            select(func.coalesce(func.sum(CardProgressORM.review_count), 0)),
            user_id,
            deck_id,
        )
        return self.db.execute(stmt).scalar() or 0

    def count_reviewed(self, user_id: UserId, deck_id: DeckId | None = None) -> int:
        stmt = self._scoped(
            select(func.count(CardProgressORM.id)).where(CardProgressORM.review_count > 0),
            user_id,
            deck_id,
        )
        return self.db.execute(stmt).scalar() or 0

    def average_mastery(self, user_id: UserId, deck_id: DeckId | None = None) -> float:
        stmt = self._scoped(
            select(func.avg(CardProgressORM.mastery_level)).where(
                CardProgressORM.review_count > 0
            ),
            user_id,
            deck_id,
        )
        return float(self.db.execute(stmt).scalar() or 0)

    @staticmethod
    def _scoped(stmt: Select, user_id: UserId, deck_id: DeckId | None) -> Select:
        stmt = stmt.where(CardProgressORM.user_id == user_id.value)
        if deck_id is not None:
            stmt = stmt.join_from(
                CardProgressORM, CardORM, CardORM.id == CardProgressORM.card_id
            ).where(CardORM.deck_id == deck_id.value)
        return stmt

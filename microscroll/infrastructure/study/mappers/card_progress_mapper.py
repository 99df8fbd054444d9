"""Mapper for CardProgress ORM ↔ Domain conversion."""

from microscroll.domain.common.value_objects import CardId, CardProgressId, UserId
from microscroll.domain.study.entities.card_progress import CardProgress
from microscroll.models import CardProgress as CardProgressORM
from microscroll.utils import ensure_utc


class CardProgressMapper:
    """Mapper for CardProgress ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: CardProgressORM) -> CardProgress:
        """Convert ORM model to domain entity."""
        return CardProgress(
            id=CardProgressId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            card_id=CardId(orm_model.card_id),
            review_count=orm_model.review_count,
            correct_count=orm_model.correct_count,
            incorrect_count=orm_model.incorrect_count,
            mastery_level=orm_model.mastery_level,
            last_reviewed=ensure_utc(orm_model.last_reviewed),
            next_review_date=ensure_utc(orm_model.next_review_date),
            version=orm_model.version,
        )

    def to_orm(
        self, domain_entity: CardProgress, orm_model: CardProgressORM | None = None
    ) -> CardProgressORM:
        """Convert domain entity to ORM model. The version column is left to SQLAlchemy."""
        if orm_model:
            # Update existing
            orm_model.review_count = domain_entity.review_count
            orm_model.correct_count = domain_entity.correct_count
            orm_model.incorrect_count = domain_entity.incorrect_count
            orm_model.mastery_level = domain_entity.mastery_level
            orm_model.last_reviewed = domain_entity.last_reviewed
            orm_model.next_review_date = domain_entity.next_review_date
            return orm_model

        # Create new
        return CardProgressORM(
            id=domain_entity.id.value if not domain_entity.id.is_transient else None,
            user_id=domain_entity.user_id.value,
            card_id=domain_entity.card_id.value,
            review_count=domain_entity.review_count,
            correct_count=domain_entity.correct_count,
            incorrect_count=domain_entity.incorrect_count,
            mastery_level=domain_entity.mastery_level,
            last_reviewed=domain_entity.last_reviewed,
            next_review_date=domain_entity.next_review_date,
        )

"""Mapper for StudySession ORM ↔ Domain conversion."""

from microscroll.domain.common.value_objects import ContentHash, DeckId, StudySessionId, UserId
from microscroll.domain.study.entities.study_session import (
    SessionMode,
    SessionStatus,
    StudySession,
)
from microscroll.models import StudySession as StudySessionORM
from microscroll.utils import as_utc, ensure_utc


class StudySessionMapper:
    """Mapper for StudySession ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: StudySessionORM) -> StudySession:
        """Convert ORM model to domain entity."""
        return StudySession(
            id=StudySessionId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            deck_id=DeckId(orm_model.deck_id),
            mode=SessionMode(orm_model.mode),
            status=SessionStatus(orm_model.status),
            started_at=as_utc(orm_model.started_at),
            ended_at=ensure_utc(orm_model.ended_at),
            cards_studied=orm_model.cards_studied,
            correct_answers=orm_model.correct_answers,
            total_time=orm_model.total_time,
            streak=orm_model.streak,
            max_streak=orm_model.max_streak,
            submission_id=orm_model.submission_id,
            submission_hash=(
                ContentHash(orm_model.submission_hash) if orm_model.submission_hash else None
            ),
            version=orm_model.version,
        )

    def to_orm(
        self, domain_entity: StudySession, orm_model: StudySessionORM | None = None
    ) -> StudySessionORM:
        """Convert domain entity to ORM model."""
        if orm_model:
            # Update existing; identity and submission keys never change
            orm_model.status = domain_entity.status.value
            orm_model.ended_at = domain_entity.ended_at
            orm_model.cards_studied = domain_entity.cards_studied
            orm_model.correct_answers = domain_entity.correct_answers
            orm_model.total_time = domain_entity.total_time
            orm_model.streak = domain_entity.streak
            orm_model.max_streak = domain_entity.max_streak
            return orm_model

        # Create new
        return StudySessionORM(
            id=domain_entity.id.value if not domain_entity.id.is_transient else None,
            user_id=domain_entity.user_id.value,
            deck_id=domain_entity.deck_id.value,
            mode=domain_entity.mode.value,
            status=domain_entity.status.value,
            started_at=domain_entity.started_at,
            ended_at=domain_entity.ended_at,
            cards_studied=domain_entity.cards_studied,
            correct_answers=domain_entity.correct_answers,
            total_time=domain_entity.total_time,
            streak=domain_entity.streak,
            max_streak=domain_entity.max_streak,
            submission_id=domain_entity.submission_id,
            submission_hash=(
                domain_entity.submission_hash.value if domain_entity.submission_hash else None
            ),
        )

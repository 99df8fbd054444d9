"""Repository for StudySession domain entities."""

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from microscroll.application.study.protocols.study_session_repository import SessionTotals
from microscroll.domain.common.value_objects import ContentHash, DeckId, StudySessionId, UserId
from microscroll.domain.study.entities.study_session import SessionMode, StudySession
from microscroll.infrastructure.study.mappers.study_session_mapper import StudySessionMapper
from microscroll.models import StudySession as StudySessionORM
from microscroll.utils import as_utc


class StudySessionRepository:
    """Repository for StudySession domain entities. Never commits."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = StudySessionMapper()

    def find_by_id(self, session_id: StudySessionId) -> StudySession | None:
        orm_model = self.db.get(StudySessionORM, session_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_submission_id(self, user_id: UserId, submission_id: str) -> StudySession | None:
        stmt = select(StudySessionORM).where(
            StudySessionORM.user_id == user_id.value,
            StudySessionORM.submission_id == submission_id,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_submission_hash(
        self, user_id: UserId, submission_hash: ContentHash, since: datetime
    ) -> StudySession | None:
        stmt = (
            select(StudySessionORM)
            .where(
                StudySessionORM.user_id == user_id.value,
                StudySessionORM.submission_hash == submission_hash.value,
                StudySessionORM.started_at >= since,
            )
            .order_by(StudySessionORM.started_at.desc(), StudySessionORM.id.desc())
            .limit(1)
        )
        orm_model = self.db.execute(stmt).scalars().first()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, session: StudySession) -> StudySession:
        """
        Stage a session (create or update) and flush it.

        Raises StaleDataError when the row changed since the session was read.

        Args:
            session: The session entity to save

        Returns:
            Saved session entity with database-generated values
        """
        if session.id.is_transient:
            orm_model = self.mapper.to_orm(session)
            self.db.add(orm_model)
        else:
            existing = self.db.get(StudySessionORM, session.id.value)
            if not existing:
                raise ValueError(f"StudySession {session.id.value} not found")
            if existing.version != session.version:
                raise StaleDataError(
                    f"StudySession {session.id.value} is at version {existing.version}, "
                    f"read at {session.version}"
                )
            orm_model = self.mapper.to_orm(session, existing)

        self.db.flush()
        return self.mapper.to_domain(orm_model)

    def find_by_user(
        self,
        user_id: UserId,
        deck_id: DeckId | None = None,
        mode: SessionMode | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[StudySession]:
        """
        List a user's sessions.

        Returns:
            Sessions ordered by started_at DESC, then id DESC
        """
        stmt = select(StudySessionORM).where(StudySessionORM.user_id == user_id.value)
        if deck_id is not None:
            stmt = stmt.where(StudySessionORM.deck_id == deck_id.value)
        if mode is not None:
            stmt = stmt.where(StudySessionORM.mode == mode.value)
        stmt = (
            stmt.order_by(StudySessionORM.started_at.desc(), StudySessionORM.id.desc())
            .offset(offset)
            .limit(limit)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def find_started_since(
        self, user_id: UserId, since: datetime, deck_id: DeckId | None = None
    ) -> list[StudySession]:
        stmt = select(StudySessionORM).where(
            StudySessionORM.user_id == user_id.value,
            StudySessionORM.started_at >= since,
        )
        if deck_id is not None:
            stmt = stmt.where(StudySessionORM.deck_id == deck_id.value)
        orm_models = self.db.execute(stmt.order_by(StudySessionORM.started_at)).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def find_start_times(self, user_id: UserId, deck_id: DeckId | None = None) -> list[datetime]:
        stmt = select(StudySessionORM.started_at).where(StudySessionORM.user_id == user_id.value)
        if deck_id is not None:
            stmt = stmt.where(StudySessionORM.deck_id == deck_id.value)
        return [as_utc(started_at) for started_at in self.db.execute(stmt).scalars().all()]

    def totals(self, user_id: UserId, deck_id: DeckId | None = None) -> SessionTotals:
        """Sum session counters with a single aggregate query."""
        stmt = select(
            func.count(StudySessionORM.id),
            func.coalesce(func.sum(StudySessionORM.cards_studied), 0),
            func.coalesce(func.sum(StudySessionORM.correct_answers), 0),
            func.coalesce(func.sum(StudySessionORM.total_time), 0),
        ).where(StudySessionORM.user_id == user_id.value)
        if deck_id is not None:
            stmt = stmt.where(StudySessionORM.deck_id == deck_id.value)

        sessions, cards_studied, correct_answers, total_time = self.db.execute(stmt).one()
        return SessionTotals(
            sessions=sessions,
            cards_studied=cards_studied,
            correct_answers=correct_answers,
            total_time=total_time,
        )

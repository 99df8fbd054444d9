"""SQLAlchemy implementation of the UnitOfWork port."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from microscroll.application.common.unit_of_work import ConcurrentUpdateError, UnitOfWork

logger = logging.getLogger(__name__)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """
    Unit of work over the request-scoped session.

    Repositories only stage changes; this class owns commit and rollback.
    Version mismatches (StaleDataError) and unique-key races
    (IntegrityError) are reported as ConcurrentUpdateError.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def commit(self) -> None:
        try:
            self.db.commit()
        except (StaleDataError, IntegrityError) as e:
            self.db.rollback()
            logger.info(f"Commit lost a concurrent update: {e!s}")
            raise ConcurrentUpdateError(str(e)) from e

    def rollback(self) -> None:
        self.db.rollback()

    def is_conflict(self, error: Exception) -> bool:
        # Flushes inside the work raise the SQLAlchemy errors directly
        return super().is_conflict(error) or isinstance(error, (StaleDataError, IntegrityError))

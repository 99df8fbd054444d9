"""
Transaction boundary for use cases.

A use case hands its whole read-modify-write to `execute`. Lost optimistic
concurrency races are detected at flush or commit time and the work is run
again against fresh state.

    try:
        result = self.uow.execute(work, attempts=self.retries)
    except ConcurrentUpdateError:
        return Failure(StudyError.conflict("Card was reviewed concurrently, please retry"))
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from types import TracebackType
from typing import Self, TypeVar

import structlog

from microscroll.application.common.result import Result

logger = structlog.get_logger(__name__)

T = TypeVar("T")
E = TypeVar("E")


class ConcurrentUpdateError(Exception):
    """Another transaction changed the same rows first."""


class UnitOfWork(ABC):
    """Port implemented by the persistence layer (see SQLAlchemyUnitOfWork)."""

    @abstractmethod
    def commit(self) -> None:
        """Make staged changes durable; raises ConcurrentUpdateError on a lost race."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard staged changes."""

    def is_conflict(self, error: Exception) -> bool:
        """Whether an error escaping the work means a concurrent writer won."""
        return isinstance(error, ConcurrentUpdateError)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        # Commit is explicit; leaving on an exception always rolls back
        if exc_type is not None:
            self.rollback()

    def execute(self, work: Callable[[], Result[T, E]], attempts: int = 1) -> Result[T, E]:
        """
        Run work in a transaction: commit on Success, roll back on Failure.

        Work must re-read everything it mutates, since a conflicting attempt
        is discarded and run again from scratch.

        Raises:
            ConcurrentUpdateError: If every attempt lost a concurrent update
        """
        for attempt in range(1, attempts + 1):
            try:
                with self:
                    result = work()
                    if result.is_success:
                        self.commit()
                    else:
                        self.rollback()
                    return result
            except Exception as e:
                if not self.is_conflict(e):
                    raise
                logger.warning("concurrent_update_detected", attempt=attempt, attempts=attempts)

        raise ConcurrentUpdateError(f"Gave up after {attempts} conflicting attempts")

"""Unit tests for UnitOfWork.execute retry semantics."""

import pytest

from microscroll.application.common.result import Failure, Result, Success
from microscroll.application.common.unit_of_work import ConcurrentUpdateError, UnitOfWork


class FakeUnitOfWork(UnitOfWork):
    """Records commits and rollbacks; fails the first `conflicts` commits."""

    def __init__(self, conflicts: int = 0) -> None:
        self.conflicts = conflicts
        self.commits = 0
        self.rollbacks = 0

    def commit(self) -> None:
        if self.conflicts > 0:
            self.conflicts -= 1
            raise ConcurrentUpdateError("stale row")
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1


class TestExecute:
    def test_success_commits(self) -> None:
        uow = FakeUnitOfWork()

        result = uow.execute(lambda: Success(42))

        assert result.unwrap() == 42
        assert uow.commits == 1
        assert uow.rollbacks == 0

    def test_failure_rolls_back(self) -> None:
        uow = FakeUnitOfWork()

        result: Result[int, str] = uow.execute(lambda: Failure("nope"))

        assert result.is_failure
        assert result.unwrap_error() == "nope"
        assert uow.commits == 0
        assert uow.rollbacks == 1

    def test_conflict_is_retried_from_scratch(self) -> None:
        uow = FakeUnitOfWork(conflicts=2)
        calls: list[int] = []

        def work() -> Result[int, str]:
            calls.append(1)
            return Success(len(calls))

        result = uow.execute(work, attempts=3)

        assert result.unwrap() == 3
        assert len(calls) == 3
        assert uow.commits == 1

    def test_gives_up_after_attempts(self) -> None:
        uow = FakeUnitOfWork(conflicts=5)

        with pytest.raises(ConcurrentUpdateError):
            uow.execute(lambda: Success(1), attempts=2)

        assert uow.commits == 0
        assert uow.rollbacks == 2

    def test_other_errors_propagate_without_retry(self) -> None:
        uow = FakeUnitOfWork()
        calls: list[int] = []

        def work() -> Result[int, str]:
            calls.append(1)
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            uow.execute(work, attempts=3)

        assert len(calls) == 1
        assert uow.rollbacks == 1

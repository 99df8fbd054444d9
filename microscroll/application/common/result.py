"""
Outcome of a use case: Success(value) or Failure(error).

Expected failures (missing deck, ended session, conflicting batch) travel as
values; exceptions stay reserved for bugs and infrastructure errors.

    result = use_case.end_session(session_id, user_id, counters)
    if result.is_failure:
        return to_response(result.unwrap_error())
    ended = result.unwrap()
"""

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    is_success = True
    is_failure = False

    def unwrap(self) -> T:
        return self.value

    def unwrap_error(self) -> NoReturn:
        raise ValueError(f"{self!r} carries no error")


@dataclass(frozen=True)
class Failure(Generic[E]):
    error: E

    is_success = False
    is_failure = True

    def unwrap(self) -> NoReturn:
        raise ValueError(f"{self!r} carries no value")

    def unwrap_error(self) -> E:
        return self.error


Result = Success[T] | Failure[E]

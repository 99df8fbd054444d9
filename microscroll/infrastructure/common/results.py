"""Bridges use case Results to the HTTP exception hierarchy."""

from typing import TypeVar

from microscroll.application.common.result import Result
from microscroll.application.study.errors import ErrorCode, StudyError
from microscroll.exceptions import (
    ConflictError,
    ForbiddenError,
    MicroscrollError,
    NotFoundError,
    ValidationError,
)

T = TypeVar("T")

_EXCEPTION_BY_CODE: dict[ErrorCode, type[MicroscrollError]] = {
    ErrorCode.NOT_FOUND: NotFoundError,
    ErrorCode.FORBIDDEN: ForbiddenError,
    ErrorCode.CONFLICT: ConflictError,
    ErrorCode.VALIDATION_ERROR: ValidationError,
}


def to_exception(error: StudyError) -> MicroscrollError:
    exception_class = _EXCEPTION_BY_CODE.get(error.code)
    if exception_class is None:
        return MicroscrollError(error.message)
    return exception_class(error.message)


def unwrap_or_raise(result: Result[T, StudyError]) -> T:
    """
    Return the success value or raise the matching MicroscrollError.

    The application exception handler renders the error envelope.
    """
    if result.is_failure:
        raise to_exception(result.unwrap_error())
    return result.unwrap()

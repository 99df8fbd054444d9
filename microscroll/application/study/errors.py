"""Typed failures returned by study use cases."""

from dataclasses import dataclass
from enum import StrEnum


class ErrorCode(StrEnum):
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class StudyError:
    """
    Failure value carried by Result.

    Messages are generic on purpose: a NOT_FOUND or FORBIDDEN answer never
    tells an unauthorized caller more than the resource kind.
    """

    code: ErrorCode
    message: str

    @classmethod
    def not_found(cls, resource: str) -> "StudyError":
        return cls(ErrorCode.NOT_FOUND, f"{resource} not found")

    @classmethod
    def forbidden(cls, resource: str) -> "StudyError":
        return cls(ErrorCode.FORBIDDEN, f"Access to this {resource.lower()} is not allowed")

    @classmethod
    def conflict(cls, message: str) -> "StudyError":
        return cls(ErrorCode.CONFLICT, message)

    @classmethod
    def validation(cls, message: str) -> "StudyError":
        return cls(ErrorCode.VALIDATION_ERROR, message)

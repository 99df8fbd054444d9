"""Common response wrapper schemas for API responses."""

from typing import Generic, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope."""

    success: bool = True
    data: T


class ErrorBody(BaseModel):
    """Stable machine-readable error."""

    code: str
    message: str


class ErrorResponse(BaseModel):
    """Error envelope."""

    success: bool = False
    error: ErrorBody


def error_response(code: str, message: str, status_code: int) -> JSONResponse:
    """Build an error envelope response."""
    body = ErrorResponse(error=ErrorBody(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))

"""Custom exception hierarchy for Microscroll application."""

from fastapi import status


class MicroscrollError(Exception):
    """Base exception for all Microscroll errors."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(MicroscrollError):
    """Resource not found error."""

    code = "NOT_FOUND"

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND)


class ForbiddenError(MicroscrollError):
    """Caller may not access the resource."""

    code = "FORBIDDEN"

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=status.HTTP_403_FORBIDDEN)


class ConflictError(MicroscrollError):
    """Request conflicts with the current state of the resource."""

    code = "CONFLICT"

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=status.HTTP_409_CONFLICT)


class ValidationError(MicroscrollError):
    """Validation error."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)


class UnauthorizedError(MicroscrollError):
    """Missing or invalid credentials."""

    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Could not validate credentials") -> None:
        super().__init__(message, status_code=status.HTTP_401_UNAUTHORIZED)


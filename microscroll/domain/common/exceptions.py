"""Errors raised by aggregates; use cases turn them into StudyError failures."""


class DomainError(Exception):
    """Base class. `details` carries machine-readable context for logs."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} - {self.details}"


class ValidationError(DomainError):
    """Input that can never be valid, e.g. more correct answers than cards studied."""

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details = {key: val for key, val in (("field", field), ("value", value)) if val is not None}
        super().__init__(message, details)
        self.field = field
        self.value = value


class BusinessRuleViolationError(DomainError):
    """A valid request that the aggregate's current state does not allow."""

    def __init__(self, rule: str, message: str | None = None) -> None:
        super().__init__(message or f"Business rule violated: {rule}", {"rule": rule})
        self.rule = rule


class InvariantViolationError(DomainError):
    """An aggregate was built in a state it must never be in."""

    def __init__(self, aggregate: str, invariant: str) -> None:
        super().__init__(
            f"Invariant violation in {aggregate}: {invariant}",
            {"aggregate": aggregate, "invariant": invariant},
        )
        self.aggregate = aggregate
        self.invariant = invariant

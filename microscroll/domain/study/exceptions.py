"""Study domain exceptions."""

from microscroll.domain.common.exceptions import BusinessRuleViolationError
from microscroll.domain.common.value_objects import StudySessionId


class SessionAlreadyEndedError(BusinessRuleViolationError):
    """Raised when an ended session is mutated."""

    def __init__(self, session_id: StudySessionId) -> None:
        super().__init__(
            "session_active",
            f"Study session {session_id.value} has already ended",
        )
        self.session_id = session_id

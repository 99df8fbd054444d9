"""Protocol for StudySession repository."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from microscroll.domain.common.value_objects import ContentHash, DeckId, StudySessionId, UserId
from microscroll.domain.study.entities.study_session import SessionMode, StudySession


@dataclass(frozen=True)
class SessionTotals:
    """Summed counters over a set of sessions."""

    sessions: int = 0
    cards_studied: int = 0
    correct_answers: int = 0
    total_time: int = 0


class StudySessionRepositoryProtocol(Protocol):
    """Protocol for StudySession repository operations."""

    def find_by_id(self, session_id: StudySessionId) -> StudySession | None:
        """
        Find a session by ID regardless of owner.

        Ownership is checked by the caller so that a foreign session can be
        reported as forbidden rather than missing.
        """
        ...

    def find_by_submission_id(self, user_id: UserId, submission_id: str) -> StudySession | None:
        """Find the speed-mode summary stored under a client-supplied submission id."""
        ...

    def find_by_submission_hash(
        self, user_id: UserId, submission_hash: ContentHash, since: datetime
    ) -> StudySession | None:
        """Find the latest speed-mode summary with this content stored at or after since."""
        ...

    def save(self, session: StudySession) -> StudySession:
        """
        Stage a session (create or update) in the current transaction.

        New sessions are flushed so that the returned entity carries its ID.
        """
        ...

    def find_by_user(
        self,
        user_id: UserId,
        deck_id: DeckId | None = None,
        mode: SessionMode | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[StudySession]:
        """
        List a user's sessions, newest first.

        Args:
            user_id: The learner
            deck_id: Optional deck filter
            mode: Optional mode filter
            limit: Page size
            offset: Number of sessions to skip

        Returns:
            Sessions ordered by started_at DESC, then id DESC
        """
        ...

    def find_started_since(
        self, user_id: UserId, since: datetime, deck_id: DeckId | None = None
    ) -> list[StudySession]:
        """List sessions started at or after a point in time, oldest first."""
        ...

    def find_start_times(
        self, user_id: UserId, deck_id: DeckId | None = None
    ) -> list[datetime]:
        """Start timestamps of every session of a user, used for streaks."""
        ...

    def totals(self, user_id: UserId, deck_id: DeckId | None = None) -> SessionTotals:
        """Sum session counters for a user, optionally scoped to a deck."""
        ...

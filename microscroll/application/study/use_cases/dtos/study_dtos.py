"""DTOs for study session, review and speed-mode use cases."""

from dataclasses import dataclass, field

from microscroll.domain.study.entities.study_session import StudySession
from microscroll.domain.study.services.due_selector import DueCandidate
from microscroll.domain.study.services.streak_calculator import StreakSummary


@dataclass
class SessionCounters:
    """Terminal counters submitted when a session ends."""

    cards_studied: int
    correct_answers: int
    total_time: int
    streak: int | None = None


@dataclass
class EndedSession:
    """A finalized session together with the recomputed account streak."""

    session: StudySession
    streaks: StreakSummary


@dataclass
class ReviewOutcome:
    """One itemized card result inside a speed-mode batch."""

    card_id: int
    correct: bool
    time_spent: int = 0


@dataclass
class SpeedResultsSubmission:
    """DTO for a speed-mode batch from the API."""

    deck_id: int
    cards_played: int
    correct_answers: int
    total_time: int
    max_streak: int
    card_results: list[ReviewOutcome] = field(default_factory=list)
    submission_id: str | None = None


@dataclass
class SpeedResultsAck:
    """Acknowledgement of a speed-mode batch, replayed verbatim for duplicates."""

    session_id: int
    deck_id: int
    cards_played: int
    correct_answers: int
    total_time: int
    max_streak: int
    cards_updated: int
    duplicate: bool = False


@dataclass
class DueCards:
    """One page of the due queue and the size of the whole queue."""

    cards: list[DueCandidate]
    total: int

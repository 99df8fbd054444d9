"""Domain events raised by the study aggregates."""

from dataclasses import dataclass

from microscroll.domain.common.domain_event import DomainEvent
from microscroll.domain.common.value_objects import DeckId, StudySessionId, UserId


@dataclass(frozen=True, kw_only=True)
class StudySessionEnded(DomainEvent):
    """A session left the active state with its final counters."""

    session_id: StudySessionId
    user_id: UserId
    deck_id: DeckId
    mode: str
    cards_studied: int
    correct_answers: int
    total_time: int

"""
Domain events.

An aggregate records an event when something worth reporting happens to it;
the use case collects the events once the transaction has committed and
logs them.
"""

from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Immutable, past-tense record. Subclasses add their own fields."""

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def event_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, object]:
        """Flatten to log-friendly primitives (ids unwrapped, datetimes as ISO strings)."""
        data: dict[str, object] = {"event_type": self.event_type}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            elif isinstance(value, UUID):
                value = str(value)
            elif hasattr(value, "to_primitive"):
                value = value.to_primitive()
            data[f.name] = value
        return data

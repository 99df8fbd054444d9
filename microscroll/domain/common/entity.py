"""
Identity for domain objects.

Two entities are the same entity when their ids match, whatever state they
are in. Ids are database integers; an entity built in memory carries id 0
until its repository saves it.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, Self, TypeVar

_TRANSIENT = 0


@dataclass(frozen=True)
class EntityId:
    """Typed integer id, so a DeckId is never accepted where a CardId is expected."""

    value: int

    def __post_init__(self) -> None:
        if self.value < _TRANSIENT:
            raise ValueError(f"{type(self).__name__} cannot be negative")

    @classmethod
    def generate(cls) -> Self:
        return cls(_TRANSIENT)

    @property
    def is_transient(self) -> bool:
        """Not saved yet."""
        return self.value == _TRANSIENT

    def to_primitive(self) -> int:
        return self.value


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """Marker base for objects that carry an `id` of type IdType."""

    id: IdType

"""Typed ids of the study model."""

from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class UserId(EntityId):
    """Opaque id of the authenticated learner."""


@dataclass(frozen=True)
class DeckId(EntityId):
    pass


@dataclass(frozen=True)
class CardId(EntityId):
    pass


@dataclass(frozen=True)
class CardProgressId(EntityId):
    pass


@dataclass(frozen=True)
class StudySessionId(EntityId):
    pass

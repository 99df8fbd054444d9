from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider

from microscroll.core import container
from microscroll.database import DatabaseSession

T = TypeVar("T")


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Create a FastAPI dependency for a container provider.

    The use case and its repositories are built against the request-scoped
    session; the container's db override only lives while they are built.
    """

    def dependency(db: DatabaseSession) -> T:
        with container.db.override(db):
            return provider()

    return dependency

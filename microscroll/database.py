"""
Engine and session plumbing.

The engine lives for the whole process: `initialize_database` runs in the
FastAPI lifespan and `dispose_engine` on shutdown. Each request gets its own
Session through `get_db`; use cases commit through the unit of work, never
through this module.
"""

from collections.abc import Generator
from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from microscroll.config import Settings, get_settings


class Base(DeclarativeBase):
    pass


_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _engine_options(database_url: str) -> dict[str, Any]:
    if database_url.startswith("sqlite"):
        # One shared connection, so an in-memory database survives across sessions
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {"pool_size": 20, "max_overflow": 30, "pool_pre_ping": True, "pool_recycle": 3600}


def initialize_database(settings: Settings) -> None:
    global _engine, _session_factory  # noqa: PLW0603
    _engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))
    _session_factory = sessionmaker(bind=_engine, autoflush=False)


def dispose_engine() -> None:
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is None:
        return
    _engine.dispose()
    _engine = None
    _session_factory = None


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("initialize_database() has not been called")
    return _engine


def create_tables() -> None:
    """Create missing tables from the ORM metadata."""
    import microscroll.models  # noqa: F401, PLC0415

    Base.metadata.create_all(bind=get_engine())


def get_session_factory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> sessionmaker[Session]:
    if _session_factory is None:
        initialize_database(settings)
    if _session_factory is None:
        raise RuntimeError("Session factory unavailable after initialization")
    return _session_factory


def get_db(
    session_factory: Annotated[sessionmaker[Session], Depends(get_session_factory)],
) -> Generator[Session, None, None]:
    """Request-scoped session, closed when the response is sent."""
    with session_factory() as db:
        yield db


DatabaseSession = Annotated[Session, Depends(get_db)]

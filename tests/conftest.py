"""Pytest configuration and fixtures."""

import os
from collections.abc import Callable, Generator
from typing import Any

# Settings are cached on first use, so the environment must be ready before
# anything from microscroll is imported.
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from microscroll import models  # noqa: E402
from microscroll.database import Base, get_db  # noqa: E402
from microscroll.infrastructure.identity.token_service import create_access_token  # noqa: E402
from microscroll.main import app  # noqa: E402

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite://"

# Create test engine; StaticPool keeps the single in-memory database alive
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

USER_ID = 1
OTHER_USER_ID = 2


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Bearer token for the default test user."""
    return {"Authorization": f"Bearer {create_access_token(USER_ID)}"}


@pytest.fixture
def other_auth_headers() -> dict[str, str]:
    """Bearer token for a second user."""
    return {"Authorization": f"Bearer {create_access_token(OTHER_USER_ID)}"}


def create_deck(
    db_session: Session,
    user_id: int = USER_ID,
    title: str = "Spanish basics",
    is_public: bool = False,
    card_count: int = 3,
) -> models.Deck:
    """Insert a deck with card_count cards ordered 0..n-1."""
    deck = models.Deck(user_id=user_id, title=title, is_public=is_public)
    db_session.add(deck)
    db_session.flush()
    for index in range(card_count):
        db_session.add(
            models.Card(
                deck_id=deck.id,
                order=index,
                front=f"Front {index}",
                back=f"Back {index}",
            )
        )
    db_session.commit()
    db_session.refresh(deck)
    return deck


def deck_card_ids(db_session: Session, deck: models.Deck) -> list[int]:
    """Card ids of a deck in deck order."""
    cards = (
        db_session.query(models.Card)
        .filter_by(deck_id=deck.id)
        .order_by(models.Card.order)
        .all()
    )
    return [card.id for card in cards]


@pytest.fixture
def deck_factory(db_session: Session) -> Callable[..., models.Deck]:
    """Factory for extra decks: deck_factory(user_id=..., is_public=..., card_count=...)."""

    def factory(**kwargs: Any) -> models.Deck:
        return create_deck(db_session, **kwargs)

    return factory


@pytest.fixture
def test_deck(db_session: Session) -> models.Deck:
    """Private deck owned by the default user, with three cards."""
    return create_deck(db_session)


@pytest.fixture
def public_deck(db_session: Session) -> models.Deck:
    """Public deck owned by another user."""
    return create_deck(db_session, user_id=OTHER_USER_ID, title="Shared verbs", is_public=True)


@pytest.fixture
def private_deck(db_session: Session) -> models.Deck:
    """Private deck owned by another user."""
    return create_deck(db_session, user_id=OTHER_USER_ID, title="Secret notes")


@pytest.fixture
def card_ids(db_session: Session, test_deck: models.Deck) -> list[int]:
    return deck_card_ids(db_session, test_deck)

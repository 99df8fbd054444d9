"""Tests for GET /study/due."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from microscroll import models

DUE_URL = "/api/v1/study/due"


def add_progress(
    db_session: Session,
    card_id: int,
    mastery_level: int,
    last_reviewed: datetime,
    next_review_date: datetime,
    user_id: int = 1,
) -> None:
    db_session.add(
        models.CardProgress(
            user_id=user_id,
            card_id=card_id,
            review_count=mastery_level,
            correct_count=mastery_level,
            incorrect_count=0,
            mastery_level=mastery_level,
            last_reviewed=last_reviewed,
            next_review_date=next_review_date,
        )
    )
    db_session.commit()


class TestDueCards:
    """Test suite for the due card queue."""

    def test_new_cards_are_due_in_deck_order(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        test_deck: models.Deck,
        card_ids: list[int],
    ) -> None:
        response = client.get(DUE_URL, params={"deckId": test_deck.id}, headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        due = data["data"]
        assert [card["cardId"] for card in due["cards"]] == card_ids
        assert due["total"] == 3
        first = due["cards"][0]
        assert first["front"] == "Front 0"
        assert first["back"] == "Back 0"
        assert first["masteryLevel"] == 0
        assert first["lastReviewed"] is None

    def test_struggling_and_stale_cards_first(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        db_session: Session,
        test_deck: models.Deck,
        card_ids: list[int],
    ) -> None:
        """Level 0 before level 2; within a level, least recently reviewed first."""
        now = datetime.now(UTC)
        hour = timedelta(hours=1)
        add_progress(db_session, card_ids[0], 2, now - timedelta(days=5), now - 24 * hour)
        add_progress(db_session, card_ids[1], 0, now - hour, now - timedelta(minutes=1))

        response = client.get(DUE_URL, params={"deckId": test_deck.id}, headers=auth_headers)

        due = response.json()["data"]
        assert [card["cardId"] for card in due["cards"]] == [card_ids[2], card_ids[1], card_ids[0]]

    def test_scheduled_cards_are_excluded(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        db_session: Session,
        test_deck: models.Deck,
        card_ids: list[int],
    ) -> None:
        now = datetime.now(UTC)
        add_progress(db_session, card_ids[0], 1, now, now + timedelta(days=1))

        response = client.get(DUE_URL, params={"deckId": test_deck.id}, headers=auth_headers)

        due = response.json()["data"]
        assert card_ids[0] not in [card["cardId"] for card in due["cards"]]
        assert due["total"] == 2

    def test_other_users_progress_is_ignored(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        db_session: Session,
        test_deck: models.Deck,
        card_ids: list[int],
    ) -> None:
        now = datetime.now(UTC)
        add_progress(db_session, card_ids[0], 3, now, now + timedelta(days=7), user_id=2)

        response = client.get(DUE_URL, params={"deckId": test_deck.id}, headers=auth_headers)

        assert response.json()["data"]["total"] == 3

    def test_limit_keeps_total(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        test_deck: models.Deck,
        card_ids: list[int],
    ) -> None:
        response = client.get(
            DUE_URL, params={"deckId": test_deck.id, "limit": 2}, headers=auth_headers
        )

        due = response.json()["data"]
        assert [card["cardId"] for card in due["cards"]] == card_ids[:2]
        assert due["total"] == 3

    def test_limit_above_maximum_rejected(
        self, client: TestClient, auth_headers: dict[str, str], test_deck: models.Deck
    ) -> None:
        response = client.get(
            DUE_URL, params={"deckId": test_deck.id, "limit": 10_000}, headers=auth_headers
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_without_deck_covers_owned_decks_only(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        test_deck: models.Deck,
        public_deck: models.Deck,
        deck_factory: Callable[..., models.Deck],
    ) -> None:
        deck_factory(title="Second deck", card_count=2)

        response = client.get(DUE_URL, headers=auth_headers)

        due = response.json()["data"]
        assert due["total"] == 5
        assert public_deck.id not in {card["deckId"] for card in due["cards"]}

    def test_public_deck_is_readable(
        self, client: TestClient, auth_headers: dict[str, str], public_deck: models.Deck
    ) -> None:
        response = client.get(DUE_URL, params={"deckId": public_deck.id}, headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["total"] == 3

    def test_private_deck_forbidden(
        self, client: TestClient, auth_headers: dict[str, str], private_deck: models.Deck
    ) -> None:
        response = client.get(DUE_URL, params={"deckId": private_deck.id}, headers=auth_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unknown_deck(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.get(DUE_URL, params={"deckId": 99999}, headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_recomputed_after_review(
        self,
        client: TestClient,
        auth_headers: dict[str, str],
        test_deck: models.Deck,
        card_ids: list[int],
    ) -> None:
        """Test that a correctly reviewed card leaves the queue immediately."""
        session = client.post(
            "/api/v1/study/sessions", json={"deckId": test_deck.id}, headers=auth_headers
        ).json()["data"]
        client.post(
            "/api/v1/study/review",
            json={"sessionId": session["id"], "cardId": card_ids[0], "correct": True},
            headers=auth_headers,
        )

        response = client.get(DUE_URL, params={"deckId": test_deck.id}, headers=auth_headers)

        due = response.json()["data"]
        assert [card["cardId"] for card in due["cards"]] == card_ids[1:]

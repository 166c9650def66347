"""End-to-end tests for the voting endpoints."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from forum.config import Settings
from forum.interface.api.app import create_app
from forum.util.di.container import setup_di
from forum.util.jwt import create_token
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client with test container."""
    app_instance = create_app()
    test_container = build_test_container()
    setup_di(app_instance, test_container)
    with TestClient(app_instance) as test_client:
        yield test_client


def login(client: TestClient, user_id: str | None = None) -> str:
    """Set an auth cookie for a (new) user and return the user ID."""
    user_id = user_id or str(uuid4())
    token = create_token(user_id, "tester", Settings().auth)
    client.cookies.set("auth_token", token)
    return user_id


def create_post(client: TestClient) -> dict:
    response = client.post("/posts", json={"title": "Votable", "community": "general"})
    assert response.status_code == 201
    return response.json()


class TestVoteEndpoints:
    """End-to-end tests for POST /posts/{id}/vote and /comments/{id}/vote."""

    def test_vote_without_auth_fails(self, client):
        """Should return 401 when not authenticated."""
        # Act
        response = client.post(f"/posts/{uuid4()}/vote", json={"voteType": 1})

        # Assert
        assert response.status_code == 401

    def test_vote_with_invalid_token_fails(self, client):
        # Arrange
        client.cookies.set("auth_token", "invalid-token")

        # Act
        response = client.post(f"/posts/{uuid4()}/vote", json={"voteType": 1})

        # Assert
        assert response.status_code == 401

    @pytest.mark.parametrize("vote_type", [2, -5, "up", None])
    def test_invalid_vote_type_is_bad_request(self, client, vote_type):
        # Arrange
        login(client)
        post = create_post(client)
        login(client)

        # Act
        response = client.post(
            f"/posts/{post['post_id']}/vote", json={"voteType": vote_type}
        )

        # Assert
        assert response.status_code == 400
        assert "Invalid vote type" in response.json()["detail"]

    def test_missing_vote_type_is_bad_request(self, client):
        # Arrange
        login(client)
        post = create_post(client)

        # Act
        response = client.post(f"/posts/{post['post_id']}/vote", json={})

        # Assert
        assert response.status_code == 400
        assert "Invalid vote type" in response.json()["detail"]

    def test_token_with_non_uuid_user_id_is_unauthenticated(self, client):
        # Arrange
        login(client)
        post = create_post(client)
        login(client, "64b7f0c2a1e4f5d6c7b8a9e0")

        # Act
        listing = client.get("/posts")
        vote = client.post(f"/posts/{post['post_id']}/vote", json={"voteType": 1})

        # Assert
        assert listing.status_code == 200
        assert vote.status_code == 401

    def test_vote_on_missing_post_is_not_found(self, client):
        # Arrange
        login(client)

        # Act
        response = client.post(f"/posts/{uuid4()}/vote", json={"voteType": 1})

        # Assert
        assert response.status_code == 404

    def test_votes_from_several_users(self, client):
        """U1 up, U2 down, U1 down, U1 retract on top of the author's vote."""
        # Arrange
        login(client)
        post = create_post(client)
        url = f"/posts/{post['post_id']}/vote"
        u1, u2 = str(uuid4()), str(uuid4())
        steps = [(u1, 1, 2), (u2, -1, 1), (u1, -1, -1), (u1, 0, 0)]

        for user_id, vote_type, expected in steps:
            # Act
            login(client, user_id)
            response = client.post(url, json={"voteType": vote_type})

            # Assert
            assert response.status_code == 200
            assert response.json() == {"votes": expected}

    def test_snake_case_vote_type_is_accepted(self, client):
        # Arrange
        login(client)
        post = create_post(client)

        # Act
        response = client.post(
            f"/posts/{post['post_id']}/vote", json={"vote_type": -1}
        )

        # Assert
        assert response.status_code == 200
        assert response.json() == {"votes": -1}

    def test_vote_on_comment(self, client):
        # Arrange
        login(client)
        post = create_post(client)
        comment = client.post(
            f"/posts/{post['post_id']}/comments", json={"content": "Hello"}
        ).json()
        login(client)

        # Act
        response = client.post(
            f"/comments/{comment['comment_id']}/vote", json={"voteType": 1}
        )

        # Assert
        assert response.status_code == 200
        assert response.json() == {"votes": 2}

    def test_malformed_item_id_is_rejected(self, client):
        login(client)

        response = client.post("/posts/not-a-uuid/vote", json={"voteType": 1})

        assert response.status_code == 422

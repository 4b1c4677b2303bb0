"""End-to-end tests for the vote and comment endpoints.

Every HTTP request gets its own request-scoped in-memory store, so these
tests focus on the HTTP layer: authentication, identifier parsing and
error mapping. Business rules are covered by the unit tests.
"""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from forum.config import AuthSettings, Settings
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
    return TestClient(app_instance)


@pytest.fixture
def auth_cookies():
    """Session cookie for a fresh member."""
    auth_settings: AuthSettings = Settings().auth
    return {"auth_token": create_token(str(uuid4()), auth_settings)}


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestVoteEndpoints:
    """HTTP behaviour of the vote endpoints."""

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("post", "/posts/{id}/vote/up"),
            ("post", "/posts/{id}/vote/down"),
            ("delete", "/posts/{id}/vote"),
            ("post", "/comments/{id}/vote/up"),
            ("post", "/comments/{id}/vote/down"),
            ("delete", "/comments/{id}/vote"),
        ],
    )
    def test_requires_authentication(self, client, method, path):
        response = getattr(client, method)(path.format(id=uuid4()))

        assert response.status_code == 401

    def test_invalid_token_is_unauthenticated(self, client):
        client.cookies.set("auth_token", "invalid-token")

        response = client.post(f"/posts/{uuid4()}/vote/up")

        assert response.status_code == 401

    def test_vote_on_missing_post_is_not_found(self, client, auth_cookies):
        client.cookies.update(auth_cookies)

        response = client.post(f"/posts/{uuid4()}/vote/up")

        assert response.status_code == 404
        assert response.json()["detail"]["kind"] == "not_found"

    def test_malformed_id_is_bad_request(self, client, auth_cookies):
        client.cookies.update(auth_cookies)

        response = client.post("/comments/not-a-uuid/vote/down")

        assert response.status_code == 400


class TestCommentEndpoints:
    """HTTP behaviour of the comment endpoints."""

    def test_list_comments_of_missing_post(self, client):
        """Reading is anonymous; a missing post is a 404."""
        response = client.get(f"/posts/{uuid4()}/comments")

        assert response.status_code == 404

    def test_negative_page_rejected(self, client):
        response = client.get(f"/posts/{uuid4()}/comments", params={"page": -1})

        assert response.status_code == 422

    def test_create_requires_authentication(self, client):
        response = client.post(f"/posts/{uuid4()}/comments", json={"body": "hello"})

        assert response.status_code == 401

    def test_create_on_missing_post(self, client, auth_cookies):
        client.cookies.update(auth_cookies)

        response = client.post(f"/posts/{uuid4()}/comments", json={"body": "hello"})

        assert response.status_code == 404

    def test_blank_body_rejected(self, client, auth_cookies):
        """Whitespace-only bodies pass the length check but not the domain rule."""
        client.cookies.update(auth_cookies)

        response = client.post(f"/posts/{uuid4()}/comments", json={"body": "   "})

        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "validation"

    def test_edit_missing_comment(self, client, auth_cookies):
        client.cookies.update(auth_cookies)

        response = client.patch(f"/comments/{uuid4()}", json={"body": "edited"})

        assert response.status_code == 404

    def test_delete_requires_authentication(self, client):
        response = client.delete(f"/comments/{uuid4()}")

        assert response.status_code == 401

"""End-to-end tests for identity linking endpoints."""

import pytest
from fastapi.testclient import TestClient

from linkage.adapter.directory import InMemoryDirectory
from linkage.config import AuthSettings
from linkage.domain.value import IdentityRef
from linkage.interface.api.app import create_app
from linkage.util.jwt import create_token
from tests.conftest import make_user
from tests.di import build_test_container


@pytest.fixture
def directory():
    return InMemoryDirectory()


@pytest.fixture
def client(directory, monkeypatch):
    """Create test client whose mock directory is ``directory``."""
    monkeypatch.setattr(
        "tests.di.directory.InMemoryDirectory", lambda: directory
    )
    app_instance = create_app(build_test_container())
    with TestClient(app_instance) as test_client:
        yield test_client


def _auth(user_id: str = "auth0|1", session_id: str = "session-1") -> dict:
    token = create_token(user_id, session_id, AuthSettings())
    return {"Authorization": f"Bearer {token}"}


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client):
        """Should report healthy."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestIdentityEndpoints:
    """End-to-end tests for identity linking API endpoints.

    Note: These tests focus on the HTTP API interface layer.
    More detailed business logic tests are in unit tests.
    """

    def test_link_without_auth_fails(self, client):
        """Should return 401 when not authenticated."""
        response = client.post(
            "/identities/link", json={"target_user_id": "google-oauth2|2"}
        )

        assert response.status_code == 401
        assert "Not authenticated" in response.json()["detail"]

    def test_link_with_invalid_token_fails(self, client):
        """Should return 401 with invalid token."""
        response = client.post(
            "/identities/link",
            json={"target_user_id": "google-oauth2|2"},
            cookies={"session_token": "invalid-token"},
        )

        assert response.status_code == 401

    def test_link_rejects_malformed_target(self, client):
        """Should validate the target id shape."""
        response = client.post(
            "/identities/link", json={"target_user_id": "nope"}, headers=_auth()
        )

        assert response.status_code == 422

    def test_link_success(self, client, directory):
        """Should link, return 201 and expose the session view."""
        # Arrange
        directory.add_user(make_user("auth0|1"))
        directory.add_user(make_user("google-oauth2|2"))

        # Act
        response = client.post(
            "/identities/link",
            json={"target_user_id": "google-oauth2|2"},
            headers=_auth(),
        )

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data["primary_user_id"] == "auth0|1"
        assert [i["provider"] for i in data["identities"]] == [
            "auth0",
            "google-oauth2",
        ]

        view = client.get("/identities", headers=_auth())
        assert view.status_code == 200
        assert view.json()["identities"] == data["identities"]

    def test_link_unverified_target_forbidden(self, client, directory):
        """Should return 403 with the failed state."""
        directory.add_user(make_user("auth0|1"))
        directory.add_user(make_user("google-oauth2|2", email_verified=False))

        response = client.post(
            "/identities/link",
            json={"target_user_id": "google-oauth2|2"},
            headers=_auth(),
        )

        assert response.status_code == 403
        detail = response.json()["detail"]
        assert detail["state"] == "target_fetched"
        assert detail["metadata_committed"] is False

    def test_link_unverified_primary_forbidden(self, client, directory):
        """Should return 403 without touching the session for an unverified caller."""
        directory.add_user(make_user("auth0|1", email_verified=False))
        directory.add_user(make_user("google-oauth2|2"))

        response = client.post(
            "/identities/link",
            json={"target_user_id": "google-oauth2|2"},
            headers=_auth(),
        )

        assert response.status_code == 403
        detail = response.json()["detail"]
        assert detail["state"] == "target_fetched"
        assert detail["metadata_committed"] is False
        assert client.get("/identities", headers=_auth()).status_code == 404

    def test_link_unknown_target(self, client, directory):
        """Should return 404 for an unknown target."""
        directory.add_user(make_user("auth0|1"))

        response = client.post(
            "/identities/link",
            json={"target_user_id": "google-oauth2|404"},
            headers=_auth(),
        )

        assert response.status_code == 404

    def test_session_view_missing(self, client):
        """Should return 404 before anything was projected."""
        response = client.get("/identities", headers=_auth())

        assert response.status_code == 404

    def test_candidates(self, client, directory):
        """Should list accounts sharing the caller's verified email."""
        directory.add_user(make_user("auth0|1"))
        directory.add_user(make_user("google-oauth2|2"))

        response = client.get("/identities/candidates", headers=_auth())

        assert response.status_code == 200
        assert [c["user_id"] for c in response.json()["candidates"]] == [
            "google-oauth2|2"
        ]

    def test_candidates_unverified_caller(self, client, directory):
        """Should return 403 for a caller with an unverified email."""
        directory.add_user(make_user("auth0|1", email_verified=False))

        response = client.get("/identities/candidates", headers=_auth())

        assert response.status_code == 403

    def test_unlink(self, client, directory):
        """Should detach the identity and return 200."""
        google = IdentityRef(provider="google-oauth2", identity_id="2")
        directory.add_user(make_user("auth0|1", extra_identities=[google]))

        response = client.delete("/identities/google-oauth2/2", headers=_auth())

        assert response.status_code == 200
        assert [i["provider"] for i in response.json()["identities"]] == ["auth0"]

    def test_unlink_primary_forbidden(self, client, directory):
        """Should refuse to detach the caller's own identity."""
        directory.add_user(make_user("auth0|1"))

        response = client.delete("/identities/auth0/1", headers=_auth())

        assert response.status_code == 403

"""Tests for session endpoints."""

import pytest
from types import SimpleNamespace
from unittest.mock import patch, MagicMock, AsyncMock
from fastapi.testclient import TestClient

from supabase import AuthError

from api.app import create_app
from api.dependencies import get_user_client


@pytest.fixture
def app():
    app = create_app()
    yield app
    app.dependency_overrides.clear()


def create_mock_client() -> MagicMock:
    client = MagicMock()
    client.auth.sign_in_with_id_token = AsyncMock()
    client.auth.sign_out = AsyncMock()
    return client


class TestIdTokenSignIn:
    """Tests for POST /api/auth/id-token"""

    @patch("modules.auth.service.get_settings")
    @patch("api.routes.auth.get_supabase_anon_client", new_callable=AsyncMock)
    def test_exchanges_token(self, mock_anon, mock_settings, app):
        mock_settings.return_value.identity_provider = "google"
        client = create_mock_client()
        client.auth.sign_in_with_id_token.return_value = SimpleNamespace(
            session=SimpleNamespace(
                access_token="access",
                refresh_token="refresh",
                expires_in=3600,
                token_type="bearer",
            ),
            user=SimpleNamespace(
                id="user-123",
                email="jane@example.com",
                user_metadata={"name": "Jane"},
                last_sign_in_at=None,
            ),
        )
        mock_anon.return_value = client

        response = TestClient(app).post("/api/auth/id-token", json={"token": "google-credential"})

        assert response.status_code == 200
        data = response.json()
        assert data["access_token"] == "access"
        assert data["user"]["full_name"] == "Jane"
        client.auth.sign_in_with_id_token.assert_awaited_once_with(
            {"provider": "google", "token": "google-credential"}
        )

    @patch("modules.auth.service.get_settings")
    @patch("api.routes.auth.get_supabase_anon_client", new_callable=AsyncMock)
    def test_rejected_token(self, mock_anon, mock_settings, app):
        mock_settings.return_value.identity_provider = "google"
        client = create_mock_client()
        client.auth.sign_in_with_id_token.side_effect = AuthError("bad id token", None)
        mock_anon.return_value = client

        response = TestClient(app).post("/api/auth/id-token", json={"token": "nope"})

        assert response.status_code == 502
        data = response.json()
        assert data["error"] == "IDENTITY_EXCHANGE_FAILED"
        assert data["message"] == "Failed to sign in with Google"

    def test_empty_token(self, app):
        response = TestClient(app).post("/api/auth/id-token", json={"token": ""})
        assert response.status_code == 422


class TestSignOut:
    """Tests for POST /api/auth/signout"""

    @patch("modules.auth.service.get_settings")
    def test_signs_out(self, mock_settings, app):
        client = create_mock_client()
        app.dependency_overrides[get_user_client] = lambda: client

        response = TestClient(app).post("/api/auth/signout")

        assert response.status_code == 204
        client.auth.sign_out.assert_awaited_once()

    @patch("modules.auth.service.get_settings")
    def test_sign_out_failure(self, mock_settings, app):
        client = create_mock_client()
        client.auth.sign_out.side_effect = AuthError("network", None)
        app.dependency_overrides[get_user_client] = lambda: client

        response = TestClient(app).post("/api/auth/signout")

        assert response.status_code == 502
        assert response.json()["message"] == "Failed to logout"

    def test_requires_token(self, app):
        assert TestClient(app).post("/api/auth/signout").status_code == 401

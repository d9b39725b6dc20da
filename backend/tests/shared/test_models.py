"""Tests for shared/models.py."""

import pytest

from shared.models import AuthenticatedUser


class TestAuthenticatedUser:
    def test_create_user(self):
        user = AuthenticatedUser(id="user-123", email="test@example.com")
        assert user.id == "user-123"
        assert user.email == "test@example.com"
        assert user.role == "user"

    def test_user_is_immutable(self):
        """AuthenticatedUser should be immutable."""
        user = AuthenticatedUser(id="user-123", email="test@example.com")
        with pytest.raises(Exception):  # Pydantic ValidationError
            user.id = "different-id"

    def test_ignores_extra_claims(self):
        user = AuthenticatedUser(id="user-123", aud="authenticated")
        assert not hasattr(user, "aud")

    def test_invalid_email(self):
        with pytest.raises(Exception):
            AuthenticatedUser(id="user-123", email="not-an-email")


class TestDisplayName:
    def test_prefers_full_name(self):
        user = AuthenticatedUser(id="u", email="jane@example.com", full_name="Jane Doe")
        assert user.display_name == "Jane Doe"

    def test_falls_back_to_email_local_part(self):
        user = AuthenticatedUser(id="u", email="jane.doe@example.com")
        assert user.display_name == "jane.doe"

    def test_falls_back_to_id(self):
        assert AuthenticatedUser(id="user-123").display_name == "user-123"

    def test_initial(self):
        assert AuthenticatedUser(id="u", email="jane@example.com").initial == "J"
        assert AuthenticatedUser(id="xyz").initial == "X"

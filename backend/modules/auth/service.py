"""
Authentication service implementation.

Validates Supabase JWT tokens on the API side and wraps the Supabase
auth client as the session gate consumed by the bookmark view model.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import jwt
from supabase import AsyncClient, AuthError

from shared.config import Settings, get_settings
from shared.models import AuthenticatedUser

from .interfaces import IAuthService, ISessionGate
from .models import AuthSession, JWTPayload
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    IdentityExchangeError,
    SignOutError,
)

logger = logging.getLogger(__name__)


def _metadata_value(metadata: Optional[dict], key: str) -> Optional[str]:
    value = (metadata or {}).get(key)
    return value or None


def user_from_auth_record(record: Any) -> AuthenticatedUser:
    """
    Map a Supabase auth user record to an AuthenticatedUser.

    Google sign-ins store the profile under user_metadata
    (avatar_url / full_name, with picture / name as fallbacks).
    """
    metadata = getattr(record, "user_metadata", None) or {}
    return AuthenticatedUser(
        id=str(record.id),
        email=getattr(record, "email", None) or None,
        avatar_url=_metadata_value(metadata, "avatar_url") or _metadata_value(metadata, "picture"),
        full_name=_metadata_value(metadata, "full_name") or _metadata_value(metadata, "name"),
        last_sign_in=getattr(record, "last_sign_in_at", None),
    )


class AuthService(IAuthService):
    """
    Implementation of API-side token validation.

    Uses the Supabase JWT secret to validate HS256 access tokens.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        This implementation validates Supabase JWTs using the JWT secret.
        """
        if not token:
            raise MissingTokenError()

        if not self._settings.supabase_jwt_secret:
            raise InvalidTokenError("Server authentication not configured")

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

        jwt_payload = JWTPayload(**payload)

        return AuthenticatedUser(
            id=jwt_payload.sub,
            email=jwt_payload.email or None,
            avatar_url=_metadata_value(jwt_payload.user_metadata, "avatar_url"),
            full_name=_metadata_value(jwt_payload.user_metadata, "full_name"),
            last_sign_in=datetime.fromtimestamp(jwt_payload.iat, tz=timezone.utc),
            role=jwt_payload.role if jwt_payload.role != "authenticated" else "user",
        )


class SupabaseSessionGate(ISessionGate):
    """
    Session gate backed by a Supabase client's auth session.
    """

    def __init__(self, client: AsyncClient, default_provider: Optional[str] = None):
        self._client = client
        self._default_provider = default_provider or get_settings().identity_provider

    async def get_current_user(self) -> Optional[AuthenticatedUser]:
        """Ask the auth provider who owns the current session."""
        try:
            response = await self._client.auth.get_user()
        except AuthError as e:
            logger.warning(f"Could not resolve current user: {e}")
            return None

        if response is None or response.user is None:
            return None
        return user_from_auth_record(response.user)

    async def sign_in_with_id_token(
        self,
        token: str,
        provider: Optional[str] = None,
    ) -> AuthSession:
        """Exchange a provider identity token for a Supabase session."""
        provider = provider or self._default_provider
        try:
            response = await self._client.auth.sign_in_with_id_token(
                {"provider": provider, "token": token}
            )
        except AuthError as e:
            logger.warning(f"Identity token exchange with {provider} failed: {e}")
            raise IdentityExchangeError(provider, str(e)) from e

        if response.session is None or response.user is None:
            raise IdentityExchangeError(provider, "no session returned")

        session = response.session
        return AuthSession(
            access_token=session.access_token,
            refresh_token=session.refresh_token or "",
            expires_in=session.expires_in,
            token_type=session.token_type or "bearer",
            user=user_from_auth_record(response.user),
        )

    async def sign_out(self) -> None:
        """End the session held by the client."""
        try:
            await self._client.auth.sign_out()
        except AuthError as e:
            logger.warning(f"Sign out failed: {e}")
            raise SignOutError(str(e)) from e


class RequestSessionGate(ISessionGate):
    """
    Session gate for an identity already validated for this request.

    The API validates the bearer token once in the auth middleware;
    view models built for that request read the identity from here
    instead of asking the auth provider again.
    """

    def __init__(self, user: Optional[AuthenticatedUser]):
        self._user = user

    async def get_current_user(self) -> Optional[AuthenticatedUser]:
        return self._user

    async def sign_in_with_id_token(
        self,
        token: str,
        provider: Optional[str] = None,
    ) -> AuthSession:
        raise IdentityExchangeError(provider or "provider", "request sessions cannot sign in")

    async def sign_out(self) -> None:
        self._user = None


# Module-level instance getter
_service_instance: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get the auth service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = AuthService()
    return _service_instance


def reset_auth_service() -> None:
    """Reset the auth service singleton (for testing)."""
    global _service_instance
    _service_instance = None

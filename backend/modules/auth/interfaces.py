"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with mocks and lets the bookmark
view model run against either a live Supabase session or an identity
that was already validated for the current request.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser

from .models import AuthSession


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for API-side token validation.
    """

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        Args:
            token: JWT access token from Supabase Auth

        Returns:
            AuthenticatedUser with user ID and profile claims

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...


@runtime_checkable
class ISessionGate(Protocol):
    """
    Interface for the current session.

    Must be consulted before any bookmark operation. An absent user
    turns every bookmark operation into a no-op with a notice.
    """

    async def get_current_user(self) -> Optional[AuthenticatedUser]:
        """
        Get the user of the current session.

        Read-only; never raises for a missing or broken session.

        Returns:
            AuthenticatedUser if signed in, None otherwise
        """
        ...

    async def sign_in_with_id_token(
        self,
        token: str,
        provider: Optional[str] = None,
    ) -> AuthSession:
        """
        Exchange a third-party identity token for a session.

        Args:
            token: Identity token issued by the provider
            provider: Provider name; defaults to the configured provider

        Returns:
            The new AuthSession

        Raises:
            IdentityExchangeError: If the provider rejects the token
        """
        ...

    async def sign_out(self) -> None:
        """
        End the current session.

        Raises:
            SignOutError: If the auth provider rejects the request
        """
        ...

"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError, ExternalServiceError


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class SessionRequiredError(AuthenticationError):
    """Raised when a bookmark operation is attempted without a session."""

    def __init__(self, message: str = "You must be logged in"):
        super().__init__(message, code="SESSION_REQUIRED")


class IdentityExchangeError(ExternalServiceError):
    """Raised when a third-party identity token cannot be exchanged for a session."""

    def __init__(self, provider: str, reason: str = ""):
        super().__init__(
            f"Failed to sign in with {provider.capitalize()}",
            service="supabase_auth",
            code="IDENTITY_EXCHANGE_FAILED",
            details={"provider": provider, "reason": reason},
        )


class SignOutError(ExternalServiceError):
    """Raised when the auth provider rejects a sign-out."""

    def __init__(self, reason: str = ""):
        super().__init__(
            "Failed to logout",
            service="supabase_auth",
            code="SIGN_OUT_FAILED",
            details={"reason": reason},
        )

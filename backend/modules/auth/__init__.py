"""
Authentication module.

Handles JWT validation and the session gate consumed by bookmark view models.

Public API:
- IAuthService: Interface for API-side token validation
- ISessionGate: Interface for the current session
- AuthSession: Session issued after identity federation
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, ISessionGate
from .models import AuthSession, JWTPayload, IdTokenSignInRequest, UserProfileResponse
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    SessionRequiredError,
    IdentityExchangeError,
    SignOutError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "ISessionGate",
    # Models
    "AuthSession",
    "JWTPayload",
    "IdTokenSignInRequest",
    "UserProfileResponse",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "SessionRequiredError",
    "IdentityExchangeError",
    "SignOutError",
]

"""
JWT Authentication middleware.

Validates Supabase JWT tokens and extracts user information.
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser
from modules.auth.interfaces import IAuthService

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


def _auth_service() -> IAuthService:
    # Imported here: api.dependencies builds on this module
    from ..dependencies import get_auth_service
    return get_auth_service()


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """
    Dependency returning the raw bearer token.

    Used to build Supabase clients that act with the caller's session,
    so row level security applies to every query.
    """
    if credentials is None:
        raise AuthError("Missing authorization header")
    return credentials.credentials


async def get_current_user(
    token: str = Depends(get_access_token),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    try:
        return await _auth_service().validate_token(token)
    except AuthenticationError as e:
        raise AuthError(e.message)


"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from typing import Optional
from pydantic import BaseModel, Field

from shared.models import AuthenticatedUser


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="User role")

    # Supabase-specific claims
    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)


class AuthSession(BaseModel):
    """A session issued by the auth provider after sign-in."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(default="", description="Refresh token")
    expires_in: Optional[int] = Field(None, description="Seconds until the access token expires")
    token_type: str = Field(default="bearer", description="Token type")
    user: AuthenticatedUser = Field(..., description="The signed-in user")


class IdTokenSignInRequest(BaseModel):
    """Request to exchange a third-party identity token for a session."""

    token: str = Field(..., min_length=1, description="Identity token (e.g. Google credential)")
    provider: Optional[str] = Field(
        None,
        description="Identity provider; defaults to the configured provider",
    )


class UserProfileResponse(BaseModel):
    """User profile as shown in the navigation bar."""

    id: str
    email: Optional[str] = None
    display_name: str
    avatar_url: Optional[str] = None
    initial: str

    @classmethod
    def from_user(cls, user: AuthenticatedUser) -> "UserProfileResponse":
        return cls(
            id=user.id,
            email=user.email,
            display_name=user.display_name,
            avatar_url=user.avatar_url,
            initial=user.initial,
        )

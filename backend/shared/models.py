"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from JWT claims or from the auth provider's
    user record, and made available to route handlers and view models
    via dependency injection. It is a read-only, request-scoped view.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: Optional[EmailStr] = Field(None, description="User's email address")

    # Profile metadata from the identity provider
    avatar_url: Optional[str] = Field(None, description="Avatar image URL")
    full_name: Optional[str] = Field(None, description="Full name")

    last_sign_in: Optional[datetime] = Field(None, description="Last sign-in time")
    role: str = Field(default="user", description="User role")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from JWT
    }

    @property
    def display_name(self) -> str:
        """Full name if known, otherwise the local part of the email."""
        if self.full_name:
            return self.full_name
        if self.email:
            return self.email.split("@")[0]
        return self.id

    @property
    def initial(self) -> str:
        """Single upper-case letter used when there is no avatar."""
        source = self.email or self.display_name
        return source[0].upper() if source else "?"

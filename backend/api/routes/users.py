"""
User-related endpoints.

Provides the current user's profile for the navigation bar.
"""

from fastapi import APIRouter, Depends
from supabase import AsyncClient

from modules.auth.models import UserProfileResponse
from modules.auth.service import SupabaseSessionGate
from ..dependencies import get_user_client
from ..middleware.auth import AuthError

router = APIRouter()


@router.get("/me", response_model=UserProfileResponse)
async def get_current_user_profile(
    client: AsyncClient = Depends(get_user_client),
) -> UserProfileResponse:
    """
    Get the current user's profile.

    Asks Supabase Auth who owns the session, so profile fields reflect
    the latest user metadata rather than the token claims.
    """
    user = await SupabaseSessionGate(client).get_current_user()
    if user is None:
        raise AuthError("Session is no longer valid")
    return UserProfileResponse.from_user(user)

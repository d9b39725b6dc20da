"""
Session endpoints.

Exchanges identity tokens from the configured provider (Google by
default) for Supabase sessions, and ends sessions.
"""

from fastapi import APIRouter, Depends, Response
from supabase import AsyncClient

from shared.database import get_supabase_anon_client
from modules.auth.models import AuthSession, IdTokenSignInRequest
from modules.auth.service import SupabaseSessionGate
from ..dependencies import get_user_client

router = APIRouter()


@router.post("/id-token", response_model=AuthSession)
async def sign_in_with_id_token(request: IdTokenSignInRequest) -> AuthSession:
    """
    Sign in with a provider identity token.

    Returns 502 with "Failed to sign in with <Provider>" if the provider
    or Supabase rejects the token.
    """
    client = await get_supabase_anon_client()
    gate = SupabaseSessionGate(client)
    return await gate.sign_in_with_id_token(request.token, request.provider)


@router.post("/signout", status_code=204)
async def sign_out(client: AsyncClient = Depends(get_user_client)) -> Response:
    """
    End the caller's session.

    Returns 502 with "Failed to logout" if Supabase rejects the request.
    """
    await SupabaseSessionGate(client).sign_out()
    return Response(status_code=204)

"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its collaborators through an
interface, and this file creates the concrete implementations.

Long-lived services are cached in the container. Bookmark collaborators
are built per request: each request (or stream connection) acts with the
caller's own Supabase session and mounts its own view model.
"""

from typing import Optional

from fastapi import Depends, Query
from supabase import AsyncClient

from shared.config import get_settings
from shared.database import get_supabase_user_client
from shared.models import AuthenticatedUser
from modules.auth.interfaces import IAuthService, ISessionGate
from modules.auth.service import RequestSessionGate, get_auth_service as get_auth_singleton
from modules.bookmarks.feed import SupabaseChangeFeed
from modules.bookmarks.interfaces import IBookmarkStore, IChangeFeed
from modules.bookmarks.models import SortKey
from modules.bookmarks.notifications import NoticeCollector
from modules.bookmarks.repository import BookmarkRepository
from modules.bookmarks.view_model import BookmarkViewModel
from .middleware.auth import get_access_token, get_current_user


class ServiceContainer:
    """
    Container for long-lived service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._auth_service: IAuthService | None = None

    @property
    def auth(self) -> IAuthService:
        """Get the auth service instance."""
        if self._auth_service is None:
            self._auth_service = get_auth_singleton()
        return self._auth_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._auth_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> IAuthService:
    """FastAPI dependency for auth service."""
    return get_container().auth


async def get_user_client(token: str = Depends(get_access_token)) -> AsyncClient:
    """FastAPI dependency for a Supabase client acting as the caller."""
    return await get_supabase_user_client(token)


def get_session_gate(
    user: AuthenticatedUser = Depends(get_current_user),
) -> ISessionGate:
    """FastAPI dependency for the session gate of an authenticated request."""
    return RequestSessionGate(user)


def get_bookmark_store(client: AsyncClient = Depends(get_user_client)) -> IBookmarkStore:
    """FastAPI dependency for the bookmark store."""
    return BookmarkRepository(client, table=get_settings().bookmarks_table)


def get_change_feed(client: AsyncClient = Depends(get_user_client)) -> IChangeFeed:
    """FastAPI dependency for the bookmark change feed."""
    settings = get_settings()
    return SupabaseChangeFeed(
        client,
        table=settings.bookmarks_table,
        schema=settings.realtime_schema,
        channel_prefix=settings.realtime_channel_prefix,
        filter_by_owner=settings.realtime_filter_by_owner,
    )


def get_notifier() -> NoticeCollector:
    """FastAPI dependency for a per-request notice buffer."""
    return NoticeCollector()


def get_bookmark_view_model(
    q: str = Query(default="", description="Search query (title or URL)"),
    sort: SortKey = Query(default=SortKey.NEWEST, description="Sort order"),
    session: ISessionGate = Depends(get_session_gate),
    store: IBookmarkStore = Depends(get_bookmark_store),
    notifier: NoticeCollector = Depends(get_notifier),
) -> BookmarkViewModel:
    """
    FastAPI dependency for a request-scoped view model without a live feed.

    The view model is not activated; handlers call refresh() when they
    need the list.
    """
    return build_view_model(session, store, notifier, search_query=q, sort_key=sort)


def build_view_model(
    session: ISessionGate,
    store: IBookmarkStore,
    notifier: NoticeCollector,
    feed: Optional[IChangeFeed] = None,
    search_query: str = "",
    sort_key: SortKey = SortKey.NEWEST,
) -> BookmarkViewModel:
    return BookmarkViewModel(
        session,
        store,
        notifier,
        feed=feed,
        search_query=search_query,
        sort_key=sort_key,
    )

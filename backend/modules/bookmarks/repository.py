"""
Bookmark repository for database access.

Encapsulates all Supabase queries and data mapping for the bookmarks table.
"""

import logging
from typing import Optional, Any

import httpx
from supabase import AsyncClient, PostgrestAPIError

from shared.repository import BaseRepository
from .interfaces import IBookmarkStore
from .models import Bookmark
from .exceptions import BookmarkStoreError

logger = logging.getLogger(__name__)

# Failures raised by the PostgREST client: API errors and transport errors
STORE_ERRORS = (PostgrestAPIError, httpx.HTTPError)


class BookmarkRepository(BaseRepository[Bookmark], IBookmarkStore):
    """
    Repository for bookmark data access.

    Note: This repository does NOT perform authorization checks.
    Ownership is enforced by row level security on user clients
    and by the view model's session checks.
    """

    def __init__(self, db: AsyncClient, table: str = "bookmarks") -> None:
        super().__init__(db)
        self._table = table

    async def list_for_user(self, user_id: str) -> list[Bookmark]:
        """
        List all bookmarks for a user, most recent first.

        Args:
            user_id: The owner's ID.

        Returns:
            Bookmarks ordered by created_at descending.
        """
        try:
            result = await (
                self._db.table(self._table)
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
        except STORE_ERRORS as e:
            raise BookmarkStoreError("select", str(e)) from e

        return [self._map_to_bookmark(row) for row in result.data or []]

    async def insert(self, user_id: str, title: str, url: str) -> Optional[Bookmark]:
        """
        Insert a bookmark record.

        Args:
            user_id: Owner of the new bookmark.
            title: Display title (already trimmed).
            url: Absolute URL (already trimmed).

        Returns:
            The created Bookmark with generated ID and timestamp, if returned.
        """
        data = {"user_id": user_id, "title": title, "url": url}
        try:
            result = await self._db.table(self._table).insert(data).execute()
        except STORE_ERRORS as e:
            raise BookmarkStoreError("insert", str(e)) from e

        if not result.data:
            return None
        return self._map_to_bookmark(result.data[0])

    async def delete(self, bookmark_id: str) -> None:
        """
        Delete a bookmark by ID.

        Args:
            bookmark_id: The bookmark ID.
        """
        try:
            await self._db.table(self._table).delete().eq("id", bookmark_id).execute()
        except STORE_ERRORS as e:
            raise BookmarkStoreError("delete", str(e), bookmark_id=bookmark_id) from e

    def _map_to_bookmark(self, data: dict[str, Any]) -> Bookmark:
        """Map database row to Bookmark model."""
        return Bookmark(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            title=data["title"],
            url=data["url"],
            created_at=data["created_at"],
        )

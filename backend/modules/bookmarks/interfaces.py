"""
Bookmarks module interfaces.

The view model depends on these collaborators, never on Supabase directly:
- IBookmarkStore: row-level CRUD on the bookmarks relation
- IChangeFeed / IFeedSubscription: the live change feed
- INotifier: fire-and-forget user notices
"""

from typing import Callable, Protocol, Optional, runtime_checkable

from .models import Bookmark, ChangeEvent


ChangeHandler = Callable[[ChangeEvent], None]


@runtime_checkable
class IBookmarkStore(Protocol):
    """
    Interface for bookmark persistence.

    Implementations raise BookmarkStoreError for any backend failure.
    """

    async def list_for_user(self, user_id: str) -> list[Bookmark]:
        """
        List all bookmarks owned by a user, newest first.

        Args:
            user_id: Owner user ID

        Returns:
            Bookmarks ordered by created_at descending
        """
        ...

    async def insert(self, user_id: str, title: str, url: str) -> Optional[Bookmark]:
        """
        Insert a bookmark owned by user_id.

        The store assigns id and created_at.

        Returns:
            The stored row if the store echoes it back, None otherwise
        """
        ...

    async def delete(self, bookmark_id: str) -> None:
        """
        Delete a bookmark by ID.

        Deleting an unknown ID is not an error.
        """
        ...


@runtime_checkable
class IFeedSubscription(Protocol):
    """A live subscription; must be released exactly once."""

    @property
    def active(self) -> bool:
        """Whether the subscription is still held."""
        ...

    async def unsubscribe(self) -> None:
        """Release the subscription. Calling it again is a no-op."""
        ...


@runtime_checkable
class IChangeFeed(Protocol):
    """
    Interface for the bookmarks change feed.

    The feed is not filtered by owner; handlers must apply the
    ownership check themselves.
    """

    async def subscribe(
        self,
        handler: ChangeHandler,
        owner_id: Optional[str] = None,
    ) -> IFeedSubscription:
        """
        Open a new subscription delivering every change on the bookmarks table.

        Args:
            handler: Called once per change event, on the event loop
            owner_id: Hint for feeds that can filter server-side; may be ignored

        Returns:
            The subscription handle

        Raises:
            ChangeFeedError: If the subscription cannot be opened
        """
        ...


@runtime_checkable
class INotifier(Protocol):
    """Fire-and-forget notices. Never awaited, never retried."""

    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

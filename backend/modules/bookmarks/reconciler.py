"""
Reconciliation of live feed events into the local bookmark collection.

The collection is ordered (newest arrivals first) and keyed by id:
no two entries ever share an id, whatever order events arrive in.
"""

import logging
from typing import Iterable, Iterator, Optional

from .models import Bookmark, ChangeEvent, ChangeEventType

logger = logging.getLogger(__name__)


class BookmarkCollection:
    """Ordered bookmarks with a constant-time id index."""

    def __init__(self, bookmarks: Iterable[Bookmark] = ()):
        self._items: list[Bookmark] = []
        self._ids: set[str] = set()
        self.replace_all(bookmarks)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Bookmark]:
        return iter(self._items)

    def __contains__(self, bookmark_id: object) -> bool:
        return bookmark_id in self._ids

    def items(self) -> tuple[Bookmark, ...]:
        """Immutable snapshot of the current order."""
        return tuple(self._items)

    def get(self, bookmark_id: str) -> Optional[Bookmark]:
        if bookmark_id not in self._ids:
            return None
        return next(b for b in self._items if b.id == bookmark_id)

    def replace_all(self, bookmarks: Iterable[Bookmark]) -> None:
        """Replace the whole collection; later duplicates of an id are dropped."""
        items: list[Bookmark] = []
        ids: set[str] = set()
        for bookmark in bookmarks:
            if bookmark.id in ids:
                continue
            ids.add(bookmark.id)
            items.append(bookmark)
        self._items = items
        self._ids = ids

    def apply(self, event: ChangeEvent, user_id: str) -> bool:
        """
        Apply one change event on behalf of user_id.

        - INSERT: prepend if owned by user_id and not already present
        - DELETE: remove by id; no ownership check, unknown ids are ignored
        - UPDATE: replace in place if present and owned by user_id

        Returns:
            True if the collection changed
        """
        if event.event_type == ChangeEventType.INSERT:
            return self._insert(event.new, user_id)
        if event.event_type == ChangeEventType.DELETE:
            return self._delete(event.old_id)
        if event.event_type == ChangeEventType.UPDATE:
            return self._update(event.new, user_id)
        return False

    def _insert(self, bookmark: Optional[Bookmark], user_id: str) -> bool:
        if bookmark is None or bookmark.user_id != user_id:
            return False
        if bookmark.id in self._ids:
            logger.debug(f"Ignoring duplicate insert for bookmark {bookmark.id}")
            return False
        self._items.insert(0, bookmark)
        self._ids.add(bookmark.id)
        return True

    def _delete(self, bookmark_id: Optional[str]) -> bool:
        # A foreign id can never be present, so no ownership check is needed
        if bookmark_id is None or bookmark_id not in self._ids:
            return False
        self._items = [b for b in self._items if b.id != bookmark_id]
        self._ids.discard(bookmark_id)
        return True

    def _update(self, bookmark: Optional[Bookmark], user_id: str) -> bool:
        if bookmark is None or bookmark.user_id != user_id:
            return False
        if bookmark.id not in self._ids:
            return False
        self._items = [bookmark if b.id == bookmark.id else b for b in self._items]
        return True

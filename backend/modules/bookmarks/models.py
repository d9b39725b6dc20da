"""
Bookmarks module data models.

These models define the core data structures for the bookmark list:
stored records, change feed events, and the derived list view.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


class SortKey(str, Enum):
    """Sort orders offered by the list view."""

    NEWEST = "newest"  # created_at descending
    OLDEST = "oldest"  # created_at ascending
    TITLE = "title"    # title A-Z, locale-aware


class Bookmark(BaseModel):
    """A stored bookmark row."""

    id: str = Field(..., description="Bookmark ID (assigned by the store)")
    user_id: str = Field(..., description="Owner user ID")
    title: str = Field(..., description="Display title")
    url: str = Field(..., description="Absolute URL")
    created_at: datetime = Field(..., description="Creation time (assigned by the store)")

    model_config = {"frozen": True, "extra": "ignore"}


class ChangeEventType(str, Enum):
    """Row-level change kinds delivered by the live feed."""

    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class ChangeEvent(BaseModel):
    """
    A change notification from the live feed.

    `new` carries the row after INSERT/UPDATE. `old` carries whatever
    the feed sends for the previous row; for DELETE this is at least the id.
    """

    event_type: ChangeEventType = Field(..., description="Change kind")
    new: Optional[Bookmark] = Field(None, description="Row after the change")
    old: dict[str, Any] = Field(default_factory=dict, description="Row before the change")

    @property
    def old_id(self) -> Optional[str]:
        value = self.old.get("id")
        return str(value) if value is not None else None


class EmptyState(str, Enum):
    """Which placeholder the list shows, if any."""

    NONE = "none"
    LOADING = "loading"
    NO_BOOKMARKS = "no_bookmarks"  # nothing saved yet
    NO_RESULTS = "no_results"      # saved bookmarks, but the search hides them all


class NoticeLevel(str, Enum):
    """Notice severity."""

    SUCCESS = "success"
    ERROR = "error"


class Notice(BaseModel):
    """A fire-and-forget user-facing notice (toast)."""

    level: NoticeLevel
    message: str


class CreateBookmarkRequest(BaseModel):
    """
    Request to create a bookmark.

    Fields are accepted as typed by the user; validation happens in the
    creation path so that errors can be reported per field.
    """

    title: str = Field(default="", description="Bookmark title")
    url: str = Field(default="", description="Bookmark URL")


class BookmarkItem(BaseModel):
    """A bookmark as rendered in the list."""

    id: str
    title: str
    url: str
    created_at: datetime
    created_label: str = Field(..., description="Creation date, e.g. 'Jan 5, 2026'")
    domain: str = Field(..., description="Hostname without leading 'www.'")
    favicon_url: Optional[str] = Field(None, description="Favicon image URL")
    deleting: bool = Field(default=False, description="Delete request in flight")


class BookmarkListView(BaseModel):
    """Snapshot of the derived (filtered + sorted) list."""

    bookmarks: list[BookmarkItem] = Field(default_factory=list)
    total: int = Field(..., description="Bookmarks in the base collection")
    count: int = Field(..., description="Bookmarks after filtering")
    count_label: str = Field(..., description="e.g. '1 Bookmark', '3 Bookmarks'")
    empty_state: EmptyState
    loading: bool
    search_query: str
    sort_key: SortKey
    notices: list[Notice] = Field(default_factory=list)


class CreateBookmarkResponse(BaseModel):
    """Outcome of the creation path."""

    created: bool
    errors: dict[str, str] = Field(default_factory=dict, description="Field-scoped validation errors")
    notices: list[Notice] = Field(default_factory=list)

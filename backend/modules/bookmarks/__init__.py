"""
Bookmarks module.

Handles the bookmark list: loading, live reconciliation from the change
feed, filtering and sorting, and the creation and deletion paths.

Public API:
- BookmarkViewModel: Live list for one mounted view
- IBookmarkStore / IChangeFeed / INotifier: Collaborator interfaces
- Bookmark: A stored bookmark row
- BookmarkListView: Derived list snapshot
- CreateBookmarkRequest: Request to create a bookmark
"""

from .interfaces import IBookmarkStore, IChangeFeed, IFeedSubscription, INotifier
from .models import (
    Bookmark,
    BookmarkItem,
    BookmarkListView,
    ChangeEvent,
    ChangeEventType,
    CreateBookmarkRequest,
    CreateBookmarkResponse,
    EmptyState,
    Notice,
    NoticeLevel,
    SortKey,
)
from .exceptions import (
    BookmarkError,
    BookmarkValidationError,
    BookmarkStoreError,
    ChangeFeedError,
    InvalidChangeEventError,
)
from .forms import BookmarkDraft, validate_bookmark_form
from .reconciler import BookmarkCollection
from .view import derive_view
from .view_model import BookmarkViewModel

__all__ = [
    # Interfaces
    "IBookmarkStore",
    "IChangeFeed",
    "IFeedSubscription",
    "INotifier",
    # Models
    "Bookmark",
    "BookmarkItem",
    "BookmarkListView",
    "ChangeEvent",
    "ChangeEventType",
    "CreateBookmarkRequest",
    "CreateBookmarkResponse",
    "EmptyState",
    "Notice",
    "NoticeLevel",
    "SortKey",
    # Exceptions
    "BookmarkError",
    "BookmarkValidationError",
    "BookmarkStoreError",
    "ChangeFeedError",
    "InvalidChangeEventError",
    # Core
    "BookmarkDraft",
    "validate_bookmark_form",
    "BookmarkCollection",
    "derive_view",
    "BookmarkViewModel",
]

"""
Bookmarks module exceptions.
"""

from typing import Any, Optional

from shared.exceptions import (
    SmartBookmarksError,
    ValidationError,
    ExternalServiceError,
)


class BookmarkError(SmartBookmarksError):
    """Base exception for bookmark-related errors."""

    pass


class BookmarkValidationError(ValidationError):
    """Raised when a bookmark form fails validation."""

    def __init__(self, errors: dict[str, str]):
        super().__init__(
            "Bookmark form is invalid",
            code="BOOKMARK_INVALID",
            details={"errors": errors},
        )
        self.errors = errors


class BookmarkStoreError(ExternalServiceError):
    """Raised when the bookmark store rejects or fails a request."""

    def __init__(
        self,
        operation: str,
        reason: str,
        bookmark_id: Optional[str] = None,
    ):
        details: dict[str, Any] = {"operation": operation, "reason": reason}
        if bookmark_id is not None:
            details["bookmark_id"] = bookmark_id
        super().__init__(
            f"Bookmark store {operation} failed: {reason}",
            service="supabase_postgrest",
            code="BOOKMARK_STORE_ERROR",
            details=details,
        )


class ChangeFeedError(ExternalServiceError):
    """Raised when the live feed subscription cannot be opened or released."""

    def __init__(self, reason: str):
        super().__init__(
            f"Change feed error: {reason}",
            service="supabase_realtime",
            code="CHANGE_FEED_ERROR",
            details={"reason": reason},
        )


class InvalidChangeEventError(BookmarkError):
    """Raised when a live feed payload cannot be mapped to a ChangeEvent."""

    def __init__(self, reason: str, payload: Optional[dict] = None):
        super().__init__(
            f"Invalid change event: {reason}",
            code="INVALID_CHANGE_EVENT",
            details={"reason": reason, "payload": payload or {}},
        )


"""
Derived list view: filtering, sorting and presentation helpers.

Everything here is a pure function of its inputs. The view model
recomputes the derived list from base state instead of patching it.
"""

import unicodedata
from typing import Iterable, Optional, Sequence
from urllib.parse import urlsplit

from .models import Bookmark, BookmarkItem, EmptyState, SortKey

FAVICON_SERVICE_URL = "https://www.google.com/s2/favicons?domain={origin}&sz=128"
_DEFAULT_PORTS = {"http": 80, "https": 443}


def matches_query(bookmark: Bookmark, query: str) -> bool:
    """Case-insensitive substring match on title or url. Empty query matches all."""
    if not query:
        return True
    needle = query.casefold()
    return needle in bookmark.title.casefold() or needle in bookmark.url.casefold()


def filter_bookmarks(bookmarks: Iterable[Bookmark], query: str) -> list[Bookmark]:
    return [b for b in bookmarks if matches_query(b, query)]


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def title_sort_key(title: str) -> tuple[str, str, str]:
    """
    Locale-aware ordering key for titles.

    Compares case- and accent-insensitively first, then by accents,
    then puts lowercase before uppercase.
    """
    return (
        _strip_accents(title).casefold(),
        unicodedata.normalize("NFKD", title).casefold(),
        title.swapcase(),
    )


def sort_bookmarks(bookmarks: Iterable[Bookmark], sort_key: SortKey) -> list[Bookmark]:
    """
    Sort into a new list. Python's sort is stable, including with reverse=True,
    so ties keep their incoming order.
    """
    if sort_key == SortKey.NEWEST:
        return sorted(bookmarks, key=lambda b: b.created_at, reverse=True)
    if sort_key == SortKey.OLDEST:
        return sorted(bookmarks, key=lambda b: b.created_at)
    if sort_key == SortKey.TITLE:
        return sorted(bookmarks, key=lambda b: title_sort_key(b.title))
    raise ValueError(f"Unknown sort key: {sort_key!r}")


def derive_view(
    bookmarks: Iterable[Bookmark],
    query: str = "",
    sort_key: SortKey = SortKey.NEWEST,
) -> list[Bookmark]:
    """sort(filter(bookmarks, query), sort_key); never mutates its input."""
    return sort_bookmarks(filter_bookmarks(bookmarks, query), sort_key)


def empty_state(total: int, visible: int, loading: bool = False) -> EmptyState:
    if loading:
        return EmptyState.LOADING
    if total == 0:
        return EmptyState.NO_BOOKMARKS
    if visible == 0:
        return EmptyState.NO_RESULTS
    return EmptyState.NONE


def count_label(count: int) -> str:
    return f"{count} {'Bookmark' if count == 1 else 'Bookmarks'}"


def bookmark_domain(url: str) -> str:
    """Hostname without a leading 'www.'; the raw url if it has no hostname."""
    try:
        hostname = urlsplit(url).hostname
    except ValueError:
        return url
    if not hostname:
        return url
    return hostname.removeprefix("www.")


def favicon_url(url: str) -> Optional[str]:
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return None
    if not parts.scheme or not parts.hostname:
        return None

    # Origin only: credentials in the netloc are dropped
    scheme = parts.scheme.lower()
    host = f"[{parts.hostname}]" if ":" in parts.hostname else parts.hostname
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"
    return FAVICON_SERVICE_URL.format(origin=f"{scheme}://{host}")


def created_label(bookmark: Bookmark) -> str:
    """e.g. 'Jan 5, 2026'."""
    created = bookmark.created_at
    return f"{created:%b} {created.day}, {created.year}"


def to_item(bookmark: Bookmark, deleting: bool = False) -> BookmarkItem:
    return BookmarkItem(
        id=bookmark.id,
        title=bookmark.title,
        url=bookmark.url,
        created_at=bookmark.created_at,
        created_label=created_label(bookmark),
        domain=bookmark_domain(bookmark.url),
        favicon_url=favicon_url(bookmark.url),
        deleting=deleting,
    )


def to_items(bookmarks: Sequence[Bookmark], deleting: frozenset[str] = frozenset()) -> list[BookmarkItem]:
    return [to_item(b, deleting=b.id in deleting) for b in bookmarks]

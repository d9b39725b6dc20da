"""Tests for list derivation: filtering, sorting and presentation."""

import pytest

from modules.bookmarks.models import EmptyState, SortKey
from modules.bookmarks.view import (
    bookmark_domain,
    count_label,
    created_label,
    derive_view,
    empty_state,
    favicon_url,
    filter_bookmarks,
    matches_query,
    sort_bookmarks,
    to_items,
)
from tests.modules.bookmarks.fakes import make_bookmark


class TestFilter:
    def test_query_matches_url_case_insensitively(self):
        bookmark = make_bookmark(title="Docs", url="https://example.com")
        assert matches_query(bookmark, "EXAMPLE")

    def test_query_matches_title(self):
        bookmark = make_bookmark(title="Python Docs", url="https://docs.python.org")
        assert matches_query(bookmark, "python d")

    def test_empty_query_matches_everything(self):
        bookmarks = [make_bookmark("a"), make_bookmark("b")]
        assert filter_bookmarks(bookmarks, "") == bookmarks

    def test_no_match(self):
        assert filter_bookmarks([make_bookmark()], "zzz") == []


class TestSort:
    def test_newest_first(self):
        old, new = make_bookmark("old", minutes=0), make_bookmark("new", minutes=10)
        assert [b.id for b in sort_bookmarks([old, new], SortKey.NEWEST)] == ["new", "old"]

    def test_oldest_first(self):
        old, new = make_bookmark("old", minutes=0), make_bookmark("new", minutes=10)
        assert [b.id for b in sort_bookmarks([new, old], SortKey.OLDEST)] == ["old", "new"]

    def test_title_is_locale_aware(self):
        bookmarks = [
            make_bookmark("1", title="banana"),
            make_bookmark("2", title="Apple"),
            make_bookmark("3", title="cherry"),
        ]
        titles = [b.title for b in sort_bookmarks(bookmarks, SortKey.TITLE)]
        assert titles == ["Apple", "banana", "cherry"]

    def test_title_folds_accents(self):
        bookmarks = [make_bookmark("1", title="Zebra"), make_bookmark("2", title="Éclair")]
        titles = [b.title for b in sort_bookmarks(bookmarks, SortKey.TITLE)]
        assert titles == ["Éclair", "Zebra"]

    @pytest.mark.parametrize("sort_key", list(SortKey))
    def test_ties_keep_incoming_order(self, sort_key):
        bookmarks = [make_bookmark(f"bm-{i}", title="Same") for i in range(5)]
        assert [b.id for b in sort_bookmarks(bookmarks, sort_key)] == [f"bm-{i}" for i in range(5)]

    def test_unknown_key(self):
        with pytest.raises(ValueError):
            sort_bookmarks([], "alphabetical")


class TestDeriveView:
    def test_filters_then_sorts(self):
        bookmarks = [
            make_bookmark("1", title="b docs", minutes=1),
            make_bookmark("2", title="news", url="https://news.example.org", minutes=2),
            make_bookmark("3", title="A Docs", minutes=3),
        ]
        result = derive_view(bookmarks, "docs", SortKey.TITLE)
        assert [b.id for b in result] == ["3", "1"]

    def test_is_pure(self):
        bookmarks = [make_bookmark("1", minutes=1), make_bookmark("2", minutes=2)]
        before = list(bookmarks)
        first = derive_view(bookmarks, "", SortKey.NEWEST)
        second = derive_view(bookmarks, "", SortKey.NEWEST)
        assert first == second
        assert bookmarks == before


class TestEmptyState:
    def test_loading(self):
        assert empty_state(0, 0, loading=True) == EmptyState.LOADING

    def test_no_bookmarks(self):
        assert empty_state(0, 0) == EmptyState.NO_BOOKMARKS

    def test_no_results(self):
        assert empty_state(3, 0) == EmptyState.NO_RESULTS

    def test_none(self):
        assert empty_state(3, 1) == EmptyState.NONE


class TestPresentation:
    def test_count_label(self):
        assert count_label(0) == "0 Bookmarks"
        assert count_label(1) == "1 Bookmark"
        assert count_label(3) == "3 Bookmarks"

    def test_domain_strips_www(self):
        assert bookmark_domain("https://www.example.com/path") == "example.com"
        assert bookmark_domain("https://docs.python.org") == "docs.python.org"

    def test_domain_without_host(self):
        assert bookmark_domain("mailto:me@example.com") == "mailto:me@example.com"

    def test_favicon_url(self):
        assert favicon_url("https://www.example.com/a?b=1") == (
            "https://www.google.com/s2/favicons?domain=https://www.example.com&sz=128"
        )
        assert favicon_url("mailto:me@example.com") is None

    def test_favicon_url_drops_credentials(self):
        assert favicon_url("https://user:pw@Example.com/private") == (
            "https://www.google.com/s2/favicons?domain=https://example.com&sz=128"
        )

    def test_favicon_url_keeps_non_default_port(self):
        assert favicon_url("http://localhost:8080/x").endswith("domain=http://localhost:8080&sz=128")
        assert favicon_url("https://example.com:443/").endswith("domain=https://example.com&sz=128")

    def test_created_label(self):
        assert created_label(make_bookmark()) == "Jan 5, 2026"

    def test_items_carry_deleting_flag(self):
        items = to_items([make_bookmark("a"), make_bookmark("b")], frozenset({"b"}))
        assert [(i.id, i.deleting) for i in items] == [("a", False), ("b", True)]
        assert items[0].domain == "example.com"

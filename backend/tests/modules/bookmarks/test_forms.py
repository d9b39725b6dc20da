"""Tests for bookmark form validation and form state."""

import pytest

from modules.bookmarks.forms import (
    BookmarkDraft,
    is_absolute_url,
    validate_bookmark_form,
)


class TestIsAbsoluteUrl:
    @pytest.mark.parametrize("url", [
        "https://example.com",
        "http://localhost:3000/path?q=1",
        "ftp://files.example.com/a.txt",
        "mailto:me@example.com",
        "https://example.com/a b",
    ])
    def test_valid(self, url):
        assert is_absolute_url(url)

    @pytest.mark.parametrize("url", [
        "not a url",
        "example.com",
        "/relative/path",
        "https://",
        "http://exa mple.com",
        "https://example.com:99999",
        "1http://example.com",
        "foo:",
    ])
    def test_invalid(self, url):
        assert not is_absolute_url(url)


class TestValidateBookmarkForm:
    def test_valid_form_is_trimmed(self):
        form, errors = validate_bookmark_form("  Docs  ", "  https://example.com  ")
        assert errors == {}
        assert form.title == "Docs"
        assert form.url == "https://example.com"

    def test_blank_title(self):
        form, errors = validate_bookmark_form("   ", "https://example.com")
        assert form is None
        assert errors == {"title": "Title is required"}

    def test_missing_url(self):
        _, errors = validate_bookmark_form("Docs", "")
        assert errors == {"url": "URL is required"}

    def test_invalid_url_only_flags_url(self):
        _, errors = validate_bookmark_form("Docs", "not a url")
        assert errors == {"url": "Please enter a valid URL"}

    def test_both_fields_reported(self):
        _, errors = validate_bookmark_form("", "")
        assert errors == {"title": "Title is required", "url": "URL is required"}


class TestBookmarkDraft:
    def test_editing_a_field_clears_its_error(self):
        draft = BookmarkDraft(errors={"title": "Title is required", "url": "URL is required"})
        draft.set_title("Docs")
        assert draft.errors == {"url": "URL is required"}
        draft.set_url("https://example.com")
        assert draft.errors == {}

    def test_clear(self):
        draft = BookmarkDraft(title="Docs", url="https://example.com", errors={"url": "x"})
        draft.clear()
        assert (draft.title, draft.url, draft.errors) == ("", "", {})

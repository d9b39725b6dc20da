"""
Bookmark creation form: validation and form state.

Validation is field-scoped: every failing field gets its own message,
and a form with any error never reaches the store.
"""

import re
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, ValidationError as PydanticValidationError, field_validator
from pydantic_core import PydanticCustomError

TITLE_REQUIRED = "Title is required"
URL_REQUIRED = "URL is required"
URL_INVALID = "Please enter a valid URL"

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
# Schemes that are meaningless without a host
_HOST_SCHEMES = {"http", "https", "ftp", "ws", "wss"}


def is_absolute_url(value: str) -> bool:
    """Whether value parses as an absolute URL (scheme plus host or path)."""
    try:
        parts = urlsplit(value)
        port = parts.port  # raises ValueError for a malformed port
    except ValueError:
        return False

    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        return False
    if any(c.isspace() for c in parts.netloc):
        return False
    if parts.scheme.lower() in _HOST_SCHEMES:
        return bool(parts.hostname) and (port is None or port >= 0)
    return bool(parts.netloc or parts.path)


class BookmarkForm(BaseModel):
    """A validated bookmark form; values are trimmed."""

    title: str
    url: str

    @field_validator("title")
    @classmethod
    def title_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError("title_required", TITLE_REQUIRED)
        return value

    @field_validator("url")
    @classmethod
    def url_absolute(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError("url_required", URL_REQUIRED)
        if not is_absolute_url(value):
            raise PydanticCustomError("url_invalid", URL_INVALID)
        return value


def validate_bookmark_form(title: str, url: str) -> tuple[Optional[BookmarkForm], dict[str, str]]:
    """
    Validate raw form input.

    Returns:
        (form, {}) when valid, (None, {field: message}) otherwise
    """
    try:
        return BookmarkForm(title=title, url=url), {}
    except PydanticValidationError as e:
        errors: dict[str, str] = {}
        for error in e.errors():
            name = str(error["loc"][0]) if error["loc"] else "form"
            errors.setdefault(name, error["msg"])
        return None, errors


@dataclass
class BookmarkDraft:
    """
    State of the "add bookmark" form.

    Editing a field clears that field's error. The creation path clears
    the fields once its insert request succeeds.
    """

    title: str = ""
    url: str = ""
    errors: dict[str, str] = field(default_factory=dict)
    submitting: bool = False

    def set_title(self, value: str) -> None:
        self.title = value
        self.errors.pop("title", None)

    def set_url(self, value: str) -> None:
        self.url = value
        self.errors.pop("url", None)

    def clear(self) -> None:
        self.title = ""
        self.url = ""
        self.errors = {}

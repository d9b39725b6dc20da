"""
Event mapper for translating Realtime payloads to ChangeEvents.

Supabase delivers postgres_changes payloads in two shapes:

    {"eventType": "INSERT", "new": {...}, "old": {...}}            (JS client form)
    {"data": {"type": "INSERT", "record": {...}, "old_record": {...}}, "ids": [...]}
                                                                    (Python client form)

Both are normalized here so the reconciler only ever sees ChangeEvent.
"""

from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from .models import Bookmark, ChangeEvent, ChangeEventType
from .exceptions import InvalidChangeEventError


def _unwrap(payload: dict[str, Any]) -> tuple[Any, Any, Any]:
    """Return (event type, new row, old row) from either payload shape."""
    if "eventType" in payload:
        return payload.get("eventType"), payload.get("new"), payload.get("old")

    data = payload.get("data", payload)
    if not isinstance(data, dict):
        return None, None, None
    return data.get("type"), data.get("record"), data.get("old_record")


def _parse_event_type(raw: Any, payload: dict[str, Any]) -> ChangeEventType:
    if not isinstance(raw, str):
        raise InvalidChangeEventError("missing event type", payload)
    try:
        return ChangeEventType(raw.upper())
    except ValueError:
        raise InvalidChangeEventError(f"unknown event type {raw!r}", payload)


def _parse_row(row: Any, payload: dict[str, Any]) -> Optional[Bookmark]:
    # Realtime sends {} rather than null for a missing side of the change
    if not row:
        return None
    try:
        return Bookmark.model_validate(row)
    except PydanticValidationError as e:
        raise InvalidChangeEventError(f"malformed record: {e.error_count()} error(s)", payload)


def map_change_payload(payload: dict[str, Any]) -> ChangeEvent:
    """
    Map a raw postgres_changes payload to a ChangeEvent.

    Raises:
        InvalidChangeEventError: If the payload has no usable type or rows
    """
    if not isinstance(payload, dict):
        raise InvalidChangeEventError("payload is not an object")

    raw_type, raw_new, raw_old = _unwrap(payload)
    event_type = _parse_event_type(raw_type, payload)

    if event_type == ChangeEventType.DELETE:
        old = raw_old if isinstance(raw_old, dict) else {}
        if old.get("id") is None:
            raise InvalidChangeEventError("delete without old id", payload)
        return ChangeEvent(event_type=event_type, old=old)

    new = _parse_row(raw_new, payload)
    if new is None:
        raise InvalidChangeEventError(f"{event_type.value.lower()} without new record", payload)

    return ChangeEvent(
        event_type=event_type,
        new=new,
        old=raw_old if isinstance(raw_old, dict) else {},
    )

"""
Bookmark API endpoints.

Provides REST endpoints for the bookmark list, the creation and deletion
paths, and an SSE stream backed by a live view model.
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse
from sse_starlette.sse import EventSourceResponse

from api.dependencies import (
    build_view_model,
    get_bookmark_store,
    get_bookmark_view_model,
    get_change_feed,
    get_notifier,
    get_session_gate,
)
from modules.auth.interfaces import ISessionGate

from .interfaces import IBookmarkStore, IChangeFeed
from .models import (
    BookmarkListView,
    CreateBookmarkRequest,
    CreateBookmarkResponse,
    Notice,
    SortKey,
)
from .exceptions import BookmarkValidationError
from .forms import BookmarkDraft
from .notifications import NoticeCollector
from .view_model import BookmarkViewModel

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=BookmarkListView)
async def list_bookmarks(
    view_model: BookmarkViewModel = Depends(get_bookmark_view_model),
    notifier: NoticeCollector = Depends(get_notifier),
) -> BookmarkListView:
    """
    List the current user's bookmarks.

    Filtered by `q` (title or URL, case-insensitive) and sorted by `sort`.
    A failed load yields an empty list rather than an error.
    """
    await view_model.refresh()
    return view_model.snapshot().model_copy(update={"notices": notifier.drain()})


@router.post("", response_model=CreateBookmarkResponse, status_code=201)
async def create_bookmark(
    request: CreateBookmarkRequest,
    view_model: BookmarkViewModel = Depends(get_bookmark_view_model),
    notifier: NoticeCollector = Depends(get_notifier),
):
    """
    Create a bookmark.

    Returns 422 with field errors if the form is invalid (no request is
    made), 502 if the store rejects the insert. The new bookmark shows up
    in the list through the live feed.
    """
    draft = BookmarkDraft(title=request.title, url=request.url)
    created = await view_model.create_bookmark(draft)

    if draft.errors:
        raise BookmarkValidationError(draft.errors)

    response = CreateBookmarkResponse(created=created, notices=notifier.drain())
    if not created:
        return JSONResponse(status_code=502, content=response.model_dump(mode="json"))
    return response


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark_id: str,
    view_model: BookmarkViewModel = Depends(get_bookmark_view_model),
    notifier: NoticeCollector = Depends(get_notifier),
):
    """
    Delete a bookmark.

    Deleting an id that does not exist (or is not yours) is not an error.
    """
    deleted = await view_model.delete_bookmark(bookmark_id)
    if not deleted:
        notices = [n.model_dump(mode="json") for n in notifier.drain()]
        return JSONResponse(status_code=502, content={"deleted": False, "notices": notices})
    return Response(status_code=204)


async def event_generator(view_model: BookmarkViewModel, queue: asyncio.Queue):
    """
    Generate SSE events from a mounted view model.

    Yields events in the format:
        event: snapshot | notice
        data: <json_data>

    Runs until the client disconnects; the view model is deactivated on
    the way out, releasing its live subscription.
    """
    try:
        await view_model.activate()
        while True:
            pending = [await queue.get()]
            while not queue.empty():
                pending.append(queue.get_nowait())

            for item in pending:
                if isinstance(item, Notice):
                    yield {"event": "notice", "data": item.model_dump_json()}
            # A burst of state changes becomes one snapshot
            if any(item is None for item in pending):
                yield {"event": "snapshot", "data": view_model.snapshot().model_dump_json()}
    finally:
        await view_model.deactivate()


@router.get("/stream")
async def stream_bookmarks(
    q: str = Query(default="", description="Search query (title or URL)"),
    sort: SortKey = Query(default=SortKey.NEWEST, description="Sort order"),
    session: ISessionGate = Depends(get_session_gate),
    store: IBookmarkStore = Depends(get_bookmark_store),
    feed: IChangeFeed = Depends(get_change_feed),
):
    """
    Stream the live bookmark list via SSE.

    Mounts a view model for this connection: the initial load, then one
    snapshot per reconciled change from the live feed.

    Event types:
    - snapshot: the full derived list (BookmarkListView)
    - notice: a user-facing notice
    """
    queue: asyncio.Queue = asyncio.Queue()
    notifier = NoticeCollector(on_notice=queue.put_nowait)
    view_model = build_view_model(session, store, notifier, feed=feed, search_query=q, sort_key=sort)
    view_model.add_listener(lambda: queue.put_nowait(None))

    return EventSourceResponse(
        event_generator(view_model, queue),
        media_type="text/event-stream",
    )

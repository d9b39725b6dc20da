"""
Bookmark view model.

Owns the local bookmark collection for one mounted view: the initial
load, live reconciliation from the change feed, the derived list, and
the create and delete request paths.

Collaborators are passed in explicitly. A view model holds at most one
feed subscription and releases it exactly once.
"""

import asyncio
import logging
from typing import Callable, Optional

from shared.models import AuthenticatedUser
from modules.auth.interfaces import ISessionGate
from modules.auth.exceptions import SessionRequiredError

from .interfaces import IBookmarkStore, IChangeFeed, IFeedSubscription, INotifier
from .models import Bookmark, BookmarkListView, ChangeEvent, EmptyState, SortKey
from .exceptions import BookmarkStoreError, ChangeFeedError
from .forms import BookmarkDraft, validate_bookmark_form
from .reconciler import BookmarkCollection
from .view import count_label, derive_view, empty_state, to_items

logger = logging.getLogger(__name__)

ADD_SUCCESS = "Bookmark added successfully"
ADD_FAILED = "Failed to add bookmark"
DELETE_SUCCESS = "Bookmark deleted"
DELETE_FAILED = "Failed to delete bookmark"

Listener = Callable[[], None]


class BookmarkViewModel:
    """
    Live, filtered and sorted bookmark list for the signed-in user.

    Usage:
        async with BookmarkViewModel(session, store, notifier, feed=feed) as vm:
            vm.set_search_query("docs")
            view = vm.snapshot()
    """

    def __init__(
        self,
        session: ISessionGate,
        store: IBookmarkStore,
        notifier: INotifier,
        feed: Optional[IChangeFeed] = None,
        search_query: str = "",
        sort_key: SortKey = SortKey.NEWEST,
    ):
        self._session = session
        self._store = store
        self._notifier = notifier
        self._feed = feed

        self._collection = BookmarkCollection()
        self._user: Optional[AuthenticatedUser] = None
        self._loading = True
        self._search_query = search_query
        self._sort_key = SortKey(sort_key)
        self._deleting: set[str] = set()

        self._subscription: Optional[IFeedSubscription] = None
        self._subscription_task: Optional[asyncio.Task] = None
        self._closed = False
        self._listeners: list[Listener] = []

    @property
    def user(self) -> Optional[AuthenticatedUser]:
        return self._user

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def bookmarks(self) -> tuple[Bookmark, ...]:
        """Base collection, newest arrivals first."""
        return self._collection.items()

    @property
    def search_query(self) -> str:
        return self._search_query

    @property
    def sort_key(self) -> SortKey:
        return self._sort_key

    @property
    def deleting(self) -> frozenset[str]:
        return frozenset(self._deleting)

    @property
    def subscribed(self) -> bool:
        return self._subscription is not None and self._subscription.active

    @property
    def visible_bookmarks(self) -> list[Bookmark]:
        return derive_view(self._collection, self._search_query, self._sort_key)

    @property
    def empty_state(self) -> EmptyState:
        return empty_state(len(self._collection), len(self.visible_bookmarks), self._loading)

    def is_deleting(self, bookmark_id: str) -> bool:
        return bookmark_id in self._deleting

    def snapshot(self) -> BookmarkListView:
        """Render the derived list as a response model."""
        visible = self.visible_bookmarks
        return BookmarkListView(
            bookmarks=to_items(visible, self.deleting),
            total=len(self._collection),
            count=len(visible),
            count_label=count_label(len(visible)),
            empty_state=empty_state(len(self._collection), len(visible), self._loading),
            loading=self._loading,
            search_query=self._search_query,
            sort_key=self._sort_key,
        )

    def set_search_query(self, query: str) -> None:
        if query != self._search_query:
            self._search_query = query
            self._emit()

    def set_sort_key(self, sort_key: SortKey) -> None:
        sort_key = SortKey(sort_key)
        if sort_key != self._sort_key:
            self._sort_key = sort_key
            self._emit()

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener()

    async def activate(self) -> None:
        """Load the user's bookmarks, then open the live subscription."""
        if self._closed:
            logger.debug("Ignoring activate on a closed view model")
            return

        await self.refresh()

        if self._user is None or self._feed is None or self._closed:
            return
        if self._subscription_task is None:
            self._subscription_task = asyncio.ensure_future(self._subscribe(self._user.id))
        # Cancelling activate must not cancel the setup deactivate waits on
        await asyncio.shield(self._subscription_task)

    async def _subscribe(self, user_id: str) -> None:
        try:
            self._subscription = await self._feed.subscribe(self._handle_change, owner_id=user_id)
        except ChangeFeedError as e:
            logger.warning(f"Live updates unavailable for user {user_id}: {e.message}")

    async def deactivate(self) -> None:
        """
        Tear down the view.

        Waits for a pending subscription setup to finish, then releases it.
        Safe to call more than once.
        """
        self._closed = True

        task = self._subscription_task
        if task is not None:
            await asyncio.wait({task})
            if task.cancelled():
                logger.debug("Live subscription setup was cancelled")
            elif task.exception() is not None:
                logger.warning(f"Live subscription setup failed: {task.exception()}")

        subscription, self._subscription = self._subscription, None
        if subscription is None:
            return
        try:
            await subscription.unsubscribe()
        except ChangeFeedError as e:
            logger.warning(f"Failed to release live subscription: {e.message}")

    async def __aenter__(self) -> "BookmarkViewModel":
        try:
            await self.activate()
        except BaseException:
            await self.deactivate()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.deactivate()

    async def refresh(self) -> None:
        """
        Replace local state with the user's bookmarks from the store.

        A failed load empties the list and is logged, not raised.
        """
        try:
            self._user = await self._session.get_current_user()
            if self._user is None:
                self._collection.replace_all(())
                return
            bookmarks = await self._store.list_for_user(self._user.id)
            self._collection.replace_all(bookmarks)
            logger.debug(f"Loaded {len(self._collection)} bookmarks for user {self._user.id}")
        except BookmarkStoreError as e:
            logger.error(f"Error fetching bookmarks: {e.message}")
            self._collection.replace_all(())
        finally:
            self._loading = False
            self._emit()

    def _handle_change(self, event: ChangeEvent) -> None:
        if self._user is None:
            return
        if self._collection.apply(event, self._user.id):
            logger.debug(f"Applied {event.event_type.value} from live feed")
            self._emit()

    async def _require_user(self) -> Optional[AuthenticatedUser]:
        user = await self._session.get_current_user()
        if user is None:
            self._notifier.error(SessionRequiredError().message)
        return user

    async def create_bookmark(self, draft: BookmarkDraft) -> bool:
        """
        Validate the draft and issue an insert.

        Local state is left alone; the feed echo adds the new row.
        Field errors land on draft.errors and no request is made.

        Returns:
            True if the insert request succeeded
        """
        form, errors = validate_bookmark_form(draft.title, draft.url)
        draft.errors = errors
        if form is None:
            return False

        user = await self._require_user()
        if user is None:
            return False

        draft.submitting = True
        try:
            await self._store.insert(user.id, form.title, form.url)
        except BookmarkStoreError as e:
            logger.error(f"Error adding bookmark: {e.message}")
            self._notifier.error(ADD_FAILED)
            return False
        finally:
            draft.submitting = False

        self._notifier.success(ADD_SUCCESS)
        draft.clear()
        return True

    async def delete_bookmark(self, bookmark_id: str) -> bool:
        """
        Issue a delete by id, then refetch.

        A second delete for the same id while one is in flight is ignored.

        Returns:
            True if the delete request succeeded
        """
        if bookmark_id in self._deleting:
            logger.debug(f"Delete already in flight for bookmark {bookmark_id}")
            return False

        # Claimed before the first await so a second click sees it
        self._deleting.add(bookmark_id)
        self._emit()
        try:
            if await self._require_user() is None:
                return False
            await self._store.delete(bookmark_id)
        except BookmarkStoreError as e:
            logger.error(f"Error deleting bookmark {bookmark_id}: {e.message}")
            self._notifier.error(DELETE_FAILED)
            return False
        finally:
            self._deleting.discard(bookmark_id)
            self._emit()

        self._notifier.success(DELETE_SUCCESS)
        await self.refresh()
        return True

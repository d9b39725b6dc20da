"""
Live change feed over Supabase Realtime.

Each subscription opens its own channel, so view models never share one.
"""

import logging
from typing import Any, Optional
from uuid import uuid4

from supabase import AsyncClient

from .interfaces import ChangeHandler, IChangeFeed, IFeedSubscription
from .event_mapper import map_change_payload
from .exceptions import ChangeFeedError, InvalidChangeEventError

logger = logging.getLogger(__name__)


class RealtimeSubscription(IFeedSubscription):
    """Handle for one Realtime channel; released exactly once."""

    def __init__(self, client: AsyncClient, channel: Any, topic: str):
        self._client = client
        self._channel = channel
        self.topic = topic
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    async def unsubscribe(self) -> None:
        if not self._active:
            return
        self._active = False
        try:
            await self._client.remove_channel(self._channel)
        except Exception as e:
            raise ChangeFeedError(f"could not release channel {self.topic}: {e}") from e
        logger.debug(f"Released realtime channel {self.topic}")


class SupabaseChangeFeed(IChangeFeed):
    """
    Change feed for the bookmarks table.

    By default every change on the table is delivered and the handler
    enforces ownership. With filter_by_owner=True the owner predicate is
    also pushed into the subscription so other users' rows never reach
    this process.
    """

    def __init__(
        self,
        client: AsyncClient,
        table: str = "bookmarks",
        schema: str = "public",
        channel_prefix: str = "bookmarks-changes",
        filter_by_owner: bool = False,
    ):
        self._client = client
        self._table = table
        self._schema = schema
        self._channel_prefix = channel_prefix
        self._filter_by_owner = filter_by_owner

    async def subscribe(
        self,
        handler: ChangeHandler,
        owner_id: Optional[str] = None,
    ) -> RealtimeSubscription:
        topic = f"{self._channel_prefix}-{uuid4().hex[:12]}"

        def on_change(payload: dict[str, Any]) -> None:
            try:
                event = map_change_payload(payload)
            except InvalidChangeEventError as e:
                logger.warning(f"Dropping change on {topic}: {e.message}")
                return
            handler(event)

        row_filter = None
        if self._filter_by_owner and owner_id:
            row_filter = f"user_id=eq.{owner_id}"

        channel = self._client.channel(topic)
        channel.on_postgres_changes(
            "*",
            schema=self._schema,
            table=self._table,
            filter=row_filter,
            callback=on_change,
        )
        try:
            await channel.subscribe()
        except BaseException as e:
            await self._discard_channel(channel, topic)
            if isinstance(e, Exception):
                raise ChangeFeedError(f"could not subscribe to {topic}: {e}") from e
            raise

        logger.debug(f"Subscribed to realtime channel {topic}")
        return RealtimeSubscription(self._client, channel, topic)

    async def _discard_channel(self, channel: Any, topic: str) -> None:
        try:
            await self._client.remove_channel(channel)
        except Exception as e:
            logger.warning(f"Failed to remove half-open channel {topic}: {e}")

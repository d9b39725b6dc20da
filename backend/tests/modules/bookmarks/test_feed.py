"""Tests for the Supabase Realtime change feed."""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from modules.bookmarks.feed import SupabaseChangeFeed
from modules.bookmarks.exceptions import ChangeFeedError
from modules.bookmarks.models import ChangeEventType


def create_mock_client() -> MagicMock:
    """An async Supabase client whose channels subscribe successfully."""
    client = MagicMock()
    channel = MagicMock()
    channel.subscribe = AsyncMock(return_value=channel)
    client.channel.return_value = channel
    client.remove_channel = AsyncMock()
    return client


def registered_callback(client: MagicMock):
    return client.channel.return_value.on_postgres_changes.call_args.kwargs["callback"]


class TestSubscribe:
    @pytest.mark.asyncio
    async def test_listens_to_all_events_on_table(self):
        client = create_mock_client()
        feed = SupabaseChangeFeed(client, table="bookmarks", schema="public")

        subscription = await feed.subscribe(lambda event: None, owner_id="user-1")

        channel = client.channel.return_value
        args, kwargs = channel.on_postgres_changes.call_args
        assert args == ("*",)
        assert kwargs["schema"] == "public"
        assert kwargs["table"] == "bookmarks"
        assert kwargs["filter"] is None
        channel.subscribe.assert_awaited_once()
        assert subscription.active

    @pytest.mark.asyncio
    async def test_owner_filter_when_enabled(self):
        client = create_mock_client()
        feed = SupabaseChangeFeed(client, filter_by_owner=True)

        await feed.subscribe(lambda event: None, owner_id="user-1")

        kwargs = client.channel.return_value.on_postgres_changes.call_args.kwargs
        assert kwargs["filter"] == "user_id=eq.user-1"

    @pytest.mark.asyncio
    async def test_each_subscription_gets_its_own_channel(self):
        client = create_mock_client()
        feed = SupabaseChangeFeed(client, channel_prefix="bookmarks-changes")

        first = await feed.subscribe(lambda event: None)
        second = await feed.subscribe(lambda event: None)

        assert first.topic != second.topic
        assert first.topic.startswith("bookmarks-changes-")

    @pytest.mark.asyncio
    async def test_subscribe_failure(self):
        client = create_mock_client()
        client.channel.return_value.subscribe = AsyncMock(side_effect=RuntimeError("socket closed"))
        feed = SupabaseChangeFeed(client)

        with pytest.raises(ChangeFeedError):
            await feed.subscribe(lambda event: None)
        client.remove_channel.assert_awaited_once_with(client.channel.return_value)

    @pytest.mark.asyncio
    async def test_cancelled_subscribe_removes_channel(self):
        client = create_mock_client()
        client.channel.return_value.subscribe = AsyncMock(side_effect=asyncio.CancelledError())
        feed = SupabaseChangeFeed(client)

        with pytest.raises(asyncio.CancelledError):
            await feed.subscribe(lambda event: None)
        client.remove_channel.assert_awaited_once_with(client.channel.return_value)

    @pytest.mark.asyncio
    async def test_remove_failure_keeps_original_error(self):
        client = create_mock_client()
        client.channel.return_value.subscribe = AsyncMock(side_effect=RuntimeError("socket closed"))
        client.remove_channel = AsyncMock(side_effect=RuntimeError("gone"))
        feed = SupabaseChangeFeed(client)

        with pytest.raises(ChangeFeedError, match="socket closed"):
            await feed.subscribe(lambda event: None)


class TestDelivery:
    @pytest.mark.asyncio
    async def test_payload_is_mapped_before_handler(self):
        client = create_mock_client()
        received = []
        await SupabaseChangeFeed(client).subscribe(received.append)

        registered_callback(client)({"eventType": "DELETE", "new": {}, "old": {"id": "bm-1"}})

        assert len(received) == 1
        assert received[0].event_type == ChangeEventType.DELETE
        assert received[0].old_id == "bm-1"

    @pytest.mark.asyncio
    async def test_malformed_payload_is_dropped(self):
        client = create_mock_client()
        received = []
        await SupabaseChangeFeed(client).subscribe(received.append)

        registered_callback(client)({"eventType": "INSERT", "new": {"id": "x"}, "old": {}})

        assert received == []


class TestUnsubscribe:
    @pytest.mark.asyncio
    async def test_releases_exactly_once(self):
        client = create_mock_client()
        subscription = await SupabaseChangeFeed(client).subscribe(lambda event: None)

        await subscription.unsubscribe()
        await subscription.unsubscribe()

        client.remove_channel.assert_awaited_once_with(client.channel.return_value)
        assert not subscription.active

    @pytest.mark.asyncio
    async def test_release_failure(self):
        client = create_mock_client()
        client.remove_channel = AsyncMock(side_effect=RuntimeError("gone"))
        subscription = await SupabaseChangeFeed(client).subscribe(lambda event: None)

        with pytest.raises(ChangeFeedError):
            await subscription.unsubscribe()
        assert not subscription.active

"""Tests for recipe progress events over Redis pub/sub."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import redis

from foodkeeper.services.realtime import (
    RECIPE_CHANNEL,
    RealtimeService,
    RecipeEventType,
    get_sync_redis,
    publish_recipe_event,
)


@pytest.fixture
def mock_sync_redis():
    import foodkeeper.services.realtime as realtime_module

    mock_redis = MagicMock()
    realtime_module._sync_redis = mock_redis
    yield mock_redis
    realtime_module._sync_redis = None


class TestRecipeEventType:
    def test_event_values(self):
        assert RecipeEventType.STAGE_CHANGED == "stage_changed"
        assert RecipeEventType.MESSAGE_ADDED == "message_added"
        assert RecipeEventType.RESET == "reset"
        assert RecipeEventType.CHAT_CLEARED == "chat_cleared"


class TestGetSyncRedis:
    def test_creates_redis_client(self):
        import foodkeeper.services.realtime as realtime_module

        realtime_module._sync_redis = None

        with patch("foodkeeper.services.realtime.redis.from_url") as mock_from_url:
            mock_client = MagicMock()
            mock_from_url.return_value = mock_client

            assert get_sync_redis() == mock_client
            mock_from_url.assert_called_once()

        realtime_module._sync_redis = None

    def test_reuses_existing_client(self, mock_sync_redis):
        with patch("foodkeeper.services.realtime.redis.from_url") as mock_from_url:
            assert get_sync_redis() == mock_sync_redis
            mock_from_url.assert_not_called()


class TestPublishRecipeEvent:
    def test_publishes_to_recipe_channel(self, mock_sync_redis):
        publish_recipe_event(RecipeEventType.STAGE_CHANGED, {"stage": "analyzing", "progress": 0.25})

        mock_sync_redis.publish.assert_called_once()
        channel, payload = mock_sync_redis.publish.call_args[0]
        assert channel == RECIPE_CHANNEL
        message = json.loads(payload)
        assert message["type"] == "stage_changed"
        assert message["data"] == {"stage": "analyzing", "progress": 0.25}
        assert "timestamp" in message

    def test_keeps_chinese_text_readable(self, mock_sync_redis):
        publish_recipe_event(RecipeEventType.MESSAGE_ADDED, {"content": "番茄炒蛋"})

        payload = mock_sync_redis.publish.call_args[0][1]
        assert "番茄炒蛋" in payload

    def test_publishes_without_data(self, mock_sync_redis):
        publish_recipe_event(RecipeEventType.RESET)

        message = json.loads(mock_sync_redis.publish.call_args[0][1])
        assert message["data"] == {}

    def test_redis_errors_are_swallowed(self, mock_sync_redis):
        mock_sync_redis.publish.side_effect = redis.ConnectionError("Redis connection failed")

        # Should not raise
        publish_recipe_event(RecipeEventType.RESET)


class TestRealtimeService:
    def test_init(self):
        service = RealtimeService()
        assert service._redis is None
        assert service._pubsub is None

    @pytest.mark.asyncio
    async def test_get_redis_creates_connection(self):
        service = RealtimeService()

        with patch("foodkeeper.services.realtime.aioredis.from_url") as mock_from_url:
            mock_redis = AsyncMock()
            mock_from_url.return_value = mock_redis

            assert await service._get_redis() == mock_redis
            mock_from_url.assert_called_once()

    @pytest.mark.asyncio
    async def test_cleanup_closes_connections(self):
        service = RealtimeService()
        mock_redis = AsyncMock()
        mock_pubsub = AsyncMock()
        service._redis = mock_redis
        service._pubsub = mock_pubsub

        await service.cleanup()

        mock_pubsub.aclose.assert_awaited_once()
        mock_redis.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cleanup_handles_no_connections(self):
        service = RealtimeService()

        # Should not raise
        await service.cleanup()

    @pytest.mark.asyncio
    async def test_subscribe_skips_control_and_invalid_messages(self):
        service = RealtimeService()
        mock_redis = MagicMock()
        mock_pubsub = MagicMock()
        event = {"type": "reset", "data": {}}

        async def mock_listen():
            yield {"type": "subscribe", "data": 1}
            yield {"type": "message", "data": "not valid json"}
            yield {"type": "message", "data": json.dumps(event)}

        mock_pubsub.listen = mock_listen
        mock_pubsub.subscribe = AsyncMock()
        mock_pubsub.unsubscribe = AsyncMock()
        mock_redis.pubsub.return_value = mock_pubsub
        service._redis = mock_redis

        messages = [message async for message in service.subscribe()]

        assert messages == [event]
        mock_pubsub.subscribe.assert_awaited_once_with(RECIPE_CHANNEL)
        mock_pubsub.unsubscribe.assert_awaited_once_with(RECIPE_CHANNEL)

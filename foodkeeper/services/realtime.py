"""Recipe-assistant progress events over Redis pub/sub."""

import json
import logging
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING

import redis
import redis.asyncio as aioredis

from foodkeeper.config import get_settings

if TYPE_CHECKING:
    from redis.asyncio.client import PubSub

logger = logging.getLogger(__name__)

RECIPE_CHANNEL = "recipes:assistant"


class RecipeEventType(StrEnum):
    """Event types emitted by the recipe assistant."""

    STAGE_CHANGED = "stage_changed"
    MESSAGE_ADDED = "message_added"
    RESET = "reset"
    CHAT_CLEARED = "chat_cleared"


_sync_redis: redis.Redis | None = None


def get_sync_redis() -> redis.Redis:
    """Get synchronous Redis client for publishing from the assistant."""
    global _sync_redis
    if _sync_redis is None:
        _sync_redis = redis.from_url(get_settings().redis_url)
    return _sync_redis


def publish_recipe_event(event_type: RecipeEventType, data: dict | None = None) -> None:
    """Publish an assistant event. Pub/sub failures are logged and never reach the caller."""
    try:
        message = {
            "type": event_type,
            "timestamp": datetime.now(UTC).isoformat(),
            "data": data or {},
        }
        get_sync_redis().publish(RECIPE_CHANNEL, json.dumps(message, ensure_ascii=False))
        logger.debug(f"Published {event_type} to {RECIPE_CHANNEL}")
    except (redis.RedisError, OSError) as e:
        logger.error(f"Failed to publish recipe event: {e}")


class RealtimeService:
    """Async Redis pub/sub service for WebSocket connections."""

    def __init__(self) -> None:
        self._redis: aioredis.Redis | None = None
        self._pubsub: PubSub | None = None

    async def _get_redis(self) -> aioredis.Redis:
        if self._redis is None:
            self._redis = aioredis.from_url(get_settings().redis_url)
        return self._redis

    async def subscribe(self, channel: str = RECIPE_CHANNEL) -> AsyncIterator[dict]:
        """Subscribe to a Redis channel and yield decoded messages."""
        redis_conn = await self._get_redis()
        self._pubsub = redis_conn.pubsub()
        await self._pubsub.subscribe(channel)

        try:
            async for message in self._pubsub.listen():
                if message["type"] != "message":
                    continue
                try:
                    yield json.loads(message["data"])
                except json.JSONDecodeError:
                    logger.warning(f"Invalid JSON in pub/sub message: {message['data']}")
        finally:
            if self._pubsub:
                await self._pubsub.unsubscribe(channel)

    async def cleanup(self) -> None:
        if self._pubsub:
            await self._pubsub.aclose()
        if self._redis:
            await self._redis.aclose()

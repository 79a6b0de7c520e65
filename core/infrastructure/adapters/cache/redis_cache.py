"""
Redis cache invalidation.

The ordering service never populates the cache; it only drops aggregate
keys that a new order makes stale. Any Redis failure is logged and
reported in the returned SideEffectResult.
"""
import logging
from typing import Optional

import redis.asyncio as aioredis

from core.application.interfaces import ICacheInvalidator
from core.application.results import SideEffectResult, fire_and_log


logger = logging.getLogger(__name__)


class RedisCacheInvalidator(ICacheInvalidator):
    """Deletes keys from Redis, connecting lazily on first use."""

    def __init__(self, redis_url: str = "redis://localhost:6379/0"):
        """
        Initialize Redis cache invalidator.

        Args:
            redis_url: Redis connection URL
        """
        self.redis_url = redis_url
        self._redis_client: Optional[aioredis.Redis] = None

    async def connect(self) -> None:
        """Create the Redis client."""
        if self._redis_client is None:
            self._redis_client = aioredis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            logger.info(f"✅ Redis client created: {self.redis_url}")

    async def disconnect(self) -> None:
        """Close Redis connection."""
        if self._redis_client:
            await self._redis_client.aclose()
            self._redis_client = None
            logger.info("✅ Disconnected from Redis")

    async def invalidate(self, key: str) -> SideEffectResult:
        async def _delete():
            await self.connect()
            await self._redis_client.delete(key)
            logger.debug(f"Cache key invalidated: {key}")

        return await fire_and_log(f"cache invalidation ({key})", _delete, level=logging.WARNING)


class NullCacheInvalidator(ICacheInvalidator):
    """Used when caching is disabled."""

    async def invalidate(self, key: str) -> SideEffectResult:
        return SideEffectResult.success(f"cache invalidation ({key})")

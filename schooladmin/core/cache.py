# schooladmin/core/cache.py
"""Redis caching implementation."""
import pickle
from typing import Any, Optional, Union
from datetime import timedelta
import logging
import redis.asyncio as redis
from redis.exceptions import RedisError

from .config import settings

logger = logging.getLogger(__name__)

class CacheManager:
    def __init__(self, url: str, enabled: bool = True, prefix: str = "schooladmin"):
        self.url = url
        self.enabled = enabled
        self.prefix = prefix
        self.redis: Optional[redis.Redis] = None

    async def connect(self):
        """Initialize Redis connection."""
        if self.enabled and not self.redis:
            self.redis = redis.from_url(
                self.url,
                encoding="utf-8",
                decode_responses=False
            )

    async def disconnect(self):
        """Close Redis connection."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None

    def make_key(self, *parts: Any) -> str:
        return ":".join([self.prefix, *(str(part) for part in parts)])

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache."""
        if not self.enabled:
            return None
        await self.connect()

        try:
            value = await self.redis.get(key)
            if value:
                return pickle.loads(value)
        except RedisError as e:
            logger.warning(f"Cache read failed for {key}: {e}")
        return None

    async def set(
        self,
        key: str,
        value: Any,
        expire: Optional[Union[int, timedelta]] = None
    ) -> bool:
        """Set value in cache."""
        if not self.enabled:
            return False
        await self.connect()

        try:
            serialized = pickle.dumps(value)
            if expire:
                if isinstance(expire, timedelta):
                    expire = int(expire.total_seconds())
                return bool(await self.redis.setex(key, expire, serialized))
            return bool(await self.redis.set(key, serialized))
        except RedisError as e:
            logger.warning(f"Cache write failed for {key}: {e}")
            return False

    async def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching ``pattern`` (relative to the prefix)."""
        if not self.enabled:
            return 0
        await self.connect()

        deleted = 0
        try:
            async for key in self.redis.scan_iter(match=self.make_key(pattern)):
                deleted += await self.redis.delete(key)
        except RedisError as e:
            logger.warning(f"Cache invalidation failed for {pattern}: {e}")
        return deleted

# Global cache instance
cache_manager = CacheManager(settings.redis_url, enabled=settings.cache_enabled)

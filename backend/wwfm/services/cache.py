"""
Redis Caching Service

Caches /detect responses so repeated keystrokes for the same term do not hit
the search backend again. Lives at the API layer only; the detection
services never read or write it.
Cache invalidation happens on:
- Manual cache clear (admin)
- TTL expiration
"""
import json
import hashlib
from typing import Optional, Any
from datetime import timedelta
import logging

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError

from wwfm.config import get_settings

logger = logging.getLogger(__name__)

# Cache key prefixes
PREFIX_DETECTION = "detect:"

# Default TTL
TTL_DETECTION = timedelta(minutes=5)


class CacheService:
    """Redis-based caching service with fallback to no-cache."""

    def __init__(self):
        self._client: Optional[redis.Redis] = None
        self._connected = False

    async def connect(self):
        """Initialize Redis connection."""
        if self._connected:
            return

        try:
            settings = get_settings()
            self._client = redis.from_url(
                settings.redis_url,
                encoding="utf-8",
                decode_responses=True
            )
            # Test connection
            await self._client.ping()
            self._connected = True
            logger.info("Redis cache connected")
        except (RedisConnectionError, Exception) as e:
            logger.warning(f"Redis not available, caching disabled: {e}")
            self._client = None
            self._connected = False

    async def disconnect(self):
        """Close Redis connection."""
        if self._client:
            await self._client.close()
            self._client = None
            self._connected = False

    def _make_key(self, prefix: str, params: dict) -> str:
        """Generate cache key from prefix and parameters."""
        # Sort params for consistent key generation
        param_str = json.dumps(params, sort_keys=True)
        hash_val = hashlib.md5(param_str.encode()).hexdigest()[:12]
        return f"{prefix}{hash_val}"

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache."""
        if not self._client:
            return None

        try:
            value = await self._client.get(key)
            if value:
                return json.loads(value)
            return None
        except Exception as e:
            logger.error(f"Cache get error: {e}")
            return None

    async def set(
        self,
        key: str,
        value: Any,
        ttl: timedelta = TTL_DETECTION
    ):
        """Set value in cache with TTL."""
        if not self._client:
            return

        try:
            await self._client.setex(
                key,
                int(ttl.total_seconds()),
                json.dumps(value, default=str)
            )
        except Exception as e:
            logger.error(f"Cache set error: {e}")

    async def delete_pattern(self, pattern: str):
        """Delete all keys matching pattern."""
        if not self._client:
            return

        try:
            cursor = 0
            while True:
                cursor, keys = await self._client.scan(cursor, match=pattern, count=100)
                if keys:
                    await self._client.delete(*keys)
                if cursor == 0:
                    break
            logger.info(f"Cleared cache keys matching: {pattern}")
        except Exception as e:
            logger.error(f"Cache delete pattern error: {e}")

    async def invalidate_detections(self):
        """Invalidate all cached detection results."""
        await self.delete_pattern(f"{PREFIX_DETECTION}*")

    # Convenience methods for detection results

    async def get_detection(self, search_term: str) -> Optional[dict]:
        """Get cached detection result for a normalized term."""
        key = self._make_key(PREFIX_DETECTION, {"q": search_term})
        return await self.get(key)

    async def set_detection(self, search_term: str, data: dict, ttl: Optional[timedelta] = None):
        """Cache detection result for a normalized term."""
        if ttl is None:
            ttl = timedelta(seconds=get_settings().detection_cache_ttl_seconds)
        key = self._make_key(PREFIX_DETECTION, {"q": search_term})
        await self.set(key, data, ttl)

    @property
    def is_connected(self) -> bool:
        """Check if cache is available."""
        return self._connected


# Singleton instance
cache = CacheService()

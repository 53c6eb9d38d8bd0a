"""Redis-backed JSON cache for the users service.

Values are stored as JSON strings with a TTL. Falls back to an in-memory
dict when Redis is not configured or cannot be reached, so the demo runs
without a Redis container.

Usage:
    cache = UsersCache(redis_url="redis://localhost:6379/0")
    await cache.set("users", [{"id": 1, "name": "Ada", "email": "ada@example.com"}])
    users = await cache.get("users")
    await cache.delete("users")
"""

import json
import time
from typing import Any, Optional

import structlog

from monitoring_stack.monitoring.metrics import record_cache_result

logger = structlog.get_logger(__name__)


class UsersCache:
    """JSON cache with Redis and in-memory backends.

    Key structure:
    - <key_prefix>:<key> -> string (json), expires after ttl_seconds

    Args:
        redis_url: Redis connection URL (None selects in-memory)
        ttl_seconds: Expiry for every entry
        key_prefix: Namespace for Redis keys
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        ttl_seconds: int = 600,
        key_prefix: str = "monitoring:cache",
    ) -> None:
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.key_prefix = key_prefix
        self._redis: Any = None
        self._use_redis = bool(redis_url)
        self._memory_store: dict[str, tuple[float, str]] = {}
        self.hits = 0
        self.misses = 0

    async def _get_redis(self) -> Any:
        """Get or create Redis connection."""
        if not self._use_redis:
            return None

        if self._redis is None:
            try:
                import redis.asyncio as aioredis

                self._redis = aioredis.from_url(
                    self.redis_url,
                    encoding="utf-8",
                    decode_responses=True,
                )
                # Test connection
                await self._redis.ping()
                logger.info("users_cache_connected", redis_url=self._redis_url_masked)
            except Exception as e:
                logger.warning(
                    "users_cache_redis_unavailable",
                    error=str(e),
                    fallback="in-memory",
                )
                self._use_redis = False
                self._redis = None
                return None

        return self._redis

    @property
    def _redis_url_masked(self) -> str:
        """Return masked Redis URL for logging (hide password)."""
        if not self.redis_url:
            return "None"
        if "@" in self.redis_url:
            parts = self.redis_url.split("@")
            return f"{parts[0].rsplit(':', 1)[0]}:****@{parts[-1]}"
        return self.redis_url

    @property
    def backend(self) -> str:
        return "redis" if self._redis is not None else "memory"

    def _make_key(self, key: str) -> str:
        return f"{self.key_prefix}:{key}"

    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value or None on a miss."""
        redis = await self._get_redis()
        if redis:
            raw = await redis.get(self._make_key(key))
        else:
            entry = self._memory_store.get(key)
            raw = None
            if entry is not None:
                expires_at, raw = entry
                if expires_at <= time.time():
                    del self._memory_store[key]
                    raw = None

        hit = raw is not None
        if hit:
            self.hits += 1
        else:
            self.misses += 1
        record_cache_result(key, hit)
        return json.loads(raw) if hit else None

    async def set(self, key: str, value: Any) -> None:
        raw = json.dumps(value)
        redis = await self._get_redis()
        if redis:
            await redis.set(self._make_key(key), raw, ex=self.ttl_seconds)
        else:
            self._memory_store[key] = (time.time() + self.ttl_seconds, raw)

    async def delete(self, key: str) -> None:
        redis = await self._get_redis()
        if redis:
            await redis.delete(self._make_key(key))
        else:
            self._memory_store.pop(key, None)
        logger.debug("cache_entry_deleted", key=key, storage=self.backend)

    async def close(self) -> None:
        """Close the Redis connection if one was opened."""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None

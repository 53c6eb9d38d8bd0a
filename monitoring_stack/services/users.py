"""
Users service.

Read-through cached listing, create-then-invalidate writes and the synthetic
metrics the dashboard polls. Repository calls are synchronous SQLAlchemy and
run in the default thread pool so they do not block the event loop.
"""

import asyncio
import random
from typing import Any, Optional

import structlog

from monitoring_stack.core.exceptions import UserNotFoundError
from monitoring_stack.db.repository import User, UserRepository
from monitoring_stack.services.cache import UsersCache

logger = structlog.get_logger(__name__)

USERS_CACHE_KEY = "users"

# Synthetic metric ranges, lower bound inclusive, upper bound exclusive
RESPONSE_TIME_RANGE = (50, 150)
CACHE_HIT_RATE_RANGE = (60, 100)


def user_to_dict(user: User) -> dict[str, Any]:
    return {"id": user.id, "name": user.name, "email": user.email}


class UserService:
    """
    Business logic behind /api/users and /api/metrics.

    Args:
        repository: User persistence
        cache: Cache holding the serialized users list
        rng: Random source for the synthetic metrics
    """

    def __init__(
        self,
        repository: UserRepository,
        cache: UsersCache,
        rng: Optional[random.Random] = None,
    ):
        self.repository = repository
        self.cache = cache
        self.rng = rng or random.Random()
        # Bumped by every write; a fill that raced a write is discarded
        self._generation = 0

    async def get_all_users(self) -> list[dict[str, Any]]:
        """Return every user, served from the cache when present."""
        cached = await self.cache.get(USERS_CACHE_KEY)
        if cached is not None:
            return cached

        generation = self._generation
        users = await asyncio.to_thread(self.repository.find_all)
        payload = [user_to_dict(u) for u in users]
        if generation != self._generation:
            logger.debug("users_cache_fill_skipped", reason="concurrent_write")
            return payload

        await self.cache.set(USERS_CACHE_KEY, payload)
        logger.debug("users_cache_filled", count=len(payload))
        return payload

    async def get_user(self, user_id: int) -> dict[str, Any]:
        """
        Return one user by id.

        Raises:
            UserNotFoundError: No user with this id
        """
        user = await asyncio.to_thread(self.repository.find_by_id, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user_to_dict(user)

    async def create_user(self, name: str, email: str) -> dict[str, Any]:
        """Persist a user and drop the cached list so the next read is fresh."""
        saved = await asyncio.to_thread(self.repository.save, User(name=name, email=email))
        self._generation += 1
        await self.cache.delete(USERS_CACHE_KEY)
        logger.info("user_created", user_id=saved.id)
        logger.debug("users_cache_invalidated", key=USERS_CACHE_KEY)
        return user_to_dict(saved)

    async def get_metrics(self) -> dict[str, int]:
        """Active user count plus stubbed response time and cache hit rate."""
        active_users = await asyncio.to_thread(self.repository.count)
        return {
            "activeUsers": active_users,
            "responseTime": self.rng.randrange(*RESPONSE_TIME_RANGE),
            "cacheHitRate": self.rng.randrange(*CACHE_HIT_RATE_RANGE),
        }

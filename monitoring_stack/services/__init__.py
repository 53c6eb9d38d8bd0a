"""Business logic for the demo users service."""

from monitoring_stack.services.cache import UsersCache
from monitoring_stack.services.users import USERS_CACHE_KEY, UserService

__all__ = [
    "UsersCache",
    "USERS_CACHE_KEY",
    "UserService",
]

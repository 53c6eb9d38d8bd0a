"""Persistence for the demo users service."""

from monitoring_stack.db.repository import Base, User, UserRepository, create_db_engine

__all__ = [
    "Base",
    "User",
    "UserRepository",
    "create_db_engine",
]

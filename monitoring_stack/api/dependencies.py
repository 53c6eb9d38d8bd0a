"""FastAPI dependency injection providers.

This module provides dependency functions for injecting services into route handlers.
"""

from typing import Optional

from monitoring_stack.services.users import UserService

# Global instance for singleton pattern
_user_service: Optional[UserService] = None


def get_user_service() -> UserService:
    """
    Get UserService instance.

    Returns the global service initialized on startup.

    Raises:
        RuntimeError: If the service has not been initialized.
    """
    if _user_service is None:
        raise RuntimeError(
            "UserService not initialized. Ensure the application startup event has run."
        )

    return _user_service


def set_user_service(service: UserService) -> None:
    """
    Set the global UserService instance.

    Called during application startup.
    """
    global _user_service
    _user_service = service


def reset_dependencies() -> None:
    """
    Reset all global dependency instances.

    Useful for testing or application shutdown.
    """
    global _user_service
    _user_service = None

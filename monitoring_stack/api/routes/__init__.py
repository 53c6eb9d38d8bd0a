"""API route modules."""

from monitoring_stack.api.routes.health import router as health_router
from monitoring_stack.api.routes.metrics import router as metrics_router
from monitoring_stack.api.routes.users import router as users_router

__all__ = [
    "health_router",
    "metrics_router",
    "users_router",
]

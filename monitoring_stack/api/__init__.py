"""
Monitoring demo backend FastAPI application.

- main: FastAPI application factory and configuration
- routes/: Users, metrics and health endpoints
- models: Pydantic request/response models
- dependencies: FastAPI dependency injection providers

API Structure:
- /api/users - List and create users
- /api/metrics - Dashboard metrics
- /api/health - Liveness probe
- /metrics - Prometheus exposition

Example:
    from monitoring_stack.api import app

    # Run with: uvicorn monitoring_stack.api.main:app --reload
"""

from monitoring_stack.api.main import app, create_app

__all__ = ["app", "create_app"]

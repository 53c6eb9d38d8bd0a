"""Monitoring demo backend - FastAPI application.

The toy service the monitoring stack observes. It includes:
- CORS middleware configuration for the dashboard frontend
- Users listing and creation with a read-through cache
- Synthetic dashboard metrics
- Plain-text health probe
- Prometheus exposition at /metrics

Usage:
    # Run with uvicorn
    uvicorn monitoring_stack.api.main:app --reload

    # Or through the root entry point
    python main.py
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

import structlog
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from monitoring_stack.api.dependencies import reset_dependencies, set_user_service
from monitoring_stack.api.models import ErrorResponse, ValidationErrorDetail, ValidationErrorResponse
from monitoring_stack.api.routes.health import router as health_router
from monitoring_stack.api.routes.metrics import router as metrics_router
from monitoring_stack.api.routes.users import router as users_router
from monitoring_stack.config.settings import get_settings
from monitoring_stack.core.exceptions import UserNotFoundError
from monitoring_stack.db.repository import UserRepository, create_db_engine
from monitoring_stack.monitoring.metrics import PrometheusMiddleware, metrics_endpoint
from monitoring_stack.services.cache import UsersCache
from monitoring_stack.services.users import UserService

logger = structlog.get_logger(__name__)

API_TITLE = "Monitoring Demo Backend"
API_DESCRIPTION = """
## Demo application for the monitoring stack

A small users service whose requests, cache and database traffic feed the
dashboards and alerts of the monitoring stack.

- `GET /api/users` - list users (cached)
- `GET /api/users/{user_id}` - get one user (404 when unknown)
- `POST /api/users` - create a user (invalidates the cache)
- `GET /api/metrics` - dashboard metrics
- `GET /api/health` - liveness probe
"""
API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Startup: Create the database schema, connect the cache, wire the service
    - Shutdown: Close the cache and dispose of the engine
    """
    settings = get_settings()
    logger.info("application_starting", service=settings.service_name, environment=settings.app_env)

    engine = create_db_engine(settings.database_url)
    cache = UsersCache(
        redis_url=settings.redis_url,
        ttl_seconds=settings.users_cache_ttl_seconds,
    )
    set_user_service(UserService(UserRepository.from_engine(engine), cache))

    logger.info("application_started")

    yield

    logger.info("application_stopping")
    await cache.close()
    engine.dispose()
    reset_dependencies()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials="*" not in settings.cors_allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept"],
    )
    app.add_middleware(PrometheusMiddleware)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle Pydantic validation errors with detailed response."""
        errors = []
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            errors.append(ValidationErrorDetail(
                field=field,
                message=error["msg"],
                value=error.get("input"),
            ))

        response = ValidationErrorResponse(
            errors=errors,
            timestamp=datetime.now(timezone.utc),
        )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=response.model_dump(mode="json"),
        )

    @app.exception_handler(UserNotFoundError)
    async def user_not_found_handler(
        request: Request, exc: UserNotFoundError
    ) -> JSONResponse:
        """Handle lookups of unknown user ids."""
        response = ErrorResponse(
            error="user_not_found",
            message=exc.message,
            path=request.url.path,
            timestamp=datetime.now(timezone.utc),
        )

        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=response.model_dump(mode="json"),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            error_type=type(exc).__name__,
        )

        response = ErrorResponse(
            error="internal_server_error",
            message="An unexpected error occurred",
            detail=str(exc) if get_settings().debug else None,
            path=request.url.path,
            timestamp=datetime.now(timezone.utc),
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=response.model_dump(mode="json"),
        )

    api_router = APIRouter(prefix="/api")
    api_router.include_router(users_router)
    api_router.include_router(metrics_router)
    api_router.include_router(health_router)
    app.include_router(api_router)

    app.add_route("/metrics", metrics_endpoint, include_in_schema=False)

    return app


# Create app instance
app = create_app()

"""
Prometheus metrics for the monitoring stack.

Covers the demo API (request latency and status), the users cache
(hits and misses) and the external tools driven by the command-line
drivers.

Usage:
    from monitoring_stack.monitoring.metrics import track_api_request

    with track_api_request("GET", "/api/users") as ctx:
        response = await call_next(request)
        ctx["status_code"] = response.status_code
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


# =============================================================================
# Metric Definitions
# =============================================================================

# API request metrics
API_REQUEST_DURATION = Histogram(
    "monitoring_backend_request_duration_seconds",
    "Duration of API requests in seconds",
    ["method", "endpoint", "status_code"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

API_REQUEST_TOTAL = Counter(
    "monitoring_backend_request_total",
    "Total number of API requests",
    ["method", "endpoint", "status_code"],
)

# Users cache metrics
CACHE_OPERATIONS = Counter(
    "monitoring_backend_cache_operations_total",
    "Users cache lookups by result",
    ["cache", "result"],
)

# External tool metrics
TOOL_INVOCATIONS = Counter(
    "monitoring_stack_tool_invocations_total",
    "External tool invocations by outcome",
    ["tool", "subcommand", "status"],
)


# =============================================================================
# Tracking Helpers
# =============================================================================


@contextmanager
def track_api_request(
    method: str,
    endpoint: str,
) -> Generator[dict, None, None]:
    """
    Context manager to track API request duration and status.

    ctx["endpoint"] overrides the endpoint label when it is only known
    after the request was handled.

    Usage:
        with track_api_request("GET", "/api/health") as ctx:
            response = await call_endpoint()
            ctx["status_code"] = response.status_code
    """
    start_time = time.perf_counter()
    context = {"status_code": "500"}  # Default to error
    try:
        yield context
    finally:
        duration = time.perf_counter() - start_time
        status_code = str(context.get("status_code", "500"))
        endpoint = context.get("endpoint", endpoint)
        API_REQUEST_DURATION.labels(
            method=method,
            endpoint=endpoint,
            status_code=status_code,
        ).observe(duration)
        API_REQUEST_TOTAL.labels(
            method=method,
            endpoint=endpoint,
            status_code=status_code,
        ).inc()


def record_cache_result(cache: str, hit: bool) -> None:
    """Record a cache lookup as a hit or a miss."""
    CACHE_OPERATIONS.labels(cache=cache, result="hit" if hit else "miss").inc()


def record_tool_invocation(tool: str, subcommand: str, status: str) -> None:
    """Record one external tool run ("success", "error" or "not_found")."""
    TOOL_INVOCATIONS.labels(tool=tool, subcommand=subcommand, status=status).inc()


# Label for requests no route matched (404s, scanners)
UNMATCHED_ENDPOINT = "unmatched"


def route_template(scope) -> str:
    """Path template of the route that handled the request, e.g. /api/users/{user_id}."""
    route = scope.get("route")
    return getattr(route, "path", UNMATCHED_ENDPOINT)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Record duration and status of every request except the metrics scrape.

    The endpoint label is the matched route template, never the raw path, so
    the number of series stays bounded by the number of routes.
    """

    async def dispatch(self, request: Request, call_next):
        if request.url.path.startswith("/metrics"):
            return await call_next(request)

        with track_api_request(request.method, UNMATCHED_ENDPOINT) as ctx:
            try:
                response = await call_next(request)
            finally:
                ctx["endpoint"] = route_template(request.scope)
            ctx["status_code"] = response.status_code
        return response


# =============================================================================
# Metrics Endpoint
# =============================================================================


async def metrics_endpoint(request) -> Response:
    """Prometheus metrics endpoint handler."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )

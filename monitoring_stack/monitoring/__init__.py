"""
Monitoring and observability for the monitoring stack.

Provides Prometheus metrics for the demo API, the users cache and the
external tools run by the command-line drivers.

Usage:
    from monitoring_stack.monitoring import PrometheusMiddleware, metrics_endpoint

    app.add_middleware(PrometheusMiddleware)
    app.add_route("/metrics", metrics_endpoint)
"""

from monitoring_stack.monitoring.metrics import (
    API_REQUEST_DURATION,
    API_REQUEST_TOTAL,
    CACHE_OPERATIONS,
    TOOL_INVOCATIONS,
    PrometheusMiddleware,
    track_api_request,
    record_cache_result,
    record_tool_invocation,
    metrics_endpoint,
)

__all__ = [
    # Prometheus metrics
    "API_REQUEST_DURATION",
    "API_REQUEST_TOTAL",
    "CACHE_OPERATIONS",
    "TOOL_INVOCATIONS",
    # Middleware and helpers
    "PrometheusMiddleware",
    "track_api_request",
    "record_cache_result",
    "record_tool_invocation",
    "metrics_endpoint",
]

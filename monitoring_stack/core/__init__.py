"""
Core infrastructure modules for the monitoring stack.

Provides common utilities used across the drivers and the demo service:
- exceptions: Standardized exception hierarchy mapped to exit statuses
- logging_config: structlog configuration
- process: Blocking external command execution
"""

from monitoring_stack.core.exceptions import (
    MonitoringStackError,
    UsageError,
    ConfigurationError,
    ExternalToolError,
    ToolNotFoundError,
    UserNotFoundError,
)

from monitoring_stack.core.logging_config import configure_logging

from monitoring_stack.core.process import (
    CommandResult,
    CommandRunner,
    run_command,
)

__all__ = [
    # Exceptions
    "MonitoringStackError",
    "UsageError",
    "ConfigurationError",
    "ExternalToolError",
    "ToolNotFoundError",
    "UserNotFoundError",
    # Logging
    "configure_logging",
    # Process execution
    "CommandResult",
    "CommandRunner",
    "run_command",
]

"""
Core exception hierarchy for the monitoring stack.

Failures are surfaced, never retried: drivers stop at the first error and the
command-line entry points translate each exception type into an exit status.
"""

from typing import Any, Optional, Sequence


# =============================================================================
# Base Exceptions
# =============================================================================


class MonitoringStackError(Exception):
    """Base exception for all monitoring stack errors."""

    exit_code: int = 1

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Command-line Errors
# =============================================================================


class UsageError(MonitoringStackError):
    """Raised when command-line arguments are missing or invalid."""

    def __init__(self, message: str, usage: Optional[str] = None):
        self.usage = usage
        super().__init__(message)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(MonitoringStackError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        self.config_key = config_key
        details = {"config_key": config_key} if config_key else None
        super().__init__(message, details)


# =============================================================================
# External Tool Errors
# =============================================================================


# Flags whose values are credentials; masked wherever a command line is kept
SECRET_FLAGS = ("--key=",)
REDACTED = "***"


def redact_command(command: Sequence[str]) -> list[str]:
    """Copy of an argv with the values of SECRET_FLAGS masked."""
    redacted = []
    for arg in command:
        arg = str(arg)
        for flag in SECRET_FLAGS:
            if arg.startswith(flag):
                arg = flag + REDACTED
        redacted.append(arg)
    return redacted


class ExternalToolError(MonitoringStackError):
    """Raised when an external binary exits with a non-zero status.

    The exit status is propagated as the process exit code. The stored
    command has credential flags masked.
    """

    def __init__(self, tool: str, command: Sequence[str], returncode: int):
        self.tool = tool
        self.command = redact_command(command)
        self.returncode = returncode
        self.exit_code = returncode
        super().__init__(
            f"[{tool}] command exited with status {returncode}",
            {"returncode": returncode},
        )


class ToolNotFoundError(MonitoringStackError):
    """Raised when an external binary cannot be executed."""

    exit_code = 127

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"[{tool}] command not found")


# =============================================================================
# Demo Service Errors
# =============================================================================


class UserNotFoundError(MonitoringStackError):
    """Raised when a user id does not exist. Served as 404."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}", {"user_id": user_id})

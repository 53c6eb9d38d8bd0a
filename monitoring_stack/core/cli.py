"""Shared plumbing for the command-line drivers."""

import argparse
from typing import Callable, NoReturn

import structlog

from monitoring_stack.core.exceptions import MonitoringStackError, UsageError

logger = structlog.get_logger(__name__)


class CliArgumentParser(argparse.ArgumentParser):
    """
    ArgumentParser whose parse errors raise UsageError.

    argparse exits 2 on bad input; the drivers exit 1 with their usage line,
    so parsing has to happen inside run_guarded.
    """

    def __init__(self, *args, usage_line: str = "", **kwargs):
        self.usage_line = usage_line
        super().__init__(*args, **kwargs)

    def error(self, message: str) -> NoReturn:
        raise UsageError(f"{self.prog}: {message}", usage=self.usage_line or None)


def run_guarded(action: Callable[[], None]) -> int:
    """
    Run a driver action and translate failures into an exit status.

    UsageError prints its message and usage line and returns 1. Every other
    MonitoringStackError returns its own exit code, which for a failed
    external tool is that tool's exit status.
    """
    try:
        action()
    except UsageError as e:
        print(e.message)
        if e.usage and e.usage != e.message:
            print(e.usage)
        return e.exit_code
    except MonitoringStackError as e:
        logger.error("command_failed", error=str(e), error_type=type(e).__name__)
        print(f"Error: {e.message}")
        return e.exit_code
    return 0

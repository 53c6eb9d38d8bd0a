"""
External command execution.

Every external tool (terraform, mimirtool) runs through run_command: no shell,
output inherited from the parent so the tool's messages reach the operator
verbatim, and a blocking wait before the next step starts.

Usage:
    result = run_command(["terraform", "init", "-upgrade"], cwd=path, tool="terraform")
"""

import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

import structlog

from monitoring_stack.core.exceptions import ExternalToolError, ToolNotFoundError
from monitoring_stack.monitoring.metrics import record_tool_invocation

logger = structlog.get_logger(__name__)


@dataclass
class CommandResult:
    """Outcome of a successful external command."""

    args: list[str]
    cwd: Optional[str]
    returncode: int
    duration_seconds: float = 0.0


CommandRunner = Callable[..., CommandResult]


def run_command(
    args: Sequence[str],
    cwd: Optional[Union[str, Path]] = None,
    tool: Optional[str] = None,
) -> CommandResult:
    """
    Run an external command and wait for it to exit.

    Args:
        args: Program and arguments (no shell interpretation)
        cwd: Working directory for the command
        tool: Name used in errors, logs and metrics (defaults to args[0])

    Returns:
        CommandResult for a zero exit status

    Raises:
        ToolNotFoundError: The program could not be executed
        ExternalToolError: The program exited non-zero
    """
    args = [str(a) for a in args]
    tool = tool or Path(args[0]).name
    subcommand = args[1] if len(args) > 1 else ""
    cwd_str = str(cwd) if cwd is not None else None

    start_time = time.perf_counter()
    try:
        completed = subprocess.run(args, cwd=cwd_str, check=False)
    except FileNotFoundError as e:
        record_tool_invocation(tool, subcommand, "not_found")
        logger.error("external_tool_not_found", tool=tool, error=str(e))
        raise ToolNotFoundError(tool) from e
    duration = time.perf_counter() - start_time

    if completed.returncode != 0:
        record_tool_invocation(tool, subcommand, "error")
        logger.error(
            "external_tool_failed",
            tool=tool,
            subcommand=subcommand,
            cwd=cwd_str,
            returncode=completed.returncode,
        )
        raise ExternalToolError(tool, args, completed.returncode)

    record_tool_invocation(tool, subcommand, "success")
    logger.debug(
        "external_tool_completed",
        tool=tool,
        subcommand=subcommand,
        cwd=cwd_str,
        duration_seconds=round(duration, 3),
    )
    return CommandResult(
        args=args,
        cwd=cwd_str,
        returncode=completed.returncode,
        duration_seconds=duration,
    )

"""Terraform command sequences for a single definition directory."""

from pathlib import Path
from typing import Optional, Union

import structlog

from monitoring_stack.core.process import CommandRunner, run_command

logger = structlog.get_logger(__name__)

PLAN_FILE = "tfplan"


class TerraformRunner:
    """
    Run init/plan/apply (or init/destroy) in one directory.

    Each command blocks until it exits; the first failure raises and the
    remaining commands are not run. Terraform itself owns the state files.

    Args:
        binary: terraform executable
        runner: Command runner, injectable for tests
    """

    def __init__(self, binary: str = "terraform", runner: Optional[CommandRunner] = None):
        self.binary = binary
        self._run = runner or run_command

    def _terraform(self, directory: Path, *args: str) -> None:
        self._run([self.binary, *args], cwd=directory, tool="terraform")

    def apply(self, directory: Union[str, Path], var_file: Optional[Union[str, Path]] = None) -> None:
        """Initialize, write a saved plan and apply exactly that plan."""
        directory = Path(directory)
        plan_args = ["plan", f"-out={PLAN_FILE}"]
        if var_file is not None:
            plan_args.append(f"-var-file={Path(var_file).resolve()}")

        logger.info("terraform_apply_started", directory=str(directory))
        self._terraform(directory, "init", "-upgrade")
        self._terraform(directory, *plan_args)
        self._terraform(directory, "apply", PLAN_FILE)
        logger.info("terraform_apply_finished", directory=str(directory))

    def destroy(self, directory: Union[str, Path], var_file: Optional[Union[str, Path]] = None) -> None:
        """Initialize and destroy every resource the directory manages."""
        directory = Path(directory)
        destroy_args = ["destroy", "-auto-approve"]
        if var_file is not None:
            destroy_args.append(f"-var-file={Path(var_file).resolve()}")

        logger.info("terraform_destroy_started", directory=str(directory))
        self._terraform(directory, "init", "-upgrade")
        self._terraform(directory, *destroy_args)
        logger.info("terraform_destroy_finished", directory=str(directory))

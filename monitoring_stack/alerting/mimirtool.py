"""
mimirtool client.

Builds mimirtool invocations for a tenant and runs them through the shared
command runner. The API key is passed on the command line (that is how
mimirtool takes it) but never logged.

Usage:
    client = MimirtoolClient.from_settings(get_settings())
    client.load_rules("_devops", [Path("alerts/devops/node.yaml")])
"""

from pathlib import Path
from typing import Optional, Sequence, Union

import structlog

from monitoring_stack.config.settings import Settings
from monitoring_stack.core.exceptions import ConfigurationError
from monitoring_stack.core.process import CommandRunner, run_command

logger = structlog.get_logger(__name__)

PathLike = Union[str, Path]


class MimirtoolClient:
    """
    Upload rules and Alertmanager configs to a multi-tenant Mimir.

    Args:
        address: Mimir base URL
        user: Basic auth user
        key: Basic auth password/API key (may be empty)
        binary: mimirtool executable
        runner: Command runner, injectable for tests
    """

    def __init__(
        self,
        address: str,
        user: str = "observe",
        key: str = "",
        binary: str = "./mimirtool",
        runner: Optional[CommandRunner] = None,
    ):
        self.address = address
        self.user = user
        self.key = key
        self.binary = binary
        self._run = runner or run_command

    @classmethod
    def from_settings(cls, settings: Settings, runner: Optional[CommandRunner] = None) -> "MimirtoolClient":
        return cls(
            address=settings.mimir_url,
            user=settings.mimir_user,
            key=settings.mimir_password.get_secret_value() if settings.mimir_password else "",
            binary=settings.mimirtool_binary,
            runner=runner,
        )

    def _connection_args(self, tenant_id: str) -> list[str]:
        return [
            f"--address={self.address}",
            f"--id={tenant_id}",
            f"--key={self.key}",
            "--user",
            self.user,
        ]

    def load_rules(self, tenant_id: str, rule_files: Sequence[PathLike]) -> None:
        """Replace the tenant's rule groups with the given rule files."""
        if not rule_files:
            raise ConfigurationError(
                f"No rule files to load for tenant {tenant_id}",
                config_key="alerts_dir",
            )

        logger.info("mimirtool_rules_load", tenant_id=tenant_id, files=len(rule_files))
        self._run(
            [
                self.binary,
                "rules",
                "load",
                *self._connection_args(tenant_id),
                *[str(f) for f in rule_files],
            ],
            tool="mimirtool",
        )

    def load_alertmanager(
        self,
        tenant_id: str,
        config_file: PathLike,
        template_files: Sequence[PathLike] = (),
    ) -> None:
        """Replace the tenant's Alertmanager config and notification templates."""
        logger.info(
            "mimirtool_alertmanager_load",
            tenant_id=tenant_id,
            config=str(config_file),
            templates=len(template_files),
        )
        self._run(
            [
                self.binary,
                "alertmanager",
                "load",
                *self._connection_args(tenant_id),
                str(config_file),
                *[str(f) for f in template_files],
            ],
            tool="mimirtool",
        )

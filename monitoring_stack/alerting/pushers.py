"""
Pushers for alert rules and Alertmanager configs.

Both push one tenant at a time and stop at the first failure. Paths are
resolved against a root directory, normally the repository checkout the CI
job runs in.
"""

from pathlib import Path
from typing import Callable, Iterable, Union

import structlog

from monitoring_stack.alerting.mimirtool import MimirtoolClient
from monitoring_stack.alerting.routing import load_alertmanager_config
from monitoring_stack.alerting.tenants import (
    COMMON_RULES_DIR,
    SLACK_TEMPLATE,
    TEMPLATES_DIR,
    Tenant,
    cluster_names,
    resolve_tenant,
)
from monitoring_stack.core.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

RULE_FILE_PATTERN = "*.yaml"


class RulesPusher:
    """Push a cluster's alert rules plus the shared common rules."""

    def __init__(
        self,
        client: MimirtoolClient,
        alerts_dir: Union[str, Path] = "alerts",
        echo: Callable[[str], None] = print,
    ):
        self.client = client
        self.alerts_dir = Path(alerts_dir)
        self.echo = echo

    def rule_files(self, tenant: Tenant) -> list[Path]:
        """Cluster rule files first, then common ones, each sorted by name."""
        cluster_files = sorted(tenant.rules_dir(self.alerts_dir).glob(RULE_FILE_PATTERN))
        common_files = sorted((self.alerts_dir / COMMON_RULES_DIR).glob(RULE_FILE_PATTERN))
        return cluster_files + common_files

    def push(self, cluster: str) -> Tenant:
        tenant = resolve_tenant(cluster)
        self.echo(f"Deploying alerts for cluster: {tenant.cluster}, tenant: {tenant.tenant_id}")

        files = self.rule_files(tenant)
        if not files:
            raise ConfigurationError(
                f"No rule files found under {tenant.rules_dir(self.alerts_dir)} "
                f"or {self.alerts_dir / COMMON_RULES_DIR}",
                config_key="alerts_dir",
            )

        self.client.load_rules(tenant.tenant_id, files)
        logger.info("alerts_deployed", cluster=tenant.cluster, tenant_id=tenant.tenant_id, files=len(files))
        self.echo("Alerts deployed successfully")
        return tenant


class AlertmanagerPusher:
    """Validate and push each tenant's Alertmanager config with the Slack template."""

    def __init__(
        self,
        client: MimirtoolClient,
        alertmanager_dir: Union[str, Path] = "alertmanager",
        echo: Callable[[str], None] = print,
    ):
        self.client = client
        self.alertmanager_dir = Path(alertmanager_dir)
        self.echo = echo

    @property
    def template_file(self) -> Path:
        return self.alertmanager_dir / TEMPLATES_DIR / SLACK_TEMPLATE

    def push(self, clusters: Iterable[str] = ()) -> list[Tenant]:
        # repeated names push once, first occurrence keeps its place
        names = list(dict.fromkeys(clusters)) or cluster_names()
        tenants = [resolve_tenant(c) for c in names]

        if not self.template_file.is_file():
            raise ConfigurationError(
                f"Notification template not found: {self.template_file}",
                config_key="alertmanager_dir",
            )

        self.echo("Deploying alertmanager configs...")
        for tenant in tenants:
            config_file = tenant.alertmanager_config(self.alertmanager_dir)
            load_alertmanager_config(config_file).validate()
            self.client.load_alertmanager(tenant.tenant_id, config_file, [self.template_file])
            logger.info("alertmanager_deployed", cluster=tenant.cluster, tenant_id=tenant.tenant_id)

        self.echo("Alertmanager configs deployed successfully")
        return tenants

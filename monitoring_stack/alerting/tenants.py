"""Tenant registry mapping clusters to their Mimir tenant and config files."""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from monitoring_stack.core.exceptions import UsageError

COMMON_RULES_DIR = "common"
TEMPLATES_DIR = "templates"
SLACK_TEMPLATE = "slack.tmpl"
ALERTMANAGER_CONFIG = "alertmanager.yaml"


@dataclass(frozen=True)
class Tenant:
    """A cluster's namespace in the multi-tenant metrics backend."""

    cluster: str
    tenant_id: str

    def rules_dir(self, alerts_dir: Union[str, Path] = "alerts") -> Path:
        return Path(alerts_dir) / self.cluster

    def alertmanager_config(self, alertmanager_dir: Union[str, Path] = "alertmanager") -> Path:
        return Path(alertmanager_dir) / self.cluster / ALERTMANAGER_CONFIG


TENANTS: dict[str, Tenant] = {
    "devops": Tenant(cluster="devops", tenant_id="_devops"),
    "apps": Tenant(cluster="apps", tenant_id="_apps"),
}


def cluster_names() -> list[str]:
    return list(TENANTS)


def resolve_tenant(cluster: str, usage: str = "") -> Tenant:
    """
    Look up the tenant for a cluster name.

    Raises:
        UsageError: Unknown cluster
    """
    tenant = TENANTS.get(cluster)
    if tenant is None:
        raise UsageError(usage or f"Unknown cluster: {cluster}", usage=usage or None)
    return tenant

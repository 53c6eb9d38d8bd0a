"""
Apply driver.

Sequences Terraform runs for one cloud provider and one component (or every
component in dependency order). Runs are strictly sequential; the first
failure aborts the remaining targets and nothing is rolled back.

Usage:
    driver = ApplyDriver(base_dir="infra-code")
    driver.run(CloudProvider.AWS, Component.ALL)
"""

import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

import structlog

from monitoring_stack.core.exceptions import ConfigurationError
from monitoring_stack.provisioning.models import (
    ALL_COMPONENTS_ORDER,
    CloudProvider,
    ClusterDescriptor,
    Component,
)
from monitoring_stack.provisioning.terraform import TerraformRunner

logger = structlog.get_logger(__name__)

CLUSTER_VARS_FILE = "cluster.tfvars.json"


@dataclass(frozen=True)
class ApplyTarget:
    """One Terraform definition directory to apply."""

    cloud: CloudProvider
    component: Component
    directory: Path


class ApplyDriver:
    """
    Resolve and apply Terraform definition directories.

    Layout: <base_dir>/<cloud>/<component>/

    Args:
        base_dir: Root of the Terraform definitions
        terraform: TerraformRunner used for every directory
        echo: Sink for operator-facing progress lines
    """

    def __init__(
        self,
        base_dir: Union[str, Path] = "infra-code",
        terraform: Optional[TerraformRunner] = None,
        echo: Callable[[str], None] = print,
    ):
        self.base_dir = Path(base_dir)
        self.terraform = terraform or TerraformRunner()
        self.echo = echo

    def component_dir(self, cloud: CloudProvider, component: Component) -> Path:
        return self.base_dir / cloud.value / component.value

    def resolve_targets(
        self,
        cloud: CloudProvider,
        component: Component,
    ) -> list[ApplyTarget]:
        """
        Resolve the directories a run will touch, in run order.

        A single component must exist; ALL silently skips missing ones.

        Raises:
            ConfigurationError: A single requested component has no directory
        """
        if component is Component.ALL:
            targets = []
            for comp in ALL_COMPONENTS_ORDER:
                directory = self.component_dir(cloud, comp)
                if directory.is_dir():
                    targets.append(ApplyTarget(cloud, comp, directory))
                else:
                    logger.info(
                        "component_skipped",
                        cloud=cloud.value,
                        component=comp.value,
                        reason="directory_missing",
                    )
            return targets

        directory = self.component_dir(cloud, component)
        if not directory.is_dir():
            raise ConfigurationError(
                f"Terraform directory not found: {directory}",
                config_key="infra_base_dir",
            )
        return [ApplyTarget(cloud, component, directory)]

    def run(
        self,
        cloud: CloudProvider,
        component: Component,
        destroy: bool = False,
        cluster: Optional[ClusterDescriptor] = None,
    ) -> list[ApplyTarget]:
        """
        Apply (or destroy) every resolved target.

        Destroy walks the targets in reverse so dependents go first. A
        cluster descriptor is passed as a var file to the kubernetes
        component only.

        Returns:
            The targets that were processed, in order
        """
        targets = self.resolve_targets(cloud, component)
        if destroy:
            targets = list(reversed(targets))

        logger.info(
            "terraform_run_started",
            cloud=cloud.value,
            component=component.value,
            destroy=destroy,
            targets=[t.component.value for t in targets],
        )

        with tempfile.TemporaryDirectory(prefix="tfvars-") as tmp:
            cluster_vars = None
            if cluster is not None:
                cluster_vars = cluster.write_tfvars(Path(tmp) / CLUSTER_VARS_FILE)

            for target in targets:
                var_file = cluster_vars if target.component is Component.KUBERNETES else None
                if destroy:
                    self.echo(f"Destroying Terraform in {target.directory}...")
                    self.terraform.destroy(target.directory, var_file=var_file)
                else:
                    self.echo(f"Applying Terraform in {target.directory}...")
                    self.terraform.apply(target.directory, var_file=var_file)

        action = "destroy" if destroy else "apply"
        self.echo(f"Terraform {action} completed for {cloud.value}/{component.value}")
        return targets

"""
Provisioning - Terraform apply driver.

Applies the Terraform definitions under <infra_base_dir>/<cloud>/<component>
one directory at a time:

- models: CloudProvider, Component and ClusterDescriptor
- terraform: init/plan/apply and init/destroy sequences
- driver: Target resolution and sequential execution
- cli: terraform-apply command
"""

from monitoring_stack.provisioning.models import (
    ALL_COMPONENTS_ORDER,
    CloudProvider,
    ClusterDescriptor,
    Component,
    load_cluster_descriptor,
)
from monitoring_stack.provisioning.terraform import TerraformRunner
from monitoring_stack.provisioning.driver import ApplyDriver, ApplyTarget

__all__ = [
    "ALL_COMPONENTS_ORDER",
    "CloudProvider",
    "ClusterDescriptor",
    "Component",
    "load_cluster_descriptor",
    "TerraformRunner",
    "ApplyDriver",
    "ApplyTarget",
]

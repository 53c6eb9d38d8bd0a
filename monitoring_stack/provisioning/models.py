"""Provisioning models: cloud providers, components and cluster descriptors."""

import json
from enum import Enum
from pathlib import Path
from typing import Union

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from monitoring_stack.core.exceptions import ConfigurationError


class CloudProvider(str, Enum):
    """Cloud providers with Terraform definitions under infra-code/."""

    AWS = "aws"
    AZURE = "azure"
    GCP = "gcp"


class Component(str, Enum):
    """Provisioning components; ALL expands to ALL_COMPONENTS_ORDER."""

    KUBERNETES = "kubernetes"
    MONITORING = "monitoring"
    NETWORKING = "networking"
    STORAGE = "storage"
    ALL = "all"


# Dependency order: clusters need the network, monitoring needs buckets
ALL_COMPONENTS_ORDER: tuple[Component, ...] = (
    Component.NETWORKING,
    Component.KUBERNETES,
    Component.STORAGE,
    Component.MONITORING,
)


class ClusterDescriptor(BaseModel):
    """Kubernetes cluster and node pool sizing passed to the kubernetes component."""

    name: str = Field(..., min_length=1, description="Cluster name")
    instance_type: str = Field(..., min_length=1, description="Node instance/machine type")
    min_size: int = Field(..., ge=0, description="Minimum node count")
    max_size: int = Field(..., ge=0, description="Maximum node count")
    desired_size: int = Field(..., ge=0, description="Desired node count")
    labels: dict[str, str] = Field(default_factory=dict, description="Node labels")

    @model_validator(mode="after")
    def validate_sizes(self) -> "ClusterDescriptor":
        if not self.min_size <= self.desired_size <= self.max_size:
            raise ValueError(
                "node pool sizes must satisfy min_size <= desired_size <= max_size "
                f"(got {self.min_size}/{self.desired_size}/{self.max_size})"
            )
        return self

    def to_tfvars(self) -> dict:
        """Map to the variable names the kubernetes definitions declare."""
        return {
            "cluster_name": self.name,
            "instance_type": self.instance_type,
            "node_min_size": self.min_size,
            "node_max_size": self.max_size,
            "node_desired_size": self.desired_size,
            "node_labels": dict(self.labels),
        }

    def write_tfvars(self, path: Union[str, Path]) -> Path:
        """Write the variables as a Terraform JSON var file."""
        path = Path(path)
        path.write_text(json.dumps(self.to_tfvars(), indent=2, sort_keys=True), encoding="utf-8")
        return path


def load_cluster_descriptor(path: Union[str, Path]) -> ClusterDescriptor:
    """
    Load a ClusterDescriptor from a YAML file.

    Raises:
        ConfigurationError: File missing, not YAML, or invalid sizing
    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigurationError(f"Cluster file not found: {path}", config_key="cluster_file") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}", config_key="cluster_file") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Cluster file {path} must contain a mapping", config_key="cluster_file")

    try:
        return ClusterDescriptor.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid cluster descriptor in {path}: {e}", config_key="cluster_file") from e

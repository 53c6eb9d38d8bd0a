"""
Alerting - tenant routing and config pushers for the metrics backend.

- tenants: Cluster to tenant id / directory registry
- routing: Alertmanager route tree and receiver resolution
- mimirtool: mimirtool command builder
- pushers: Rule and Alertmanager config pushers
- cli: update-alerts and update-alertmanager commands
"""

from monitoring_stack.alerting.tenants import TENANTS, Tenant, resolve_tenant
from monitoring_stack.alerting.routing import (
    AlertRouter,
    Matcher,
    Receiver,
    Route,
    load_alertmanager_config,
)
from monitoring_stack.alerting.mimirtool import MimirtoolClient
from monitoring_stack.alerting.pushers import AlertmanagerPusher, RulesPusher

__all__ = [
    "TENANTS",
    "Tenant",
    "resolve_tenant",
    "AlertRouter",
    "Matcher",
    "Receiver",
    "Route",
    "load_alertmanager_config",
    "MimirtoolClient",
    "AlertmanagerPusher",
    "RulesPusher",
]

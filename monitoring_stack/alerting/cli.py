"""
update-alerts / update-alertmanager - push alerting config to Mimir.

Usage:
    update-alerts devops
    update-alerts apps
    update-alertmanager              # devops, then apps
    update-alertmanager apps

Exit status:
    0   pushed
    1   missing or invalid cluster, missing files, invalid Alertmanager config
    N   the exit status of mimirtool when it fails
"""

import sys
from typing import Optional, Sequence

from monitoring_stack.alerting.mimirtool import MimirtoolClient
from monitoring_stack.alerting.pushers import AlertmanagerPusher, RulesPusher
from monitoring_stack.alerting.tenants import cluster_names, resolve_tenant
from monitoring_stack.config.settings import get_settings
from monitoring_stack.core.cli import CliArgumentParser, run_guarded
from monitoring_stack.core.exceptions import UsageError
from monitoring_stack.core.logging_config import configure_logging

ALERTS_PROG = "update-alerts"
ALERTMANAGER_PROG = "update-alertmanager"
ALERTS_USAGE = f"Usage: {ALERTS_PROG} [{'|'.join(cluster_names())}]"
ALERTMANAGER_USAGE = f"Usage: {ALERTMANAGER_PROG} [{'|'.join(cluster_names())} ...]"


def alerts_main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for update-alerts."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    def action() -> None:
        parser = CliArgumentParser(
            prog=ALERTS_PROG,
            usage_line=ALERTS_USAGE,
            description="Load a cluster's alert rules into its Mimir tenant",
        )
        parser.add_argument("cluster", nargs="?", help=" or ".join(cluster_names()))
        parser.add_argument("--alerts-dir", type=str, help="Rules root (default: ALERTS_DIR or alerts)")
        args = parser.parse_args(argv)

        if not args.cluster:
            raise UsageError(ALERTS_USAGE, usage=ALERTS_USAGE)
        resolve_tenant(args.cluster, usage=ALERTS_USAGE)
        pusher = RulesPusher(
            MimirtoolClient.from_settings(settings),
            alerts_dir=args.alerts_dir or settings.alerts_dir,
        )
        pusher.push(args.cluster)

    return run_guarded(action)


def alertmanager_main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for update-alertmanager."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    def action() -> None:
        parser = CliArgumentParser(
            prog=ALERTMANAGER_PROG,
            usage_line=ALERTMANAGER_USAGE,
            description="Validate and load Alertmanager configs into their Mimir tenants",
        )
        parser.add_argument("clusters", nargs="*", help="Clusters to push (default: all)")
        parser.add_argument(
            "--alertmanager-dir",
            type=str,
            help="Alertmanager root (default: ALERTMANAGER_DIR or alertmanager)",
        )
        args = parser.parse_args(argv)

        for cluster in args.clusters:
            resolve_tenant(cluster, usage=ALERTMANAGER_USAGE)
        pusher = AlertmanagerPusher(
            MimirtoolClient.from_settings(settings),
            alertmanager_dir=args.alertmanager_dir or settings.alertmanager_dir,
        )
        pusher.push(args.clusters)

    return run_guarded(action)


if __name__ == "__main__":
    sys.exit(alerts_main())

"""
terraform-apply - apply Terraform definitions for one cloud and component.

Usage:
    terraform-apply aws kubernetes
    terraform-apply gcp all
    terraform-apply azure storage --destroy
    terraform-apply aws kubernetes --cluster-file clusters/devops.yaml

Exit status:
    0   every target applied
    1   missing or invalid arguments, or a missing definition directory
    N   the exit status of the Terraform command that failed
"""

import argparse
import sys
from typing import Optional, Sequence

from monitoring_stack.config.settings import get_settings
from monitoring_stack.core.cli import CliArgumentParser, run_guarded
from monitoring_stack.core.exceptions import UsageError
from monitoring_stack.core.logging_config import configure_logging
from monitoring_stack.provisioning.driver import ApplyDriver
from monitoring_stack.provisioning.models import (
    CloudProvider,
    Component,
    load_cluster_descriptor,
)
from monitoring_stack.provisioning.terraform import TerraformRunner

PROG = "terraform-apply"
USAGE = (
    f"Usage: {PROG} "
    f"[{'|'.join(c.value for c in CloudProvider)}] "
    f"[{'|'.join(c.value for c in Component)}]"
)


def build_parser() -> CliArgumentParser:
    parser = CliArgumentParser(
        prog=PROG,
        usage_line=USAGE,
        description="Apply Terraform definitions for a cloud provider and component",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Apply only the Kubernetes cluster on AWS
    terraform-apply aws kubernetes

    # Apply networking, kubernetes, storage and monitoring in order
    terraform-apply gcp all
        """,
    )
    parser.add_argument("cloud", nargs="?", help="aws, azure or gcp")
    parser.add_argument("component", nargs="?", help="kubernetes, monitoring, networking, storage or all")
    parser.add_argument(
        "--destroy",
        action="store_true",
        help="Destroy instead of apply (reverse order for 'all')",
    )
    parser.add_argument(
        "--cluster-file",
        type=str,
        help="YAML cluster descriptor passed as variables to the kubernetes component",
    )
    parser.add_argument(
        "--base-dir",
        type=str,
        help="Root of the Terraform definitions (default: INFRA_BASE_DIR or infra-code)",
    )
    return parser


def parse_target(cloud: Optional[str], component: Optional[str]) -> tuple[CloudProvider, Component]:
    """
    Validate the positional arguments.

    Raises:
        UsageError: Missing argument, unknown cloud or unknown component
    """
    if not cloud or not component:
        raise UsageError(USAGE, usage=USAGE)

    try:
        comp = Component(component)
    except ValueError:
        raise UsageError(f"Invalid component: {component}")

    try:
        provider = CloudProvider(cloud)
    except ValueError:
        raise UsageError(f"Invalid cloud provider: {cloud}", usage=USAGE)

    return provider, comp


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the terraform-apply command."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    def action() -> None:
        args = build_parser().parse_args(argv)
        cloud, component = parse_target(args.cloud, args.component)
        cluster = load_cluster_descriptor(args.cluster_file) if args.cluster_file else None
        driver = ApplyDriver(
            base_dir=args.base_dir or settings.infra_base_dir,
            terraform=TerraformRunner(binary=settings.terraform_binary),
        )
        driver.run(cloud, component, destroy=args.destroy, cluster=cluster)

    return run_guarded(action)


if __name__ == "__main__":
    sys.exit(main())

"""Unit tests for the tenant registry."""

from pathlib import Path

import pytest

from monitoring_stack.alerting.tenants import TENANTS, resolve_tenant
from monitoring_stack.core.exceptions import UsageError


class TestResolveTenant:
    """Cluster name to tenant mapping."""

    def test_devops(self):
        tenant = resolve_tenant("devops")

        assert tenant.tenant_id == "_devops"
        assert tenant.rules_dir() == Path("alerts/devops")
        assert tenant.alertmanager_config() == Path("alertmanager/devops/alertmanager.yaml")

    def test_apps(self):
        tenant = resolve_tenant("apps")

        assert tenant.tenant_id == "_apps"
        assert tenant.rules_dir() == Path("alerts/apps")

    @pytest.mark.parametrize("cluster", ["", "prod", "Devops", "_devops", "common"])
    def test_unknown_cluster(self, cluster):
        """Anything but the two literal names is rejected."""
        with pytest.raises(UsageError):
            resolve_tenant(cluster)

    def test_usage_error_carries_usage(self):
        """The given usage line becomes the error message."""
        with pytest.raises(UsageError) as exc_info:
            resolve_tenant("prod", usage="Usage: update-alerts [devops|apps]")

        assert exc_info.value.message == "Usage: update-alerts [devops|apps]"
        assert exc_info.value.exit_code == 1

    def test_rules_dir_relative_to_root(self, tmp_path):
        assert TENANTS["apps"].rules_dir(tmp_path / "alerts") == tmp_path / "alerts" / "apps"

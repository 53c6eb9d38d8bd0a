"""Integration tests for the terraform-apply command.

subprocess.run is patched so no Terraform binary is needed; everything above
it (argument validation, target resolution, exit status mapping) is real.
"""

import subprocess
from unittest.mock import patch

import pytest

from monitoring_stack.provisioning.cli import USAGE, main

PATCH_TARGET = "monitoring_stack.core.process.subprocess.run"


def completed(returncode: int = 0):
    def _run(args, cwd=None, check=False):
        return subprocess.CompletedProcess(args, returncode)

    return _run


class TestArgumentValidation:
    """Usage errors exit 1 before any tool runs."""

    @pytest.mark.parametrize("argv", [[], ["aws"]])
    def test_missing_arguments_print_usage(self, argv, capsys):
        """Missing cloud or component prints the usage line and exits 1."""
        with patch(PATCH_TARGET) as mock_run:
            code = main(argv)

        assert code == 1
        assert capsys.readouterr().out.strip() == USAGE
        assert USAGE.startswith("Usage: terraform-apply [aws|azure|gcp] ")
        mock_run.assert_not_called()

    @pytest.mark.parametrize("component", ["database", "ALL", "kube"])
    def test_invalid_component(self, component, capsys):
        """Unknown components print 'Invalid component' and exit 1."""
        with patch(PATCH_TARGET) as mock_run:
            code = main(["aws", component])

        assert code == 1
        assert "Invalid component" in capsys.readouterr().out
        mock_run.assert_not_called()

    def test_invalid_cloud(self, capsys):
        """Unknown clouds exit 1 with a usage line."""
        with patch(PATCH_TARGET) as mock_run:
            code = main(["digitalocean", "kubernetes"])

        out = capsys.readouterr().out
        assert code == 1
        assert "Invalid cloud provider: digitalocean" in out
        assert USAGE in out
        mock_run.assert_not_called()

    @pytest.mark.parametrize(
        "argv",
        [
            ["aws", "kubernetes", "extra"],
            ["aws", "--bogus"],
            ["aws", "kubernetes", "--base-dir"],
        ],
    )
    def test_unparseable_arguments_exit_1(self, argv, capsys):
        """Extra positionals and unknown flags are usage errors, not argparse's exit 2."""
        with patch(PATCH_TARGET) as mock_run:
            code = main(argv)

        out = capsys.readouterr().out
        assert code == 1
        assert USAGE in out
        mock_run.assert_not_called()


class TestExecution:
    """Exit statuses of real runs against a temp definition tree."""

    def test_success_runs_terraform_in_component_dir(self, infra_tree, capsys):
        with patch(PATCH_TARGET, side_effect=completed(0)) as mock_run:
            code = main(["aws", "kubernetes", "--base-dir", str(infra_tree)])

        assert code == 0
        assert mock_run.call_count == 3
        cwds = {call.kwargs["cwd"] for call in mock_run.call_args_list}
        assert cwds == {str(infra_tree / "aws" / "kubernetes")}
        assert "Terraform apply completed for aws/kubernetes" in capsys.readouterr().out

    def test_all_order(self, infra_tree):
        """'all' visits networking, kubernetes, storage, monitoring."""
        with patch(PATCH_TARGET, side_effect=completed(0)) as mock_run:
            code = main(["aws", "all", "--base-dir", str(infra_tree)])

        visited = []
        for call in mock_run.call_args_list:
            name = call.kwargs["cwd"].rsplit("/", 1)[-1]
            if not visited or visited[-1] != name:
                visited.append(name)
        assert code == 0
        assert visited == ["networking", "kubernetes", "storage", "monitoring"]

    def test_tool_exit_status_is_propagated(self, infra_tree):
        """The failing Terraform command's exit status becomes ours."""
        with patch(PATCH_TARGET, side_effect=completed(3)) as mock_run:
            code = main(["aws", "storage", "--base-dir", str(infra_tree)])

        assert code == 3
        assert mock_run.call_count == 1

    def test_missing_terraform_binary(self, infra_tree):
        """A missing binary exits 127 like the shell would."""
        with patch(PATCH_TARGET, side_effect=FileNotFoundError("terraform")):
            code = main(["aws", "storage", "--base-dir", str(infra_tree)])

        assert code == 127

    def test_missing_component_directory(self, infra_tree, capsys):
        """A single component without definitions exits 1."""
        with patch(PATCH_TARGET) as mock_run:
            code = main(["gcp", "monitoring", "--base-dir", str(infra_tree)])

        assert code == 1
        assert "Terraform directory not found" in capsys.readouterr().out
        mock_run.assert_not_called()

    def test_invalid_cluster_file(self, infra_tree, tmp_path, capsys):
        """An invalid cluster descriptor exits 1 before Terraform runs."""
        cluster_file = tmp_path / "cluster.yaml"
        cluster_file.write_text("name: x\ninstance_type: t\nmin_size: 3\nmax_size: 1\ndesired_size: 2\n")

        with patch(PATCH_TARGET) as mock_run:
            code = main([
                "aws", "kubernetes",
                "--base-dir", str(infra_tree),
                "--cluster-file", str(cluster_file),
            ])

        assert code == 1
        mock_run.assert_not_called()

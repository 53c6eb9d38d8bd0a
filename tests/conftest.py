"""
Pytest Configuration and Shared Fixtures.

This module provides common fixtures for all tests:

- recording_runner: Fake command runner that records invocations
- infra_tree: Terraform definition directories under a temp root
- alerting_tree: Rule files, Alertmanager configs and templates under a temp root
- sample_alertmanager_config: Parsed Alertmanager config with nested routes
- user_service: UserService over in-memory SQLite and an in-memory cache
"""

from pathlib import Path
from typing import Optional

import pytest
import yaml

from monitoring_stack.core.exceptions import ExternalToolError
from monitoring_stack.core.process import CommandResult
from monitoring_stack.db.repository import UserRepository, create_db_engine
from monitoring_stack.services.cache import UsersCache
from monitoring_stack.services.users import UserService


class RecordingRunner:
    """Command runner double: records calls and fails on a chosen call."""

    def __init__(self, fail_on: Optional[int] = None, returncode: int = 1):
        self.calls: list[dict] = []
        self.fail_on = fail_on
        self.returncode = returncode

    def __call__(self, args, cwd=None, tool=None) -> CommandResult:
        args = [str(a) for a in args]
        self.calls.append({"args": args, "cwd": Path(cwd) if cwd is not None else None, "tool": tool})
        if self.fail_on is not None and len(self.calls) - 1 == self.fail_on:
            raise ExternalToolError(tool or args[0], args, self.returncode)
        return CommandResult(args=args, cwd=str(cwd) if cwd else None, returncode=0)

    @property
    def commands(self) -> list[list[str]]:
        return [c["args"] for c in self.calls]


@pytest.fixture
def recording_runner() -> RecordingRunner:
    """Runner that succeeds on every call."""
    return RecordingRunner()


@pytest.fixture
def infra_tree(tmp_path: Path) -> Path:
    """
    Terraform definitions for aws (all four components) and gcp
    (networking and kubernetes only).
    """
    base = tmp_path / "infra-code"
    for comp in ("networking", "kubernetes", "storage", "monitoring"):
        (base / "aws" / comp).mkdir(parents=True)
    for comp in ("networking", "kubernetes"):
        (base / "gcp" / comp).mkdir(parents=True)
    return base


@pytest.fixture
def sample_alertmanager_config() -> dict:
    """Alertmanager config with team routes and a continue route."""
    return {
        "route": {
            "receiver": "slack-default",
            "group_by": ["alertname"],
            "routes": [
                {
                    "matchers": ['severity="critical"'],
                    "receiver": "pagerduty-oncall",
                    "continue": True,
                },
                {
                    "match": {"team": "platform"},
                    "receiver": "slack-platform",
                    "routes": [
                        {"match": {"service": "ingress"}, "receiver": "slack-ingress"},
                    ],
                },
                {
                    "match_re": {"service": "mysql|redis"},
                    "receiver": "slack-data",
                },
            ],
        },
        "receivers": [
            {"name": "slack-default", "slack_configs": [{"channel": "#alerts"}]},
            {"name": "pagerduty-oncall", "pagerduty_configs": [{"routing_key": "x"}]},
            {"name": "slack-platform", "slack_configs": [{"channel": "#platform"}]},
            {"name": "slack-ingress", "slack_configs": [{"channel": "#ingress"}]},
            {"name": "slack-data", "slack_configs": [{"channel": "#data"}]},
        ],
    }


@pytest.fixture
def alerting_tree(tmp_path: Path, sample_alertmanager_config: dict) -> Path:
    """Repository-like layout of alerts/ and alertmanager/ under a temp root."""
    alerts = tmp_path / "alerts"
    for cluster, files in {
        "devops": ["node.yaml", "cluster.yaml"],
        "apps": ["backend.yaml"],
        "common": ["watchdog.yaml"],
    }.items():
        (alerts / cluster).mkdir(parents=True)
        for name in files:
            (alerts / cluster / name).write_text("groups: []\n", encoding="utf-8")
    (alerts / "devops" / "README.md").write_text("not a rule file\n", encoding="utf-8")

    alertmanager = tmp_path / "alertmanager"
    for cluster in ("devops", "apps"):
        (alertmanager / cluster).mkdir(parents=True)
        (alertmanager / cluster / "alertmanager.yaml").write_text(
            yaml.safe_dump(sample_alertmanager_config), encoding="utf-8"
        )
    (alertmanager / "templates").mkdir()
    (alertmanager / "templates" / "slack.tmpl").write_text(
        '{{ define "slack.title" }}{{ .CommonLabels.alertname }}{{ end }}\n',
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def user_repository() -> UserRepository:
    """Repository over a fresh in-memory SQLite database."""
    engine = create_db_engine("sqlite:///:memory:")
    yield UserRepository.from_engine(engine)
    engine.dispose()


@pytest.fixture
def users_cache() -> UsersCache:
    """In-memory users cache."""
    return UsersCache(redis_url=None)


@pytest.fixture
def user_service(user_repository: UserRepository, users_cache: UsersCache) -> UserService:
    """UserService with in-memory storage and cache."""
    return UserService(user_repository, users_cache)

"""Unit tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from monitoring_stack.config.settings import Settings


class TestSettings:
    """Defaults, environment overrides and production checks."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("MIMIR_URL", raising=False)
        settings = Settings(_env_file=None)

        assert settings.api_port == 8080
        assert settings.infra_base_dir == "infra-code"
        assert settings.mimirtool_binary == "./mimirtool"
        assert settings.is_development

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("MIMIR_URL", "https://mimir.internal")
        monkeypatch.setenv("MIMIR_PASSWORD", "pw")

        settings = Settings(_env_file=None)

        assert settings.mimir_url == "https://mimir.internal"
        assert settings.mimir_password.get_secret_value() == "pw"
        assert str(settings.mimir_password) == "**********"

    def test_production_requires_password_and_no_debug(self, monkeypatch):
        monkeypatch.delenv("MIMIR_PASSWORD", raising=False)
        with pytest.raises(ValidationError, match="mimir_password must be set"):
            Settings(_env_file=None, app_env="production", debug=False)
        with pytest.raises(ValidationError, match="debug must be False"):
            Settings(_env_file=None, app_env="production", debug=True, mimir_password="x")

    def test_production_valid(self):
        settings = Settings(_env_file=None, app_env="production", debug=False, mimir_password="x")

        assert settings.is_production

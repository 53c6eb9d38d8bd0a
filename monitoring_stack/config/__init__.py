"""
Configuration Management.

Centralized configuration using Pydantic Settings.

Configuration sources (in order of precedence):
1. Environment variables
2. .env file
3. Default values

Secrets (the Mimir password, database credentials inside DATABASE_URL)
are injected by the CI environment and never committed to source control.

Example:
    from monitoring_stack.config import get_settings

    settings = get_settings()
    print(settings.mimir_url)
"""

from monitoring_stack.config.settings import Settings, get_settings, settings

__all__ = [
    "Settings",
    "get_settings",
    "settings",
]

"""
Monitoring Stack - Demo Backend Entry Point

Runs the users demo service the monitoring stack scrapes and alerts on.
"""

import uvicorn
import structlog

from monitoring_stack.config import get_settings
from monitoring_stack.core.logging_config import configure_logging

logger = structlog.get_logger(__name__)


def main():
    """Main entry point for running the application."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    logger.info(
        "Starting server",
        host=settings.api_host,
        port=settings.api_port,
        environment=settings.app_env,
    )

    uvicorn.run(
        "monitoring_stack.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

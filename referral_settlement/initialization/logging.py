"""
Initialization - Logging Module.

Configures loguru logger for the service.
Sets up log rotation and retention policies.
"""

import sys

from loguru import logger

from referral_settlement.config.settings import Settings


def setup_logging(settings: Settings) -> None:
    """Configure logger sinks from settings."""
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)

    if settings.log_file:
        logger.add(
            settings.log_file,
            rotation="1 day",
            retention="7 days",
            level=settings.log_level,
            encoding="utf-8",
        )

    logger.info(
        "Logging configured",
        extra={"environment": settings.environment, "level": settings.log_level},
    )

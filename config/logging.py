"""
Structured logging setup.

Call configure_logging() once at process start (scripts, workers).
Library code only does structlog.get_logger(__name__).
"""

import logging
import sys

import structlog

from config.settings import Settings, get_settings


def configure_logging(settings: Settings = None) -> None:
    """
    Configure structlog on top of stdlib logging.

    JSON output in production, console output otherwise.
    """
    settings = settings or get_settings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer() if settings.is_production
                else structlog.dev.ConsoleRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

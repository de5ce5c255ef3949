"""Logging configuration for the storefront.

Standard library logging carries the records; structlog shapes them.
Console output in development, JSON lines in production and staging.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog


def get_log_level() -> str:
    """Get log level based on environment."""
    env = os.getenv("ENVIRONMENT", "development").lower()

    level_map = {
        "production": "INFO",
        "staging": "INFO",
        "development": "DEBUG",
        "test": "WARNING",
    }

    return os.getenv("LOG_LEVEL", level_map.get(env, "INFO")).upper()


def configure_logging() -> None:
    """Configure all logging for the application. Logs go to stderr."""
    log_level = get_log_level()
    env = os.getenv("ENVIRONMENT", "development").lower()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    root_logger.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.contextvars.merge_contextvars,
    ]

    if env in ["production", "staging"]:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

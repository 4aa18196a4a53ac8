"""Structured logging setup.

The library only asks structlog for loggers; applications call
configure_logging() once at startup to pick renderer and level.
"""

import logging
from typing import Optional

import structlog

from fieldcheck.config import get_settings


def configure_logging(debug: Optional[bool] = None, level: Optional[str] = None) -> None:
    """Configure structlog processors and the minimum level.

    Args:
        debug: Use the console renderer instead of JSON. Defaults to settings.DEBUG.
        level: Minimum level name ("debug", "info", ...). Defaults to settings.LOG_LEVEL.
    """
    settings = get_settings()
    debug = settings.DEBUG if debug is None else debug
    level_name = (level or settings.LOG_LEVEL).upper()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level_name, logging.INFO)
        ),
    )

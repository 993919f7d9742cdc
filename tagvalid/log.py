"""Structured logging setup.

The library only emits events through ``structlog.get_logger()``; it never
configures logging on import. Applications that want the library's events
rendered consistently call ``configure_logging()`` once at startup.
"""

import logging
from typing import Optional

import structlog

from tagvalid.config import get_settings
from tagvalid.errors import ConfigurationError


def configure_logging(debug: Optional[bool] = None, level: Optional[str] = None) -> None:
    """Install the structlog processor chain.

    Args:
        debug: Render human-readable console output instead of JSON.
            Defaults to the ``DEBUG`` setting.
        level: Minimum level name, e.g. ``"info"``. Defaults to ``LOG_LEVEL``.
    """
    settings = get_settings()
    if debug is None:
        debug = settings.DEBUG
    level_name = (level or settings.LOG_LEVEL).upper()
    min_level = getattr(logging, level_name, None)
    if not isinstance(min_level, int):
        raise ConfigurationError(f"Unknown log level: {level_name!r}")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
    )

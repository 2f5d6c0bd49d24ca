"""Structured logging configuration using structlog.

Development runs get pretty-printed console output, production runs get
one JSON object per line.

Usage:
    from sparkdeck.logging import get_logger, configure_logging

    # At application startup
    configure_logging()

    # In modules
    logger = get_logger(__name__)
    logger.info("ideas_loaded", count=5)
"""

import logging
import sys
from typing import Any, cast

import structlog
from structlog.types import Processor

from sparkdeck.config import APP_ENV, LOG_LEVEL


def configure_logging(
    development: bool | None = None,
    log_level: str | None = None,
) -> None:
    """Configure structured logging for the application.

    Args:
        development: If True, use pretty-printed output. If False, use JSON.
                    If None, derived from APP_ENV (anything but production).
        log_level: Log level string (DEBUG, INFO, WARNING, ERROR).
                  If None, uses LOG_LEVEL from config.
    """
    if development is None:
        development = APP_ENV != "production"

    if log_level is None:
        log_level = LOG_LEVEL

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    # Disabled levels are dropped before any other processing
    shared_processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if development:
        processors: list[Processor] = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = [
            *shared_processors,
            # logger.exception tracebacks become an "exception" string field
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
        force=True,
    )
    logging.getLogger().setLevel(numeric_level)

    # Third-party chatter
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        A bound structlog logger instance.
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


def bind_contextvars(**kwargs: Any) -> None:
    """Bind context variables included in all subsequent log calls.

    The web server binds a request id per request with this.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_contextvars() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()

"""
Logging Configuration

Structured logging for the scrapers and the dedup pipeline, built on structlog.
"""
import logging
import sys
from typing import Any, Optional, TextIO

import structlog
from structlog.types import EventDict, Processor

from config.settings import settings

APP_NAME = "auction_tracker"


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Tag every entry with the app name and deployment environment.
    """
    event_dict["app"] = APP_NAME
    event_dict["environment"] = settings.environment
    return event_dict


def resolve_log_level(level: Optional[str] = None) -> str:
    """Explicit level, else DEBUG in debug mode, else settings.log_level."""
    if level is None:
        level = "DEBUG" if settings.debug else settings.log_level
    return level.upper()


def setup_logging(
    level: Optional[str] = None,
    log_format: Optional[str] = None,
    stream: Optional[TextIO] = None
) -> structlog.BoundLogger:
    """
    Configure structured logging for the application.

    Args:
        level: Log level name, defaults to settings.log_level (DEBUG when settings.debug)
        log_format: "json" or "console", defaults to settings.log_format
        stream: Output stream, defaults to stdout

    Returns:
        Configured structlog logger instance
    """
    level = resolve_log_level(level)
    log_format = log_format or settings.log_format

    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stdout,
        level=getattr(logging, level, logging.INFO),
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]

    if log_format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.processors.ExceptionRenderer())
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger()


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()

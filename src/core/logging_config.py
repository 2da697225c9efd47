"""Structured logging configuration.

This module configures structlog with a stable JSON event format.
Log lines go to stderr so streamed records on stdout stay clean.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL

_configured = False


def configure_logging(level_name: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structlog processors and the minimum level.

    Args:
        level_name: Standard level name such as ``INFO`` or ``DEBUG``.
    """
    global _configured
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level_name.upper())
        ),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )
    _configured = True


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog bound logger emitting JSON events.
    """
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)


def _stderr_logger_factory(*args: Any) -> Any:
    """Bind each logger to whatever ``sys.stderr`` is at log time."""
    return structlog.PrintLogger(file=sys.stderr)

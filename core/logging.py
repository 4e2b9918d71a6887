"""Structured logging for the scoring engine."""

import logging
from typing import Any

import structlog

from core.config import get_settings


def setup_logging() -> None:
    """
    Configure structlog for a host application.

    Scoring modules only emit debug events; nothing is printed until the
    configured level allows it. Production renders JSON lines, every other
    environment renders to the console.
    """
    settings = get_settings()

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.is_production:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=not settings.is_test,
    )


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Get a logger, optionally bound to context such as the table revision."""
    return structlog.get_logger(name, **initial_values)

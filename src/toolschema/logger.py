"""Structured logging configuration for toolschema."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def resolve_level(level: str) -> int:
    """Return the numeric logging level for ``level``, defaulting to ``INFO``."""
    return getattr(logging, level.upper(), logging.INFO)


def configure(level: str = "INFO", json_out: bool = True) -> structlog.BoundLogger:
    """Configure structlog for schema generation and return a bound logger.

    Library modules log through ``structlog.get_logger(__name__)``; doc-lookup
    misses are emitted at ``warning`` and tool registration at ``debug``.
    """
    numeric_level = resolve_level(level)
    logging.basicConfig(format="%(message)s", level=numeric_level, stream=sys.stderr, force=True)
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if json_out else structlog.dev.ConsoleRenderer(),
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )
    return structlog.get_logger("toolschema")

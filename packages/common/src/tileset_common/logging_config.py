"""Structured logging setup (structlog).

Usage:
    >>> from tileset_common import configure_logging, get_logger
    >>> configure_logging(level="DEBUG")
    >>> logger = get_logger(__name__)
    >>> logger.info("tileset_loaded", path="tileset.json", gzipped=False)
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Optional

import structlog

from tileset_common.config import get_settings


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:
    # Resolve sys.stderr per logger, it may be swapped after configuration
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Configure structlog for the current process.

    Args:
        level: Log level name (default: settings.log_level)
        fmt: "console" for human-readable output, "json" for one JSON
            object per line (default: settings.log_format)
    """
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    fmt = (fmt or settings.log_format).lower()

    renderer: structlog.types.Processor
    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level_name)
        ),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )


def get_logger(name: Optional[str] = None) -> Any:
    """Get a structlog logger bound to ``name``."""
    return structlog.get_logger(name)

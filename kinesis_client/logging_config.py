"""Structured logging setup."""

import logging
import sys
from typing import Optional
import structlog

from kinesis_client.config import settings


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """
    Configure structlog for the process.

    Args:
        level: Log level name (defaults to settings.log_level)
        fmt: "json" or "console" (defaults to settings.log_format)
    """
    level = (level or settings.log_level).upper()
    fmt = (fmt or settings.log_format).lower()

    log_level = logging.getLevelName(level)
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    elif fmt == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    else:
        raise ValueError(f"Unknown log format: {fmt}")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

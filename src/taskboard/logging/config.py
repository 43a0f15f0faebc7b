"""Logging configuration for taskboard.

Usage:
    from taskboard.logging import configure_logging, get_logger

    configure_logging(level="DEBUG")
    log = get_logger(__name__)
    log.info("Column created", column_id="review")
"""

from __future__ import annotations

import logging
import sys

import structlog

from taskboard.logging.formatters import BoardRenderer

_configured = False


def configure_logging(
    *,
    level: str = "INFO",
    colors: bool | None = None,
    json_output: bool = False,
) -> None:
    """Configure structlog for the engine.

    Call this once at application startup. Modules obtain loggers through
    :func:`get_logger` at import time; those loggers resolve the
    configuration lazily, so calling this afterwards still takes effect.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        colors: Enable colors (auto-detect TTY/FORCE_COLOR if None)
        json_output: Use JSON output for log aggregation
    """
    global _configured

    if colors is None:
        colors = sys.stderr.isatty()

    _configure_stdlib_logging(level)

    if json_output:
        renderer: structlog.typing.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = BoardRenderer(colors=colors)

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    _configured = True


def is_configured() -> bool:
    """Whether :func:`configure_logging` has run in this process."""
    return _configured


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Get a logger instance.

    Args:
        name: Optional logger name (usually module ``__name__``). It is carried
            as the ``logger_name`` key so the console renderer can show the component.

    Returns:
        Lazily configured structlog logger
    """
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(name, logger_name=name)


def _configure_stdlib_logging(level: str) -> None:
    """Configure stdlib logging and quiet SQLAlchemy's own loggers."""
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[logging.StreamHandler()],
    )

    for logger_name in ("sqlalchemy.engine", "sqlalchemy.pool"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)

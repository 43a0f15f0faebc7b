"""Structured logging for taskboard.

Usage:
    from taskboard.logging import configure_logging, get_logger

    # At application startup
    configure_logging(level="INFO")

    # In modules
    log = get_logger(__name__)
    log.info("Task moved", task_id="abc", status="done")
"""

from taskboard.logging.colors import COMPONENT_COLORS, LEVEL_COLORS
from taskboard.logging.config import configure_logging, get_logger, is_configured
from taskboard.logging.formatters import BoardRenderer

__all__ = [
    "COMPONENT_COLORS",
    "LEVEL_COLORS",
    "BoardRenderer",
    "configure_logging",
    "get_logger",
    "is_configured",
]

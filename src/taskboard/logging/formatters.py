"""Structlog renderer for taskboard.

Produces pipe-separated output: HH:MM:SS | level | component | message key=value...
"""

from __future__ import annotations

import os
import sys
import traceback
from datetime import datetime
from typing import TYPE_CHECKING, Any

from taskboard.logging.colors import (
    ANSI_DIM,
    ANSI_EMERALD,
    ANSI_RESET,
    ANSI_ROSE,
    ANSI_SLATE,
    ANSI_VIOLET,
    COMPONENT_COLORS,
    LEVEL_COLORS,
)

if TYPE_CHECKING:
    from structlog.typing import EventDict, WrappedLogger


class BoardRenderer:
    """Console renderer used by :func:`taskboard.logging.configure_logging`.

    Example:
        10:02:11 | info  | columns  | Column created column_id=3f1c... base_order=4
        10:02:12 | warn  | db       | Transaction rolled back error=EntityNotFoundError
    """

    def __init__(
        self,
        colors: bool | None = None,
        component_width: int = 8,
        max_exception_frames: int = 5,
    ) -> None:
        self.component_width = component_width
        self.max_exception_frames = max_exception_frames

        if colors is None:
            force_color = os.environ.get("FORCE_COLOR", "")
            self.colors = sys.stderr.isatty() or force_color not in ("", "0", "false")
        else:
            self.colors = colors

    def __call__(
        self,
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> str:
        """Render a log event to a formatted string."""
        timestamp = event_dict.pop("timestamp", datetime.now().strftime("%H:%M:%S"))
        level = event_dict.pop("level", method_name).lower()
        logger_name = str(event_dict.pop("logger_name", "") or event_dict.pop("logger", "") or "")
        event = str(event_dict.pop("event", ""))

        exc_info = event_dict.pop("exc_info", None)
        exception_str = self._format_exception(exc_info) if exc_info else ""

        component = self._component(logger_name)
        kv_pairs = self._format_kv_pairs(event_dict)

        if self.colors:
            comp_color = self._component_color(logger_name)
            ts = f"{ANSI_DIM}{timestamp}{ANSI_RESET}"
            lvl = f"{LEVEL_COLORS.get(level, LEVEL_COLORS['info'])}{level:<5}{ANSI_RESET}"
            comp = f"{comp_color}{component:<{self.component_width}}{ANSI_RESET}"
            kv = f"{ANSI_DIM}{kv_pairs}{ANSI_RESET}" if kv_pairs else ""
        else:
            ts = timestamp
            lvl = f"{level:<5}"
            comp = f"{component:<{self.component_width}}"
            kv = kv_pairs

        line = f"{ts} | {lvl} | {comp} | {event}"
        if kv:
            line += f" {kv}"
        if exception_str:
            line += f"\n{exception_str}"
        return line

    @staticmethod
    def _component(logger_name: str) -> str:
        """Second dotted segment of the logger name (``taskboard.db.store`` -> ``db``)."""
        parts = logger_name.split(".")
        if len(parts) >= 2 and parts[0] == "taskboard":
            return parts[1]
        return parts[0] or "board"

    @staticmethod
    def _component_color(logger_name: str) -> str:
        for prefix, color in COMPONENT_COLORS.items():
            if logger_name.startswith(prefix):
                return color
        return ANSI_SLATE

    def _format_kv_pairs(self, event_dict: EventDict) -> str:
        pairs = []
        for key, value in event_dict.items():
            if key.startswith("_"):
                continue
            if self.colors and isinstance(value, bool):
                color = ANSI_EMERALD if value else ANSI_ROSE
                pairs.append(f"{key}={color}{value}{ANSI_RESET}")
            elif self.colors and isinstance(value, (int, float)):
                pairs.append(f"{key}={ANSI_VIOLET}{value}{ANSI_RESET}")
            else:
                pairs.append(f"{key}={value}")
        return " ".join(pairs)

    def _format_exception(self, exc_info: tuple[Any, ...] | bool) -> str:
        """Format an exception with only the most recent frames."""
        if exc_info is True:
            exc_info = sys.exc_info()

        if not exc_info or exc_info[0] is None:
            return ""

        exc_type, exc_value, exc_tb = exc_info

        tb_lines = traceback.format_tb(exc_tb)
        if len(tb_lines) > self.max_exception_frames:
            tb_lines = ["  ... (truncated)\n", *tb_lines[-self.max_exception_frames :]]

        indent = "           "
        formatted_tb = "".join(tb_lines).rstrip()
        formatted_tb = "\n".join(indent + line for line in formatted_tb.split("\n"))

        exc_name = exc_type.__name__
        if exc_type.__module__ and exc_type.__module__ != "builtins":
            exc_name = f"{exc_type.__module__}.{exc_name}"

        if self.colors:
            return (
                f"{indent}{ANSI_ROSE}{exc_name}: {exc_value}{ANSI_RESET}\n"
                f"{ANSI_DIM}{formatted_tb}{ANSI_RESET}"
            )
        return f"{indent}{exc_name}: {exc_value}\n{formatted_tb}"

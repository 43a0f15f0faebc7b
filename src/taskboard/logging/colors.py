"""Board color palette for terminal log output."""

from __future__ import annotations

# =============================================================================
# ANSI 24-bit Escape Codes
# =============================================================================

ANSI_SKY = "\033[38;2;96;165;250m"
ANSI_AMBER = "\033[38;2;250;204;21m"
ANSI_SLATE = "\033[38;2;148;163;184m"
ANSI_EMERALD = "\033[38;2;74;222;128m"
ANSI_ROSE = "\033[38;2;251;113;133m"
ANSI_VIOLET = "\033[38;2;192;132;252m"
ANSI_DIM = "\033[38;2;100;100;115m"
ANSI_RESET = "\033[0m"
ANSI_BOLD = "\033[1m"

# =============================================================================
# Log Level Color Mapping
# =============================================================================

LEVEL_COLORS: dict[str, str] = {
    "debug": ANSI_DIM,
    "info": ANSI_SKY,
    "warning": ANSI_AMBER,
    "warn": ANSI_AMBER,
    "error": ANSI_ROSE,
    "critical": ANSI_VIOLET,
}

# Logger name prefix -> color, so store/graph/column lines are easy to tell apart
COMPONENT_COLORS: dict[str, str] = {
    "taskboard.db": ANSI_SLATE,
    "taskboard.columns": ANSI_SKY,
    "taskboard.tasks": ANSI_EMERALD,
    "taskboard.sequence": ANSI_AMBER,
    "taskboard.service": ANSI_VIOLET,
}

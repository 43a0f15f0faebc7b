"""Workflow columns: per-context ordering and lifecycle."""

from taskboard.columns.manager import ColumnManager
from taskboard.columns.ordering import (
    TIER_ORDERED,
    TIER_UNPLACED_SCOPED,
    ColumnOrderResolver,
    upsert_column_position,
)

__all__ = [
    "TIER_ORDERED",
    "TIER_UNPLACED_SCOPED",
    "ColumnManager",
    "ColumnOrderResolver",
    "upsert_column_position",
]

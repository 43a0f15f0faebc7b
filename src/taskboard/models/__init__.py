"""Domain models for the board engine."""

from taskboard.models.columns import (
    DEFAULT_COLUMN_COLOR,
    DEFAULT_COLUMNS,
    ESSENTIAL_COLUMN_IDS,
    ColumnCreate,
    ColumnUpdate,
    KanbanColumn,
    is_essential_column,
)
from taskboard.models.dependencies import Dependency, DependencyType
from taskboard.models.tasks import Task, TaskCreate

__all__ = [
    "DEFAULT_COLUMNS",
    "DEFAULT_COLUMN_COLOR",
    "ESSENTIAL_COLUMN_IDS",
    "ColumnCreate",
    "ColumnUpdate",
    "Dependency",
    "DependencyType",
    "KanbanColumn",
    "Task",
    "TaskCreate",
    "is_essential_column",
]

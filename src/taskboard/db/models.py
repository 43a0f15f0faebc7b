"""SQLModel schemas for the board store.

Architecture:
- ColumnRecord: workflow columns, global (project_id NULL) or project-scoped
- ColumnOrderRecord: per-context position overrides (project_id NULL = "all tasks")
- TaskRecord: the task fields the engine owns (status, project, position)
- DependencyRecord: predecessor -> successor edges between tasks

Components query these through SQLAlchemy Core using the module-level
``Table`` handles at the bottom of this file.
"""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Index, Table
from sqlmodel import Field, SQLModel

from taskboard.models.columns import DEFAULT_COLUMN_COLOR
from taskboard.models.dependencies import DependencyType


def utcnow_naive() -> datetime:
    """Get current UTC time as naive datetime (for TIMESTAMP WITHOUT TIME ZONE)."""
    return datetime.now(UTC).replace(tzinfo=None)


# =============================================================================
# Base Model
# =============================================================================


class TimestampMixin(SQLModel):
    """Mixin for created/updated timestamps, stored as naive UTC ``DateTime`` columns."""

    created_at: datetime = Field(
        default_factory=utcnow_naive,
        sa_type=DateTime,
        description="When this record was created",
    )
    updated_at: datetime = Field(
        default_factory=utcnow_naive,
        sa_type=DateTime,
        description="When this record was last updated",
    )


# =============================================================================
# Columns
# =============================================================================


class ColumnRecord(TimestampMixin, table=True):
    """A workflow column."""

    __tablename__ = "kanban_columns"  # type: ignore[assignment]

    id: str = Field(primary_key=True, max_length=64)
    project_id: str | None = Field(default=None, max_length=64, index=True)
    name: str = Field(max_length=255)
    color: str = Field(default=DEFAULT_COLUMN_COLOR, max_length=64)
    base_order: int = Field(default=0, index=True)
    is_default: bool = Field(default=False)

    def __repr__(self) -> str:
        return f"<ColumnRecord {self.id} ({self.name})>"


class ColumnOrderRecord(TimestampMixin, table=True):
    """Position of one column within one viewing context."""

    __tablename__ = "column_order"  # type: ignore[assignment]

    id: str = Field(primary_key=True, max_length=64)
    project_id: str | None = Field(default=None, max_length=64, index=True)
    column_id: str = Field(foreign_key="kanban_columns.id", ondelete="CASCADE", index=True)
    position: int = Field(default=0)

    __table_args__ = (
        Index("ix_column_order_project_column_unique", "project_id", "column_id", unique=True),
    )


# =============================================================================
# Tasks
# =============================================================================


class TaskRecord(TimestampMixin, table=True):
    """A task row."""

    __tablename__ = "tasks"  # type: ignore[assignment]

    id: str = Field(primary_key=True, max_length=64)
    project_id: str | None = Field(default=None, max_length=64, index=True)
    title: str = Field(max_length=200)
    status: str = Field(default="todo", max_length=64, index=True)
    position: int = Field(default=0)


class DependencyRecord(SQLModel, table=True):
    """A dependency edge between two tasks."""

    __tablename__ = "dependencies"  # type: ignore[assignment]

    id: str = Field(primary_key=True, max_length=64)
    predecessor_id: str = Field(foreign_key="tasks.id", ondelete="CASCADE", index=True)
    successor_id: str = Field(foreign_key="tasks.id", ondelete="CASCADE", index=True)
    dependency_type: str = Field(default=DependencyType.FINISH_TO_START.value, max_length=32)
    lag_days: int = Field(default=0)
    created_at: datetime = Field(default_factory=utcnow_naive, sa_type=DateTime)

    __table_args__ = (
        Index("ix_dependencies_pair_unique", "predecessor_id", "successor_id", unique=True),
    )


# =============================================================================
# Core table handles
# =============================================================================

kanban_columns: Table = ColumnRecord.__table__  # type: ignore[attr-defined]
column_order: Table = ColumnOrderRecord.__table__  # type: ignore[attr-defined]
tasks: Table = TaskRecord.__table__  # type: ignore[attr-defined]
dependencies: Table = DependencyRecord.__table__  # type: ignore[attr-defined]

"""Workflow column models."""

from datetime import datetime

from pydantic import BaseModel, Field, computed_field

# Columns that can never be deleted. Both are global.
ESSENTIAL_COLUMN_IDS: frozenset[str] = frozenset({"todo", "done"})

DEFAULT_COLUMN_COLOR = "bg-blue-500"

# Seeded by init_db, in base order
DEFAULT_COLUMNS: tuple[tuple[str, str, str], ...] = (
    ("todo", "To Do", "bg-blue-500"),
    ("in_progress", "In Progress", "bg-yellow-500"),
    ("on_hold", "On Hold", "bg-gray-500"),
    ("done", "Done", "bg-green-500"),
)


def is_essential_column(column_id: str) -> bool:
    """Check whether a column id is one of the protected essential columns."""
    return column_id in ESSENTIAL_COLUMN_IDS


class KanbanColumn(BaseModel):
    """A workflow stage a task can occupy, as seen from one viewing context.

    ``base_order`` is the column's own fallback order. ``position`` is the
    effective position after resolving the context's override; columns read
    without a context report ``base_order`` there.
    """

    id: str = Field(..., description="Stable column id, also used as task status")
    project_id: str | None = Field(
        default=None, description="Owning project (None = global column)"
    )
    name: str = Field(..., description="Display name")
    color: str = Field(default=DEFAULT_COLUMN_COLOR, description="Color class")
    base_order: int = Field(default=0, description="Fallback order assigned at creation")
    position: int = Field(default=0, description="Effective position in the resolved context")
    is_default: bool = Field(default=False, description="Seeded at schema bootstrap")
    created_at: datetime | None = Field(default=None)
    updated_at: datetime | None = Field(default=None)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_essential(self) -> bool:
        """Essential columns cannot be deleted."""
        return is_essential_column(self.id)

    @property
    def is_global(self) -> bool:
        return self.project_id is None


class ColumnCreate(BaseModel):
    """Input for creating a column."""

    name: str = Field(..., description="Display name (must not be blank)")
    color: str = Field(default=DEFAULT_COLUMN_COLOR, description="Color class")
    project_id: str | None = Field(
        default=None, description="Scope the column to a project (None = global)"
    )


class ColumnUpdate(BaseModel):
    """Partial update for a column. Unset fields are left untouched."""

    name: str | None = None
    color: str | None = None
    base_order: int | None = None

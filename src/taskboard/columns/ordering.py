"""Per-context column ordering.

A column's effective position depends on the viewing context:

- a project context sees global columns plus the project's own columns,
  each at its ``(project, column)`` override or else its base order;
- the aggregate "all tasks" context (``project_id=None``) sees every column,
  at its ``(NULL, column)`` override or else its base order.

Columns are sorted by ``(tier, position, id)``. Tier 1 holds scoped columns
that have no aggregate override, so the first time they show up in the
aggregate view they trail the global ordering instead of interleaving with it.
"""

import uuid
from typing import Any

from sqlalchemy import ColumnElement, func, insert, or_, select, update

from taskboard.db.models import column_order, kanban_columns, utcnow_naive
from taskboard.db.store import TransactionalStore
from taskboard.logging import get_logger
from taskboard.models.columns import KanbanColumn

log = get_logger(__name__)

# Sort tiers for the aggregate context
TIER_ORDERED = 0
TIER_UNPLACED_SCOPED = 1


def context_filter(project_id: str | None) -> ColumnElement[bool]:
    """Match order rows of one context. ``None`` is the aggregate context."""
    if project_id is None:
        return column_order.c.project_id.is_(None)
    return column_order.c.project_id == project_id


def row_to_column(row: dict[str, Any], position: int | None = None) -> KanbanColumn:
    """Convert a ``kanban_columns`` row to a column model."""
    return KanbanColumn(
        id=row["id"],
        project_id=row["project_id"],
        name=row["name"],
        color=row["color"],
        base_order=row["base_order"],
        position=row["base_order"] if position is None else position,
        is_default=bool(row["is_default"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class ColumnOrderResolver:
    """Computes the effective column order for a viewing context.

    Read-only: resolving never writes, so it is safe to call inside or
    outside a transaction and always gives the same answer for the same state.
    """

    def __init__(self, store: TransactionalStore) -> None:
        self._store = store

    def resolve(self, project_id: str | None = None) -> list[KanbanColumn]:
        """Return the columns visible in a context, in effective order.

        Args:
            project_id: Project context, or None for the aggregate view

        Returns:
            Columns with ``position`` set to their effective position
        """
        overrides = self._overrides(project_id)
        ranked: list[tuple[tuple[int, int, str], KanbanColumn]] = []

        for row in self._store.query_many(self._visible_columns(project_id)):
            override = overrides.get(row["id"])
            position = row["base_order"] if override is None else override
            tier = TIER_ORDERED
            if project_id is None and override is None and row["project_id"] is not None:
                tier = TIER_UNPLACED_SCOPED
            ranked.append(((tier, position, row["id"]), row_to_column(row, position)))

        ranked.sort(key=lambda item: item[0])
        return [column for _, column in ranked]

    def get(self, column_id: str, project_id: str | None = None) -> KanbanColumn | None:
        """Fetch one column with its effective position in a context."""
        row = self._store.query_one(select(kanban_columns).where(kanban_columns.c.id == column_id))
        if row is None:
            return None
        override = self._store.scalar(
            select(column_order.c.position).where(
                column_order.c.column_id == column_id, context_filter(project_id)
            )
        )
        return row_to_column(row, override)

    def max_position(self, project_id: str | None = None) -> int | None:
        """Highest effective position visible in a context, or None if nothing is visible."""
        positions = [column.position for column in self.resolve(project_id)]
        return max(positions) if positions else None

    def _visible_columns(self, project_id: str | None) -> Any:
        stmt = select(kanban_columns)
        if project_id is not None:
            stmt = stmt.where(
                or_(
                    kanban_columns.c.project_id.is_(None),
                    kanban_columns.c.project_id == project_id,
                )
            )
        return stmt

    def _overrides(self, project_id: str | None) -> dict[str, int]:
        rows = self._store.query_many(
            select(column_order.c.column_id, column_order.c.position).where(
                context_filter(project_id)
            )
        )
        return {row["column_id"]: row["position"] for row in rows}


def upsert_column_position(
    store: TransactionalStore,
    column_id: str,
    project_id: str | None,
    position: int,
) -> None:
    """Set a column's position in one context, creating the order row on first use.

    Selects before writing instead of relying on the unique index, because
    the aggregate context stores NULL and NULLs never collide in a unique index.
    """
    now = utcnow_naive()
    existing_id = store.scalar(
        select(column_order.c.id).where(
            column_order.c.column_id == column_id, context_filter(project_id)
        )
    )
    if existing_id is not None:
        store.execute(
            update(column_order)
            .where(column_order.c.id == existing_id)
            .values(position=position, updated_at=now)
        )
        return

    store.execute(
        insert(column_order).values(
            id=str(uuid.uuid4()),
            project_id=project_id,
            column_id=column_id,
            position=position,
            created_at=now,
            updated_at=now,
        )
    )


def max_base_order(store: TransactionalStore) -> int | None:
    """Highest base order across all columns, or None when there are none."""
    return store.scalar(select(func.max(kanban_columns.c.base_order)))

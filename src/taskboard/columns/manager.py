"""Column lifecycle: create, update, delete and reorder workflow columns."""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import delete, func, insert, select, update

from taskboard.columns.ordering import (
    ColumnOrderResolver,
    max_base_order,
    row_to_column,
    upsert_column_position,
)
from taskboard.db.models import column_order, kanban_columns, tasks, utcnow_naive
from taskboard.db.store import TransactionalStore
from taskboard.errors import (
    EntityNotFoundError,
    HasDependentsError,
    ProtectedEntityError,
    ValidationError,
)
from taskboard.logging import get_logger
from taskboard.models.columns import (
    ColumnCreate,
    ColumnUpdate,
    KanbanColumn,
    is_essential_column,
)

if TYPE_CHECKING:
    from taskboard.sequence import SequenceReorderer

log = get_logger(__name__)


class ColumnManager:
    """Creates, edits and removes columns while keeping per-context order intact.

    Essential columns (``todo`` and ``done``) can be edited but never deleted.
    Deleting a column that tasks still sit in requires a migration target.
    """

    def __init__(
        self,
        store: TransactionalStore,
        resolver: ColumnOrderResolver,
        reorderer: "SequenceReorderer",
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._reorderer = reorderer

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def resolve(self, project_id: str | None = None) -> list[KanbanColumn]:
        """Columns visible in a context, in effective order."""
        return self._resolver.resolve(project_id)

    def get(self, column_id: str, project_id: str | None = None) -> KanbanColumn | None:
        return self._resolver.get(column_id, project_id)

    def require(self, column_id: str, project_id: str | None = None) -> KanbanColumn:
        """Like :meth:`get` but raises ``EntityNotFoundError`` for a missing column."""
        column = self._resolver.get(column_id, project_id)
        if column is None:
            raise EntityNotFoundError("Column", column_id)
        return column

    def task_count(self, column_id: str) -> int:
        """Number of tasks whose status is this column."""
        count = self._store.scalar(
            select(func.count()).select_from(tasks).where(tasks.c.status == column_id)
        )
        return int(count or 0)

    def list_for_export(self) -> list[KanbanColumn]:
        """Every column regardless of scope: global first, then by base order."""
        rows = self._store.query_many(
            select(kanban_columns).order_by(
                kanban_columns.c.project_id.is_not(None),
                kanban_columns.c.project_id,
                kanban_columns.c.base_order,
                kanban_columns.c.id,
            )
        )
        return [row_to_column(row) for row in rows]

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, data: ColumnCreate, for_project_id: str | None = None) -> KanbanColumn:
        """Create a column and place it at the end of its anchor context.

        The anchor context is the column's own project when it is scoped,
        otherwise ``for_project_id`` (the context the caller was viewing,
        None for the aggregate view).

        Args:
            data: Column name, color and optional project scope
            for_project_id: Context to append a global column to

        Returns:
            The new column as resolved in the anchor context

        Raises:
            ValidationError: If the name is blank
        """
        name = data.name.strip()
        if not name:
            raise ValidationError("Column name must not be empty", details={"name": data.name})

        column_id = str(uuid.uuid4())
        anchor = data.project_id if data.project_id is not None else for_project_id

        with self._store.transaction():
            highest_base = max_base_order(self._store)
            base_order = 0 if highest_base is None else highest_base + 1

            highest_visible = self._resolver.max_position(anchor)
            position = 0 if highest_visible is None else highest_visible + 1

            now = utcnow_naive()
            self._store.execute(
                insert(kanban_columns).values(
                    id=column_id,
                    project_id=data.project_id,
                    name=name,
                    color=data.color,
                    base_order=base_order,
                    is_default=False,
                    created_at=now,
                    updated_at=now,
                )
            )
            upsert_column_position(self._store, column_id, anchor, position)

        log.info(
            "Column created",
            column_id=column_id,
            project_id=data.project_id,
            anchor=anchor,
            base_order=base_order,
            position=position,
        )
        return self.require(column_id, anchor)

    def update(self, column_id: str, data: ColumnUpdate) -> KanbanColumn:
        """Apply a partial update to a column.

        Raises:
            EntityNotFoundError: If the column does not exist
            ValidationError: If a new name is blank
        """
        existing = self.require(column_id)
        values = data.model_dump(exclude_unset=True, exclude_none=True)

        if "name" in values:
            values["name"] = values["name"].strip()
            if not values["name"]:
                raise ValidationError(
                    "Column name must not be empty", details={"column_id": column_id}
                )

        if not values:
            return existing

        values["updated_at"] = utcnow_naive()
        with self._store.transaction():
            self._store.execute(
                update(kanban_columns).where(kanban_columns.c.id == column_id).values(**values)
            )

        log.info("Column updated", column_id=column_id, fields=sorted(values))
        return self.require(column_id)

    def delete(self, column_id: str, target_column_id: str | None = None) -> None:
        """Delete a column.

        With ``target_column_id`` the call becomes :meth:`delete_with_migration`.

        Raises:
            ProtectedEntityError: If the column is essential
            EntityNotFoundError: If the column does not exist
            HasDependentsError: If tasks still use the column and no target was given
        """
        if is_essential_column(column_id):
            raise ProtectedEntityError("Column", column_id)

        if target_column_id is not None:
            self.delete_with_migration(column_id, target_column_id)
            return

        with self._store.transaction():
            self.require(column_id)
            count = self.task_count(column_id)
            if count > 0:
                raise HasDependentsError(column_id, count)
            self._delete_column_rows(column_id)

        log.info("Column deleted", column_id=column_id)

    def delete_with_migration(self, column_id: str, target_column_id: str) -> int:
        """Move every task out of a column, then delete it, as one unit.

        Tasks moved into a project-scoped target are also re-filed into the
        target's project.

        Returns:
            Number of tasks migrated

        Raises:
            ProtectedEntityError: If the column is essential
            EntityNotFoundError: If the column or the target does not exist
            ValidationError: If the target is the column itself
        """
        if is_essential_column(column_id):
            raise ProtectedEntityError("Column", column_id)

        with self._store.transaction():
            self.require(column_id)
            target = self._resolver.get(target_column_id)
            if target is None:
                raise EntityNotFoundError("Target column", target_column_id)
            if target.id == column_id:
                raise ValidationError(
                    "Cannot migrate tasks into the column being deleted",
                    details={"column_id": column_id},
                )

            values: dict[str, object] = {"status": target.id, "updated_at": utcnow_naive()}
            if target.project_id is not None:
                values["project_id"] = target.project_id

            migrated = self._store.execute(
                update(tasks).where(tasks.c.status == column_id).values(**values)
            )
            self._delete_column_rows(column_id)

        log.info(
            "Column deleted with migration",
            column_id=column_id,
            target_column_id=target_column_id,
            migrated=migrated,
        )
        return migrated

    def reorder(self, column_ids: list[str], project_id: str | None = None) -> None:
        """Set the column order of one context. Other contexts are untouched."""
        self._reorderer.reorder_columns(column_ids, project_id)

    def _delete_column_rows(self, column_id: str) -> None:
        self._store.execute(delete(column_order).where(column_order.c.column_id == column_id))
        self._store.execute(delete(kanban_columns).where(kanban_columns.c.id == column_id))

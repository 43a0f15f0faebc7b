"""Dense renumbering of tasks within a bucket and columns within a context.

Tasks are sequenced per status bucket: ``reorder_tasks`` numbers exactly the
ids it is given, ``0..n-1``. Passing ids from several buckets without a
status yields one shared sequence across them, which is how a caller gets a
cross-bucket ordering when a view needs one.
"""

from collections import Counter
from collections.abc import Sequence

from sqlalchemy import select, update

from taskboard.columns.ordering import upsert_column_position
from taskboard.db.models import kanban_columns, tasks, utcnow_naive
from taskboard.db.store import TransactionalStore
from taskboard.errors import EntityNotFoundError, ValidationError
from taskboard.logging import get_logger

log = get_logger(__name__)


def _ensure_unique(ids: Sequence[str], kind: str) -> None:
    duplicates = sorted(i for i, count in Counter(ids).items() if count > 1)
    if duplicates:
        raise ValidationError(
            f"Duplicate {kind} ids in reorder request",
            details={"duplicates": duplicates},
        )


class SequenceReorderer:
    """Assigns ``position = index`` to an ordered id list in one transaction."""

    def __init__(self, store: TransactionalStore) -> None:
        self._store = store

    def reorder_tasks(self, task_ids: Sequence[str], status: str | None = None) -> None:
        """Renumber tasks in the given order, optionally moving them all to ``status``.

        When ``status`` names a project-scoped column, the tasks are re-filed
        into that project as well, the same as a single-task move.

        Raises:
            ValidationError: If an id appears twice
            EntityNotFoundError: If ``status`` or any task id does not exist;
                nothing is written in that case
        """
        _ensure_unique(task_ids, "task")

        with self._store.transaction():
            shared: dict[str, object] = {}
            if status is not None:
                column = self._store.query_one(
                    select(kanban_columns.c.id, kanban_columns.c.project_id).where(
                        kanban_columns.c.id == status
                    )
                )
                if column is None:
                    raise EntityNotFoundError("Column", status)
                shared["status"] = status
                if column["project_id"] is not None:
                    shared["project_id"] = column["project_id"]

            now = utcnow_naive()
            for index, task_id in enumerate(task_ids):
                matched = self._store.execute(
                    update(tasks)
                    .where(tasks.c.id == task_id)
                    .values(position=index, updated_at=now, **shared)
                )
                if matched == 0:
                    raise EntityNotFoundError("Task", task_id)

        log.info("Tasks reordered", count=len(task_ids), status=status)

    def reorder_columns(self, column_ids: Sequence[str], project_id: str | None = None) -> None:
        """Write the order of columns for one context only.

        Args:
            column_ids: Columns in their new order (index = new position)
            project_id: Context to write, None for the aggregate view

        Raises:
            ValidationError: If an id appears twice
            EntityNotFoundError: If a column does not exist
        """
        _ensure_unique(column_ids, "column")

        with self._store.transaction():
            known = {
                row["id"]
                for row in self._store.query_many(
                    select(kanban_columns.c.id).where(kanban_columns.c.id.in_(list(column_ids)))
                )
            }
            for column_id in column_ids:
                if column_id not in known:
                    raise EntityNotFoundError("Column", column_id)

            for index, column_id in enumerate(column_ids):
                upsert_column_position(self._store, column_id, project_id, index)

        log.info("Columns reordered", count=len(column_ids), project_id=project_id)

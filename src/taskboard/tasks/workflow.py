"""Task workflow engine: moving tasks between columns."""

from sqlalchemy import select, update

from taskboard.db.models import kanban_columns, tasks, utcnow_naive
from taskboard.db.store import TransactionalStore
from taskboard.errors import EntityNotFoundError
from taskboard.logging import get_logger
from taskboard.models.tasks import Task
from taskboard.tasks.manager import next_position, row_to_task

log = get_logger(__name__)


class TaskWorkflowEngine:
    """Handles task status transitions.

    Any column is a valid destination. Moving a task into a project-scoped
    column also files the task under that project; both fields change in a
    single statement, so no reader ever sees the new status with the old
    project.
    """

    def __init__(self, store: TransactionalStore) -> None:
        self._store = store

    def move_task(self, task_id: str, status: str) -> Task:
        """Move a task to another column.

        A task that changes bucket lands at the end of the destination
        bucket. Moving to the column the task is already in leaves its
        position alone.

        Args:
            task_id: Task to move
            status: Destination column id

        Returns:
            Updated task

        Raises:
            EntityNotFoundError: If the task or the destination column doesn't exist
        """
        with self._store.transaction():
            row = self._store.query_one(select(tasks).where(tasks.c.id == task_id))
            if row is None:
                raise EntityNotFoundError("Task", task_id)

            column = self._store.query_one(
                select(kanban_columns.c.id, kanban_columns.c.project_id).where(
                    kanban_columns.c.id == status
                )
            )
            if column is None:
                raise EntityNotFoundError("Column", status)

            values: dict[str, object] = {"status": status, "updated_at": utcnow_naive()}
            if column["project_id"] is not None:
                values["project_id"] = column["project_id"]
            if row["status"] != status:
                values["position"] = next_position(self._store, status)

            self._store.execute(update(tasks).where(tasks.c.id == task_id).values(**values))
            updated = self._store.query_one(select(tasks).where(tasks.c.id == task_id))

        log.info(
            "Task moved",
            task_id=task_id,
            from_status=row["status"],
            to_status=status,
            project_id=values.get("project_id", row["project_id"]),
        )
        return row_to_task(updated)  # type: ignore[arg-type]

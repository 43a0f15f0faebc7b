"""Task rows: creation, lookup and removal."""

import uuid
from typing import Any

from sqlalchemy import delete, func, insert, select

from taskboard.db.models import kanban_columns, tasks, utcnow_naive
from taskboard.db.store import TransactionalStore
from taskboard.errors import EntityNotFoundError, ValidationError
from taskboard.logging import get_logger
from taskboard.models.tasks import Task, TaskCreate

log = get_logger(__name__)


def row_to_task(row: dict[str, Any]) -> Task:
    """Convert a ``tasks`` row to a task model."""
    return Task(
        id=row["id"],
        title=row["title"],
        project_id=row["project_id"],
        status=row["status"],
        position=row["position"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def next_position(store: TransactionalStore, status: str) -> int:
    """Position just past the last task of a status bucket."""
    highest = store.scalar(select(func.max(tasks.c.position)).where(tasks.c.status == status))
    return 0 if highest is None else highest + 1


class TaskManager:
    """Manages the task rows the board engine works on."""

    def __init__(self, store: TransactionalStore) -> None:
        self._store = store

    def create(self, data: TaskCreate) -> Task:
        """Create a task at the end of its status bucket.

        A task created in a project-scoped column belongs to that column's project.

        Raises:
            ValidationError: If the title is blank
            EntityNotFoundError: If the status column does not exist
        """
        title = data.title.strip()
        if not title:
            raise ValidationError("Task title must not be empty")

        task_id = str(uuid.uuid4())
        with self._store.transaction():
            column = self._store.query_one(
                select(kanban_columns.c.project_id).where(kanban_columns.c.id == data.status)
            )
            if column is None:
                raise EntityNotFoundError("Column", data.status)

            project_id = column["project_id"] or data.project_id
            now = utcnow_naive()
            self._store.execute(
                insert(tasks).values(
                    id=task_id,
                    project_id=project_id,
                    title=title,
                    status=data.status,
                    position=next_position(self._store, data.status),
                    created_at=now,
                    updated_at=now,
                )
            )

        log.info("Task created", task_id=task_id, status=data.status, project_id=project_id)
        return self.require(task_id)

    def get(self, task_id: str) -> Task | None:
        row = self._store.query_one(select(tasks).where(tasks.c.id == task_id))
        return row_to_task(row) if row is not None else None

    def require(self, task_id: str) -> Task:
        """Like :meth:`get` but raises ``EntityNotFoundError`` for a missing task."""
        task = self.get(task_id)
        if task is None:
            raise EntityNotFoundError("Task", task_id)
        return task

    def list_by_status(self, status: str, project_id: str | None = None) -> list[Task]:
        """Tasks in one bucket ordered by position, optionally limited to a project."""
        stmt = select(tasks).where(tasks.c.status == status)
        if project_id is not None:
            stmt = stmt.where(tasks.c.project_id == project_id)
        rows = self._store.query_many(stmt.order_by(tasks.c.position, tasks.c.created_at))
        return [row_to_task(row) for row in rows]

    def list_all(self) -> list[Task]:
        rows = self._store.query_many(select(tasks).order_by(tasks.c.status, tasks.c.position))
        return [row_to_task(row) for row in rows]

    def delete(self, task_id: str) -> None:
        """Remove a task row. Dependency edges go with it (foreign key cascade).

        Raises:
            EntityNotFoundError: If the task does not exist
        """
        with self._store.transaction():
            removed = self._store.execute(delete(tasks).where(tasks.c.id == task_id))
            if removed == 0:
                raise EntityNotFoundError("Task", task_id)

        log.info("Task deleted", task_id=task_id)

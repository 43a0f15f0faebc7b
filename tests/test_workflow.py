"""Tests for moving tasks between columns."""

from collections.abc import Callable

import pytest

from taskboard.errors import EntityNotFoundError
from taskboard.models import KanbanColumn, Task
from taskboard.service import BoardService


class TestMoveTask:
    """Tests for TaskWorkflowEngine.move_task."""

    def test_move_to_global_column_keeps_project(
        self, service: BoardService, make_task: Callable[..., Task]
    ) -> None:
        task = make_task(project_id="p1")

        moved = service.move_task(task.id, "in_progress")

        assert moved.status == "in_progress"
        assert moved.project_id == "p1"

    def test_move_to_scoped_column_refiles(
        self,
        service: BoardService,
        make_task: Callable[..., Task],
        make_column: Callable[..., KanbanColumn],
    ) -> None:
        """Status and project change together."""
        review = make_column("Review", project_id="p2")
        task = make_task(project_id="p1")

        moved = service.move_task(task.id, review.id)

        assert moved.status == review.id
        assert moved.project_id == "p2"
        stored = service.get_task(task.id)
        assert stored is not None
        assert (stored.status, stored.project_id) == (review.id, "p2")

    def test_unassigned_task_adopts_project(
        self,
        service: BoardService,
        make_task: Callable[..., Task],
        make_column: Callable[..., KanbanColumn],
    ) -> None:
        review = make_column("Review", project_id="p3")
        task = make_task()
        assert task.project_id is None

        assert service.move_task(task.id, review.id).project_id == "p3"

    def test_appends_to_destination_bucket(
        self, service: BoardService, make_task: Callable[..., Task]
    ) -> None:
        make_task(status="in_progress")
        make_task(status="in_progress")
        task = make_task()

        moved = service.move_task(task.id, "in_progress")

        assert moved.position == 2
        positions = [t.position for t in service.tasks.list_by_status("in_progress")]
        assert positions == [0, 1, 2]

    def test_same_column_keeps_position(
        self, service: BoardService, make_task: Callable[..., Task]
    ) -> None:
        make_task()
        task = make_task()
        make_task()

        moved = service.move_task(task.id, "todo")

        assert moved.position == task.position == 1

    def test_updates_timestamp(
        self, service: BoardService, make_task: Callable[..., Task]
    ) -> None:
        task = make_task()
        moved = service.move_task(task.id, "done")
        assert moved.updated_at is not None
        assert task.updated_at is not None
        assert moved.updated_at >= task.updated_at

    def test_missing_task(self, service: BoardService) -> None:
        with pytest.raises(EntityNotFoundError):
            service.move_task("ghost", "done")

    def test_missing_column_changes_nothing(
        self, service: BoardService, make_task: Callable[..., Task]
    ) -> None:
        task = make_task(project_id="p1")

        with pytest.raises(EntityNotFoundError):
            service.move_task(task.id, "nope")

        stored = service.get_task(task.id)
        assert stored == task

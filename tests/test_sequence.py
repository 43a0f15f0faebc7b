"""Tests for atomic task and column renumbering."""

from collections.abc import Callable
from typing import Any

import pytest

from taskboard.db import TransactionalStore
from taskboard.errors import EntityNotFoundError, ValidationError
from taskboard.models import KanbanColumn, Task
from taskboard.sequence import SequenceReorderer
from taskboard.service import BoardService


def _positions(service: BoardService, *tasks: Task) -> list[int]:
    return [service.get_task(t.id).position for t in tasks]  # type: ignore[union-attr]


@pytest.fixture
def trio(make_task: Callable[..., Task]) -> tuple[Task, Task, Task]:
    """Three todo tasks at positions 0, 1, 2."""
    return make_task("T1"), make_task("T2"), make_task("T3")


class TestReorderTasks:
    """Tests for SequenceReorderer.reorder_tasks."""

    def test_positions_follow_list(
        self, service: BoardService, trio: tuple[Task, Task, Task]
    ) -> None:
        t1, t2, t3 = trio

        service.reorder_tasks([t3.id, t1.id, t2.id])

        assert _positions(service, t3, t1, t2) == [0, 1, 2]

    def test_unknown_last_id_rolls_back(
        self, service: BoardService, trio: tuple[Task, Task, Task]
    ) -> None:
        t1, t2, t3 = trio

        with pytest.raises(EntityNotFoundError):
            service.reorder_tasks([t3.id, t1.id, "ghost"])

        assert _positions(service, t1, t2, t3) == [0, 1, 2]

    def test_injected_failure_rolls_back(
        self,
        service: BoardService,
        store: TransactionalStore,
        trio: tuple[Task, Task, Task],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """A storage failure on the last write leaves every position as it was."""
        t1, t2, t3 = trio
        original = store.execute
        calls = {"n": 0}

        def failing_execute(statement: Any, params: Any = None) -> int:
            calls["n"] += 1
            if calls["n"] == 3:
                raise RuntimeError("disk full")
            return original(statement, params)

        monkeypatch.setattr(store, "execute", failing_execute)

        with pytest.raises(RuntimeError, match="disk full"):
            service.reorder_tasks([t3.id, t1.id, t2.id])

        monkeypatch.undo()
        assert _positions(service, t1, t2, t3) == [0, 1, 2]

    def test_duplicate_ids(self, service: BoardService, trio: tuple[Task, Task, Task]) -> None:
        t1, _, _ = trio
        with pytest.raises(ValidationError):
            service.reorder_tasks([t1.id, t1.id])

    def test_empty_list_is_noop(self, service: BoardService, trio: tuple[Task, Task, Task]) -> None:
        service.reorder_tasks([])
        assert _positions(service, *trio) == [0, 1, 2]

    def test_with_status_moves_tasks(
        self, service: BoardService, trio: tuple[Task, Task, Task]
    ) -> None:
        t1, t2, _ = trio

        service.reorder_tasks([t2.id, t1.id], status="in_progress")

        bucket = service.tasks.list_by_status("in_progress")
        assert [(t.id, t.position) for t in bucket] == [(t2.id, 0), (t1.id, 1)]

    def test_with_scoped_status_refiles(
        self,
        service: BoardService,
        trio: tuple[Task, Task, Task],
        make_column: Callable[..., KanbanColumn],
    ) -> None:
        review = make_column("Review", project_id="p9")
        t1, _, _ = trio

        service.reorder_tasks([t1.id], status=review.id)

        moved = service.get_task(t1.id)
        assert moved is not None
        assert (moved.status, moved.project_id, moved.position) == (review.id, "p9", 0)

    def test_unknown_status(self, service: BoardService, trio: tuple[Task, Task, Task]) -> None:
        t1, _, _ = trio
        with pytest.raises(EntityNotFoundError):
            service.reorder_tasks([t1.id], status="nope")
        assert service.get_task(t1.id).status == "todo"  # type: ignore[union-attr]

    def test_other_buckets_untouched(
        self,
        service: BoardService,
        trio: tuple[Task, Task, Task],
        make_task: Callable[..., Task],
    ) -> None:
        """Per-bucket sequencing: only the listed ids are renumbered."""
        other = make_task(status="done")
        t1, t2, t3 = trio

        service.reorder_tasks([t2.id, t3.id, t1.id])

        assert service.get_task(other.id).position == 0  # type: ignore[union-attr]


class TestReorderColumnsDirect:
    """Tests for SequenceReorderer.reorder_columns used on its own."""

    def test_writes_single_context(self, store: TransactionalStore, service: BoardService) -> None:
        SequenceReorderer(store).reorder_columns(["done", "todo"], project_id="p1")

        p1 = [c.id for c in service.resolve_columns("p1")]
        assert p1[0] == "done"
        assert [c.id for c in service.resolve_columns()][0] == "todo"

    def test_unknown_column_writes_nothing(
        self, store: TransactionalStore, service: BoardService
    ) -> None:
        with pytest.raises(EntityNotFoundError):
            SequenceReorderer(store).reorder_columns(["done", "ghost"], project_id="p1")
        assert [c.id for c in service.resolve_columns("p1")][0] == "todo"

"""Pytest fixtures for taskboard tests.

This module provides:
- engine: a fresh in-memory SQLite engine per test, schema created and
  default columns (todo, in_progress, on_hold, done) seeded
- store / service: the transactional store and the wired board service
- Factory fixtures: make_task, make_column

Usage:
    def test_something(service, make_task):
        task = make_task(title="Write docs", status="in_progress")
        service.move_task(task.id, "done")
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
import structlog
from sqlalchemy import Engine

from taskboard.config import BoardConfig
from taskboard.db import TransactionalStore, close_engine, create_board_engine, init_db
from taskboard.models import ColumnCreate, KanbanColumn, Task, TaskCreate
from taskboard.service import BoardService


@pytest.fixture
def settings() -> BoardConfig:
    return BoardConfig(_env_file=None, database_url="sqlite://")  # type: ignore[call-arg]


@pytest.fixture
def engine(settings: BoardConfig) -> Iterator[Engine]:
    engine = create_board_engine(settings)
    init_db(engine, seed=True)
    yield engine
    close_engine(engine)


@pytest.fixture
def store(engine: Engine) -> TransactionalStore:
    return TransactionalStore(engine)


@pytest.fixture
def service(store: TransactionalStore) -> BoardService:
    return BoardService(store)


@pytest.fixture
def make_task(service: BoardService) -> Callable[..., Task]:
    """Factory creating tasks through the service."""
    counter = {"n": 0}

    def _make(
        title: str | None = None,
        status: str = "todo",
        project_id: str | None = None,
    ) -> Task:
        counter["n"] += 1
        return service.create_task(
            TaskCreate(
                title=title or f"Task {counter['n']}",
                status=status,
                project_id=project_id,
            )
        )

    return _make


@pytest.fixture
def make_column(service: BoardService) -> Callable[..., KanbanColumn]:
    """Factory creating columns through the service."""

    def _make(
        name: str,
        project_id: str | None = None,
        for_project_id: str | None = None,
    ) -> KanbanColumn:
        return service.create_column(
            ColumnCreate(name=name, project_id=project_id), for_project_id=for_project_id
        )

    return _make


@pytest.fixture
def reset_logging() -> Iterator[None]:
    """Restore structlog defaults after a test that configures logging."""
    yield
    structlog.reset_defaults()

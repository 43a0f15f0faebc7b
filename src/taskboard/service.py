"""Board service - one entry point over every engine component.

Construct it explicitly and pass it to whatever needs the board:

    service = BoardService.from_config()
    todo = service.resolve_columns(project_id="proj-1")
    service.move_task(task_id, "done")

All components share the service's store, so an operation on one component
can run inside a transaction opened by another.
"""

from collections.abc import Sequence

from sqlalchemy import Engine

from taskboard.columns.manager import ColumnManager
from taskboard.columns.ordering import ColumnOrderResolver
from taskboard.config import BoardConfig, config
from taskboard.db.connection import create_board_engine, init_db
from taskboard.db.store import TransactionalStore
from taskboard.logging import configure_logging, get_logger
from taskboard.models.columns import ColumnCreate, ColumnUpdate, KanbanColumn
from taskboard.models.dependencies import Dependency, DependencyType
from taskboard.models.tasks import Task, TaskCreate
from taskboard.sequence import SequenceReorderer
from taskboard.tasks.dependencies import DependencyGraph, TaskOrderResult
from taskboard.tasks.manager import TaskManager
from taskboard.tasks.workflow import TaskWorkflowEngine

log = get_logger(__name__)


class BoardService:
    """Wires the store, column, task, dependency and ordering components together."""

    def __init__(self, store: TransactionalStore) -> None:
        self.store = store
        self.resolver = ColumnOrderResolver(store)
        self.reorderer = SequenceReorderer(store)
        self.columns = ColumnManager(store, self.resolver, self.reorderer)
        self.tasks = TaskManager(store)
        self.dependencies = DependencyGraph(store)
        self.workflow = TaskWorkflowEngine(store)

    @classmethod
    def from_engine(cls, engine: Engine) -> "BoardService":
        return cls(TransactionalStore(engine))

    @classmethod
    def from_config(
        cls, settings: BoardConfig | None = None, *, initialize: bool = True
    ) -> "BoardService":
        """Build a service from settings.

        Applies the logging settings, creates the engine and, unless
        ``initialize`` is False, creates the tables and seeds the defaults.
        """
        if settings is None:
            settings = config
        configure_logging(level=settings.log_level, json_output=settings.log_json)

        engine = create_board_engine(settings)
        if initialize:
            init_db(engine, seed=settings.seed_default_columns)
        return cls.from_engine(engine)

    # -------------------------------------------------------------------------
    # Columns
    # -------------------------------------------------------------------------

    def resolve_columns(self, project_id: str | None = None) -> list[KanbanColumn]:
        return self.columns.resolve(project_id)

    def create_column(
        self, data: ColumnCreate, for_project_id: str | None = None
    ) -> KanbanColumn:
        return self.columns.create(data, for_project_id)

    def update_column(self, column_id: str, data: ColumnUpdate) -> KanbanColumn:
        return self.columns.update(column_id, data)

    def delete_column(self, column_id: str, target_column_id: str | None = None) -> None:
        self.columns.delete(column_id, target_column_id)

    def delete_column_with_migration(self, column_id: str, target_column_id: str) -> int:
        return self.columns.delete_with_migration(column_id, target_column_id)

    def reorder_columns(self, column_ids: Sequence[str], project_id: str | None = None) -> None:
        self.reorderer.reorder_columns(column_ids, project_id)

    def task_count_by_column(self, column_id: str) -> int:
        return self.columns.task_count(column_id)

    # -------------------------------------------------------------------------
    # Tasks
    # -------------------------------------------------------------------------

    def create_task(self, data: TaskCreate) -> Task:
        return self.tasks.create(data)

    def get_task(self, task_id: str) -> Task | None:
        return self.tasks.get(task_id)

    def move_task(self, task_id: str, status: str) -> Task:
        return self.workflow.move_task(task_id, status)

    def reorder_tasks(self, task_ids: Sequence[str], status: str | None = None) -> None:
        self.reorderer.reorder_tasks(task_ids, status)

    def delete_task(self, task_id: str) -> int:
        """Delete a task together with every dependency edge touching it.

        Returns:
            Number of dependency edges removed
        """
        with self.store.transaction():
            self.tasks.require(task_id)
            removed = self.dependencies.delete_all_for_task(task_id)
            self.tasks.delete(task_id)

        log.info("Task removed from board", task_id=task_id, edges_removed=removed)
        return removed

    # -------------------------------------------------------------------------
    # Dependencies
    # -------------------------------------------------------------------------

    def create_dependency(
        self,
        predecessor_id: str,
        successor_id: str,
        dependency_type: DependencyType | str = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
    ) -> Dependency:
        return self.dependencies.create_edge(
            predecessor_id, successor_id, dependency_type, lag_days
        )

    def delete_dependency(self, edge_id: str) -> None:
        self.dependencies.delete_edge(edge_id)

    def dependencies_for_task(self, task_id: str) -> list[Dependency]:
        return self.dependencies.list_for_task(task_id)

    def suggest_task_order(self, task_ids: Sequence[str] | None = None) -> TaskOrderResult:
        return self.dependencies.suggest_order(task_ids)

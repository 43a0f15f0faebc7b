"""Task dependency graph with cycle prevention.

Edges point from predecessor to successor. The edge set is kept a DAG:
inserting ``predecessor -> successor`` closes a cycle exactly when the
predecessor is already reachable from the successor, so every insertion
first walks the graph breadth-first from the successor.
"""

import uuid
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import delete, insert, or_, select

from taskboard.db.models import dependencies, tasks, utcnow_naive
from taskboard.db.store import TransactionalStore
from taskboard.errors import (
    CircularDependencyError,
    DuplicateDependencyError,
    EntityNotFoundError,
    SelfDependencyError,
    ValidationError,
)
from taskboard.logging import get_logger
from taskboard.models.dependencies import Dependency, DependencyType

log = get_logger(__name__)


@dataclass
class TaskOrderResult:
    """Result of topological sort."""

    ordered_tasks: list[str]  # Task IDs, predecessors first
    unordered_tasks: list[str] = field(default_factory=list)  # Tasks that could not be placed
    warnings: list[str] = field(default_factory=list)


def row_to_dependency(row: dict[str, Any]) -> Dependency:
    return Dependency(
        id=row["id"],
        predecessor_id=row["predecessor_id"],
        successor_id=row["successor_id"],
        dependency_type=DependencyType(row["dependency_type"]),
        lag_days=row["lag_days"],
        created_at=row["created_at"],
    )


class DependencyGraph:
    """Validates and mutates the predecessor -> successor task graph."""

    def __init__(self, store: TransactionalStore) -> None:
        self._store = store

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get(self, edge_id: str) -> Dependency | None:
        row = self._store.query_one(select(dependencies).where(dependencies.c.id == edge_id))
        return row_to_dependency(row) if row is not None else None

    def list_all(self) -> list[Dependency]:
        rows = self._store.query_many(
            select(dependencies).order_by(dependencies.c.created_at, dependencies.c.id)
        )
        return [row_to_dependency(row) for row in rows]

    def list_for_task(self, task_id: str) -> list[Dependency]:
        """Edges where the task is either the predecessor or the successor."""
        rows = self._store.query_many(
            select(dependencies)
            .where(
                or_(
                    dependencies.c.predecessor_id == task_id,
                    dependencies.c.successor_id == task_id,
                )
            )
            .order_by(dependencies.c.created_at, dependencies.c.id)
        )
        return [row_to_dependency(row) for row in rows]

    def predecessors(self, task_id: str) -> list[str]:
        """Tasks this task waits on."""
        rows = self._store.query_many(
            select(dependencies.c.predecessor_id).where(dependencies.c.successor_id == task_id)
        )
        return sorted(row["predecessor_id"] for row in rows)

    def successors(self, task_id: str) -> list[str]:
        """Tasks waiting on this task."""
        rows = self._store.query_many(
            select(dependencies.c.successor_id).where(dependencies.c.predecessor_id == task_id)
        )
        return sorted(row["successor_id"] for row in rows)

    def would_create_cycle(self, predecessor_id: str, successor_id: str) -> bool:
        """Check whether adding ``predecessor -> successor`` would close a cycle.

        Breadth-first search from the successor along existing edges; the
        edge is unsafe if the predecessor is reachable.
        """
        if predecessor_id == successor_id:
            return True

        graph = self._adjacency()
        visited: set[str] = set()
        queue: deque[str] = deque([successor_id])

        while queue:
            current = queue.popleft()
            if current == predecessor_id:
                return True
            if current in visited:
                continue
            visited.add(current)
            queue.extend(n for n in graph.get(current, ()) if n not in visited)

        return False

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create_edge(
        self,
        predecessor_id: str,
        successor_id: str,
        dependency_type: DependencyType | str = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
    ) -> Dependency:
        """Add a dependency edge.

        Args:
            predecessor_id: Task that must come first
            successor_id: Task that depends on the predecessor
            dependency_type: Temporal relation between the two
            lag_days: Delay between the two ends

        Returns:
            The stored edge

        Raises:
            SelfDependencyError: If both ids are the same task
            ValidationError: If the dependency type is not a known kind
            EntityNotFoundError: If either task does not exist
            DuplicateDependencyError: If the same ordered pair already exists
            CircularDependencyError: If the edge would close a cycle
        """
        if predecessor_id == successor_id:
            raise SelfDependencyError(predecessor_id)

        try:
            kind = DependencyType(dependency_type)
        except ValueError as e:
            raise ValidationError(
                f"Unknown dependency type: {dependency_type}",
                details={"dependency_type": str(dependency_type)},
            ) from e

        edge_id = str(uuid.uuid4())
        with self._store.transaction():
            self._require_tasks(predecessor_id, successor_id)

            existing = self._store.scalar(
                select(dependencies.c.id).where(
                    dependencies.c.predecessor_id == predecessor_id,
                    dependencies.c.successor_id == successor_id,
                )
            )
            if existing is not None:
                raise DuplicateDependencyError(predecessor_id, successor_id)

            if self.would_create_cycle(predecessor_id, successor_id):
                log.info(
                    "Dependency rejected",
                    predecessor_id=predecessor_id,
                    successor_id=successor_id,
                    reason="cycle",
                )
                raise CircularDependencyError(predecessor_id, successor_id)

            self._store.execute(
                insert(dependencies).values(
                    id=edge_id,
                    predecessor_id=predecessor_id,
                    successor_id=successor_id,
                    dependency_type=kind.value,
                    lag_days=lag_days,
                    created_at=utcnow_naive(),
                )
            )

        log.info(
            "Dependency created",
            edge_id=edge_id,
            predecessor_id=predecessor_id,
            successor_id=successor_id,
            dependency_type=kind.value,
        )
        edge = self.get(edge_id)
        if edge is None:
            raise EntityNotFoundError("Dependency", edge_id)
        return edge

    def delete_edge(self, edge_id: str) -> None:
        """Remove one edge.

        Raises:
            EntityNotFoundError: If the edge does not exist
        """
        with self._store.transaction():
            removed = self._store.execute(delete(dependencies).where(dependencies.c.id == edge_id))
            if removed == 0:
                raise EntityNotFoundError("Dependency", edge_id)

        log.info("Dependency deleted", edge_id=edge_id)

    def delete_all_for_task(self, task_id: str) -> int:
        """Remove every edge touching a task, before the task itself is removed.

        Only the task's own edges go; no edge is added between its former
        predecessors and successors.

        Returns:
            Number of edges removed
        """
        removed = self._store.execute(
            delete(dependencies).where(
                or_(
                    dependencies.c.predecessor_id == task_id,
                    dependencies.c.successor_id == task_id,
                )
            )
        )
        log.info("Dependencies removed for task", task_id=task_id, count=removed)
        return removed

    # -------------------------------------------------------------------------
    # Ordering
    # -------------------------------------------------------------------------

    def suggest_order(self, task_ids: Iterable[str] | None = None) -> TaskOrderResult:
        """Suggest an execution order using topological sort.

        Predecessors come before their successors; ties go to the lower task
        position, then the task id. Tasks that cannot be placed are reported
        separately.

        Args:
            task_ids: Restrict the ordering to these tasks (default: every task)

        Returns:
            TaskOrderResult with ordered task IDs
        """
        stmt = select(tasks.c.id, tasks.c.position)
        if task_ids is not None:
            stmt = stmt.where(tasks.c.id.in_(list(task_ids)))
        rank = {row["id"]: (row["position"], row["id"]) for row in self._store.query_many(stmt)}

        graph: dict[str, list[str]] = {task_id: [] for task_id in rank}
        in_degree: dict[str, int] = dict.fromkeys(rank, 0)
        for predecessor_id, successor_ids in self._adjacency().items():
            if predecessor_id not in rank:
                continue
            for successor_id in successor_ids:
                if successor_id in rank:
                    graph[predecessor_id].append(successor_id)
                    in_degree[successor_id] += 1

        # Kahn's algorithm
        ready = sorted((t for t, degree in in_degree.items() if degree == 0), key=rank.__getitem__)
        ordered: list[str] = []
        while ready:
            task_id = ready.pop(0)
            ordered.append(task_id)
            for successor_id in graph[task_id]:
                in_degree[successor_id] -= 1
                if in_degree[successor_id] == 0:
                    ready.append(successor_id)
                    ready.sort(key=rank.__getitem__)

        placed = set(ordered)
        unordered = sorted((t for t in rank if t not in placed), key=rank.__getitem__)
        warnings: list[str] = []
        if unordered:
            warnings.append(
                f"{len(unordered)} task(s) could not be ordered due to circular dependencies"
            )

        log.debug("Task order suggested", ordered=len(ordered), unordered=len(unordered))
        return TaskOrderResult(ordered_tasks=ordered, unordered_tasks=unordered, warnings=warnings)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _adjacency(self) -> dict[str, list[str]]:
        """Successor lists for every predecessor, loaded in one query."""
        graph: dict[str, list[str]] = {}
        rows = self._store.query_many(
            select(dependencies.c.predecessor_id, dependencies.c.successor_id)
        )
        for row in rows:
            graph.setdefault(row["predecessor_id"], []).append(row["successor_id"])
        return graph

    def _require_tasks(self, *task_ids: str) -> None:
        found = {
            row["id"]
            for row in self._store.query_many(select(tasks.c.id).where(tasks.c.id.in_(task_ids)))
        }
        for task_id in task_ids:
            if task_id not in found:
                raise EntityNotFoundError("Task", task_id)

"""Core exceptions for taskboard operations."""


class TaskboardError(Exception):
    """Base exception for all taskboard errors."""

    def __init__(self, message: str, *, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(TaskboardError):
    """Raised when input validation fails."""


class SelfDependencyError(ValidationError):
    """Raised when a task is made to depend on itself."""

    def __init__(self, task_id: str) -> None:
        super().__init__(
            f"A task cannot depend on itself: {task_id}",
            details={"task_id": task_id},
        )


class DuplicateDependencyError(ValidationError):
    """Raised when the exact predecessor/successor pair already exists."""

    def __init__(self, predecessor_id: str, successor_id: str) -> None:
        super().__init__(
            f"Dependency already exists: {predecessor_id} -> {successor_id}",
            details={"predecessor_id": predecessor_id, "successor_id": successor_id},
        )


class CircularDependencyError(TaskboardError):
    """Raised when a new dependency edge would close a cycle."""

    def __init__(self, predecessor_id: str, successor_id: str) -> None:
        super().__init__(
            f"Cannot create dependency {predecessor_id} -> {successor_id}: "
            "would create a circular dependency",
            details={"predecessor_id": predecessor_id, "successor_id": successor_id},
        )


class ProtectedEntityError(TaskboardError):
    """Raised when deleting an entity that must always exist."""

    def __init__(self, entity_type: str, identifier: str) -> None:
        super().__init__(
            f"{entity_type} is protected and cannot be deleted: {identifier}",
            details={"entity_type": entity_type, "identifier": identifier},
        )


class HasDependentsError(TaskboardError):
    """Raised when a column cannot be deleted because tasks still use it."""

    def __init__(self, column_id: str, task_count: int) -> None:
        super().__init__(
            f"Cannot delete column {column_id} with {task_count} task(s). "
            "Move or delete the tasks first, or pass a migration target.",
            details={"column_id": column_id, "task_count": task_count},
        )
        self.task_count = task_count


class EntityNotFoundError(TaskboardError):
    """Raised when a referenced column, task or dependency does not exist."""

    def __init__(self, entity_type: str, identifier: str) -> None:
        super().__init__(
            f"{entity_type} not found: {identifier}",
            details={"entity_type": entity_type, "identifier": identifier},
        )

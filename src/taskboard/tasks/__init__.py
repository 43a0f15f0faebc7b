"""Task management: rows, dependency graph and status transitions."""

from taskboard.tasks.dependencies import DependencyGraph, TaskOrderResult
from taskboard.tasks.manager import TaskManager
from taskboard.tasks.workflow import TaskWorkflowEngine

__all__ = [
    "DependencyGraph",
    "TaskManager",
    "TaskOrderResult",
    "TaskWorkflowEngine",
]

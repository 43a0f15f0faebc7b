"""
taskboard: ordering and dependency-consistency engine for a multi-view task board.

This package provides:
- Per-context column ordering (global and project-scoped columns)
- Column lifecycle with essential-column protection and task migration
- An acyclic task dependency graph
- Atomic task moves and reorders over a transactional SQL store
"""

from taskboard._version import __version__, get_version
from taskboard.config import BoardConfig, config
from taskboard.errors import (
    CircularDependencyError,
    DuplicateDependencyError,
    EntityNotFoundError,
    HasDependentsError,
    ProtectedEntityError,
    SelfDependencyError,
    TaskboardError,
    ValidationError,
)
from taskboard.service import BoardService

__all__ = [
    # Service
    "BoardService",
    # Config
    "BoardConfig",
    "config",
    # Errors
    "CircularDependencyError",
    "DuplicateDependencyError",
    "EntityNotFoundError",
    "HasDependentsError",
    "ProtectedEntityError",
    "SelfDependencyError",
    "TaskboardError",
    "ValidationError",
    # Version
    "__version__",
    "get_version",
]

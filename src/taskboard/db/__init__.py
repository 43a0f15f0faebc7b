"""Board storage - SQLModel schema, engine setup and the transactional store.

Usage:
    from taskboard.db import TransactionalStore, create_board_engine, init_db

    engine = create_board_engine()
    init_db(engine)
    store = TransactionalStore(engine)

    with store.transaction():
        store.execute(...)
"""

from taskboard.db.connection import (
    close_engine,
    create_board_engine,
    init_db,
    seed_default_columns,
)
from taskboard.db.models import (
    ColumnOrderRecord,
    ColumnRecord,
    DependencyRecord,
    TaskRecord,
    column_order,
    dependencies,
    kanban_columns,
    tasks,
    utcnow_naive,
)
from taskboard.db.store import TransactionalStore

__all__ = [
    # Connection
    "close_engine",
    "create_board_engine",
    "init_db",
    "seed_default_columns",
    # Store
    "TransactionalStore",
    # Records
    "ColumnOrderRecord",
    "ColumnRecord",
    "DependencyRecord",
    "TaskRecord",
    # Tables
    "column_order",
    "dependencies",
    "kanban_columns",
    "tasks",
    "utcnow_naive",
]

"""Engine construction and schema bootstrap.

Provides a synchronous SQLAlchemy engine for the configured URL and
``init_db``, which creates the SQLModel tables and seeds the default
workflow columns.
"""

from typing import Any

from sqlalchemy import Engine, create_engine, event, func, insert, select
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from taskboard.config import BoardConfig, config
from taskboard.db.models import kanban_columns, utcnow_naive
from taskboard.logging import get_logger
from taskboard.models.columns import DEFAULT_COLUMNS

log = get_logger(__name__)

# =============================================================================
# Engine Configuration
# =============================================================================


def create_board_engine(settings: BoardConfig | None = None) -> Engine:
    """Create the engine for the board store.

    SQLite engines enforce foreign keys (order rows and dependency edges
    cascade with their owners) and emit ``BEGIN`` explicitly so a rollback
    covers reads and writes alike. In-memory SQLite shares a single
    connection so every caller sees the same database.
    """
    settings = settings or config
    kwargs: dict[str, Any] = {"echo": settings.database_echo}

    if settings.is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if settings.is_memory_database:
            kwargs["poolclass"] = StaticPool

    engine = create_engine(settings.database_url, **kwargs)

    if settings.is_sqlite:
        _install_sqlite_hooks(engine)

    log.debug("Engine created", url=engine.url.render_as_string(hide_password=True))
    return engine


def _install_sqlite_hooks(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection: Any, _record: Any) -> None:
        # Let SQLAlchemy, not pysqlite, decide where transactions begin
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


# =============================================================================
# Schema Bootstrap
# =============================================================================


def init_db(engine: Engine, *, seed: bool | None = None) -> None:
    """Create all board tables if they don't exist.

    Args:
        engine: Engine from :func:`create_board_engine`
        seed: Insert the default columns (defaults to ``config.seed_default_columns``)
    """
    SQLModel.metadata.create_all(engine)
    log.info("Database tables initialized")

    should_seed = config.seed_default_columns if seed is None else seed
    if should_seed:
        seed_default_columns(engine)


def seed_default_columns(engine: Engine) -> int:
    """Insert the default global columns that are not present yet.

    Returns:
        Number of columns inserted
    """
    inserted = 0
    with engine.begin() as conn:
        existing = set(conn.execute(select(kanban_columns.c.id)).scalars())
        max_order = conn.execute(select(func.max(kanban_columns.c.base_order))).scalar()
        next_order = 0 if max_order is None else max_order + 1

        for column_id, name, color in DEFAULT_COLUMNS:
            if column_id in existing:
                continue
            now = utcnow_naive()
            conn.execute(
                insert(kanban_columns).values(
                    id=column_id,
                    project_id=None,
                    name=name,
                    color=color,
                    base_order=next_order,
                    is_default=True,
                    created_at=now,
                    updated_at=now,
                )
            )
            next_order += 1
            inserted += 1

    if inserted:
        log.info("Seeded default columns", count=inserted)
    return inserted


def close_engine(engine: Engine) -> None:
    """Dispose of pooled connections. Call at application shutdown."""
    engine.dispose()
    log.info("Database connections closed")

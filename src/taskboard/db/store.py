"""Transactional statement store.

Every multi-step engine operation runs inside :meth:`TransactionalStore.transaction`,
so its writes commit together or not at all.
"""

import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any, TypeVar

from sqlalchemy import Connection, Engine, Executable, text

from taskboard.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")

Statement = Executable | str
Params = Mapping[str, Any] | None


def _coerce(statement: Statement) -> Executable:
    return text(statement) if isinstance(statement, str) else statement


def _bind(params: Params) -> dict[str, Any] | None:
    return dict(params) if params else None


class TransactionalStore:
    """Statement execution over one SQLAlchemy engine.

    Outside a transaction each call runs in its own short transaction.
    Inside :meth:`transaction`, all calls from the same thread share one
    connection; other threads keep their own connections and only ever see
    committed state. A nested ``transaction()`` joins the enclosing one as a
    savepoint: a failing inner block is undone on its own, and only the
    outermost block commits.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._local = threading.local()

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def in_transaction(self) -> bool:
        """Whether the calling thread has a transaction open on this store."""
        return self._connection is not None

    @property
    def _connection(self) -> Connection | None:
        return getattr(self._local, "connection", None)

    @_connection.setter
    def _connection(self, conn: Connection | None) -> None:
        self._local.connection = conn

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator["TransactionalStore"]:
        """Group every statement issued in the block into one unit.

        Usage:
            with store.transaction():
                store.execute(update(tasks).values(status="done"))
                store.execute(delete(kanban_columns).where(...))

        Yields:
            The store itself; commits on success, rolls back and re-raises on
            any exception.
        """
        if self._connection is not None:
            savepoint = self._connection.begin_nested()
            try:
                yield self
            except Exception:
                savepoint.rollback()
                raise
            else:
                savepoint.commit()
            return

        with self._engine.connect() as conn:
            trans = conn.begin()
            self._connection = conn
            try:
                yield self
            except Exception as e:
                trans.rollback()
                log.warning("Transaction rolled back", error=type(e).__name__)
                raise
            else:
                trans.commit()
            finally:
                self._connection = None

    def run_in_transaction(self, fn: Callable[["TransactionalStore"], T]) -> T:
        """Run ``fn(store)`` in one transaction and return its result."""
        with self.transaction():
            return fn(self)

    @contextmanager
    def _connect(self) -> Iterator[Connection]:
        if self._connection is not None:
            yield self._connection
        else:
            with self._engine.begin() as conn:
                yield conn

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def execute(self, statement: Statement, params: Params = None) -> int:
        """Execute a write statement.

        Returns:
            Number of rows matched by the statement
        """
        with self._connect() as conn:
            result = conn.execute(_coerce(statement), _bind(params))
            return result.rowcount

    def query_one(self, statement: Statement, params: Params = None) -> dict[str, Any] | None:
        """Execute a query and return the first row as a dict, or None."""
        with self._connect() as conn:
            row = conn.execute(_coerce(statement), _bind(params)).mappings().first()
            return dict(row) if row is not None else None

    def query_many(self, statement: Statement, params: Params = None) -> list[dict[str, Any]]:
        """Execute a query and return every row as a dict."""
        with self._connect() as conn:
            rows = conn.execute(_coerce(statement), _bind(params)).mappings().all()
            return [dict(row) for row in rows]

    def scalar(self, statement: Statement, params: Params = None) -> Any:
        """Execute a query and return the first column of the first row."""
        with self._connect() as conn:
            return conn.execute(_coerce(statement), _bind(params)).scalar()

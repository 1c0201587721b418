"""SQLAlchemy engine and transaction scopes over SQLite.

Every transaction runs on its own connection and ``Session``. Writable
transactions open with ``BEGIN IMMEDIATE``, so SQLite serializes writers
across threads *and* processes while WAL mode keeps readers unblocked.
Read-only transactions use a deferred ``BEGIN`` and read one consistent
snapshot.

Optimistic locking lives in the repositories (``UPDATE ... WHERE
version = :expected``); a writer that waits past the busy timeout gets a
``ConcurrencyConflictError``. A commit is a single SQLite commit, so it
either applies every write or none.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool

from trading.domain.exceptions import (
    ConcurrencyConflictError,
    IntegrityViolationError,
)
from trading.domain.repository.transaction_manager import TransactionManager
from trading.infrastructure.persistence.models import Base

logger = logging.getLogger(__name__)

DEFAULT_BUSY_TIMEOUT = 30.0

# Execution option carried by the connection into the ``begin`` hook.
_READ_ONLY = "trading_read_only"


def sqlite_url(path: Path) -> str:
    return f"sqlite:///{path}"


def create_sqlite_engine(url: str, busy_timeout: float = DEFAULT_BUSY_TIMEOUT) -> Engine:
    """Create an engine whose transactions are started by us, not by sqlite3.

    Connections are not pooled: each transaction opens its own, which is
    what short-lived CLI processes and tests want.
    """
    engine = create_engine(
        url,
        poolclass=NullPool,
        connect_args={"timeout": busy_timeout, "check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Stop the driver from emitting its own BEGIN/COMMIT.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        if conn.get_execution_options().get(_READ_ONLY, False):
            conn.exec_driver_sql("BEGIN")
        else:
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def _is_busy(exc: OperationalError) -> bool:
    message = str(exc.orig).lower()
    return "locked" in message or "busy" in message


class Database(TransactionManager):
    """Transaction manager over one SQLite database file.

    The active session is tracked per thread, so repositories called
    inside ``begin()`` join it and statements issued outside any
    transaction run in their own (autocommit).
    """

    def __init__(self, url: str, busy_timeout: float = DEFAULT_BUSY_TIMEOUT) -> None:
        self._engine = create_sqlite_engine(url, busy_timeout)
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        self._local = threading.local()
        Base.metadata.create_all(self._engine)
        logger.debug("Opened database %s", url)

    @property
    def engine(self) -> Engine:
        return self._engine

    # --- TransactionManager interface -----------------------------------------

    @contextmanager
    def begin(self, read_only: bool = False) -> Iterator[Session]:
        current = self.current()
        if current is not None:
            if current.info[_READ_ONLY] and not read_only:
                raise IntegrityViolationError(
                    "Cannot open a writable scope inside a read-only transaction"
                )
            yield current
            return

        session = self._session_factory()
        session.info[_READ_ONLY] = read_only
        self._local.session = session
        try:
            # Procuring the connection emits BEGIN right away.
            session.connection(execution_options={_READ_ONLY: read_only})
            yield session
            session.commit()
        except OperationalError as exc:
            session.rollback()
            if _is_busy(exc):
                logger.warning("Database busy, transaction abandoned: %s", exc.orig)
                raise ConcurrencyConflictError(
                    "Database is busy with a concurrent writer; retry the request"
                ) from exc
            raise
        except BaseException:
            session.rollback()
            logger.debug("Transaction rolled back")
            raise
        finally:
            self._local.session = None
            session.close()

    def current(self) -> Session | None:
        return getattr(self._local, "session", None)

    # --- Statement scope (used by repositories) -------------------------------

    @contextmanager
    def session(self, write: bool = False) -> Iterator[Session]:
        """Join the active transaction, or run in a transaction of its own."""
        current = self.current()
        if current is None:
            with self.begin(read_only=not write) as session:
                yield session
            return
        if write and current.info[_READ_ONLY]:
            raise IntegrityViolationError("Cannot write inside a read-only transaction")
        yield current

    def dispose(self) -> None:
        self._engine.dispose()

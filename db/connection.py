"""
db/connection.py
----------------
Connection providers handed to the data-access layer.

A provider lends short-lived DB-API connections through ``acquire()`` and
takes them back through ``release()``. It also advertises the driver's
``paramstyle`` so statements can use the right positional marker.

- PoolConnectionProvider: PostgreSQL, backed by psycopg2's ThreadedConnectionPool.
- SQLiteConnectionProvider: SQLite file or shared in-memory database.
"""

import sqlite3
import threading
from typing import Optional, Protocol

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from db.errors import ProviderError
from utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionProvider(Protocol):
    """What the data-access layer needs from a connection source."""

    paramstyle: str

    def acquire(self):
        ...

    def release(self, conn) -> None:
        ...


class PoolConnectionProvider:
    """Lends connections from a psycopg2 pool shared between threads."""

    paramstyle = "format"

    def __init__(
        self,
        dsn: str = DATABASE_URL,
        min_conn: int = DB_POOL_MIN,
        max_conn: int = DB_POOL_MAX,
    ):
        self._dsn = dsn
        self._min_conn = min_conn
        self._max_conn = max_conn
        self._pool: Optional[pool.ThreadedConnectionPool] = None
        self._lock = threading.Lock()

    def open(self) -> pool.ThreadedConnectionPool:
        """
        Initialize the database connection pool, once per provider.

        Returns:
            The pool, whether it was just created or already open.

        Raises:
            ProviderError: If the database is unreachable.
        """
        with self._lock:
            if self._pool is not None:
                return self._pool
            try:
                self._pool = pool.ThreadedConnectionPool(self._min_conn, self._max_conn, self._dsn)
                logger.info("Database connection pool initialized successfully.")
            except psycopg2.OperationalError as e:
                logger.error(f"Failed to initialize database pool: {e}")
                raise ProviderError(str(e)) from e
            return self._pool

    def acquire(self):
        """
        Get a connection from the pool, opening the pool on first use.

        Raises:
            ProviderError: If the pool is exhausted or closed.
        """
        active = self.open()
        try:
            return active.getconn()
        except pool.PoolError as e:
            raise ProviderError(str(e)) from e

    def release(self, conn) -> None:
        """Return a connection back to the pool."""
        if self._pool is not None:
            self._pool.putconn(conn)

    def close(self) -> None:
        """Close all connections in the pool."""
        with self._lock:
            if self._pool is None:
                return
            self._pool.closeall()
            self._pool = None
        logger.info("Database connection pool closed.")

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class SQLiteConnectionProvider:
    """
    Opens one sqlite3 connection per ``acquire()`` and closes it on ``release()``.

    ``memory_name`` selects a named shared in-memory database instead of a
    file; an anchor connection keeps it alive until ``close()``.
    """

    paramstyle = "qmark"

    def __init__(self, path: Optional[str] = None, memory_name: Optional[str] = None):
        if (path is None) == (memory_name is None):
            raise ValueError("Pass exactly one of path or memory_name.")
        self._anchor: Optional[sqlite3.Connection] = None
        if memory_name is not None:
            self._database = f"file:{memory_name}?mode=memory&cache=shared"
            self._uri = True
            self._anchor = sqlite3.connect(self._database, uri=True)
        else:
            self._database = path
            self._uri = False
        self._closed = False

    def acquire(self) -> sqlite3.Connection:
        if self._closed:
            raise ProviderError("Connection provider is closed.")
        try:
            return sqlite3.connect(self._database, uri=self._uri)
        except sqlite3.Error as e:
            raise ProviderError(str(e)) from e

    def release(self, conn: sqlite3.Connection) -> None:
        conn.close()

    def close(self) -> None:
        if self._anchor is not None:
            self._anchor.close()
            self._anchor = None
        self._closed = True

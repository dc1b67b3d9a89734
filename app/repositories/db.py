"""DuckDB connection management - bounded cursor pool with query deadlines."""

import threading
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol

import duckdb
from loguru import logger

from app.errors import PoolTimeoutError, QueryError
from settings import DB_ACQUIRE_TIMEOUT, DB_PATH, DB_POOL_SIZE, DB_QUERY_TIMEOUT

MEMORY = ":memory:"


class Database(Protocol):
    """What repositories need from the database engine."""

    def query(self, sql: str, params: Sequence[Any] | None = None) -> list[dict[str, Any]]: ...


def db_exists(path: str = DB_PATH) -> bool:
    """Check if database file exists."""
    return path == MEMORY or Path(path).exists()


class DuckDBPool:
    """Bounded pool of cursors over one shared DuckDB connection.

    At most ``size`` queries run concurrently; callers wait up to
    ``acquire_timeout`` seconds for a slot. Each statement is interrupted
    once it runs longer than ``query_timeout`` seconds.
    """

    def __init__(
        self,
        path: str = DB_PATH,
        size: int = DB_POOL_SIZE,
        query_timeout: float = DB_QUERY_TIMEOUT,
        acquire_timeout: float = DB_ACQUIRE_TIMEOUT,
        read_only: bool = True,
    ):
        self._path = path
        self._read_only = read_only and path != MEMORY
        self._size = max(1, size)
        self._query_timeout = query_timeout
        self._acquire_timeout = acquire_timeout
        self._conn: duckdb.DuckDBPyConnection | None = None
        self._lock = threading.Lock()
        self._slots = threading.BoundedSemaphore(self._size)
        logger.debug("DuckDBPool: path={}, size={}, read_only={}", path, self._size, self._read_only)

    @property
    def size(self) -> int:
        return self._size

    def _connection(self) -> duckdb.DuckDBPyConnection:
        with self._lock:
            if self._conn is None:
                if not db_exists(self._path):
                    logger.warning("DB not found: {}", self._path)
                try:
                    self._conn = duckdb.connect(self._path, read_only=self._read_only)
                except duckdb.Error as e:
                    raise QueryError(f"Cannot open database {self._path}: {e}") from e
                logger.debug("DB connected: {} (read_only={})", self._path, self._read_only)
            return self._conn

    def query(self, sql: str, params: Sequence[Any] | None = None) -> list[dict[str, Any]]:
        """Execute SQL with positional ($n) parameters and return rows as dicts."""
        if not self._slots.acquire(timeout=self._acquire_timeout):
            raise PoolTimeoutError(f"No database connection available within {self._acquire_timeout}s")
        try:
            cursor = self._connection().cursor()
            timer = threading.Timer(self._query_timeout, cursor.interrupt)
            timer.start()
            try:
                if params:
                    cursor.execute(sql, list(params))
                else:
                    cursor.execute(sql)
                columns = [d[0] for d in cursor.description or []]
                return [dict(zip(columns, row)) for row in cursor.fetchall()]
            except duckdb.InterruptException as e:
                raise QueryError(f"Query exceeded {self._query_timeout}s and was interrupted") from e
            except duckdb.Error as e:
                raise QueryError(str(e)) from e
            finally:
                timer.cancel()
                cursor.close()
        finally:
            self._slots.release()

    def close(self) -> None:
        """Close the shared connection."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.debug("DB connection closed")


_pool: DuckDBPool | None = None
_pool_lock = threading.Lock()


def get_db() -> DuckDBPool:
    """Get the process-wide pool (created on first use)."""
    global _pool
    with _pool_lock:
        if _pool is None:
            _pool = DuckDBPool()
        return _pool


def close_db() -> None:
    """Close the process-wide pool."""
    global _pool
    with _pool_lock:
        if _pool is not None:
            _pool.close()
            _pool = None

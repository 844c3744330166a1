"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.

A single ``Database`` instance is created by the entry point and handed to
every repository. Callers never touch a connection: they go through
``Database.execute``, which borrows a connection, runs one statement and
always gives the connection back.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Optional

import psycopg2
from psycopg2 import extras, pool

from config import (
    DATABASE_URL,
    DB_POOL_CLOSE_GRACE_SECONDS,
    DB_POOL_MAX,
    DB_POOL_MIN,
)
from utils.logger import get_logger

logger = get_logger(__name__)


class QueryError(Exception):
    """
    A statement failed. Carries the statement and its parameters so the
    failure can be diagnosed from the log or the API error body.
    """

    def __init__(self, statement: str, params: Optional[dict], cause: Exception):
        self.statement = statement
        self.params = params
        self.cause = cause
        super().__init__(str(cause).strip() or cause.__class__.__name__)


@dataclass
class QueryResult:
    """Rows (as dicts) returned by a statement, plus the affected-row count."""
    rows: list[dict] = field(default_factory=list)
    rowcount: int = 0

    def first(self) -> Optional[dict]:
        """Return the first row, or None for an empty result."""
        return self.rows[0] if self.rows else None


class Database:
    """Owns the connection pool for the lifetime of the process."""

    def __init__(
        self,
        dsn: str = DATABASE_URL,
        min_conn: int = DB_POOL_MIN,
        max_conn: int = DB_POOL_MAX,
        close_grace_seconds: float = DB_POOL_CLOSE_GRACE_SECONDS,
    ):
        self.dsn = dsn
        self.min_conn = min_conn
        self.max_conn = max_conn
        self.close_grace_seconds = close_grace_seconds
        self._pool: pool.ThreadedConnectionPool | None = None
        # ThreadedConnectionPool raises when exhausted; the semaphore makes callers wait instead.
        self._slots = threading.BoundedSemaphore(max_conn)
        self._in_flight = 0
        self._idle = threading.Condition()

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    # ── LIFECYCLE ─────────────────────────────────────────

    def initialize(self) -> bool:
        """
        Create the connection pool and run a smoke-test query.

        Calling this again while the pool is open does nothing.

        Returns:
            True once the pool exists.

        Raises:
            psycopg2.OperationalError: If the database is unreachable.
        """
        if self._pool is not None:
            return True
        try:
            self._pool = pool.ThreadedConnectionPool(self.min_conn, self.max_conn, self.dsn)
            logger.info(
                f"Database connection pool initialized (min={self.min_conn}, max={self.max_conn})."
            )
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise

        try:
            self.execute("SELECT 1 AS ok;")
            logger.info("Database connection test succeeded.")
        except QueryError as e:
            logger.warning(f"Database connection test failed, pool kept open: {e}")
        return True

    def close(self, grace_seconds: Optional[float] = None) -> None:
        """
        Close all connections in the pool.

        Waits up to ``grace_seconds`` for statements that are still running.
        """
        if self._pool is None:
            return
        grace = self.close_grace_seconds if grace_seconds is None else grace_seconds
        with self._idle:
            drained = self._idle.wait_for(lambda: self._in_flight == 0, timeout=grace)
        if not drained:
            logger.warning(
                f"Closing pool with {self._in_flight} statement(s) still running after {grace}s."
            )
        self._pool.closeall()
        self._pool = None
        logger.info("Database connection pool closed.")

    # ── EXECUTION ─────────────────────────────────────────

    def execute(
        self,
        statement: str,
        params: Optional[dict[str, Any]] = None,
        autocommit: bool = True,
    ) -> QueryResult:
        """
        Run one statement on a pooled connection.

        Args:
            statement: SQL with ``%(name)s`` placeholders.
            params: Values bound to the placeholders.
            autocommit: When False, commit explicitly on success and roll
                back on failure.

        Returns:
            A QueryResult with the fetched rows and the affected-row count.

        Raises:
            QueryError: Wrapping whatever the driver raised.
            RuntimeError: If the pool has not been initialized.
        """
        db_pool = self._pool
        if db_pool is None:
            raise RuntimeError("Database pool not initialized. Call initialize() first.")

        params = params or {}
        self._slots.acquire()
        with self._idle:
            self._in_flight += 1
        conn = None
        try:
            conn = db_pool.getconn()
            conn.autocommit = autocommit
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(statement, params or None)
                rows = [dict(r) for r in cur.fetchall()] if cur.description else []
                rowcount = cur.rowcount
            if not autocommit:
                conn.commit()
            return QueryResult(rows=rows, rowcount=rowcount)
        except Exception as e:
            if conn is not None and not autocommit:
                try:
                    conn.rollback()
                    logger.info("Transaction rolled back after failed statement.")
                except Exception as rollback_error:
                    logger.error(f"Rollback failed: {rollback_error}")
            logger.error(f"Query failed: {e} | SQL: {' '.join(statement.split())} | params: {params}")
            raise QueryError(statement, params, e) from e
        finally:
            if conn is not None:
                try:
                    db_pool.putconn(conn)
                except Exception as e:
                    logger.error(f"Failed to release connection back to pool: {e}")
            self._slots.release()
            with self._idle:
                self._in_flight -= 1
                self._idle.notify_all()

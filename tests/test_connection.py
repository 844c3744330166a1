from unittest.mock import MagicMock

import psycopg2
import pytest

from db import connection
from db.connection import Database, QueryError


def _cursor(rows=None, rowcount=None, description=True):
    cur = MagicMock()
    cur.fetchall.return_value = rows or []
    cur.rowcount = len(rows or []) if rowcount is None else rowcount
    cur.description = [("col",)] if description else None
    return cur


@pytest.fixture
def pg(monkeypatch):
    """Patch the psycopg2 pool with a mock handing out one mock connection."""
    conn = MagicMock()
    conn.cursor.return_value.__enter__.return_value = _cursor([{"ok": 1}])
    db_pool = MagicMock()
    db_pool.getconn.return_value = conn
    factory = MagicMock(return_value=db_pool)
    monkeypatch.setattr(connection.pool, "ThreadedConnectionPool", factory)
    return factory, db_pool, conn


@pytest.fixture
def db(pg):
    database = Database(dsn="postgresql://test", min_conn=1, max_conn=2, close_grace_seconds=0.1)
    database.initialize()
    return database


def _use_cursor(conn, cur):
    conn.cursor.return_value.__enter__.return_value = cur


def test_initialize_is_idempotent(pg):
    factory, _, _ = pg
    database = Database(dsn="postgresql://test", min_conn=1, max_conn=2)

    assert database.initialize() is True
    assert database.initialize() is True

    factory.assert_called_once_with(1, 2, "postgresql://test")
    assert database.is_open


def test_initialize_propagates_unreachable_database(monkeypatch):
    factory = MagicMock(side_effect=psycopg2.OperationalError("could not connect"))
    monkeypatch.setattr(connection.pool, "ThreadedConnectionPool", factory)
    database = Database(dsn="postgresql://test")

    with pytest.raises(psycopg2.OperationalError):
        database.initialize()
    assert not database.is_open


def test_failed_smoke_test_keeps_pool_open(pg):
    _, _, conn = pg
    cur = _cursor()
    cur.execute.side_effect = psycopg2.ProgrammingError("boom")
    _use_cursor(conn, cur)
    database = Database(dsn="postgresql://test")

    assert database.initialize() is True
    assert database.is_open


def test_execute_returns_rows_and_releases_connection(db, pg):
    _, db_pool, conn = pg
    _use_cursor(conn, _cursor([{"prisoner_id": 1000}, {"prisoner_id": 1001}]))

    result = db.execute("SELECT prisoner_id FROM prisoner;")

    assert result.rows == [{"prisoner_id": 1000}, {"prisoner_id": 1001}]
    assert result.rowcount == 2
    assert result.first() == {"prisoner_id": 1000}
    assert db_pool.putconn.call_count == 2
    assert db._in_flight == 0


def test_execute_without_result_set(db, pg):
    _, _, conn = pg
    _use_cursor(conn, _cursor(rowcount=3, description=False))

    result = db.execute("DELETE FROM parole WHERE prisoner_id = %(id)s;", {"id": 1})

    assert result.rows == []
    assert result.rowcount == 3
    assert result.first() is None


def test_execute_passes_none_for_missing_params(db, pg):
    _, _, conn = pg
    cur = _cursor()
    _use_cursor(conn, cur)

    db.execute("SELECT '100%' AS literal;")

    cur.execute.assert_called_once_with("SELECT '100%' AS literal;", None)


def test_execute_wraps_driver_errors(db, pg):
    _, db_pool, conn = pg
    cur = _cursor()
    cause = psycopg2.IntegrityError("violates foreign key constraint")
    cur.execute.side_effect = cause
    _use_cursor(conn, cur)
    db_pool.putconn.reset_mock()

    with pytest.raises(QueryError) as exc_info:
        db.execute("INSERT INTO cell (cellblock_id) VALUES (%(id)s);", {"id": 99})

    err = exc_info.value
    assert err.statement.startswith("INSERT INTO cell")
    assert err.params == {"id": 99}
    assert err.__cause__ is cause
    assert "foreign key" in str(err)
    db_pool.putconn.assert_called_once_with(conn)
    assert db._in_flight == 0


def test_explicit_transaction_commits(db, pg):
    _, _, conn = pg
    conn.commit.reset_mock()

    db.execute("CREATE TABLE t (id INT);", autocommit=False)

    assert conn.autocommit is False
    conn.commit.assert_called_once()
    conn.rollback.assert_not_called()


def test_explicit_transaction_rolls_back_on_failure(db, pg):
    _, _, conn = pg
    cur = _cursor()
    cur.execute.side_effect = psycopg2.ProgrammingError("syntax error")
    _use_cursor(conn, cur)
    conn.commit.reset_mock()

    with pytest.raises(QueryError):
        db.execute("CREATE TABLE;", autocommit=False)

    conn.rollback.assert_called_once()
    conn.commit.assert_not_called()


def test_release_failure_is_logged_not_raised(db, pg):
    _, db_pool, _ = pg
    db_pool.putconn.side_effect = psycopg2.pool.PoolError("unkeyed connection")

    result = db.execute("SELECT 1 AS ok;")

    assert result.rows == [{"ok": 1}]


def test_execute_before_initialize():
    database = Database(dsn="postgresql://test")

    with pytest.raises(RuntimeError):
        database.execute("SELECT 1;")


def test_close(db, pg):
    _, db_pool, _ = pg

    db.close()
    db.close()

    db_pool.closeall.assert_called_once()
    assert not db.is_open


def test_close_without_pool_is_noop():
    Database(dsn="postgresql://test").close()

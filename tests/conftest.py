"""Shared fixtures: a scripted stand-in for db.connection.Database."""

import pytest

from db.connection import QueryResult


class FakeDatabase:
    """
    Records every statement and replays queued results in order.
    With nothing queued, a statement returns an empty result.
    """

    def __init__(self):
        self.calls: list[tuple[str, dict]] = []
        self._results: list = []

    def queue(self, rows=None, rowcount=None) -> "FakeDatabase":
        rows = rows or []
        self._results.append(
            QueryResult(rows=rows, rowcount=len(rows) if rowcount is None else rowcount)
        )
        return self

    def queue_error(self, error: Exception) -> "FakeDatabase":
        self._results.append(error)
        return self

    def execute(self, statement, params=None, autocommit=True):
        self.calls.append((statement, dict(params or {})))
        if not self._results:
            return QueryResult()
        result = self._results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    def statements(self) -> list[str]:
        return [" ".join(sql.split()) for sql, _ in self.calls]


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()

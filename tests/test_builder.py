"""Unit tests for StatementBuilder and the execution helpers."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from mortar import delete, select
from mortar.builder import StatementBuilder
from mortar.compile.placeholder import AT_P, DOLLAR, QUESTION
from mortar.errors import (
    EmptyCollectionError,
    RunnerNotSetError,
    UnknownPlaceholderFormatError,
)
from mortar.execute.runner import execute_with, query_row_with, query_with
from mortar.expr import Eq, Expr


class FakeCursor:
    def __init__(self, rows, error=None):
        self.rows = list(rows)
        self.error = error
        self.executed = []
        self.closed = False

    def execute(self, sql, args):
        if self.error is not None:
            raise self.error
        self.executed.append((sql, list(args)))

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, rows=(), error=None):
        self.rows = rows
        self.error = error
        self.cursors = []

    def cursor(self):
        cur = FakeCursor(self.rows, self.error)
        self.cursors.append(cur)
        return cur


# ---------------------------------------------------------------------------
# StatementBuilder
# ---------------------------------------------------------------------------


def test_default_builder_uses_question_marks():
    assert StatementBuilder().placeholder_fmt is QUESTION


def test_placeholder_format_by_name(pg):
    assert pg.placeholder_fmt is DOLLAR
    sql, args = pg.select("*").from_("t").where(Eq({"a": 1, "b": 2})).to_sql()
    assert sql == "SELECT * FROM t WHERE a = $1 AND b = $2"
    assert args == [1, 2]


def test_placeholder_format_method_returns_new_builder():
    base = StatementBuilder()
    mssql = base.placeholder_format(AT_P)
    assert base.placeholder_fmt is QUESTION
    assert mssql.update("t").set("a", 1).to_sql() == ("UPDATE t SET a = @p1", [1])


def test_every_statement_inherits_format(pg):
    assert pg.insert("t").values(1).to_sql()[0] == "INSERT INTO t VALUES ($1)"
    assert pg.replace("t").values(1).to_sql()[0] == "REPLACE INTO t VALUES ($1)"
    assert pg.update("t").set("a", 1).to_sql()[0] == "UPDATE t SET a = $1"
    assert pg.delete("t").where("a = ?", 1).to_sql()[0] == "DELETE FROM t WHERE a = $1"


def test_statement_can_override_builder_format(pg):
    sql, _ = pg.select("*").from_("t").where({"a": 1}).placeholder_format("question").to_sql()
    assert sql == "SELECT * FROM t WHERE a = ?"


def test_unknown_format_name_rejected():
    with pytest.raises((ValidationError, UnknownPlaceholderFormatError)):
        StatementBuilder(placeholder_fmt="nope")
    with pytest.raises(UnknownPlaceholderFormatError):
        StatementBuilder().placeholder_format("nope")


def test_builder_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        StatementBuilder(dialect="postgres")


# ---------------------------------------------------------------------------
# Execution helpers
# ---------------------------------------------------------------------------


def test_execute_without_runner_raises():
    with pytest.raises(RunnerNotSetError):
        delete("t").execute()
    with pytest.raises(RunnerNotSetError):
        select("1").query()
    with pytest.raises(RunnerNotSetError):
        select("1").query_row()


def test_execute_with_passes_rendered_sql():
    conn = FakeConnection()
    cursor = execute_with(conn, delete("t").where(Eq({"id": [1, 2]})))
    assert cursor.executed == [("DELETE FROM t WHERE id IN (?,?)", [1, 2])]


def test_query_with_returns_cursor():
    conn = FakeConnection(rows=[("a",)])
    cursor = query_with(conn, select("name").from_("t"))
    assert cursor.executed == [("SELECT name FROM t", [])]
    assert not cursor.closed


def test_query_row_with_returns_first_row_and_closes_cursor():
    conn = FakeConnection(rows=[("a",), ("b",)])
    row = query_row_with(conn, select("name").from_("t"))
    assert row == ("a",)
    assert conn.cursors[0].closed


def test_query_row_with_no_rows_returns_none():
    assert query_row_with(FakeConnection(), select("1")) is None


def test_build_error_prevents_execution():
    conn = FakeConnection()
    with pytest.raises(EmptyCollectionError):
        execute_with(conn, select("*").from_("t").where(Expr("id IN ?", [])))
    assert conn.cursors == []


def test_failed_execute_closes_cursor():
    conn = FakeConnection(error=ValueError("no such table: t"))
    with pytest.raises(ValueError, match="no such table"):
        execute_with(conn, delete("t"))
    assert conn.cursors[0].closed


def test_failed_query_row_closes_cursor():
    conn = FakeConnection(error=ValueError("syntax error"))
    with pytest.raises(ValueError):
        query_row_with(conn, select("1"))
    assert conn.cursors[0].closed


def test_runner_from_builder():
    conn = FakeConnection(rows=[(1,)])
    builder = StatementBuilder().run_with(conn)
    assert builder.select("count(*)").from_("t").query_row() == (1,)
    assert conn.cursors[0].executed == [("SELECT count(*) FROM t", [])]


def test_statement_run_with():
    conn = FakeConnection()
    delete("t").run_with(conn).execute()
    assert conn.cursors[0].executed == [("DELETE FROM t", [])]


def test_rendering_logs_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="mortar"):
        select("*").from_("t").to_sql()
    assert any("SelectBuilder" in record.getMessage() for record in caplog.records)

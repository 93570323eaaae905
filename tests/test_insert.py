"""Unit tests for InsertBuilder (INSERT and REPLACE)."""

from __future__ import annotations

import pytest

from mortar import insert, replace, select
from mortar.errors import InvalidStatementError
from mortar.expr import Eq, Literal, expr


def test_insert_full_clause_order():
    sql, args = (
        insert("a")
        .prefix("WITH prefix AS ?", 0)
        .options("DELAYED", "IGNORE")
        .columns("b", "c")
        .values(1, 2)
        .values(3, expr("? + 1", 4))
        .suffix("RETURNING ?", 5)
        .to_sql()
    )
    assert sql == (
        "WITH prefix AS ? INSERT DELAYED IGNORE INTO a (b,c) VALUES (?,?),(?,? + 1) RETURNING ?"
    )
    assert args == [0, 1, 2, 3, 4, 5]


def test_insert_without_columns():
    assert insert("t").values(1).to_sql() == ("INSERT INTO t VALUES (?)", [1])


def test_insert_binds_text_and_none():
    sql, args = insert("users").columns("name", "email").values("ann", None).to_sql()
    assert sql == "INSERT INTO users (name,email) VALUES (?,?)"
    assert args == ["ann", None]


def test_insert_literal_value_is_inlined():
    sql, args = insert("t").columns("a", "b").values(Literal("DEFAULT"), 1).to_sql()
    assert sql == "INSERT INTO t (a,b) VALUES (DEFAULT,?)"
    assert args == [1]


def test_insert_subquery_value_is_parenthesised():
    sql, args = (
        insert("t").columns("id").values(select("max(id) + 1").from_("t").where(Eq({"k": 2}))).to_sql()
    )
    assert sql == "INSERT INTO t (id) VALUES ((SELECT max(id) + 1 FROM t WHERE k = ?))"
    assert args == [2]


def test_insert_set_map_in_insertion_order():
    sql, args = insert("users").set_map({"name": "bob", "age": 30}).to_sql()
    assert sql == "INSERT INTO users (name,age) VALUES (?,?)"
    assert args == ["bob", 30]


def test_insert_select():
    sql, args = (
        insert("table2")
        .columns("field1")
        .select(select("field1").from_("table1").where(Eq({"field1": 1})))
        .to_sql()
    )
    assert sql == "INSERT INTO table2 (field1) SELECT field1 FROM table1 WHERE field1 = ?"
    assert args == [1]


def test_replace():
    assert replace("table").values(1).to_sql() == ("REPLACE INTO table VALUES (?)", [1])


def test_on_duplicate_key_update():
    sql, args = (
        insert("users")
        .columns("id", "email", "name")
        .values(1, "a@example.com", "A")
        .on_duplicate_key_update({"email": "b@example.com", "name": "B"})
        .to_sql()
    )
    assert sql == (
        "INSERT INTO users (id,email,name) VALUES (?,?,?) "
        "ON DUPLICATE KEY UPDATE email = ?, name = ?"
    )
    assert args == [1, "a@example.com", "A", "b@example.com", "B"]


def test_on_duplicate_key_update_with_expression():
    sql, args = (
        insert("counters")
        .columns("k", "n")
        .values("hits", 1)
        .on_duplicate_key_update([("n", Literal("n + VALUES(n)"))])
        .to_sql()
    )
    assert sql == "INSERT INTO counters (k,n) VALUES (?,?) ON DUPLICATE KEY UPDATE n = n + VALUES(n)"
    assert args == ["hits", 1]


def test_insert_dollar_placeholders():
    sql, args = (
        insert("t").columns("a", "b").values(1, 2).values(3, 4)
        .placeholder_format("dollar").to_sql()
    )
    assert sql == "INSERT INTO t (a,b) VALUES ($1,$2),($3,$4)"
    assert args == [1, 2, 3, 4]


def test_insert_without_table_raises():
    with pytest.raises(InvalidStatementError) as exc_info:
        insert("").values(1).to_sql()
    assert "specify a table" in str(exc_info.value)


def test_insert_without_values_raises():
    with pytest.raises(InvalidStatementError) as exc_info:
        insert("t").columns("a").to_sql()
    assert "at least one set of values or select clause" in str(exc_info.value)


def test_insert_builder_is_persistent():
    base = insert("t").columns("a")
    one = base.values(1)
    two = one.values(2)
    assert one.to_sql() == ("INSERT INTO t (a) VALUES (?)", [1])
    assert two.to_sql() == ("INSERT INTO t (a) VALUES (?),(?)", [1, 2])

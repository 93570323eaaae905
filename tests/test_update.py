"""Unit tests for UpdateBuilder."""

from __future__ import annotations

import pytest

from mortar import select, update
from mortar.errors import InvalidStatementError
from mortar.expr import Eq, Expr, Literal, Or, case, expr


def test_update_full_clause_order():
    sql, args = (
        update("a")
        .prefix("WITH prefix AS ?", 0)
        .set("b", expr("? + 1", 1))
        .set_map({"c": 2})
        .set("c1", case("status").when("1", "2").when("2", "1"))
        .set("c2", case().when("a = 2", expr("?", "foo")).when("a = 3", expr("?", "bar")))
        .set("c3", select("a").from_("b"))
        .where("d = ?", 3)
        .order_by("e")
        .limit(4)
        .offset(5)
        .suffix("RETURNING ?", 6)
        .to_sql()
    )
    assert sql == (
        "WITH prefix AS ? "
        "UPDATE a SET b = ? + 1, c = ?, c1 = CASE status WHEN 1 THEN 2 WHEN 2 THEN 1 END, "
        "c2 = CASE WHEN a = 2 THEN ? WHEN a = 3 THEN ? END, c3 = (SELECT a FROM b) "
        "WHERE d = ? ORDER BY e LIMIT 4 OFFSET 5 RETURNING ?"
    )
    assert args == [0, 1, 2, "foo", "bar", 3, 6]


def test_update_binds_plain_text():
    sql, args = update("users").set("status", "active").where({"id": 1}).to_sql()
    assert sql == "UPDATE users SET status = ? WHERE id = ?"
    assert args == ["active", 1]


def test_update_set_map_keeps_insertion_order():
    sql, args = update("t").set_map({"z": 1, "a": 2}).to_sql()
    assert sql == "UPDATE t SET z = ?, a = ?"
    assert args == [1, 2]


def test_update_from_select():
    accounts = select("id").from_("accounts").where(Eq({"accounts.name": "ACME"}))
    sql, args = (
        update("employees")
        .set("sales_count", 100)
        .from_select(accounts, "subquery")
        .where("employees.account_id = subquery.id")
        .to_sql()
    )
    assert sql == (
        "UPDATE employees SET sales_count = ? "
        "FROM (SELECT id FROM accounts WHERE accounts.name = ?) AS subquery "
        "WHERE employees.account_id = subquery.id"
    )
    assert args == [100, "ACME"]


def test_update_from_table():
    sql, _ = update("a").set("x", Literal("b.x")).from_("b").where("a.id = b.id").to_sql()
    assert sql == "UPDATE a SET x = b.x FROM b WHERE a.id = b.id"


def test_update_join():
    sql, args = (
        update("employees")
        .join("departments ON employees.department_id = departments.id")
        .set("salary", Literal("salary * 1.1"))
        .where(Eq({"departments.name": "Engineering"}))
        .to_sql()
    )
    assert sql == (
        "UPDATE employees JOIN departments ON employees.department_id = departments.id "
        "SET salary = salary * 1.1 WHERE departments.name = ?"
    )
    assert args == ["Engineering"]


def test_update_with_recursive_cte():
    tree = Expr(
        "SELECT id FROM categories WHERE id = ? "
        "UNION ALL SELECT c.id FROM categories c JOIN category_tree t ON c.parent_id = t.id",
        1,
    )
    sql, args = (
        update("categories")
        .with_recursive("category_tree", tree)
        .set("active", 0)
        .where("id IN (SELECT id FROM category_tree)")
        .to_sql()
    )
    assert sql == (
        "WITH RECURSIVE category_tree AS (SELECT id FROM categories WHERE id = ? "
        "UNION ALL SELECT c.id FROM categories c JOIN category_tree t ON c.parent_id = t.id) "
        "UPDATE categories SET active = ? WHERE id IN (SELECT id FROM category_tree)"
    )
    assert args == [1, 0]


def test_update_dollar_placeholders():
    sql, args = (
        update("t").set("a", 1).where(Eq({"b": [2, 3]})).placeholder_format("dollar").to_sql()
    )
    assert sql == "UPDATE t SET a = $1 WHERE b IN ($2,$3)"
    assert args == [1, 2, 3]


def test_update_empty_filter_omits_where():
    assert update("t").set("a", 1).where(Or()).to_sql() == ("UPDATE t SET a = ?", [1])


def test_update_without_table_raises():
    with pytest.raises(InvalidStatementError) as exc_info:
        update("").set("a", 1).to_sql()
    assert "specify a table" in str(exc_info.value)


def test_update_without_set_raises():
    with pytest.raises(InvalidStatementError) as exc_info:
        update("t").where({"id": 1}).to_sql()
    assert "at least one Set clause" in str(exc_info.value)


def test_update_table_can_be_replaced():
    assert update("a").table("b").set("x", 1).to_sql() == ("UPDATE b SET x = ?", [1])

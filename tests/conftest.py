"""Shared pytest fixtures for mortar unit and integration tests."""
from __future__ import annotations

import sqlite3

import pytest

from mortar.builder import StatementBuilder
from tests.fixtures import load_ddl

USERS = [
    (1, "ann", "ann@example.com", "active", 31, "ops"),
    (2, "bob", None, "inactive", 45, "ops"),
    (3, "cid", "cid@example.com", "active", 19, "dev"),
    (4, "dee", "dee@example.com", "banned", 52, "dev"),
]

ORDERS = [
    (10, 1, "pending", None, 12.5),
    (11, 1, "completed", None, 80.0),
    (12, 3, "processing", None, 5.0),
    (13, 4, "pending", None, 40.0),
]

CATEGORIES = [
    (1, None, "root", 1),
    (2, 1, "child", 1),
    (3, 2, "grandchild", 1),
    (4, None, "other", 1),
]


@pytest.fixture()
def db() -> sqlite3.Connection:
    """In-memory SQLite database seeded with users, orders and categories."""
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.executescript(load_ddl("sqlite"))
    conn.executemany("INSERT INTO users VALUES (?,?,?,?,?,?)", USERS)
    conn.executemany("INSERT INTO orders VALUES (?,?,?,?,?)", ORDERS)
    conn.executemany("INSERT INTO categories VALUES (?,?,?,?)", CATEGORIES)
    conn.commit()
    yield conn
    conn.close()


@pytest.fixture()
def sq(db: sqlite3.Connection) -> StatementBuilder:
    """Statement factory bound to the SQLite fixture."""
    return StatementBuilder().run_with(db)


@pytest.fixture(scope="session")
def pg() -> StatementBuilder:
    """Statement factory rendering PostgreSQL ``$n`` placeholders."""
    return StatementBuilder(placeholder_fmt="dollar")

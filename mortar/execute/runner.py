"""Run built statements against a DB-API 2.0 connection.

Any object with a ``cursor()`` method returning a PEP 249 cursor works as a
runner: ``sqlite3.Connection``, psycopg connections, pymysql connections, and
so on.  The statement must be rendered in the placeholder format the driver
expects; see :mod:`mortar.compile.placeholder`.
"""

from __future__ import annotations

import logging
from typing import Any

from mortar.expr.base import Fragment

logger = logging.getLogger(__name__)


def _run(runner: Any, statement: Fragment) -> Any:
    sql, args = statement.to_sql()
    logger.debug("Executing %s", sql)
    cursor = runner.cursor()
    try:
        cursor.execute(sql, args)
    except Exception:
        cursor.close()
        raise
    return cursor


def execute_with(runner: Any, statement: Fragment) -> Any:
    """Render ``statement`` and execute it on a new cursor of ``runner``.

    Returns:
        The cursor, so callers can read ``rowcount`` / ``lastrowid``.

    Raises:
        BuildError: If the statement cannot be rendered.  Nothing is sent to
            the database in that case.
    """
    return _run(runner, statement)


def query_with(runner: Any, statement: Fragment) -> Any:
    """Render and execute ``statement``; return the cursor for iterating rows."""
    return _run(runner, statement)


def query_row_with(runner: Any, statement: Fragment) -> Any:
    """Render and execute ``statement``; return its first row or ``None``."""
    cursor = _run(runner, statement)
    try:
        return cursor.fetchone()
    finally:
        cursor.close()

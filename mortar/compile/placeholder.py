"""Placeholder formats: rewriting ``?`` markers into a driver's syntax.

Every fragment renders plain ``?`` markers.  Only the outermost statement
rewrites them, once, with its :class:`PlaceholderFormat`:

=============  =================  ==========================================
Format         Example            Drivers
=============  =================  ==========================================
``QUESTION``   ``?``              ``sqlite3``, ``mysqlclient`` (qmark)
``DOLLAR``     ``$1, $2``         ``asyncpg``, PostgreSQL server-side
``COLON``      ``:1, :2``         ``oracledb`` (numeric)
``AT_P``       ``@p1, @p2``       SQL Server (``pytds`` / ``pymssql``)
=============  =================  ==========================================

The rewrite is a single left-to-right scan.  It does not parse SQL, so a
``?`` inside a quoted string literal is rewritten like any other marker.
Passing ``arg_count`` makes numbered formats check the number of markers they
rewrote against the number of bound arguments, which turns such a stray
``?`` into an :class:`~mortar.errors.ArgumentCountError` instead of a
silently mis-numbered statement.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from mortar.errors import ArgumentCountError
from mortar.expr.operators import MARKER


class PlaceholderFormat(ABC):
    """Abstract base for placeholder rewrite strategies."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the registry name of this format (e.g. ``'dollar'``)."""

    @abstractmethod
    def replace_placeholders(self, sql: str, arg_count: int | None = None) -> str:
        """Return ``sql`` with every ``?`` marker rewritten.

        Args:
            sql: Fully composed SQL containing ``?`` markers.
            arg_count: Number of bound arguments, when known.

        Raises:
            ArgumentCountError: If ``arg_count`` is given and disagrees with
                the number of markers (numbered formats only).
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class QuestionFormat(PlaceholderFormat):
    """Leaves ``?`` markers unchanged."""

    @property
    def name(self) -> str:
        return "question"

    def replace_placeholders(self, sql: str, arg_count: int | None = None) -> str:
        return sql


class NumberedFormat(PlaceholderFormat):
    """Replaces the n-th marker with ``<prefix><n>``, counting from 1."""

    def __init__(self, name: str, prefix: str) -> None:
        self._name = name
        self._prefix = prefix

    @property
    def name(self) -> str:
        return self._name

    def placeholder(self, position: int) -> str:
        return f"{self._prefix}{position}"

    def replace_placeholders(self, sql: str, arg_count: int | None = None) -> str:
        pieces = sql.split(MARKER)
        found = len(pieces) - 1
        if arg_count is not None and found != arg_count:
            raise ArgumentCountError(found, arg_count, sql)

        out = [pieces[0]]
        for position, tail in enumerate(pieces[1:], start=1):
            out.append(self.placeholder(position))
            out.append(tail)
        return "".join(out)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, {self._prefix!r})"


QUESTION = QuestionFormat()
DOLLAR = NumberedFormat("dollar", "$")
COLON = NumberedFormat("colon", ":")
AT_P = NumberedFormat("atp", "@p")

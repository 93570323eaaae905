"""Raw SQL expressions with positional arguments.

``Expr("id IN ? AND status = ?", [1, 2, 3], "active")`` renders
``"id IN (?,?,?) AND status = ?"`` with arguments ``[1, 2, 3, "active"]``.

Each ``?`` in the template consumes exactly one argument, left to right:

* a ``list`` / ``tuple`` argument expands to a parenthesised marker list and
  its elements are spliced into the arguments in order;
* a :class:`~mortar.expr.base.Fragment` argument (typically a sub-query) is
  rendered and its text replaces the marker;
* any other argument is bound to the marker unchanged.
"""

from __future__ import annotations

from typing import Any

from mortar.errors import ArgumentCountError, EmptyCollectionError
from mortar.expr.base import Fragment, render
from mortar.expr.operators import MARKER, is_collection, placeholders


class Expr(Fragment):
    """An immutable SQL template plus its ordered arguments."""

    sql: str
    args: tuple[Any, ...] = ()

    def __init__(self, sql: str, *args: Any) -> None:
        super().__init__(sql=sql, args=args)

    def to_sql(self) -> tuple[str, list[Any]]:
        expected = self.sql.count(MARKER)
        if expected != len(self.args):
            raise ArgumentCountError(expected, len(self.args), self.sql)
        if not self.args:
            return self.sql, []

        pieces = self.sql.split(MARKER)
        out: list[str] = [pieces[0]]
        args: list[Any] = []
        for arg, tail in zip(self.args, pieces[1:]):
            out.append(self._expand(arg, args))
            out.append(tail)
        return "".join(out), args

    def _expand(self, arg: Any, args: list[Any]) -> str:
        """Return the text replacing one marker; append its values to ``args``."""
        if isinstance(arg, Fragment):
            sql, nested_args = render(arg)
            args.extend(nested_args)
            return sql
        if is_collection(arg):
            if not arg:
                raise EmptyCollectionError(self.sql)
            args.extend(arg)
            return f"({placeholders(len(arg))})"
        args.append(arg)
        return MARKER


def expr(sql: str, *args: Any) -> Expr:
    """Build an :class:`Expr`; convenience alias for the constructor."""
    return Expr(sql, *args)

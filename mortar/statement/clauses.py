"""Clause-level fragments used by the statement builders.

Classes
-------
CTE               ``alias[(c1, c2)] AS (<statement>)``
JoinSelectPart    ``<JOIN TYPE> (<select>) AS alias [ON ...]``
CompoundPart      ``UNION [ALL] <select>``
Subquery          ``(<statement>)`` for SET values and VALUES rows
SetClause         ``column = <value>`` for UPDATE SET / ON DUPLICATE KEY UPDATE
"""
from __future__ import annotations

from typing import Any

from mortar.errors import InvalidStatementError, UnsupportedValueError
from mortar.expr.base import Alias, Fragment, render
from mortar.expr.raw import Expr


class CTE(Fragment):
    """A common table expression.

    The owning statement writes the ``WITH`` keyword once (``WITH RECURSIVE``
    when any of its CTEs is recursive) and separates CTEs with commas.
    """

    alias: str
    expression: Fragment
    column_list: tuple[str, ...] = ()
    recursive: bool = False

    def to_sql(self) -> tuple[str, list[Any]]:
        if not self.alias.strip():
            raise InvalidStatementError("CTE alias must not be empty", clause="WITH")
        sql, args = render(self.expression)
        columns = f"({', '.join(self.column_list)})" if self.column_list else ""
        return f"{self.alias}{columns} AS ({sql})", args


class JoinSelectPart(Fragment):
    """A join against an aliased sub-select.

    The ON clause may be a SQL string (bound to ``on_args``) or a fragment
    (in which case ``on_args`` must be empty).
    """

    join_type: str
    target: Fragment
    alias: str
    on: Any = None
    on_args: tuple[Any, ...] = ()

    @classmethod
    def build(
        cls,
        join_type: str,
        select: Fragment,
        alias: str,
        on: Any,
        on_args: tuple[Any, ...],
    ) -> JoinSelectPart:
        return cls(
            join_type=join_type,
            target=Alias(select, alias),
            alias=alias,
            on=on,
            on_args=on_args,
        )

    def to_sql(self) -> tuple[str, list[Any]]:
        if not self.join_type.strip():
            raise InvalidStatementError("join type must not be empty", clause="JOIN")
        if not self.alias.strip():
            raise InvalidStatementError("join alias must not be empty", clause="JOIN")

        target_sql, args = render(self.target)
        sql = f"{self.join_type} {target_sql}"

        on_fragment = self._on_fragment()
        if on_fragment is None:
            return sql, args
        on_sql, on_args = render(on_fragment)
        if on_sql:
            sql = f"{sql} ON {on_sql}"
            args.extend(on_args)
        return sql, args

    def _on_fragment(self) -> Fragment | None:
        if self.on is None or (isinstance(self.on, str) and not self.on.strip()):
            if self.on_args:
                raise InvalidStatementError(
                    "join ON clause arguments provided without an ON clause",
                    clause="JOIN",
                )
            return None
        if isinstance(self.on, str):
            return Expr(self.on, *self.on_args)
        if isinstance(self.on, Fragment):
            if self.on_args:
                raise InvalidStatementError(
                    "join ON clause arguments must be empty when ON clause is a fragment",
                    clause="JOIN",
                )
            return self.on
        raise UnsupportedValueError(
            f"unsupported join ON clause type {type(self.on).__name__}",
            value=self.on,
            clause="JOIN",
        )


class CompoundPart(Fragment):
    """``<operator> <select>`` appended after HAVING (``UNION``, ``UNION ALL``)."""

    operator: str
    query: Fragment

    def to_sql(self) -> tuple[str, list[Any]]:
        if not self.operator.strip():
            raise InvalidStatementError("compound operator must not be empty", clause="UNION")
        sql, args = render(self.query)
        if not sql.strip():
            raise InvalidStatementError("compound SELECT must not be empty", clause="UNION")
        return f"{self.operator} {sql}", args


class Subquery(Fragment):
    """A nested statement wrapped in parentheses."""

    query: Fragment

    def to_sql(self) -> tuple[str, list[Any]]:
        sql, args = render(self.query)
        return f"({sql})", args


class SetClause(Fragment):
    """``column = <value>``."""

    column: str
    value: Fragment

    def to_sql(self) -> tuple[str, list[Any]]:
        sql, args = render(self.value)
        return f"{self.column} = {sql}", args

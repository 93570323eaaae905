"""Shared statement machinery.

Every statement builder is a frozen pydantic model and a
:class:`~mortar.expr.base.Fragment`, so a finished SELECT can be nested
inside another statement as a sub-query.  Builder methods never mutate:
each returns ``self.model_copy(update=...)``, so a partially built statement
can be reused as a template from any number of call sites.

Class hierarchy
---------------
Statement                 prefixes, suffixes, placeholder format, runner
  ├── InsertBuilder       (insert.py)
  └── FilteredStatement   CTEs, joins, WHERE, ORDER BY, LIMIT, OFFSET
        ├── SelectBuilder (select.py)
        ├── UpdateBuilder (update.py)
        └── DeleteBuilder (delete.py)
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from collections.abc import Iterable
from typing import Any

from mortar.compile.placeholder import QUESTION, PlaceholderFormat
from mortar.compile.registry import resolve_format
from mortar.errors import RunnerNotSetError
from mortar.expr.base import Fragment, Literal, Param, render_all
from mortar.expr.coerce import to_fragment
from mortar.statement.clauses import CTE, JoinSelectPart, Subquery
from mortar.statement.policy import WHERE

logger = logging.getLogger(__name__)


class ClauseWriter:
    """Accumulates space-separated clause text and the matching arguments."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self.args: list[Any] = []

    def write(self, sql: str, args: Iterable[Any] = ()) -> None:
        if sql:
            self._parts.append(sql)
            self.args.extend(args)

    def clause(
        self,
        keyword: str,
        fragments: Iterable[Fragment],
        separator: str,
    ) -> None:
        """Write ``"<keyword> <joined fragments>"`` unless they render empty."""
        sql, args = render_all(fragments, separator)
        if sql:
            self.write(f"{keyword} {sql}" if keyword else sql, args)

    def result(self) -> tuple[str, list[Any]]:
        return " ".join(self._parts), self.args


class Statement(Fragment):
    """Base for all statement builders."""

    prefixes: tuple[Fragment, ...] = ()
    suffixes: tuple[Fragment, ...] = ()
    placeholder_fmt: PlaceholderFormat = QUESTION
    runner: Any = None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @abstractmethod
    def _write(self, out: ClauseWriter) -> None:
        """Write the statement body (everything between prefixes and suffixes)."""

    def to_sql_raw(self) -> tuple[str, list[Any]]:
        out = ClauseWriter()
        out.clause("", self.prefixes, " ")
        self._write(out)
        out.clause("", self.suffixes, " ")
        return out.result()

    def to_sql(self) -> tuple[str, list[Any]]:
        """Render with the statement's placeholder format applied.

        Raises:
            BuildError: If any part of the statement fails to render.
        """
        sql, args = self.to_sql_raw()
        sql = self.placeholder_fmt.replace_placeholders(sql, len(args))
        logger.debug("Built %s (%d args)", type(self).__name__, len(args))
        return sql, args

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def placeholder_format(self, fmt: PlaceholderFormat | str) -> Statement:
        """Return a copy rendering markers in ``fmt`` (instance or registered name)."""
        return self.model_copy(update={"placeholder_fmt": resolve_format(fmt)})

    def run_with(self, runner: Any) -> Statement:
        """Return a copy bound to a DB-API connection used by :meth:`execute`."""
        return self.model_copy(update={"runner": runner})

    # ------------------------------------------------------------------
    # Prefix / suffix
    # ------------------------------------------------------------------

    def prefix(self, sql: str, *args: Any) -> Statement:
        """Add an expression to the very beginning of the statement."""
        return self.prefix_expr(to_fragment(sql, *args))

    def prefix_expr(self, fragment: Fragment) -> Statement:
        return self._append("prefixes", fragment)

    def suffix(self, sql: str, *args: Any) -> Statement:
        """Add an expression to the end of the statement (e.g. ``RETURNING id``)."""
        return self.suffix_expr(to_fragment(sql, *args))

    def suffix_expr(self, fragment: Fragment) -> Statement:
        return self._append("suffixes", fragment)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(self) -> Any:
        """Execute with the runner set by :meth:`run_with`; return the cursor."""
        from mortar.execute.runner import execute_with

        return execute_with(self._require_runner(), self)

    def query(self) -> Any:
        """Execute and return the cursor for row iteration."""
        from mortar.execute.runner import query_with

        return query_with(self._require_runner(), self)

    def query_row(self) -> Any:
        """Execute and return the first row, or ``None``."""
        from mortar.execute.runner import query_row_with

        return query_row_with(self._require_runner(), self)

    def _require_runner(self) -> Any:
        if self.runner is None:
            raise RunnerNotSetError()
        return self.runner

    # ------------------------------------------------------------------
    # Persistent update helpers
    # ------------------------------------------------------------------

    def _append(self, field: str, *items: Any) -> Any:
        return self.model_copy(update={field: getattr(self, field) + items})

    def _set(self, **values: Any) -> Any:
        return self.model_copy(update=values)


def to_value(value: Any) -> Fragment:
    """Coerce a SET / VALUES value.

    Statements become parenthesised sub-queries, other fragments are inlined,
    and anything else (including text) is bound as one argument.
    """
    if isinstance(value, Statement):
        return Subquery(query=value)
    if isinstance(value, Fragment):
        return value
    return Param(value)


class FilteredStatement(Statement):
    """Statements with CTEs, joins, WHERE, ORDER BY, LIMIT and OFFSET."""

    ctes: tuple[Fragment, ...] = ()
    joins: tuple[Fragment, ...] = ()
    where_parts: tuple[Fragment, ...] = ()
    order_by_parts: tuple[Fragment, ...] = ()
    limit_value: int | None = None
    offset_value: int | None = None

    # ------------------------------------------------------------------
    # CTEs
    # ------------------------------------------------------------------

    def with_(self, alias: str, expression: Fragment) -> Any:
        """Add a non-recursive CTE: ``WITH alias AS (<expression>)``."""
        return self.with_cte(CTE(alias=alias, expression=expression))

    def with_recursive(self, alias: str, expression: Fragment) -> Any:
        """Add a recursive CTE: ``WITH RECURSIVE alias AS (<expression>)``."""
        return self.with_cte(CTE(alias=alias, expression=expression, recursive=True))

    def with_cte(self, cte: Fragment) -> Any:
        """Add an arbitrary fragment to the WITH list."""
        return self._append("ctes", cte)

    # ------------------------------------------------------------------
    # Joins
    # ------------------------------------------------------------------

    def join_clause(self, pred: Any, *args: Any) -> Any:
        """Add a complete join clause (``"LEFT JOIN t ON ..."`` or a fragment)."""
        return self._append("joins", to_fragment(pred, *args))

    def join(self, join: str, *args: Any) -> Any:
        return self.join_clause(f"JOIN {join}", *args)

    def left_join(self, join: str, *args: Any) -> Any:
        return self.join_clause(f"LEFT JOIN {join}", *args)

    def right_join(self, join: str, *args: Any) -> Any:
        return self.join_clause(f"RIGHT JOIN {join}", *args)

    def inner_join(self, join: str, *args: Any) -> Any:
        return self.join_clause(f"INNER JOIN {join}", *args)

    def cross_join(self, join: str, *args: Any) -> Any:
        return self.join_clause(f"CROSS JOIN {join}", *args)

    def join_select(self, select: Fragment, alias: str, on: Any = None, *args: Any) -> Any:
        """``JOIN (<select>) AS alias ON <on>``."""
        return self.join_clause(JoinSelectPart.build("JOIN", select, alias, on, args))

    def left_join_select(self, select: Fragment, alias: str, on: Any = None, *args: Any) -> Any:
        return self.join_clause(JoinSelectPart.build("LEFT JOIN", select, alias, on, args))

    def right_join_select(self, select: Fragment, alias: str, on: Any = None, *args: Any) -> Any:
        return self.join_clause(JoinSelectPart.build("RIGHT JOIN", select, alias, on, args))

    def inner_join_select(self, select: Fragment, alias: str, on: Any = None, *args: Any) -> Any:
        return self.join_clause(JoinSelectPart.build("INNER JOIN", select, alias, on, args))

    # ------------------------------------------------------------------
    # Filtering and ordering
    # ------------------------------------------------------------------

    def where(self, pred: Any, *args: Any) -> Any:
        """Add a filter; filters are ANDed together.

        ``pred`` may be a SQL string with ``?`` markers bound to ``args``, a
        mapping (rendered as :class:`~mortar.expr.predicates.Eq`), or any
        fragment.  ``None`` and ``""`` are ignored.
        """
        if pred is None or (isinstance(pred, str) and not pred):
            return self
        return self._append("where_parts", to_fragment(pred, *args))

    def order_by_clause(self, pred: Any, *args: Any) -> Any:
        """Add an ORDER BY expression that may carry bound arguments."""
        return self._append("order_by_parts", to_fragment(pred, *args))

    def order_by(self, *order_bys: str) -> Any:
        """Add ORDER BY expressions, e.g. ``order_by("name ASC", "id DESC")``."""
        return self._append("order_by_parts", *(Literal(o) for o in order_bys))

    def limit(self, limit: int) -> Any:
        return self._set(limit_value=int(limit))

    def remove_limit(self) -> Any:
        return self._set(limit_value=None)

    def offset(self, offset: int) -> Any:
        return self._set(offset_value=int(offset))

    def remove_offset(self) -> Any:
        return self._set(offset_value=None)

    # ------------------------------------------------------------------
    # Shared clause writers
    # ------------------------------------------------------------------

    def _write_ctes(self, out: ClauseWriter) -> None:
        if not self.ctes:
            return
        recursive = any(isinstance(c, CTE) and c.recursive for c in self.ctes)
        out.clause("WITH RECURSIVE" if recursive else "WITH", self.ctes, ", ")

    def _write_joins(self, out: ClauseWriter) -> None:
        out.clause("", self.joins, " ")

    def _write_where(self, out: ClauseWriter) -> None:
        out.write(*WHERE.render(self.where_parts))

    def _write_tail(self, out: ClauseWriter) -> None:
        """ORDER BY, LIMIT and OFFSET."""
        out.clause("ORDER BY", self.order_by_parts, ", ")
        if self.limit_value is not None:
            out.write(f"LIMIT {self.limit_value}")
        if self.offset_value is not None:
            out.write(f"OFFSET {self.offset_value}")

"""SELECT statement builder.

Clause order::

    [prefixes] [WITH ctes] SELECT [options] columns [FROM from] [joins]
    [WHERE ...] [GROUP BY ...] [HAVING ...] [UNION ...] [ORDER BY ...]
    [LIMIT n] [OFFSET n] [suffixes]
"""

from __future__ import annotations

from typing import Any

from mortar.errors import InvalidStatementError
from mortar.expr.base import Alias, Fragment, Literal, render, render_all
from mortar.expr.coerce import to_fragment
from mortar.statement.base import ClauseWriter, FilteredStatement
from mortar.statement.clauses import CompoundPart
from mortar.statement.policy import HAVING


class SelectBuilder(FilteredStatement):
    """Builds SELECT statements.

    Example::

        sql, args = (
            select("id", "name")
            .from_("users")
            .where(Eq({"status": "active"}))
            .order_by("name")
            .limit(10)
            .to_sql()
        )
    """

    option_words: tuple[str, ...] = ()
    column_parts: tuple[Fragment, ...] = ()
    from_part: Fragment | None = None
    group_bys: tuple[str, ...] = ()
    having_parts: tuple[Fragment, ...] = ()
    compounds: tuple[Fragment, ...] = ()

    # ------------------------------------------------------------------
    # Columns and options
    # ------------------------------------------------------------------

    def options(self, *options: str) -> SelectBuilder:
        """Add keywords between SELECT and the column list (``SQL_NO_CACHE`` ...)."""
        return self._append("option_words", *options)

    def distinct(self) -> SelectBuilder:
        return self.options("DISTINCT")

    def columns(self, *columns: str) -> SelectBuilder:
        """Add result columns given as plain SQL text."""
        return self._append("column_parts", *(Literal(c) for c in columns))

    def column(self, column: Any, *args: Any) -> SelectBuilder:
        """Add one result column that may bind arguments or be a fragment::

            column("IF(col IN (" + placeholders(3) + "), 1, 0) AS col", 1, 2, 3)
            column(alias(case("status").when("1", "'one'"), "label"))
        """
        return self._append("column_parts", to_fragment(column, *args))

    def remove_columns(self) -> SelectBuilder:
        """Drop every result column; add new ones before rendering."""
        return self._set(column_parts=())

    # ------------------------------------------------------------------
    # FROM
    # ------------------------------------------------------------------

    def from_(self, table: str) -> SelectBuilder:
        return self._set(from_part=Literal(table))

    def from_select(self, select: SelectBuilder, alias: str) -> SelectBuilder:
        """Use ``(<select>) AS alias`` as the FROM source."""
        return self._set(from_part=Alias(select, alias))

    # ------------------------------------------------------------------
    # Grouping and compounds
    # ------------------------------------------------------------------

    def group_by(self, *group_bys: str) -> SelectBuilder:
        return self._append("group_bys", *group_bys)

    def having(self, pred: Any, *args: Any) -> SelectBuilder:
        """Add a HAVING filter; accepts the same inputs as :meth:`where`."""
        if pred is None or (isinstance(pred, str) and not pred):
            return self
        return self._append("having_parts", to_fragment(pred, *args))

    def union(self, sql: str, *args: Any) -> SelectBuilder:
        """Append ``UNION <sql>`` (duplicate rows removed)."""
        return self._append("compounds", to_fragment(f"UNION {sql}", *args))

    def union_all(self, sql: str, *args: Any) -> SelectBuilder:
        """Append ``UNION ALL <sql>`` (duplicate rows kept)."""
        return self._append("compounds", to_fragment(f"UNION ALL {sql}", *args))

    def union_select(self, *selects: SelectBuilder) -> SelectBuilder:
        return self._append(
            "compounds", *(CompoundPart(operator="UNION", query=s) for s in selects)
        )

    def union_all_select(self, *selects: SelectBuilder) -> SelectBuilder:
        return self._append(
            "compounds", *(CompoundPart(operator="UNION ALL", query=s) for s in selects)
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _write(self, out: ClauseWriter) -> None:
        if not self.column_parts:
            raise InvalidStatementError(
                "select statements must have at least one result column",
                clause="SELECT",
            )

        self._write_ctes(out)

        columns_sql, columns_args = render_all(self.column_parts, ", ")
        head = " ".join(("SELECT", *self.option_words))
        out.write(f"{head} {columns_sql}", columns_args)

        if self.from_part is not None:
            from_sql, from_args = render(self.from_part)
            out.write(f"FROM {from_sql}", from_args)

        self._write_joins(out)
        self._write_where(out)
        if self.group_bys:
            out.write(f"GROUP BY {', '.join(self.group_bys)}")
        out.write(*HAVING.render(self.having_parts))
        out.clause("", self.compounds, " ")
        self._write_tail(out)

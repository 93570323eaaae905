"""INSERT / REPLACE statement builder.

Clause order::

    [prefixes] INSERT|REPLACE [options] INTO table [(c1,c2)]
    VALUES (?,?),(?,?) | <select>
    [ON DUPLICATE KEY UPDATE c = ?, ...] [suffixes]
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from mortar.errors import InvalidStatementError
from mortar.expr.base import Fragment, render, render_all
from mortar.statement.base import ClauseWriter, Statement, to_value
from mortar.statement.clauses import SetClause


def _pairs(values: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> list[tuple[str, Any]]:
    if isinstance(values, Mapping):
        return list(values.items())
    return list(values)


class InsertBuilder(Statement):
    """Builds INSERT (or REPLACE) statements."""

    verb: str = "INSERT"
    option_words: tuple[str, ...] = ()
    into_table: str = ""
    column_names: tuple[str, ...] = ()
    value_rows: tuple[tuple[Fragment, ...], ...] = ()
    select_query: Fragment | None = None
    duplicate_updates: tuple[SetClause, ...] = ()

    def options(self, *options: str) -> InsertBuilder:
        """Add keywords between INSERT and INTO (``IGNORE``, ``DELAYED`` ...)."""
        return self._append("option_words", *options)

    def into(self, table: str) -> InsertBuilder:
        return self._set(into_table=table)

    def columns(self, *columns: str) -> InsertBuilder:
        return self._append("column_names", *columns)

    def values(self, *values: Any) -> InsertBuilder:
        """Add one row.  Fragments are inlined; other values are bound."""
        row = tuple(to_value(v) for v in values)
        return self._append("value_rows", row)

    def set_map(self, values: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> InsertBuilder:
        """Replace columns and rows with a single row taken from ``values``."""
        pairs = _pairs(values)
        return self._set(
            column_names=tuple(column for column, _ in pairs),
            value_rows=(tuple(to_value(value) for _, value in pairs),),
        )

    def select(self, select: Fragment) -> InsertBuilder:
        """Insert the rows of ``select`` instead of literal VALUES."""
        return self._set(select_query=select)

    def on_duplicate_key_update(
        self, values: Mapping[str, Any] | Iterable[tuple[str, Any]]
    ) -> InsertBuilder:
        """Add a MySQL ``ON DUPLICATE KEY UPDATE`` list, in iteration order."""
        clauses = tuple(
            SetClause(column=column, value=to_value(value)) for column, value in _pairs(values)
        )
        return self._append("duplicate_updates", *clauses)

    def _write(self, out: ClauseWriter) -> None:
        if not self.into_table:
            raise InvalidStatementError("insert statements must specify a table", clause="INTO")
        if not self.value_rows and self.select_query is None:
            raise InvalidStatementError(
                "insert statements must have at least one set of values or select clause",
                clause="VALUES",
            )

        out.write(" ".join((self.verb, *self.option_words, "INTO", self.into_table)))
        if self.column_names:
            out.write(f"({','.join(self.column_names)})")

        if self.select_query is not None:
            out.write(*render(self.select_query))
        else:
            self._write_values(out)

        if self.duplicate_updates:
            out.clause("ON DUPLICATE KEY UPDATE", self.duplicate_updates, ", ")

    def _write_values(self, out: ClauseWriter) -> None:
        rows: list[str] = []
        args: list[Any] = []
        for row in self.value_rows:
            row_sql, row_args = render_all(row, ",")
            rows.append(f"({row_sql})")
            args.extend(row_args)
        out.write(f"VALUES {','.join(rows)}", args)

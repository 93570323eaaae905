"""UPDATE statement builder.

Clause order::

    [prefixes] [WITH ctes] UPDATE table [joins] SET a = ?, ... [FROM from]
    [WHERE ...] [ORDER BY ...] [LIMIT n] [OFFSET n] [suffixes]
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from mortar.errors import InvalidStatementError
from mortar.expr.base import Alias, Fragment, Literal, render, render_all
from mortar.statement.base import ClauseWriter, FilteredStatement, to_value
from mortar.statement.clauses import SetClause


class UpdateBuilder(FilteredStatement):
    """Builds UPDATE statements.

    ``set()`` values are bound as arguments unless they are fragments::

        update("accounts")
            .set("balance", expr("balance + ?", 10))
            .set("status", "active")            # bound: status = ?
            .set("level", case("tier").when("'gold'", 3).else_(1))
            .where({"id": 7})
    """

    table_name: str = ""
    set_clauses: tuple[SetClause, ...] = ()
    from_part: Fragment | None = None

    def table(self, table: str) -> UpdateBuilder:
        return self._set(table_name=table)

    def set(self, column: str, value: Any) -> UpdateBuilder:
        """Add ``column = value`` to the SET list."""
        return self._append("set_clauses", SetClause(column=column, value=to_value(value)))

    def set_map(self, values: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> UpdateBuilder:
        """Add one SET entry per item, in iteration order."""
        items = values.items() if isinstance(values, Mapping) else values
        return self._append(
            "set_clauses",
            *(SetClause(column=column, value=to_value(value)) for column, value in items),
        )

    def from_(self, table: str) -> UpdateBuilder:
        return self._set(from_part=Literal(table))

    def from_select(self, select: Fragment, alias: str) -> UpdateBuilder:
        return self._set(from_part=Alias(select, alias))

    def _write(self, out: ClauseWriter) -> None:
        if not self.table_name:
            raise InvalidStatementError("update statements must specify a table", clause="UPDATE")
        if not self.set_clauses:
            raise InvalidStatementError(
                "update statements must have at least one Set clause", clause="SET"
            )

        self._write_ctes(out)
        out.write(f"UPDATE {self.table_name}")
        self._write_joins(out)

        set_sql, set_args = render_all(self.set_clauses, ", ")
        out.write(f"SET {set_sql}", set_args)

        if self.from_part is not None:
            from_sql, from_args = render(self.from_part)
            out.write(f"FROM {from_sql}", from_args)

        self._write_where(out)
        self._write_tail(out)

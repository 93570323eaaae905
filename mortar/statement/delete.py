"""DELETE statement builder."""

from __future__ import annotations

from mortar.errors import InvalidStatementError
from mortar.statement.base import ClauseWriter, FilteredStatement


class DeleteBuilder(FilteredStatement):
    """Builds ``[WITH ...] DELETE FROM t [joins] [WHERE ...] [ORDER BY ...] [LIMIT] [OFFSET]``.

    Without any filter the statement affects every row.  An empty ``And`` /
    ``Or`` passed to :meth:`where` is treated as "no filter".  Raw SQL is always
    kept, so ``where("(1=0)")`` or any explicit false expression gives a
    statement that deletes nothing.
    """

    from_table: str = ""

    def from_(self, table: str) -> DeleteBuilder:
        return self._set(from_table=table)

    def _write(self, out: ClauseWriter) -> None:
        if not self.from_table:
            raise InvalidStatementError(
                "delete statements must specify a From table", clause="DELETE"
            )
        self._write_ctes(out)
        out.write(f"DELETE FROM {self.from_table}")
        self._write_joins(out)
        self._write_where(out)
        self._write_tail(out)

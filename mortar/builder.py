"""Statement factory carrying shared defaults.

``StatementBuilder`` holds the settings every statement needs (placeholder
format, runner) so they are configured once rather than on each statement::

    pg = StatementBuilder(placeholder_fmt="dollar")
    sql, args = pg.select("*").from_("users").where({"id": 7}).to_sql()
    # 'SELECT * FROM users WHERE id = $1', [7]

The module-level :func:`select`, :func:`insert`, :func:`replace`,
:func:`update` and :func:`delete` use a default builder: ``?`` markers and
no runner.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from mortar.compile.placeholder import QUESTION, PlaceholderFormat
from mortar.compile.registry import resolve_format
from mortar.statement.delete import DeleteBuilder
from mortar.statement.insert import InsertBuilder
from mortar.statement.select import SelectBuilder
from mortar.statement.update import UpdateBuilder


class StatementBuilder(BaseModel):
    """Factory for statement builders sharing one configuration.

    Attributes:
        placeholder_fmt: Format applied by ``to_sql()``; a
            :class:`PlaceholderFormat` or a registered name such as
            ``"dollar"``.
        runner: Optional DB-API connection used by ``execute()`` /
            ``query()`` / ``query_row()``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    placeholder_fmt: PlaceholderFormat = QUESTION
    runner: Any = None

    @field_validator("placeholder_fmt", mode="before")
    @classmethod
    def _resolve_placeholder_fmt(cls, v: Any) -> Any:
        if isinstance(v, str):
            return resolve_format(v)
        return v

    # ------------------------------------------------------------------
    # Derived factories
    # ------------------------------------------------------------------

    def placeholder_format(self, fmt: PlaceholderFormat | str) -> StatementBuilder:
        """Return a factory whose statements use ``fmt``."""
        return self.model_copy(update={"placeholder_fmt": resolve_format(fmt)})

    def run_with(self, runner: Any) -> StatementBuilder:
        """Return a factory whose statements execute on ``runner``."""
        return self.model_copy(update={"runner": runner})

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _defaults(self) -> dict[str, Any]:
        return {"placeholder_fmt": self.placeholder_fmt, "runner": self.runner}

    def select(self, *columns: str) -> SelectBuilder:
        return SelectBuilder(**self._defaults()).columns(*columns)

    def insert(self, into: str) -> InsertBuilder:
        return InsertBuilder(**self._defaults()).into(into)

    def replace(self, into: str) -> InsertBuilder:
        """Like :meth:`insert` but renders ``REPLACE INTO`` (MySQL / SQLite)."""
        return InsertBuilder(verb="REPLACE", **self._defaults()).into(into)

    def update(self, table: str) -> UpdateBuilder:
        return UpdateBuilder(**self._defaults()).table(table)

    def delete(self, from_: str) -> DeleteBuilder:
        return DeleteBuilder(**self._defaults()).from_(from_)


#: Default factory: ``?`` markers, no runner.
DEFAULT_BUILDER = StatementBuilder()


def select(*columns: str) -> SelectBuilder:
    """Start a SELECT with the given result columns."""
    return DEFAULT_BUILDER.select(*columns)


def insert(into: str) -> InsertBuilder:
    """Start an INSERT into ``into``."""
    return DEFAULT_BUILDER.insert(into)


def replace(into: str) -> InsertBuilder:
    """Start a REPLACE into ``into``."""
    return DEFAULT_BUILDER.replace(into)


def update(table: str) -> UpdateBuilder:
    """Start an UPDATE of ``table``."""
    return DEFAULT_BUILDER.update(table)


def delete(from_: str) -> DeleteBuilder:
    """Start a DELETE from ``from_``."""
    return DEFAULT_BUILDER.delete(from_)

"""Comparison predicates: column / value fragments.

Each predicate holds an ordered association of column name to value::

    Eq({"status": "active", "id": [1, 2, 3]})
    # status = ? AND id IN (?,?,?)      args: ["active", 1, 2, 3]

    Eq(deleted_at=None)
    # deleted_at IS NULL                args: []

Values are classified once, at construction, into a
:class:`~mortar.expr.operators.ValueKind`; rendering dispatches on that tag.
Columns render in the caller's insertion order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, ClassVar

from pydantic import BaseModel

from mortar.errors import MissingValueError, UnsupportedValueError
from mortar.expr.base import FRAGMENT_CONFIG, Fragment
from mortar.expr.operators import (
    ALWAYS_FALSE,
    ALWAYS_TRUE,
    MARKER,
    SQL_OPERATORS,
    ComparisonOp,
    ValueKind,
    classify,
    placeholders,
)

ColumnValues = Mapping[str, Any] | Iterable[tuple[str, Any]]


class Term(BaseModel):
    """One ``column <op> value`` pair with its pre-computed value kind."""

    model_config = FRAGMENT_CONFIG

    column: str
    kind: ValueKind
    value: Any


def _to_terms(columns: ColumnValues | None, extra: dict[str, Any]) -> tuple[Term, ...]:
    if columns is None:
        pairs: list[tuple[str, Any]] = []
    elif isinstance(columns, Mapping):
        pairs = list(columns.items())
    else:
        pairs = [(column, value) for column, value in columns]
    pairs.extend(extra.items())

    terms = []
    for column, value in pairs:
        kind, stored = classify(value)
        terms.append(Term(column=column, kind=kind, value=stored))
    return tuple(terms)


class Predicate(Fragment):
    """Base class for comparison predicates.

    Accepts a mapping, an iterable of ``(column, value)`` pairs, keyword
    arguments, or a combination of them (keywords come last).
    """

    op: ClassVar[ComparisonOp]

    terms: tuple[Term, ...] = ()

    def __init__(self, columns: ColumnValues | None = None, /, **values: Any) -> None:
        super().__init__(terms=_to_terms(columns, values))

    @property
    def is_compound(self) -> bool:
        """``True`` when more than one column is compared."""
        return len(self.terms) > 1

    def to_sql(self) -> tuple[str, list[Any]]:
        if not self.terms:
            return self._render_empty()
        parts: list[str] = []
        args: list[Any] = []
        for term in self.terms:
            sql, term_args = self._render_term(term)
            parts.append(sql)
            args.extend(term_args)
        return " AND ".join(parts), args

    def _render_empty(self) -> tuple[str, list[Any]]:
        raise MissingValueError(
            f"no comparison value provided for {SQL_OPERATORS[self.op]}"
        )

    def _render_term(self, term: Term) -> tuple[str, list[Any]]:
        if term.kind is not ValueKind.SCALAR:
            raise UnsupportedValueError(
                f"unsupported value type for this comparison: "
                f"{term.kind.value} value for {term.column!r} "
                f"with {SQL_OPERATORS[self.op]}",
                value=term.value,
            )
        return f"{term.column} {SQL_OPERATORS[self.op]} {MARKER}", [term.value]


# ---------------------------------------------------------------------------
# Equality
# ---------------------------------------------------------------------------


class _EqualityPredicate(Predicate):
    """Shared rendering for ``Eq`` / ``NotEq`` (NULL and IN-list aware)."""

    negated: ClassVar[bool] = False

    @property
    def is_empty_filter(self) -> bool:
        """``True`` for no columns, or a single column compared to an empty collection."""
        if not self.terms:
            return True
        if len(self.terms) > 1:
            return False
        term = self.terms[0]
        return term.kind is ValueKind.COLLECTION and not term.value

    def _render_empty(self) -> tuple[str, list[Any]]:
        return ALWAYS_TRUE, []

    def _render_term(self, term: Term) -> tuple[str, list[Any]]:
        if term.kind is ValueKind.NULL:
            null_sql = "IS NOT NULL" if self.negated else "IS NULL"
            return f"{term.column} {null_sql}", []
        if term.kind is ValueKind.COLLECTION:
            if not term.value:
                # "equals one of nothing" is vacuously false, its negation true.
                return (ALWAYS_TRUE if self.negated else ALWAYS_FALSE), []
            in_sql = "NOT IN" if self.negated else "IN"
            return (
                f"{term.column} {in_sql} ({placeholders(len(term.value))})",
                list(term.value),
            )
        return super()._render_term(term)


class Eq(_EqualityPredicate):
    """``column = ?``, ``column IS NULL`` or ``column IN (...)``."""

    op: ClassVar[ComparisonOp] = ComparisonOp.EQ


class NotEq(_EqualityPredicate):
    """``column <> ?``, ``column IS NOT NULL`` or ``column NOT IN (...)``."""

    op: ClassVar[ComparisonOp] = ComparisonOp.NE
    negated: ClassVar[bool] = True


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


class Lt(Predicate):
    """``column < ?``."""

    op: ClassVar[ComparisonOp] = ComparisonOp.LT


class LtOrEq(Predicate):
    """``column <= ?``."""

    op: ClassVar[ComparisonOp] = ComparisonOp.LTE


class Gt(Predicate):
    """``column > ?``."""

    op: ClassVar[ComparisonOp] = ComparisonOp.GT


class GtOrEq(Predicate):
    """``column >= ?``."""

    op: ClassVar[ComparisonOp] = ComparisonOp.GTE


# ---------------------------------------------------------------------------
# Pattern matching
# ---------------------------------------------------------------------------


class Like(Predicate):
    """``column LIKE ?``."""

    op: ClassVar[ComparisonOp] = ComparisonOp.LIKE


class NotLike(Predicate):
    """``column NOT LIKE ?``."""

    op: ClassVar[ComparisonOp] = ComparisonOp.NOT_LIKE


class ILike(Predicate):
    """``column ILIKE ?`` (PostgreSQL)."""

    op: ClassVar[ComparisonOp] = ComparisonOp.ILIKE


class NotILike(Predicate):
    """``column NOT ILIKE ?`` (PostgreSQL)."""

    op: ClassVar[ComparisonOp] = ComparisonOp.NOT_ILIKE

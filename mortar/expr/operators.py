"""Constants and helpers shared by predicate and conjunction fragments.

This module defines the value-kind classification used by comparison
predicates, the SQL operator table, and the always-true / always-false
literals emitted for empty filters.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

#: The positional parameter marker written by every fragment.
MARKER = "?"

#: Rendered by an empty ``And`` and by ``NotEq`` over an empty collection.
ALWAYS_TRUE = "(1=1)"

#: Rendered by an empty ``Or`` and by ``Eq`` over an empty collection.
ALWAYS_FALSE = "(1=0)"


# ---------------------------------------------------------------------------
# Value classification
# ---------------------------------------------------------------------------


class ValueKind(str, Enum):
    """How a comparison value is rendered."""

    NULL = "null"
    SCALAR = "scalar"
    COLLECTION = "collection"


def is_collection(value: Any) -> bool:
    """Return ``True`` for values expanded into one marker per element.

    Only ``list`` and ``tuple`` qualify.  Strings, bytes, mappings and sets
    are bound as single values (sets have no stable element order).
    """
    return isinstance(value, (list, tuple))


def classify(value: Any) -> tuple[ValueKind, Any]:
    """Return the :class:`ValueKind` of ``value`` and its stored form.

    Collections are copied into tuples so later mutation of the caller's
    list cannot change an already-built fragment.
    """
    if value is None:
        return ValueKind.NULL, None
    if is_collection(value):
        return ValueKind.COLLECTION, tuple(value)
    return ValueKind.SCALAR, value


def placeholders(count: int) -> str:
    """Return ``count`` comma-separated markers, e.g. ``"?,?,?"``."""
    if count < 1:
        return ""
    return ",".join(MARKER for _ in range(count))


# ---------------------------------------------------------------------------
# Comparison operators
# ---------------------------------------------------------------------------


class ComparisonOp(str, Enum):
    """Comparison kinds supported by predicate fragments."""

    EQ = "EQ"
    NE = "NE"
    LT = "LT"
    LTE = "LTE"
    GT = "GT"
    GTE = "GTE"
    LIKE = "LIKE"
    NOT_LIKE = "NOT_LIKE"
    ILIKE = "ILIKE"
    NOT_ILIKE = "NOT_ILIKE"


#: SQL keyword / symbol for each comparison.
SQL_OPERATORS: dict[ComparisonOp, str] = {
    ComparisonOp.EQ: "=",
    ComparisonOp.NE: "<>",
    ComparisonOp.LT: "<",
    ComparisonOp.LTE: "<=",
    ComparisonOp.GT: ">",
    ComparisonOp.GTE: ">=",
    ComparisonOp.LIKE: "LIKE",
    ComparisonOp.NOT_LIKE: "NOT LIKE",
    ComparisonOp.ILIKE: "ILIKE",
    ComparisonOp.NOT_ILIKE: "NOT ILIKE",
}

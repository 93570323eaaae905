"""Coercion of caller input into fragments.

Statement builders accept strings, mappings and fragments interchangeably
(``where("a = ?", 1)``, ``where({"a": 1})``, ``where(Eq({"a": 1}))``).  These
helpers turn such input into a :class:`~mortar.expr.base.Fragment` once, at
construction time, so rendering never has to inspect foreign types again.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from mortar.errors import UnsupportedValueError
from mortar.expr.base import EMPTY, Fragment, Literal, Param
from mortar.expr.raw import Expr


class Unsupported(Fragment):
    """Defers a coercion failure until render time."""

    value: Any
    reason: str

    def to_sql(self) -> tuple[str, list[Any]]:
        raise UnsupportedValueError(self.reason, value=self.value)


def to_fragment(value: Any, *args: Any) -> Fragment:
    """Coerce a clause argument (WHERE, JOIN, ORDER BY, prefix...) to a fragment.

    * ``None`` or ``""`` become the no-op fragment.
    * a ``str`` becomes an :class:`~mortar.expr.raw.Expr` over ``args``.
    * a mapping becomes an equality predicate.
    * a fragment is returned unchanged (``args`` must then be empty).

    Anything else yields a fragment that raises
    :class:`~mortar.errors.UnsupportedValueError` when rendered.
    """
    if isinstance(value, Fragment):
        if args:
            return Unsupported(
                value=value,
                reason="arguments cannot accompany a fragment; bind them inside it",
            )
        return value
    if value is None:
        return EMPTY
    if isinstance(value, str):
        return Expr(value, *args) if value else EMPTY
    if isinstance(value, Mapping):
        from mortar.expr.predicates import Eq

        return Eq(value)
    return Unsupported(
        value=value,
        reason=f"unsupported clause type {type(value).__name__}",
    )


def to_slot(value: Any) -> Fragment:
    """Coerce a CASE subject / condition / result slot to a fragment.

    Text is emitted verbatim (column references, keywords, pre-quoted
    literals); any other non-fragment value is bound as a single argument.
    """
    if isinstance(value, Fragment):
        return value
    if isinstance(value, str):
        return Literal(value)
    return Param(value)

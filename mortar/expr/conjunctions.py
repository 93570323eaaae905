"""Structural conjunctions: ``And``, ``Or`` and ``Not``.

``And(a, b)`` renders ``"(<a> AND <b>)"``; ``Or`` likewise with ``OR``.
Children rendering to ``""`` are skipped.  An empty ``And`` renders the
always-true literal ``(1=1)`` and an empty ``Or`` the always-false literal
``(1=0)``.  A WHERE / HAVING clause whose only filter is a childless ``And``
or ``Or`` is dropped (see :mod:`mortar.statement.policy`), so "no filter
supplied" never turns into an accidental ``WHERE (1=0)``.
"""

from __future__ import annotations

from typing import Any, ClassVar

from mortar.expr.base import Fragment, render
from mortar.expr.operators import ALWAYS_FALSE, ALWAYS_TRUE
from mortar.expr.predicates import Predicate


class Conjunction(Fragment):
    """An ordered sequence of child fragments joined by one connective."""

    connective: ClassVar[str]
    empty_sql: ClassVar[str]

    parts: tuple[Fragment, ...] = ()

    def __init__(self, *parts: Fragment) -> None:
        super().__init__(parts=parts)

    def append(self, *parts: Fragment) -> Conjunction:
        """Return a new conjunction with ``parts`` added at the end."""
        return self.model_copy(update={"parts": self.parts + parts})

    @property
    def is_empty_filter(self) -> bool:
        return not self.parts

    def to_sql(self) -> tuple[str, list[Any]]:
        if not self.parts:
            return self.empty_sql, []
        sql_parts: list[str] = []
        args: list[Any] = []
        for part in self.parts:
            sql, part_args = render(part)
            if not sql:
                continue
            sql_parts.append(sql)
            args.extend(part_args)
        if not sql_parts:
            return "", []
        return f"({f' {self.connective} '.join(sql_parts)})", args


class And(Conjunction):
    """All children must hold."""

    connective: ClassVar[str] = "AND"
    empty_sql: ClassVar[str] = ALWAYS_TRUE


class Or(Conjunction):
    """At least one child must hold."""

    connective: ClassVar[str] = "OR"
    empty_sql: ClassVar[str] = ALWAYS_FALSE


class Not(Fragment):
    """Negates exactly one child: ``NOT <child>``.

    Conjunction children are already parenthesised; a predicate comparing
    several columns is wrapped so the negation covers all of them.
    """

    expr: Fragment

    def __init__(self, expr: Fragment) -> None:
        super().__init__(expr=expr)

    def to_sql(self) -> tuple[str, list[Any]]:
        sql, args = render(self.expr)
        if not sql:
            return "", []
        if isinstance(self.expr, Predicate) and self.expr.is_compound:
            sql = f"({sql})"
        return f"NOT {sql}", args

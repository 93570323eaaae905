"""CASE expressions.

Build incrementally, validate on render::

    status = (
        case("order_status")
        .when("'pending'", 0)
        .when("'completed'", 2)
        .else_(99)
    )
    # CASE order_status WHEN 'pending' THEN ? WHEN 'completed' THEN ? ELSE ? END
    # args: [0, 2, 99]

Slot dispatch (subject, conditions, results and the default):

* a :class:`~mortar.expr.base.Fragment` renders recursively;
* a ``str`` is emitted verbatim and binds nothing;
* any other value becomes one ``?`` marker bound to that value.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from mortar.errors import MissingWhenClauseError
from mortar.expr.base import FRAGMENT_CONFIG, Fragment, render
from mortar.expr.coerce import to_fragment, to_slot


class WhenThen(BaseModel):
    """A single ``WHEN <condition> THEN <result>`` pair."""

    model_config = FRAGMENT_CONFIG

    condition: Fragment
    result: Fragment


class Case(Fragment):
    """An immutable CASE expression; each builder method returns a new one."""

    subject: Fragment | None = None
    whens: tuple[WhenThen, ...] = ()
    default: Fragment | None = None

    def when(self, condition: Any, result: Any) -> Case:
        """Return a copy with ``WHEN condition THEN result`` appended."""
        pair = WhenThen(condition=to_slot(condition), result=to_slot(result))
        return self.model_copy(update={"whens": self.whens + (pair,)})

    def else_(self, value: Any) -> Case:
        """Return a copy with the ``ELSE`` result set (replacing any previous one)."""
        return self.model_copy(update={"default": to_slot(value)})

    def to_sql(self) -> tuple[str, list[Any]]:
        if not self.whens:
            raise MissingWhenClauseError()

        parts = ["CASE"]
        args: list[Any] = []

        def emit(fragment: Fragment) -> str:
            sql, fragment_args = render(fragment)
            args.extend(fragment_args)
            return sql

        if self.subject is not None:
            subject_sql = emit(self.subject)
            if subject_sql:
                parts.append(subject_sql)
        for pair in self.whens:
            parts.append(f"WHEN {emit(pair.condition)} THEN {emit(pair.result)}")
        if self.default is not None:
            parts.append(f"ELSE {emit(self.default)}")
        parts.append("END")
        return " ".join(parts), args


def case(*what: Any) -> Case:
    """Start a CASE expression.

    ``case()`` has no subject.  ``case("status")`` uses the text verbatim;
    ``case("? > ?", 10, 5)`` binds the extra arguments to the subject's
    markers; ``case(fragment)`` nests the fragment.
    """
    if not what:
        return Case()
    subject, *args = what
    if args:
        return Case(subject=to_fragment(subject, *args))
    return Case(subject=to_slot(subject))

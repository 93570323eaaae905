"""The fragment protocol and the composer.

A :class:`Fragment` is anything that can render itself to SQL text plus the
ordered list of arguments bound to the ``?`` markers in that text.  Every
fragment is a frozen pydantic model: once built it never changes, so a
fragment can be shared freely between statements and threads.

Rendering contract
------------------
``to_sql()`` returns ``(sql, args)`` or raises a
:class:`~mortar.errors.BuildError`.  For any successful rendering the number
of ``?`` markers in ``sql`` equals ``len(args)`` and their left-to-right order
matches.  ``to_sql_raw()`` is what enclosing fragments call; it differs from
``to_sql()`` only for statements, whose ``to_sql()`` additionally rewrites the
markers into the statement's placeholder format.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict

from mortar.errors import BuildError
from mortar.expr.operators import MARKER

#: Shared model config for every fragment.
FRAGMENT_CONFIG = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)


class Fragment(BaseModel, ABC):
    """Base class for every renderable SQL fragment."""

    model_config = FRAGMENT_CONFIG

    @abstractmethod
    def to_sql(self) -> tuple[str, list[Any]]:
        """Render to ``(sql, args)``.

        Raises:
            BuildError: If the fragment's content is inconsistent.
        """

    @property
    def is_empty_filter(self) -> bool:
        """``True`` when this fragment stands for "no filter supplied".

        WHERE / HAVING drop a clause whose only filter says so.
        """
        return False

    def to_sql_raw(self) -> tuple[str, list[Any]]:
        """Render with plain ``?`` markers, for nesting inside another fragment."""
        return self.to_sql()

    def must_sql(self) -> tuple[str, list[Any]]:
        """Render like :meth:`to_sql` for call sites that cannot fail.

        Intended for statically constructed statements.  A build failure is
        a programming error here and surfaces as ``RuntimeError``.
        """
        try:
            return self.to_sql()
        except BuildError as exc:
            raise RuntimeError(f"must_sql failed: {exc}") from exc


# ---------------------------------------------------------------------------
# Leaf variants
# ---------------------------------------------------------------------------


class Literal(Fragment):
    """Verbatim SQL text with no markers and no arguments.

    Used for column names, keywords, and pre-quoted literals.
    """

    sql: str

    def __init__(self, sql: str) -> None:
        super().__init__(sql=sql)

    def to_sql(self) -> tuple[str, list[Any]]:
        return self.sql, []


class Param(Fragment):
    """A single bound value: renders one marker and one argument.

    The value is never expanded, even when it is a list.
    """

    value: Any

    def __init__(self, value: Any) -> None:
        super().__init__(value=value)

    def to_sql(self) -> tuple[str, list[Any]]:
        return MARKER, [self.value]


class Empty(Fragment):
    """The explicit no-op fragment; the composer skips it entirely."""

    def to_sql(self) -> tuple[str, list[Any]]:
        return "", []


#: Shared no-op instance.
EMPTY = Empty()


class Alias(Fragment):
    """Wraps a fragment as ``(<sql>) AS <name>``."""

    expr: Fragment
    name: str

    def __init__(self, expr: Fragment, name: str) -> None:
        super().__init__(expr=expr, name=name)

    def to_sql(self) -> tuple[str, list[Any]]:
        sql, args = render(self.expr)
        return f"({sql}) AS {self.name}", args


def alias(expr: Fragment, name: str) -> Alias:
    """Return ``expr`` aliased as ``name`` (e.g. for a CASE result column)."""
    return Alias(expr, name)


# ---------------------------------------------------------------------------
# Composer
# ---------------------------------------------------------------------------


def render(fragment: Fragment) -> tuple[str, list[Any]]:
    """Render a single fragment with plain ``?`` markers.

    Returns a fresh argument list the caller may extend.
    """
    sql, args = fragment.to_sql_raw()
    return sql, list(args)


def render_all(
    fragments: Iterable[Fragment],
    separator: str,
) -> tuple[str, list[Any]]:
    """Join ``fragments`` with ``separator`` into one ``(sql, args)`` pair.

    Fragments are rendered in order.  The first failure propagates and no
    partial SQL is returned.  A fragment rendering to ``""`` contributes
    neither text, separator, nor arguments.  Argument lists are concatenated,
    never merged or reordered.
    """
    parts: list[str] = []
    args: list[Any] = []
    for fragment in fragments:
        sql, fragment_args = render(fragment)
        if not sql:
            continue
        parts.append(sql)
        args.extend(fragment_args)
    return separator.join(parts), args

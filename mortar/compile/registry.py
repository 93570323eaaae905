"""Placeholder format registry (Open/Closed Principle).

``PlaceholderRegistry`` maps names to :class:`PlaceholderFormat` instances so
that configuration can refer to a format by name (``"dollar"``) and new
formats can be added without touching the statement builders.

Usage::

    from mortar.compile.registry import PlaceholderRegistry

    @PlaceholderRegistry.register("percent")
    class PercentFormat(PlaceholderFormat):
        ...

    sql = rewrite("a = ? AND b = ?", "dollar")   # 'a = $1 AND b = $2'
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import ClassVar

from mortar.compile.placeholder import AT_P, COLON, DOLLAR, QUESTION, PlaceholderFormat
from mortar.errors import UnknownPlaceholderFormatError

logger = logging.getLogger(__name__)


class PlaceholderRegistry:
    """Registry mapping format names to :class:`PlaceholderFormat` instances."""

    _formats: ClassVar[dict[str, PlaceholderFormat]] = {}

    @classmethod
    def register(
        cls, name: str
    ) -> Callable[[type[PlaceholderFormat]], type[PlaceholderFormat]]:
        """Decorator that instantiates and registers a format class under ``name``.

        Args:
            name: The format name (e.g. ``"dollar"``).

        Returns:
            A decorator that registers and returns the format class.
        """

        def decorator(format_cls: type[PlaceholderFormat]) -> type[PlaceholderFormat]:
            cls.register_format(format_cls(), name=name)
            return format_cls

        return decorator

    @classmethod
    def register_format(cls, fmt: PlaceholderFormat, name: str | None = None) -> None:
        """Register a format instance under ``name`` (defaults to ``fmt.name``)."""
        key = (name or fmt.name).lower()
        if key in cls._formats:
            logger.debug("Replacing placeholder format %r with %r", key, fmt)
        cls._formats[key] = fmt

    @classmethod
    def get(cls, name: str) -> PlaceholderFormat:
        """Return the format registered under ``name``.

        Raises:
            UnknownPlaceholderFormatError: If no format is registered for ``name``.
        """
        fmt = cls._formats.get(name.lower())
        if fmt is None:
            raise UnknownPlaceholderFormatError(name, cls.registered_names())
        return fmt

    @classmethod
    def registered_names(cls) -> list[str]:
        """Return the sorted list of registered format names."""
        return sorted(cls._formats)


for _builtin in (QUESTION, DOLLAR, COLON, AT_P):
    PlaceholderRegistry.register_format(_builtin)


def resolve_format(fmt: PlaceholderFormat | str) -> PlaceholderFormat:
    """Return ``fmt`` itself, or the registered format when given a name."""
    if isinstance(fmt, PlaceholderFormat):
        return fmt
    return PlaceholderRegistry.get(fmt)


def rewrite(
    sql: str,
    fmt: PlaceholderFormat | str,
    arg_count: int | None = None,
) -> str:
    """Rewrite the ``?`` markers of a composed statement into ``fmt``.

    Args:
        sql: Fully composed SQL with ``?`` markers.
        fmt: A :class:`PlaceholderFormat` or its registered name.
        arg_count: Number of bound arguments, checked by numbered formats.

    Returns:
        The rewritten SQL string.
    """
    return resolve_format(fmt).replace_placeholders(sql, arg_count)

"""Custom exception hierarchy for mortar.

All public errors inherit from :class:`MortarError` so callers can catch the
base class for any mortar-specific failure.

Every :class:`BuildError` is raised while a fragment or statement is being
rendered (``to_sql()``), never while it is being assembled, so builders can
be constructed incrementally and validated only when finally rendered.
"""
from __future__ import annotations


class MortarError(Exception):
    """Base exception for all mortar errors."""


class BuildError(MortarError):
    """Raised when a fragment or statement cannot be rendered to SQL.

    Args:
        message: Human-readable description.
        clause: The statement clause being rendered when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause


class UnsupportedValueError(BuildError):
    """Raised when a value has a type the comparison or slot cannot render.

    Args:
        message: Human-readable description.
        value: The offending value.
        clause: Optional clause name.
    """

    def __init__(self, message: str, value: object = None, clause: str | None = None) -> None:
        super().__init__(message, clause=clause)
        self.value = value


class MissingValueError(BuildError):
    """Raised when a comparison predicate carries no column/value pair."""


class EmptyCollectionError(BuildError):
    """Raised when an empty list or tuple is bound to a raw expression marker."""

    def __init__(self, sql: str) -> None:
        super().__init__(
            f"empty collection passed where an argument was expected in {sql!r}"
        )
        self.sql = sql


class ArgumentCountError(BuildError):
    """Raised when the number of ``?`` markers differs from the argument count.

    Args:
        expected: Number of markers found in the SQL text.
        actual: Number of arguments supplied.
        sql: The SQL text that was being rendered.
    """

    def __init__(self, expected: int, actual: int, sql: str) -> None:
        super().__init__(
            f"placeholder count mismatch in {sql!r}: "
            f"expected {expected} arguments, got {actual}"
        )
        self.expected = expected
        self.actual = actual
        self.sql = sql


class MissingWhenClauseError(BuildError):
    """Raised when a CASE expression is rendered without any WHEN clause."""

    def __init__(self) -> None:
        super().__init__(
            "case expression must contain at least one WHEN clause", clause="CASE"
        )


class InvalidStatementError(BuildError):
    """Raised when a statement is missing a required part (table, columns, ...)."""


class UnknownPlaceholderFormatError(BuildError):
    """Raised when a placeholder format name is not registered.

    Args:
        name: The requested format name.
        registered: Names currently registered.
    """

    def __init__(self, name: str, registered: list[str]) -> None:
        super().__init__(
            f"Unknown placeholder format: '{name}'. Registered formats: {registered}."
        )
        self.name = name
        self.registered = registered


class RunnerError(MortarError):
    """Base class for errors raised by the execution helpers."""


class RunnerNotSetError(RunnerError):
    """Raised when ``execute()`` / ``query()`` is called without a runner."""

    def __init__(self) -> None:
        super().__init__("cannot run; no runner set (call run_with() first)")

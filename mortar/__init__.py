"""mortar: composable SQL fragments and statement builders.

Build SQL from pieces, bind arguments in order.

Public API
----------
``select`` / ``insert`` / ``replace`` / ``update`` / ``delete``
    Start a statement with the default configuration (``?`` markers).

``StatementBuilder``
    Factory carrying a placeholder format and an optional DB-API runner.

``Eq``, ``NotEq``, ``Lt``, ``LtOrEq``, ``Gt``, ``GtOrEq``, ``Like``,
``NotLike``, ``ILike``, ``NotILike``
    Column comparison predicates built from a mapping of column to value.

``And``, ``Or``, ``Not``
    Structural conjunctions over any fragments.

``expr``, ``case``, ``alias``, ``placeholders``
    Raw SQL with bound arguments, CASE expressions, aliased fragments, and
    a ``?,?,?`` helper.

Every statement renders with ``to_sql()`` to ``(sql, args)`` and raises a
:class:`BuildError` subclass when it cannot be rendered.

Extensibility
-------------
New placeholder styles can be registered via::

    from mortar.compile.registry import PlaceholderRegistry

    @PlaceholderRegistry.register("percent")
    class PercentFormat(PlaceholderFormat):
        ...

After registration, ``StatementBuilder(placeholder_fmt="percent")`` and
``Statement.placeholder_format("percent")`` pick it up by name.
"""

from __future__ import annotations

from mortar.builder import StatementBuilder, delete, insert, replace, select, update
from mortar.compile.placeholder import (
    AT_P,
    COLON,
    DOLLAR,
    QUESTION,
    NumberedFormat,
    PlaceholderFormat,
)
from mortar.compile.registry import PlaceholderRegistry, rewrite
from mortar.errors import (
    ArgumentCountError,
    BuildError,
    EmptyCollectionError,
    InvalidStatementError,
    MissingValueError,
    MissingWhenClauseError,
    MortarError,
    RunnerError,
    RunnerNotSetError,
    UnknownPlaceholderFormatError,
    UnsupportedValueError,
)
from mortar.execute.runner import execute_with, query_row_with, query_with
from mortar.expr import (
    Alias,
    And,
    Case,
    Eq,
    Expr,
    Fragment,
    Gt,
    GtOrEq,
    ILike,
    Like,
    Literal,
    Lt,
    LtOrEq,
    Not,
    NotEq,
    NotILike,
    NotLike,
    Or,
    Param,
    alias,
    case,
    expr,
    placeholders,
)
from mortar.statement import (
    CTE,
    DeleteBuilder,
    InsertBuilder,
    SelectBuilder,
    UpdateBuilder,
)

__all__ = [
    # Statements
    "StatementBuilder",
    "select",
    "insert",
    "replace",
    "update",
    "delete",
    "SelectBuilder",
    "InsertBuilder",
    "UpdateBuilder",
    "DeleteBuilder",
    "CTE",
    # Fragments
    "Fragment",
    "Literal",
    "Param",
    "Alias",
    "Expr",
    "Case",
    "Eq",
    "NotEq",
    "Lt",
    "LtOrEq",
    "Gt",
    "GtOrEq",
    "Like",
    "NotLike",
    "ILike",
    "NotILike",
    "And",
    "Or",
    "Not",
    "alias",
    "case",
    "expr",
    "placeholders",
    # Placeholders
    "PlaceholderFormat",
    "NumberedFormat",
    "PlaceholderRegistry",
    "QUESTION",
    "DOLLAR",
    "COLON",
    "AT_P",
    "rewrite",
    # Execution
    "execute_with",
    "query_with",
    "query_row_with",
    # Errors
    "MortarError",
    "BuildError",
    "UnsupportedValueError",
    "MissingValueError",
    "EmptyCollectionError",
    "ArgumentCountError",
    "MissingWhenClauseError",
    "InvalidStatementError",
    "UnknownPlaceholderFormatError",
    "RunnerError",
    "RunnerNotSetError",
]

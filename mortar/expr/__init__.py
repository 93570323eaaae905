"""mortar fragments: the composable pieces statements are built from."""
from mortar.expr.base import (
    EMPTY,
    Alias,
    Empty,
    Fragment,
    Literal,
    Param,
    alias,
    render,
    render_all,
)
from mortar.expr.case import Case, WhenThen, case
from mortar.expr.coerce import to_fragment, to_slot
from mortar.expr.conjunctions import And, Conjunction, Not, Or
from mortar.expr.operators import (
    ALWAYS_FALSE,
    ALWAYS_TRUE,
    MARKER,
    ComparisonOp,
    ValueKind,
    placeholders,
)
from mortar.expr.predicates import (
    Eq,
    Gt,
    GtOrEq,
    ILike,
    Like,
    Lt,
    LtOrEq,
    NotEq,
    NotILike,
    NotLike,
    Predicate,
)
from mortar.expr.raw import Expr, expr

__all__ = [
    "ALWAYS_FALSE",
    "ALWAYS_TRUE",
    "EMPTY",
    "MARKER",
    "Alias",
    "And",
    "Case",
    "ComparisonOp",
    "Conjunction",
    "Empty",
    "Eq",
    "Expr",
    "Fragment",
    "Gt",
    "GtOrEq",
    "ILike",
    "Like",
    "Literal",
    "Lt",
    "LtOrEq",
    "Not",
    "NotEq",
    "NotILike",
    "NotLike",
    "Or",
    "Param",
    "Predicate",
    "ValueKind",
    "WhenThen",
    "alias",
    "case",
    "expr",
    "placeholders",
    "render",
    "render_all",
    "to_fragment",
    "to_slot",
]

"""mortar statement builders: SELECT, INSERT, REPLACE, UPDATE and DELETE."""
from mortar.statement.base import ClauseWriter, FilteredStatement, Statement, to_value
from mortar.statement.clauses import CTE, CompoundPart, JoinSelectPart, SetClause, Subquery
from mortar.statement.delete import DeleteBuilder
from mortar.statement.insert import InsertBuilder
from mortar.statement.policy import HAVING, WHERE, FilterPolicy
from mortar.statement.select import SelectBuilder
from mortar.statement.update import UpdateBuilder

__all__ = [
    "CTE",
    "HAVING",
    "WHERE",
    "ClauseWriter",
    "CompoundPart",
    "DeleteBuilder",
    "FilterPolicy",
    "FilteredStatement",
    "InsertBuilder",
    "JoinSelectPart",
    "SelectBuilder",
    "SetClause",
    "Statement",
    "Subquery",
    "UpdateBuilder",
    "to_value",
]

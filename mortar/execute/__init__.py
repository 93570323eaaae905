"""mortar execution helpers for DB-API 2.0 connections."""
from mortar.execute.runner import execute_with, query_row_with, query_with

__all__ = ["execute_with", "query_row_with", "query_with"]

"""
SQL module for client-side SQL generation.

This module provides the escaping engine (values, identifiers, LIKE patterns),
the ``?`` / ``??`` / ``:name`` / ``::name`` template formatter, the WHERE
clause compiler and statement builders, all parameterized by a dialect.
"""

from .core.escaper import (
    Escaper,
    escape_id,
    escape_like,
    format_date,
    format_datetime,
    format_query,
    quote,
)
from .core.identifier import qualify_table, quote_identifier
from .core.parameters import build_indexed_params, remap_records
from .core.raw import RawSql, binary, raw
from .dialects import InsertOption, MySQLDialect, PostgreSQLDialect, SQLDialect, get_dialect
from .operations.statements import StatementBuilder
from .operations.where import WhereCompiler

__all__ = [
    "Escaper",
    "InsertOption",
    "MySQLDialect",
    "PostgreSQLDialect",
    "RawSql",
    "SQLDialect",
    "StatementBuilder",
    "WhereCompiler",
    "binary",
    "build_indexed_params",
    "escape_id",
    "escape_like",
    "format_date",
    "format_datetime",
    "format_query",
    "get_dialect",
    "qualify_table",
    "quote",
    "quote_identifier",
    "raw",
    "remap_records",
]

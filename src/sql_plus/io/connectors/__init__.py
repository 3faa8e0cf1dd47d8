"""MySQL connectivity: connector, connection wrapper, statements and errors."""

from .database import Database
from .error_codes import DEFAULT_CATEGORIES, ErrorCategory
from .error_translator import translate_driver_exception, translate_error
from .exceptions import (
    AccessDeniedError,
    CannotAddForeignKeyError,
    DatabaseError,
    DuplicateEntryError,
    NoSuchTableError,
    TooManyConnectionsError,
)
from .mysql_connector import MySQLConnector
from .statement import Statement

__all__ = [
    "AccessDeniedError",
    "CannotAddForeignKeyError",
    "DEFAULT_CATEGORIES",
    "Database",
    "DatabaseError",
    "DuplicateEntryError",
    "ErrorCategory",
    "MySQLConnector",
    "NoSuchTableError",
    "Statement",
    "TooManyConnectionsError",
    "translate_driver_exception",
    "translate_error",
]

"""SQL dialects."""

from typing import Dict, Type

from .base import InsertOption, SQLDialect
from .mysql import MySQLDialect
from .postgresql import PostgreSQLDialect

DIALECTS: Dict[str, Type[SQLDialect]] = {
    MySQLDialect.name: MySQLDialect,
    PostgreSQLDialect.name: PostgreSQLDialect,
}


def get_dialect(name: str) -> SQLDialect:
    """Instantiate a dialect by name ("mysql", "postgresql")."""
    try:
        return DIALECTS[name]()
    except KeyError:
        raise ValueError(f"Unknown SQL dialect: {name!r}") from None


__all__ = [
    "DIALECTS",
    "InsertOption",
    "MySQLDialect",
    "PostgreSQLDialect",
    "SQLDialect",
    "get_dialect",
]

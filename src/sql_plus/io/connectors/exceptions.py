"""Exceptions for failures reported by the database server.

Every class carries the driver error code and the SQL that failed so callers
can decide on retry or recovery; none of them is retried automatically.
"""

from typing import Any, Dict, Optional

from sql_plus.infrastructure.sql.core.exceptions import SqlPlusError


class DatabaseError(SqlPlusError):
    """Generic database failure; the base of every driver-derived error."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        sql: Optional[str] = None,
    ):
        self.code = code
        self.sql = sql
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to structured dict for logging."""
        data = super().to_dict()
        data["code"] = self.code
        data["sql"] = self.sql
        return data


class DuplicateEntryError(DatabaseError):
    """A unique or primary key constraint rejected the row."""


class NoSuchTableError(DatabaseError):
    """The statement referenced a table that does not exist."""

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        code: Optional[int] = None,
        sql: Optional[str] = None,
    ):
        self.table = table
        super().__init__(message, code=code, sql=sql)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["table"] = self.table
        return data


class CannotAddForeignKeyError(DatabaseError):
    """A foreign key could not be created; ``details`` holds the server's explanation."""

    def __init__(
        self,
        message: str,
        details: Optional[str],
        sql: Optional[str],
        code: Optional[int] = None,
    ):
        self.base_message = message
        self.details = details
        lines = [
            message,
            "Details: " + (details if details else "(insufficient privileges)"),
            "SQL: " + (sql if sql else "(unknown)"),
        ]
        super().__init__("\n".join(lines), code=code, sql=sql)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["details"] = self.details
        return data


class AccessDeniedError(DatabaseError):
    """The server refused the credentials or the privilege."""


class TooManyConnectionsError(DatabaseError):
    """The server's connection limit has been reached."""

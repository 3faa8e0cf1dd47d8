"""
Translation of driver errors into the sql-plus exception hierarchy.

The translator is a decision table over error categories. The only extra
work happens for foreign key failures, where the server is asked for the
detailed reason; those diagnostic queries never mask the original error.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional, Tuple

import pymysql

from sql_plus.utils.logging import get_logger

from .error_codes import DEFAULT_CATEGORIES, ErrorCategory
from .exceptions import (
    AccessDeniedError,
    CannotAddForeignKeyError,
    DatabaseError,
    DuplicateEntryError,
    NoSuchTableError,
    TooManyConnectionsError,
)

logger = get_logger(__name__)

NO_SUCH_TABLE_PATTERN = re.compile(r"Table '(.*)' doesn't exist")
FOREIGN_KEY_SECTION_PATTERN = re.compile(
    r"^------------------------\n"
    r"LATEST FOREIGN KEY ERROR\n"
    r"------------------------\n"
    r"(.*?)(?:------------\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def driver_error_parts(exc: BaseException) -> Tuple[Optional[int], str]:
    """
    Split a PyMySQL error into (code, message).

    PyMySQL raises errors as ``Error(code, message)``; anything else yields
    ``(None, str(exc))``.
    """
    args = getattr(exc, "args", ())
    if len(args) >= 2 and isinstance(args[0], int):
        return args[0], str(args[1])
    return None, str(exc)


def parse_missing_table(message: str) -> Optional[str]:
    """
    Extract the table name from a "doesn't exist" message.

    Examples:
        >>> parse_missing_table("Table 'db.foo' doesn't exist")
        'db.foo'
        >>> parse_missing_table("something else") is None
        True
    """
    match = NO_SUCH_TABLE_PATTERN.fullmatch(message)
    return match.group(1) if match else None


def translate_error(
    connection: Optional[Any],
    code: Optional[int],
    message: str,
    sql: Optional[str],
    categories: Mapping[int, ErrorCategory] = DEFAULT_CATEGORIES,
) -> DatabaseError:
    """
    Map a driver error code and message to a typed exception.

    Args:
        connection: PyMySQL connection used for diagnostics, or None
        code: Driver error code
        message: Driver error message
        sql: SQL that failed
        categories: Error code -> category table

    Returns:
        The exception to raise; callers chain it with ``raise ... from exc``
    """
    category = categories.get(code) if code is not None else None
    context = f"{message}\nSQL: {sql}"

    if category is ErrorCategory.DUPLICATE_ENTRY:
        return DuplicateEntryError(context, code=code, sql=sql)
    if category is ErrorCategory.NO_SUCH_TABLE:
        return NoSuchTableError(
            context, table=parse_missing_table(message), code=code, sql=sql
        )
    if category is ErrorCategory.CANNOT_ADD_FOREIGN_KEY:
        details = fetch_foreign_key_details(connection)
        return CannotAddForeignKeyError(message, details, sql, code=code)
    if category is ErrorCategory.ACCESS_DENIED:
        return AccessDeniedError(context, code=code, sql=sql)
    if category is ErrorCategory.TOO_MANY_CONNECTIONS:
        return TooManyConnectionsError(context, code=code, sql=sql)
    return DatabaseError(context, code=code, sql=sql)


def translate_driver_exception(
    connection: Optional[Any],
    exc: BaseException,
    sql: Optional[str],
    categories: Mapping[int, ErrorCategory] = DEFAULT_CATEGORIES,
) -> DatabaseError:
    """Translate a caught PyMySQL exception; see ``translate_error``."""
    code, message = driver_error_parts(exc)
    return translate_error(connection, code, message, sql, categories)


def fetch_foreign_key_details(connection: Optional[Any]) -> Optional[str]:
    """
    Ask InnoDB why the last foreign key failed.

    Falls back to naming the current user (reading the InnoDB status needs the
    PROCESS privilege), then to the status query's own error message.
    """
    if connection is None:
        return "(no connection)"

    try:
        status = _first_row(connection, "SHOW ENGINE INNODB STATUS")
    except pymysql.MySQLError as status_error:
        logger.warning(
            "error_translator.innodb_status_failed", error=str(status_error)
        )
        try:
            user_row = _first_row(connection, "SELECT USER()")
        except pymysql.MySQLError as user_error:
            logger.warning("error_translator.user_lookup_failed", error=str(user_error))
            return f"({driver_error_parts(status_error)[1]})"
        user = user_row[0] if user_row else "(unknown)"
        return f"(user {user} does not have PROCESS privilege)"

    if len(status) < 3:
        return None
    match = FOREIGN_KEY_SECTION_PATTERN.search(str(status[2]))
    return match.group(1) if match else None


def _first_row(connection: Any, sql: str) -> list:
    """Run a diagnostic query directly on the driver, bypassing translation."""
    with connection.cursor() as cursor:
        cursor.execute(sql)
        row = cursor.fetchone()
    if row is None:
        return []
    if isinstance(row, Mapping):
        return list(row.values())
    return list(row)

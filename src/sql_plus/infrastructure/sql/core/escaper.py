"""
Value and identifier escaping.

``Escaper.quote`` turns a Python value into a SQL literal, ``Escaper.escape_id``
turns a name into a quoted identifier and ``Escaper.format`` fills a SQL
template (see ``template.py``) with both. Module-level functions bound to a
connection-less MySQL escaper are provided for standalone use.

Value rules:
    None                      -> NULL
    bool                      -> dialect literal (1/0 for MySQL, TRUE/FALSE for PostgreSQL)
    int, float, Decimal       -> decimal text, unquoted
    RawSql                    -> verbatim
    datetime / date           -> 'YYYY-MM-DD HH:MM:SS' / 'YYYY-MM-DD'
    bytes                     -> 0x hex literal
    list, tuple, set          -> (v1, v2, ...)
    Mapping                   -> `k1`=v1, `k2`=v2
    str                       -> connection's native escaping, else dialect table
"""

from __future__ import annotations

import datetime
import math
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from pymysql.connections import Connection as PyMySQLConnection

from ..dialects.base import SQLDialect
from ..dialects.mysql import MySQLDialect
from .exceptions import (
    UnsupportedConnectionKindError,
    UnsupportedValueKindError,
)
from .raw import RawSql, hex_literal
from .template import Params, format_template

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"

SEQUENCE_TYPES = (list, tuple, set, frozenset)
BINARY_TYPES = (bytes, bytearray, memoryview)
LIKE_ESCAPES = str.maketrans({"%": "\\%", "_": "\\_"})


class Escaper:
    """
    Escapes values and identifiers for one dialect, optionally using a
    live connection's native string escaping.

    Example:
        >>> esc = Escaper()
        >>> esc.format("SELECT * FROM ?? WHERE id IN ?", ["users", [1, 2]])
        'SELECT * FROM `users` WHERE id IN (1, 2)'
    """

    def __init__(
        self,
        connection: Optional[Any] = None,
        dialect: Optional[SQLDialect] = None,
    ):
        """
        Args:
            connection: PyMySQL connection used for string escaping, or None
                to use the dialect's escape table
            dialect: Dialect for identifiers and literals (default MySQL)
        """
        self.connection = connection
        self.dialect = dialect if dialect is not None else MySQLDialect()

    def quote(self, value: Any) -> str:
        """Render ``value`` as a SQL literal. Always returns text."""
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return self.dialect.boolean(value)
        if isinstance(value, RawSql):
            return value.sql
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            if not math.isfinite(value):
                raise UnsupportedValueKindError(value, "a finite number")
            return repr(value)
        if isinstance(value, Decimal):
            if not value.is_finite():
                raise UnsupportedValueKindError(value, "a finite number")
            return str(value)
        if isinstance(value, datetime.datetime):
            return "'" + value.strftime(DATETIME_FORMAT) + "'"
        if isinstance(value, datetime.date):
            return "'" + value.strftime(DATE_FORMAT) + "'"
        if isinstance(value, str):
            return self.quote_string(value)
        if isinstance(value, BINARY_TYPES):
            return hex_literal(value) if len(value) else "''"
        if isinstance(value, Mapping):
            return ", ".join(
                f"{self.escape_id(k)}={self.quote(v)}" for k, v in value.items()
            )
        if isinstance(value, SEQUENCE_TYPES):
            return "(" + ", ".join(self.quote(v) for v in value) + ")"
        raise UnsupportedValueKindError(value)

    def quote_string(self, value: str) -> str:
        """Quote text, preferring the connection's own escaping rules."""
        if self.connection is None:
            return self.dialect.escape_string(value)
        if isinstance(self.connection, PyMySQLConnection):
            return self.connection.escape(value)
        raise UnsupportedConnectionKindError(
            self.connection, "pymysql.connections.Connection"
        )

    def escape_id(self, identifier: Any, forbid_qualified: bool = False) -> str:
        """
        Quote an identifier.

        Args:
            identifier: Name, RawSql, or a sequence of names (comma-joined)
            forbid_qualified: Treat dots as part of the name instead of
                splitting ``schema.table`` into two quoted segments

        Examples:
            >>> Escaper().escape_id("db.users")
            '`db`.`users`'
            >>> Escaper().escape_id("db.users", forbid_qualified=True)
            '`db.users`'
            >>> Escaper().escape_id(["id", "name"])
            '`id`,`name`'
        """
        if isinstance(identifier, RawSql):
            return identifier.sql
        if isinstance(identifier, SEQUENCE_TYPES):
            return ",".join(self.escape_id(x, forbid_qualified) for x in identifier)
        if not isinstance(identifier, str):
            raise UnsupportedValueKindError(identifier, "str or RawSql identifier")
        return self.dialect.quote(identifier, strict=forbid_qualified)

    @staticmethod
    def escape_like(value: str) -> str:
        """
        Escape LIKE wildcards; the result still needs quoting.

        Examples:
            >>> Escaper.escape_like("50%_off")
            '50\\\\%\\\\_off'
        """
        return value.translate(LIKE_ESCAPES)

    def format(self, template: str, params: Optional[Params] = None) -> str:
        """Fill ``?``, ``??``, ``:name`` and ``::name`` placeholders in ``template``."""
        return format_template(template, params, self.quote, self.escape_id)


def format_datetime(
    timestamp: Union[None, int, float, str, datetime.date] = None,
) -> str:
    """
    Format a moment as ``YYYY-MM-DD HH:MM:SS`` (unquoted).

    Accepts None (now), a Unix timestamp, an ISO-8601 string or a date/datetime.
    """
    return _coerce_datetime(timestamp).strftime(DATETIME_FORMAT)


def format_date(
    timestamp: Union[None, int, float, str, datetime.date] = None,
) -> str:
    """Format a moment as ``YYYY-MM-DD`` (unquoted); accepts the same inputs as ``format_datetime``."""
    return _coerce_datetime(timestamp).strftime(DATE_FORMAT)


def _coerce_datetime(
    timestamp: Union[None, int, float, str, datetime.date],
) -> datetime.datetime:
    if timestamp is None:
        return datetime.datetime.now()
    if isinstance(timestamp, datetime.datetime):
        return timestamp
    if isinstance(timestamp, datetime.date):
        return datetime.datetime(timestamp.year, timestamp.month, timestamp.day)
    if isinstance(timestamp, str):
        stripped = timestamp.strip()
        if stripped.lstrip("-").replace(".", "", 1).isdigit():
            return datetime.datetime.fromtimestamp(float(stripped))
        return datetime.datetime.fromisoformat(stripped)
    if isinstance(timestamp, (int, float)) and not isinstance(timestamp, bool):
        return datetime.datetime.fromtimestamp(timestamp)
    raise UnsupportedValueKindError(timestamp, "timestamp, ISO string or date")


_default_escaper = Escaper()


def quote(value: Any) -> str:
    """Quote a value with the connection-less MySQL escaper."""
    return _default_escaper.quote(value)


def escape_id(identifier: Any, forbid_qualified: bool = False) -> str:
    """Quote an identifier with the connection-less MySQL escaper."""
    return _default_escaper.escape_id(identifier, forbid_qualified)


def escape_like(value: str) -> str:
    return Escaper.escape_like(value)


def format_query(template: str, params: Optional[Params] = None) -> str:
    """Fill a SQL template with the connection-less MySQL escaper."""
    return _default_escaper.format(template, params)

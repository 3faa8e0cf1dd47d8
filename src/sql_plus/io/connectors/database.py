"""
Connection wrapper adding client-side templating, statement helpers and
typed errors on top of a PyMySQL connection.

The wrapper composes the driver connection rather than extending it. Every
driver failure is translated by ``error_translator`` and re-raised with the
original exception chained.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Sequence

import pymysql
from pymysql.cursors import DictCursor

from sql_plus.config import get_settings
from sql_plus.infrastructure.sql.core.escaper import Escaper
from sql_plus.infrastructure.sql.core.template import Params
from sql_plus.infrastructure.sql.dialects.base import InsertOption, SQLDialect
from sql_plus.infrastructure.sql.operations.statements import Columns, StatementBuilder
from sql_plus.infrastructure.sql.operations.where import WhereCompiler, WhereNode
from sql_plus.utils.logging import get_logger

from .error_translator import translate_driver_exception
from .statement import Statement

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from sql_plus.io.loader.bulk_insert import BulkInsert

logger = get_logger(__name__)


class Database:
    """
    A PyMySQL connection with SQL helpers.

    Example:
        >>> with MySQLConnector().get_connection() as db:
        ...     db.insert("users", {"name": "alice", "active": True})
        ...     rows = db.select("users", where={"active": True}).fetch_all()
    """

    def __init__(
        self,
        connection: Any,
        dialect: Optional[SQLDialect] = None,
        on_close: Optional[Callable[[Database], None]] = None,
        cursor_class: Any = DictCursor,
    ):
        """
        Args:
            connection: Open PyMySQL connection
            dialect: SQL dialect (default MySQL)
            on_close: Called once after the connection is closed
            cursor_class: PyMySQL cursor class used for every query
        """
        self.connection = connection
        self.escaper = Escaper(connection, dialect)
        self.where = WhereCompiler(self.escaper)
        self.statements = StatementBuilder(self.escaper, self.where)
        self.cursor_class = cursor_class
        self.closed = False
        self._on_close = on_close

    @property
    def dialect(self) -> SQLDialect:
        return self.escaper.dialect

    # Escaping

    def format(self, sql: str, params: Optional[Params] = None) -> str:
        return self.escaper.format(sql, params)

    def quote(self, value: Any) -> str:
        return self.escaper.quote(value)

    def escape_id(self, identifier: Any, forbid_qualified: bool = False) -> str:
        return self.escaper.escape_id(identifier, forbid_qualified)

    # Execution

    def prepare(self, sql: str) -> Statement:
        return Statement(self, sql)

    def query(self, sql: str, params: Any = None) -> Statement:
        """Fill ``sql`` with ``params`` client-side, run it and return the statement."""
        return self.prepare(sql).execute(params)

    def execute(self, sql: str, params: Any = None) -> int:
        """Run a statement and return the number of affected rows."""
        statement = self.query(sql, params)
        try:
            return statement.row_count
        finally:
            statement.close()

    def run(self, sql: str) -> Any:
        """
        Execute final SQL on a new driver cursor.

        Raises:
            DatabaseError: (or a subclass) translated from the driver error
        """
        cursor = self.connection.cursor(self.cursor_class)
        try:
            cursor.execute(sql)
        except pymysql.MySQLError as exc:
            cursor.close()
            error = translate_driver_exception(self.connection, exc, sql)
            logger.warning("database.query_failed", **error.to_dict())
            raise error from exc
        return cursor

    def fetch_value(self, sql: str, params: Any = None) -> Any:
        statement = self.query(sql, params)
        try:
            return statement.fetch_column()
        finally:
            statement.close()

    def last_insert_id(self) -> int:
        return self.connection.insert_id()

    # Statement helpers

    def select(
        self,
        table: str,
        columns: Columns = None,
        where: WhereNode = None,
        limit: Optional[int] = None,
    ) -> Statement:
        return self.query(self.statements.select(table, columns, where, limit))

    def count(self, table: str, where: WhereNode = None) -> int:
        return int(self.fetch_value(self.statements.count(table, where)))

    def min(self, table: str, column: str, where: WhereNode = None) -> Any:
        return self.fetch_value(self.statements.aggregate("MIN", table, column, where))

    def max(self, table: str, column: str, where: WhereNode = None) -> Any:
        return self.fetch_value(self.statements.aggregate("MAX", table, column, where))

    def exists(self, table: str, where: WhereNode = None) -> bool:
        return bool(self.fetch_value(self.statements.exists(table, where)))

    def insert(
        self,
        table: str,
        data: Mapping[str, Any],
        options: InsertOption = InsertOption.NONE,
    ) -> int:
        """Insert one row and return its auto-increment id."""
        self.execute(self.statements.insert(table, data, options))
        return self.last_insert_id()

    def insert_if_not_exists(
        self,
        table: str,
        data: Mapping[str, Any],
        where: WhereNode,
        pk: Optional[str] = None,
    ) -> Any:
        """
        Insert ``data`` unless a row matching ``where`` exists.

        Returns the existing row's ``pk`` value (``1`` when ``pk`` is None) or
        the new row's auto-increment id.
        """
        columns = "1" if pk is None else [pk]
        existing = self.fetch_value(self.statements.select(table, columns, where, limit=1))
        if existing is not None:
            return existing
        return self.insert(table, data)

    def upsert(
        self,
        table: str,
        rows: Sequence[Mapping[str, Any]],
        conflict_columns: Sequence[str] = (),
        update_columns: Optional[Sequence[str]] = None,
    ) -> int:
        sql = self.statements.upsert(table, rows, conflict_columns, update_columns)
        return self.execute(sql)

    def update(
        self,
        table: str,
        data: Mapping[Any, Any],
        where: WhereNode,
        limit: Optional[int] = None,
    ) -> int:
        return self.execute(self.statements.update(table, data, where, limit))

    def delete(self, table: str, where: WhereNode, limit: Optional[int] = None) -> int:
        return self.execute(self.statements.delete(table, where, limit))

    def truncate(self, table: str) -> int:
        return self.execute(self.statements.truncate(table))

    def get_database(self) -> Optional[str]:
        """Name of the current default schema, queried from the server."""
        return self.fetch_value("SELECT DATABASE()")

    def bulk_insert(
        self,
        table: str,
        batch_size: Optional[int] = None,
        truncate_first: bool = False,
        ignore: bool = False,
    ) -> BulkInsert:
        """
        Create a ``BulkInsert`` for ``table``.

        ``batch_size`` defaults to ``Settings.bulk_insert_batch_size``; when
        that is unset too, the batch size is estimated from the first row.
        """
        from sql_plus.io.loader.bulk_insert import BulkInsert

        if truncate_first:
            self.truncate(table)
        if batch_size is None:
            batch_size = get_settings().bulk_insert_batch_size
        return BulkInsert(self, table, batch_size=batch_size, ignore=ignore)

    # Lifecycle

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self.connection.close()
        finally:
            if self._on_close is not None:
                self._on_close(self)

    def __enter__(self) -> Database:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()

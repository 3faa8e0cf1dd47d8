"""
Prepared statement wrapper.

Statements are prepared client-side: the SQL template is kept as-is and its
placeholders are filled by the escaping engine on every ``execute``. The
wrapper owns the driver cursor of its latest execution.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator, List, Mapping, Optional, Sequence

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from .database import Database


class Statement:
    """
    A SQL template bound to a ``Database``.

    Example:
        >>> stmt = db.prepare("SELECT name FROM users WHERE id=?")
        >>> stmt.execute([7]).fetch_column()
        'alice'
    """

    def __init__(self, database: Database, sql: str):
        self.database = database
        self.sql = sql
        self.executed_sql: Optional[str] = None
        self._cursor: Optional[Any] = None

    def execute(self, params: Any = None) -> Statement:
        """
        Fill the template with ``params`` and run it.

        ``params`` may be a sequence (``?``/``??``), a mapping
        (``:name``/``::name``), None, or a single scalar for a one-placeholder
        template. Returns the statement itself so fetches can be chained.
        """
        if params is not None and not _is_params_container(params):
            params = [params]
        sql = self.database.format(self.sql, params)
        self.close()
        self._cursor = self.database.run(sql)
        self.executed_sql = sql
        return self

    def debug_query(self, params: Any = None) -> str:
        """Return the SQL that ``execute(params)`` would send, without running it."""
        if params is not None and not _is_params_container(params):
            params = [params]
        return self.database.format(self.sql, params)

    @property
    def cursor(self) -> Any:
        if self._cursor is None:
            raise RuntimeError("Statement has not been executed")
        return self._cursor

    @property
    def row_count(self) -> int:
        """Rows affected (or returned, for buffered SELECTs) by the last execution."""
        return int(self.cursor.rowcount)

    def fetch_one(self) -> Optional[Any]:
        return self.cursor.fetchone()

    def fetch_all(self) -> List[Any]:
        return list(self.cursor.fetchall())

    def fetch_column(self, index: int = 0) -> Optional[Any]:
        """Return one column of the next row, or None when no rows remain."""
        row = self.fetch_one()
        if row is None:
            return None
        return _row_values(row)[index]

    def fetch_all_column(self, index: int = 0) -> List[Any]:
        return [_row_values(row)[index] for row in self.fetch_all()]

    def __iter__(self) -> Iterator[Any]:
        while True:
            row = self.fetch_one()
            if row is None:
                return
            yield row

    def close(self) -> None:
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None

    def __repr__(self) -> str:
        return f"Statement({self.sql!r})"


def _is_params_container(params: Any) -> bool:
    if isinstance(params, (str, bytes, bytearray)):
        return False
    return isinstance(params, (Sequence, Mapping))


def _row_values(row: Any) -> List[Any]:
    if isinstance(row, Mapping):
        return list(row.values())
    return list(row)

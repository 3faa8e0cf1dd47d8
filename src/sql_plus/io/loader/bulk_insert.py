"""
Batched multi-row INSERT accumulator.

Rows are buffered until the batch is full, an explicit ``flush()``, a row
with new columns, or the end of a ``with`` block. Each flush sends a single
``INSERT ... VALUES (...), (...)`` statement whose prepared template is
cached and reused while the batch size stays the same.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Mapping, Optional

from sql_plus.infrastructure.sql.core.parameters import flatten_rows
from sql_plus.io.connectors.exceptions import DatabaseError
from sql_plus.utils.logging import get_logger

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from sql_plus.io.connectors.database import Database
    from sql_plus.io.connectors.statement import Statement

logger = get_logger(__name__)

# Multiplier applied to a row's raw size when estimating how many rows fit
# into one packet; covers escaping and hex expansion.
PACKET_SAFETY_FACTOR = 4

MAX_PACKET_QUERY = "SELECT @@max_allowed_packet"


def row_byte_size(row: Mapping[str, Any]) -> int:
    """
    Approximate the wire size of a row's values.

    Examples:
        >>> row_byte_size({"a": "héllo", "b": None, "c": b"\\x00\\x01"})
        8
    """
    size = 0
    for value in row.values():
        if value is None:
            continue
        if isinstance(value, (bytes, bytearray, memoryview)):
            size += len(value)
        else:
            size += len(str(value).encode("utf-8"))
    return size


class BulkInsert:
    """
    Accumulate rows for ``table`` and insert them in batches.

    Example:
        >>> with db.bulk_insert("events", batch_size=500) as inserter:
        ...     for event in events:
        ...         inserter.push(event)
    """

    def __init__(
        self,
        database: Database,
        table: str,
        batch_size: Optional[int] = None,
        ignore: bool = False,
    ):
        """
        Args:
            database: Database the rows are written to
            table: Target table
            batch_size: Rows per INSERT; estimated from the first row if None
            ignore: Build ``INSERT IGNORE`` statements
        """
        if batch_size is not None and batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.database = database
        self.table = table
        self.batch_size = batch_size
        self.ignore_duplicates = ignore

        self.fields: Optional[List[str]] = None
        self.data: List[Any] = []
        self.row_count = 0

        self.stmt: Optional[Statement] = None
        self.stmt_size = 0

        self.rows_written = 0
        self.flush_count = 0

    def push(self, row: Mapping[str, Any]) -> None:
        """Buffer one row, flushing first on new columns and after when the batch is full."""
        if self.fields is None:
            self._set_fields(row)
        elif set(row) - set(self.fields):
            logger.info(
                "bulk_insert.schema_changed",
                table=self.table,
                new_fields=sorted(set(row) - set(self.fields)),
            )
            self.flush()
            self._set_fields(row)

        if self.batch_size is None:
            self.batch_size = self.estimate_batch_size(row)

        self.data.extend(flatten_rows([row], self.fields))
        self.row_count += 1

        if self.row_count >= self.batch_size:
            self.flush()

    def estimate_batch_size(self, row: Mapping[str, Any]) -> int:
        """Derive a batch size from the server's ``max_allowed_packet`` and a sample row."""
        value = self.database.fetch_value(MAX_PACKET_QUERY)
        if value is None:
            raise DatabaseError(
                f"Cannot estimate batch size for {self.table}: max_allowed_packet is unknown",
                sql=MAX_PACKET_QUERY,
            )
        max_packet = int(value)
        row_size = row_byte_size(row) * PACKET_SAFETY_FACTOR
        estimate = max_packet // row_size if row_size else max_packet
        batch_size = max(1, estimate)
        logger.debug(
            "bulk_insert.batch_size_estimated",
            table=self.table,
            max_allowed_packet=max_packet,
            row_bytes=row_size,
            batch_size=batch_size,
        )
        return batch_size

    def flush(self) -> None:
        """Insert the buffered rows, if any."""
        if self.row_count == 0:
            return

        if self.stmt is None or self.stmt_size != self.row_count:
            sql = self.database.statements.insert_rows(
                self.table, self.fields, self.row_count, ignore=self.ignore_duplicates
            )
            if self.stmt is not None:
                self.stmt.close()
            self.stmt = self.database.prepare(sql)
            self.stmt_size = self.row_count

        try:
            self.stmt.execute(self.data)
        except Exception:
            # Failed rows are dropped so teardown does not send them again.
            logger.warning("bulk_insert.flush_failed", table=self.table, rows=self.row_count)
            self.data = []
            self.row_count = 0
            raise

        self.rows_written += self.row_count
        self.flush_count += 1
        logger.info(
            "bulk_insert.flushed",
            table=self.table,
            rows=self.row_count,
            rows_written=self.rows_written,
            flush_count=self.flush_count,
        )

        self.data = []
        self.row_count = 0

    def ignore(self, flag: bool = True) -> BulkInsert:
        """Toggle ``INSERT IGNORE`` for statements built from now on."""
        self.ignore_duplicates = flag
        return self

    def close(self) -> None:
        self.flush()
        if self.stmt is not None:
            self.stmt.close()

    def _set_fields(self, row: Mapping[str, Any]) -> None:
        self.fields = list(row)
        # A cached statement lists the old columns.
        if self.stmt is not None:
            self.stmt.close()
        self.stmt = None
        self.stmt_size = 0

    def __enter__(self) -> BulkInsert:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()

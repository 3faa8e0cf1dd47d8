"""
Raw SQL fragments that bypass escaping.

A ``RawSql`` is emitted verbatim wherever a value or identifier is expected.
It is the single deliberate escape hatch from quoting; callers are
responsible for its safety.
"""

from typing import Optional, Union

BinaryLike = Union[bytes, bytearray, memoryview]


class RawSql:
    """Pre-validated SQL fragment, rendered verbatim."""

    __slots__ = ("sql",)

    def __init__(self, sql: str):
        self.sql = str(sql)

    def __str__(self) -> str:
        return self.sql

    def __repr__(self) -> str:
        return f"RawSql({self.sql!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RawSql):
            return self.sql == other.sql
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("RawSql", self.sql))


def raw(sql: str) -> RawSql:
    """
    Mark a SQL fragment as raw so it is never quoted.

    Examples:
        >>> from sql_plus.infrastructure.sql import quote
        >>> quote(raw("NOW()"))
        'NOW()'
    """
    return RawSql(sql)


def hex_literal(data: BinaryLike) -> str:
    """Render bytes as a MySQL hexadecimal literal (``0x...``)."""
    return "0x" + bytes(data).hex()


def binary(data: Optional[Union[BinaryLike, str]]) -> Optional[Union[RawSql, str, bytes]]:
    """
    Embed binary data as a hex literal instead of a quoted string.

    ``None`` and empty input pass through unchanged. Text is encoded as UTF-8.

    Examples:
        >>> binary(b"\\x01\\xff")
        RawSql('0x01ff')
        >>> binary(None) is None
        True
    """
    if data is None or len(data) == 0:
        return data
    if isinstance(data, str):
        data = data.encode("utf-8")
    return RawSql(hex_literal(data))

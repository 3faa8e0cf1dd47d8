"""
MySQL-specific SQL dialect implementation.

Backtick identifiers, ``1``/``0`` booleans, backslash-aware string escaping,
and the MySQL INSERT modifiers (priority, IGNORE, REPLACE,
ON DUPLICATE KEY UPDATE).
"""

from typing import Sequence

from .base import InsertOption, SQLDialect

# Escape table used when no connection is available. Not safe when the
# server runs with NO_BACKSLASH_ESCAPES or a multi-byte charset such as
# big5, cp932, gb2312, gbk or sjis.
STRING_ESCAPES = str.maketrans(
    {
        "'": "''",
        "\\": "\\\\",
        "\0": "\\0",
        "\t": "\\t",
        "\n": "\\n",
        "\r": "\\r",
        "\x08": "\\b",
        "\x1a": "\\Z",
    }
)


class MySQLDialect(SQLDialect):
    """MySQL SQL dialect implementation."""

    name = "mysql"
    true_literal = "1"
    false_literal = "0"
    supports_modify_limit = True

    def escape_string(self, value: str) -> str:
        return "'" + value.translate(STRING_ESCAPES) + "'"

    def build_insert(
        self,
        table: str,
        columns: Sequence[str],
        value_groups: Sequence[str],
        options: InsertOption = InsertOption.NONE,
    ) -> str:
        """
        Build an INSERT (or REPLACE) statement for one or more value groups.

        Examples:
            >>> MySQLDialect().build_insert("t", ["a"], ["(?)", "(?)"], InsertOption.IGNORE)
            'INSERT IGNORE INTO `t` (`a`) VALUES (?), (?)'
        """
        if InsertOption.REPLACE in options and InsertOption.IGNORE in options:
            raise ValueError("REPLACE cannot be combined with IGNORE")

        sql = "REPLACE " if InsertOption.REPLACE in options else "INSERT "
        if InsertOption.LOW_PRIORITY in options:
            sql += "LOW_PRIORITY "
        elif InsertOption.DELAYED in options:
            sql += "DELAYED "
        elif InsertOption.HIGH_PRIORITY in options:
            sql += "HIGH_PRIORITY "
        if InsertOption.IGNORE in options:
            sql += "IGNORE "

        return (
            f"{sql}INTO {self.quote(table)} ({self._column_list(columns)}) "
            f"VALUES {self._values(value_groups)}"
        )

    def build_upsert(
        self,
        table: str,
        columns: Sequence[str],
        value_groups: Sequence[str],
        conflict_columns: Sequence[str],
        update_columns: Sequence[str],
    ) -> str:
        """
        Build INSERT ... ON DUPLICATE KEY UPDATE.

        MySQL resolves conflicts against every unique key, so
        ``conflict_columns`` only serves to pick the default update columns.
        """
        base_insert = self.build_insert(table, columns, value_groups)
        if not update_columns:
            raise ValueError("Upsert needs at least one column to update")
        update_set = ", ".join(
            f"{self.quote(col, strict=True)}=VALUES({self.quote(col, strict=True)})"
            for col in update_columns
        )
        return f"{base_insert} ON DUPLICATE KEY UPDATE {update_set}"

"""
PostgreSQL-specific SQL dialect implementation.

Provides PostgreSQL-specific SQL syntax for INSERT statements,
conflict handling, and identifier quoting.
"""

from typing import Sequence

from .base import InsertOption, SQLDialect


class PostgreSQLDialect(SQLDialect):
    """PostgreSQL SQL dialect implementation."""

    name = "postgresql"
    true_literal = "TRUE"
    false_literal = "FALSE"

    def escape_string(self, value: str) -> str:
        """Standard-conforming string literal: only quotes are doubled."""
        if "\0" in value:
            raise ValueError("PostgreSQL text values cannot contain NUL characters")
        return "'" + value.replace("'", "''") + "'"

    def build_insert(
        self,
        table: str,
        columns: Sequence[str],
        value_groups: Sequence[str],
        options: InsertOption = InsertOption.NONE,
    ) -> str:
        """
        Build an INSERT statement.

        ``InsertOption.IGNORE`` becomes ``ON CONFLICT DO NOTHING``; the MySQL
        priority and REPLACE modifiers have no PostgreSQL equivalent.

        Examples:
            >>> PostgreSQLDialect().build_insert("mapping.plans", ["id"], ["(?)"])
            'INSERT INTO "mapping"."plans" ("id") VALUES (?)'
        """
        unsupported = options & ~InsertOption.IGNORE
        if unsupported:
            raise ValueError(f"PostgreSQL does not support INSERT options: {unsupported}")

        sql = (
            f"INSERT INTO {self.quote(table)} ({self._column_list(columns)}) "
            f"VALUES {self._values(value_groups)}"
        )
        if InsertOption.IGNORE in options:
            sql += " ON CONFLICT DO NOTHING"
        return sql

    def build_upsert(
        self,
        table: str,
        columns: Sequence[str],
        value_groups: Sequence[str],
        conflict_columns: Sequence[str],
        update_columns: Sequence[str],
    ) -> str:
        """
        Build INSERT ... ON CONFLICT (...) DO UPDATE statement.

        Args:
            table: Table name, optionally schema-qualified
            columns: Column names to insert
            value_groups: Rendered ``(...)`` value groups
            conflict_columns: Columns for conflict detection
            update_columns: Columns to update on conflict

        Returns:
            INSERT ... ON CONFLICT DO UPDATE SQL statement
        """
        if not conflict_columns:
            raise ValueError("PostgreSQL upsert needs conflict columns")
        if not update_columns:
            raise ValueError("Upsert needs at least one column to update")
        base_insert = self.build_insert(table, columns, value_groups)
        conflict_cols = ", ".join(self.quote(c, strict=True) for c in conflict_columns)
        update_set = ", ".join(
            f"{self.quote(col, strict=True)} = EXCLUDED.{self.quote(col, strict=True)}"
            for col in update_columns
        )
        return f"{base_insert} ON CONFLICT ({conflict_cols}) DO UPDATE SET {update_set}"

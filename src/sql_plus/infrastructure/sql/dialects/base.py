"""
Shared behaviour for SQL dialects.

A dialect decides how identifiers are quoted, how booleans and strings are
written as literals, and how INSERT statements are shaped. Everything else
(templating, WHERE compilation) is dialect-neutral.
"""

import enum
from typing import ClassVar, List, Optional, Sequence

from ..core.identifier import qualify_table, quote_identifier


class InsertOption(enum.Flag):
    """Modifiers for INSERT statements. Combine with ``|``."""

    NONE = 0
    LOW_PRIORITY = enum.auto()
    DELAYED = enum.auto()
    HIGH_PRIORITY = enum.auto()
    IGNORE = enum.auto()
    REPLACE = enum.auto()


class SQLDialect:
    """Base class for dialects; subclasses set the class attributes."""

    name: ClassVar[str]
    true_literal: ClassVar[str]
    false_literal: ClassVar[str]
    supports_modify_limit: ClassVar[bool] = False

    def quote(self, identifier: str, strict: bool = False) -> str:
        """Quote an identifier; dotted names are split unless ``strict``."""
        return quote_identifier(identifier, dialect=self.name, strict=strict)

    def qualify(self, table: str, schema: Optional[str] = None) -> str:
        """Create a fully qualified table reference."""
        return qualify_table(table, schema, dialect=self.name)

    def boolean(self, value: bool) -> str:
        return self.true_literal if value else self.false_literal

    def escape_string(self, value: str) -> str:
        """Render text as a quoted string literal without a connection."""
        raise NotImplementedError

    def limit_clause(self, limit: Optional[int]) -> str:
        if limit is None:
            return ""
        return f" LIMIT {int(limit)}"

    def build_insert(
        self,
        table: str,
        columns: Sequence[str],
        value_groups: Sequence[str],
        options: InsertOption = InsertOption.NONE,
    ) -> str:
        raise NotImplementedError

    def build_upsert(
        self,
        table: str,
        columns: Sequence[str],
        value_groups: Sequence[str],
        conflict_columns: Sequence[str],
        update_columns: Sequence[str],
    ) -> str:
        raise NotImplementedError

    def _column_list(self, columns: Sequence[str]) -> str:
        if not columns:
            raise ValueError("Column list cannot be empty")
        return ", ".join(self.quote(c, strict=True) for c in columns)

    @staticmethod
    def _values(value_groups: Sequence[str]) -> str:
        if not value_groups:
            raise ValueError("INSERT needs at least one row of values")
        return ", ".join(value_groups)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def update_columns_default(
    columns: Sequence[str], conflict_columns: Sequence[str]
) -> List[str]:
    """Default upsert target: every inserted column that is not part of the key."""
    return [c for c in columns if c not in conflict_columns]

"""
SQL statement builders.

Provides high-level builders for SELECT, INSERT, UPDATE and DELETE
statements. Identifiers go through the escaper, WHERE clauses through the
``WhereCompiler`` and dialect-specific syntax (INSERT modifiers, upserts,
LIMIT on modifying statements) through the escaper's dialect.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..core.escaper import Escaper
from ..core.exceptions import UnsupportedValueKindError
from ..core.parameters import build_indexed_params, positional_group
from ..dialects.base import InsertOption, SQLDialect, update_columns_default
from .where import WhereCompiler, WhereNode

Columns = Union[None, str, Sequence[str], Mapping[str, str]]

AGGREGATES = frozenset({"COUNT", "MIN", "MAX", "SUM", "AVG"})


class StatementBuilder:
    """
    High-level builder for complete SQL statements.

    Example:
        >>> from sql_plus.infrastructure.sql import Escaper, StatementBuilder
        >>> builder = StatementBuilder(Escaper())
        >>> builder.select("users", ["id", "name"], where={"active": True}, limit=10)
        'SELECT `id`, `name` FROM `users` WHERE `active`=1 LIMIT 10'
    """

    def __init__(self, escaper: Escaper, where: Optional[WhereCompiler] = None):
        """
        Initialize the StatementBuilder.

        Args:
            escaper: Escaper used for identifiers and values
            where: WHERE compiler; one bound to ``escaper`` is created if omitted
        """
        self.escaper = escaper
        self.where = where if where is not None else WhereCompiler(escaper)

    @property
    def dialect(self) -> SQLDialect:
        return self.escaper.dialect

    def build_columns(self, columns: Columns) -> str:
        """
        Render a column list.

        ``None`` selects ``*``, a string is used verbatim, a sequence is quoted
        name by name, and a mapping renders ``column AS alias`` for each
        ``alias: column`` pair.
        """
        if columns is None:
            return "*"
        if isinstance(columns, str):
            return columns
        if isinstance(columns, Mapping):
            return ", ".join(
                f"{self.escaper.escape_id(column)} AS {self.escaper.escape_id(alias)}"
                for alias, column in columns.items()
            )
        if isinstance(columns, (list, tuple)):
            return ", ".join(self.escaper.escape_id(c) for c in columns)
        raise UnsupportedValueKindError(columns, "column name, list or alias mapping")

    def select(
        self,
        table: str,
        columns: Columns = None,
        where: WhereNode = None,
        limit: Optional[int] = None,
    ) -> str:
        sql = f"SELECT {self.build_columns(columns)} FROM {self.escaper.escape_id(table)}"
        if where is not None:
            sql += f" WHERE {self.where.compile_list(where)}"
        return sql + self.dialect.limit_clause(limit)

    def count(self, table: str, where: WhereNode = None) -> str:
        return self.select(table, "COUNT(*)", where)

    def aggregate(
        self, function: str, table: str, column: str, where: WhereNode = None
    ) -> str:
        """Build ``SELECT FN(column) FROM table [WHERE ...]`` for MIN, MAX, SUM, AVG or COUNT."""
        function = function.upper()
        if function not in AGGREGATES:
            raise ValueError(f"Unsupported aggregate function: {function}")
        expression = f"{function}({self.escaper.escape_id(column)})"
        return self.select(table, expression, where)

    def exists(self, table: str, where: WhereNode = None) -> str:
        inner = self.select(table, None, where if where is not None else {})
        return f"SELECT EXISTS({inner})"

    def insert(
        self,
        table: str,
        data: Mapping[str, Any],
        options: InsertOption = InsertOption.NONE,
    ) -> str:
        """Build a single-row INSERT with the values inlined."""
        group = "(" + ", ".join(self.escaper.quote(v) for v in data.values()) + ")"
        return self.dialect.build_insert(table, list(data), [group], options)

    def prepare_insert(
        self,
        table: str,
        columns: Sequence[str],
        options: InsertOption = InsertOption.NONE,
    ) -> Tuple[str, Dict[str, str]]:
        """
        Build a reusable single-row INSERT template.

        Returns:
            Tuple of (sql with ``:col_N`` placeholders, column -> param mapping);
            pass records through ``remap_records`` before executing.
        """
        param_map, placeholders = build_indexed_params(columns)
        group = "(" + ", ".join(placeholders) + ")"
        return self.dialect.build_insert(table, columns, [group], options), param_map

    def insert_rows(
        self,
        table: str,
        columns: Sequence[str],
        row_count: int,
        ignore: bool = False,
    ) -> str:
        """
        Build a multi-row INSERT with ``row_count`` groups of ``?`` placeholders.

        Examples:
            >>> StatementBuilder(Escaper()).insert_rows("t", ["a", "b"], 2, ignore=True)
            'INSERT IGNORE INTO `t` (`a`, `b`) VALUES (?, ?), (?, ?)'
        """
        if row_count <= 0:
            raise ValueError("row_count must be positive")
        options = InsertOption.IGNORE if ignore else InsertOption.NONE
        groups = [positional_group(len(columns))] * row_count
        return self.dialect.build_insert(table, columns, groups, options)

    def upsert(
        self,
        table: str,
        rows: Sequence[Mapping[str, Any]],
        conflict_columns: Sequence[str] = (),
        update_columns: Optional[Sequence[str]] = None,
    ) -> str:
        """
        Build an INSERT that updates existing rows on key conflict.

        Columns are taken from the first row; missing values are NULL.
        ``update_columns`` defaults to every column not in ``conflict_columns``.
        """
        if not rows:
            raise ValueError("upsert needs at least one row")
        columns = list(rows[0])
        groups = [
            "(" + ", ".join(self.escaper.quote(row.get(c)) for c in columns) + ")"
            for row in rows
        ]
        if not update_columns:
            update_columns = update_columns_default(columns, conflict_columns)
        return self.dialect.build_upsert(
            table, columns, groups, conflict_columns, update_columns
        )

    def update(
        self,
        table: str,
        data: Mapping[Any, Any],
        where: WhereNode,
        limit: Optional[int] = None,
    ) -> str:
        """
        Build an UPDATE with inlined values.

        Integer keys in ``data`` carry raw SET fragments, e.g.
        ``{0: "hits=hits+1", "seen": True}``.
        """
        if not data:
            raise ValueError("UPDATE needs at least one column to set")
        assignments: List[str] = []
        for key, value in data.items():
            if isinstance(key, int) and not isinstance(key, bool):
                assignments.append(str(value))
            else:
                assignments.append(
                    f"{self.escaper.escape_id(key)}={self.escaper.quote(value)}"
                )
        sql = (
            f"UPDATE {self.escaper.escape_id(table)} SET {', '.join(assignments)} "
            f"WHERE {self.where.compile_list(where)}"
        )
        return sql + self._modify_limit(limit)

    def prepare_update(
        self,
        table: str,
        columns: Sequence[str],
        where: WhereNode,
    ) -> Tuple[str, Dict[str, str]]:
        """
        Build a reusable UPDATE template; ``where`` is inlined.

        Examples:
            >>> sql, param_map = StatementBuilder(Escaper()).prepare_update("t", ["name"], {"id": 1})
            >>> sql
            'UPDATE `t` SET `name`=:col_0 WHERE `id`=1'
        """
        if not columns:
            raise ValueError("UPDATE needs at least one column to set")
        param_map, placeholders = build_indexed_params(columns)
        assignments = ", ".join(
            f"{self.escaper.escape_id(column)}={placeholder}"
            for column, placeholder in zip(columns, placeholders)
        )
        sql = (
            f"UPDATE {self.escaper.escape_id(table)} SET {assignments} "
            f"WHERE {self.where.compile_list(where)}"
        )
        return sql, param_map

    def delete(self, table: str, where: WhereNode, limit: Optional[int] = None) -> str:
        sql = (
            f"DELETE FROM {self.escaper.escape_id(table)} "
            f"WHERE {self.where.compile_list(where)}"
        )
        return sql + self._modify_limit(limit)

    def truncate(self, table: str) -> str:
        return f"TRUNCATE TABLE {self.escaper.escape_id(table)}"

    def _modify_limit(self, limit: Optional[int]) -> str:
        if limit is None:
            return ""
        if not self.dialect.supports_modify_limit:
            raise ValueError(f"{self.dialect.name} does not support LIMIT on UPDATE/DELETE")
        return self.dialect.limit_clause(limit)


__all__ = ["InsertOption", "StatementBuilder"]

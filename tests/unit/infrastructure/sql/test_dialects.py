"""
Unit tests for the MySQL and PostgreSQL dialects.
"""

import pytest

from sql_plus.infrastructure.sql.dialects import (
    InsertOption,
    MySQLDialect,
    PostgreSQLDialect,
    get_dialect,
)
from sql_plus.infrastructure.sql.dialects.base import update_columns_default


class TestGetDialect:
    def test_known_names(self):
        assert isinstance(get_dialect("mysql"), MySQLDialect)
        assert isinstance(get_dialect("postgresql"), PostgreSQLDialect)

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown SQL dialect"):
            get_dialect("sqlite")


class TestMySQLDialect:
    """Tests for MySQL dialect."""

    @pytest.fixture
    def dialect(self):
        return MySQLDialect()

    def test_dialect_name(self, dialect):
        assert dialect.name == "mysql"
        assert dialect.supports_modify_limit

    def test_quote_identifier(self, dialect):
        """Quote should use backticks."""
        assert dialect.quote("年金计划号") == "`年金计划号`"

    def test_qualify_table(self, dialect):
        assert dialect.qualify("年金计划", schema="mapping") == "`mapping`.`年金计划`"

    def test_limit_clause(self, dialect):
        assert dialect.limit_clause(10) == " LIMIT 10"
        assert dialect.limit_clause(None) == ""

    def test_build_insert(self, dialect):
        sql = dialect.build_insert("plans", ["id", "name"], ["(1, 'a')", "(2, 'b')"])
        assert sql == "INSERT INTO `plans` (`id`, `name`) VALUES (1, 'a'), (2, 'b')"

    def test_columns_are_not_split_on_dots(self, dialect):
        sql = dialect.build_insert("app.plans", ["a.b"], ["(?)"])
        assert sql == "INSERT INTO `app`.`plans` (`a.b`) VALUES (?)"

    @pytest.mark.parametrize(
        "options,prefix",
        [
            (InsertOption.IGNORE, "INSERT IGNORE INTO"),
            (InsertOption.REPLACE, "REPLACE INTO"),
            (InsertOption.LOW_PRIORITY | InsertOption.IGNORE, "INSERT LOW_PRIORITY IGNORE INTO"),
            (InsertOption.DELAYED, "INSERT DELAYED INTO"),
            (InsertOption.HIGH_PRIORITY, "INSERT HIGH_PRIORITY INTO"),
            (InsertOption.REPLACE | InsertOption.LOW_PRIORITY, "REPLACE LOW_PRIORITY INTO"),
        ],
    )
    def test_insert_options(self, dialect, options, prefix):
        sql = dialect.build_insert("t", ["a"], ["(?)"], options)
        assert sql == f"{prefix} `t` (`a`) VALUES (?)"

    def test_replace_with_ignore_rejected(self, dialect):
        with pytest.raises(ValueError):
            dialect.build_insert("t", ["a"], ["(?)"], InsertOption.REPLACE | InsertOption.IGNORE)

    def test_empty_columns_rejected(self, dialect):
        with pytest.raises(ValueError, match="Column list cannot be empty"):
            dialect.build_insert("t", [], ["()"])

    def test_empty_values_rejected(self, dialect):
        with pytest.raises(ValueError):
            dialect.build_insert("t", ["a"], [])

    def test_build_upsert(self, dialect):
        sql = dialect.build_upsert("t", ["id", "name"], ["(1, 'a')"], ["id"], ["name"])
        assert sql == (
            "INSERT INTO `t` (`id`, `name`) VALUES (1, 'a') "
            "ON DUPLICATE KEY UPDATE `name`=VALUES(`name`)"
        )

    def test_string_literal(self, dialect):
        assert dialect.escape_string("a'b\\") == "'a''b\\\\'"


class TestPostgreSQLDialect:
    """Tests for PostgreSQL dialect."""

    @pytest.fixture
    def dialect(self):
        return PostgreSQLDialect()

    def test_dialect_name(self, dialect):
        assert dialect.name == "postgresql"
        assert not dialect.supports_modify_limit

    def test_quote_identifier(self, dialect):
        """Quote should use double quotes."""
        assert dialect.quote("年金计划号") == '"年金计划号"'

    def test_qualify_table(self, dialect):
        assert dialect.qualify("年金计划", schema="mapping") == '"mapping"."年金计划"'

    def test_build_insert(self, dialect):
        sql = dialect.build_insert("mapping.年金计划", ["年金计划号", "计划全称"], ["(?, ?)"])
        assert sql == 'INSERT INTO "mapping"."年金计划" ("年金计划号", "计划全称") VALUES (?, ?)'

    def test_ignore_becomes_on_conflict(self, dialect):
        sql = dialect.build_insert("t", ["a"], ["(1)"], InsertOption.IGNORE)
        assert sql.endswith(" ON CONFLICT DO NOTHING")

    def test_mysql_only_options_rejected(self, dialect):
        with pytest.raises(ValueError, match="does not support"):
            dialect.build_insert("t", ["a"], ["(1)"], InsertOption.REPLACE)

    def test_build_upsert(self, dialect):
        sql = dialect.build_upsert("t", ["id", "name"], ["(1, 'a')"], ["id"], ["name"])
        assert sql == (
            'INSERT INTO "t" ("id", "name") VALUES (1, \'a\') '
            'ON CONFLICT ("id") DO UPDATE SET "name" = EXCLUDED."name"'
        )

    def test_upsert_requires_conflict_columns(self, dialect):
        with pytest.raises(ValueError):
            dialect.build_upsert("t", ["id"], ["(1)"], [], ["id"])


def test_update_columns_default():
    assert update_columns_default(["id", "a", "b"], ["id"]) == ["a", "b"]

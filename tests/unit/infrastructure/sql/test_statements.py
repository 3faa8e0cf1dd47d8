"""
Unit tests for StatementBuilder.
"""

import pytest

from sql_plus.infrastructure.sql import Escaper, InsertOption, PostgreSQLDialect, StatementBuilder, raw
from sql_plus.infrastructure.sql.core.exceptions import UnsupportedValueKindError


@pytest.fixture
def builder():
    return StatementBuilder(Escaper())


class TestSelect:
    """SELECT, COUNT, aggregates and EXISTS."""

    def test_select_all(self, builder):
        assert builder.select("users") == "SELECT * FROM `users`"

    def test_select_columns_where_limit(self, builder):
        sql = builder.select("users", ["id", "name"], where={"active": True}, limit=10)
        assert sql == "SELECT `id`, `name` FROM `users` WHERE `active`=1 LIMIT 10"

    def test_select_alias_mapping(self, builder):
        sql = builder.select("users", {"n": "name", "uid": "u.id"})
        assert sql == "SELECT `name` AS `n`, `u`.`id` AS `uid` FROM `users`"

    def test_select_raw_column_string(self, builder):
        assert builder.select("t", "DISTINCT a") == "SELECT DISTINCT a FROM `t`"

    def test_select_raw_column_entry(self, builder):
        assert builder.select("t", [raw("NOW()"), "a"]) == "SELECT NOW(), `a` FROM `t`"

    def test_unsupported_columns(self, builder):
        with pytest.raises(UnsupportedValueKindError):
            builder.select("t", 5)

    def test_count(self, builder):
        assert builder.count("t", {"a": 1}) == "SELECT COUNT(*) FROM `t` WHERE `a`=1"

    def test_aggregate(self, builder):
        assert builder.aggregate("max", "t", "price") == "SELECT MAX(`price`) FROM `t`"

    def test_unknown_aggregate(self, builder):
        with pytest.raises(ValueError, match="Unsupported aggregate"):
            builder.aggregate("median", "t", "price")

    def test_exists_without_where(self, builder):
        assert builder.exists("t") == "SELECT EXISTS(SELECT * FROM `t` WHERE 1)"

    def test_exists_with_where(self, builder):
        assert builder.exists("t", {"id": 3}) == "SELECT EXISTS(SELECT * FROM `t` WHERE `id`=3)"


class TestInsert:
    """INSERT builders."""

    def test_insert_inlines_values(self, builder):
        sql = builder.insert("t", {"a": 1, "b": "x", "c": None})
        assert sql == "INSERT INTO `t` (`a`, `b`, `c`) VALUES (1, 'x', NULL)"

    def test_insert_with_options(self, builder):
        sql = builder.insert("t", {"a": 1}, InsertOption.IGNORE)
        assert sql == "INSERT IGNORE INTO `t` (`a`) VALUES (1)"

    def test_prepare_insert(self, builder):
        sql, param_map = builder.prepare_insert("t", ["user id", "email"])
        assert sql == "INSERT INTO `t` (`user id`, `email`) VALUES (:col_0, :col_1)"
        assert param_map == {"user id": "col_0", "email": "col_1"}

    def test_prepare_insert_renders_with_remapped_record(self, builder):
        from sql_plus.infrastructure.sql import remap_records

        sql, param_map = builder.prepare_insert("t", ["user id", "email"])
        record = remap_records([{"user id": 7}], param_map)[0]
        assert builder.escaper.format(sql, record) == (
            "INSERT INTO `t` (`user id`, `email`) VALUES (7, NULL)"
        )

    def test_insert_rows(self, builder):
        sql = builder.insert_rows("t", ["a", "b"], 2, ignore=True)
        assert sql == "INSERT IGNORE INTO `t` (`a`, `b`) VALUES (?, ?), (?, ?)"

    def test_insert_rows_requires_rows(self, builder):
        with pytest.raises(ValueError):
            builder.insert_rows("t", ["a"], 0)

    def test_upsert(self, builder):
        sql = builder.upsert("t", [{"id": 1, "n": "a"}, {"id": 2}], ["id"])
        assert sql == (
            "INSERT INTO `t` (`id`, `n`) VALUES (1, 'a'), (2, NULL) "
            "ON DUPLICATE KEY UPDATE `n`=VALUES(`n`)"
        )

    def test_upsert_requires_rows(self, builder):
        with pytest.raises(ValueError):
            builder.upsert("t", [], ["id"])

    def test_postgresql_upsert(self):
        builder = StatementBuilder(Escaper(dialect=PostgreSQLDialect()))
        sql = builder.upsert("t", [{"id": 1, "n": True}], ["id"], ["n"])
        assert sql == (
            'INSERT INTO "t" ("id", "n") VALUES (1, TRUE) '
            'ON CONFLICT ("id") DO UPDATE SET "n" = EXCLUDED."n"'
        )


class TestModify:
    """UPDATE, DELETE and TRUNCATE."""

    def test_update(self, builder):
        sql = builder.update("t", {0: "hits=hits+1", "seen": True}, {"id": 3}, limit=1)
        assert sql == "UPDATE `t` SET hits=hits+1, `seen`=1 WHERE `id`=3 LIMIT 1"

    def test_update_requires_data(self, builder):
        with pytest.raises(ValueError):
            builder.update("t", {}, {"id": 1})

    def test_update_without_where_matches_all(self, builder):
        assert builder.update("t", {"a": 1}, None) == "UPDATE `t` SET `a`=1 WHERE 1"

    def test_prepare_update(self, builder):
        sql, param_map = builder.prepare_update("t", ["display name", "seen"], {"id": 3})
        assert sql == "UPDATE `t` SET `display name`=:col_0, `seen`=:col_1 WHERE `id`=3"
        assert param_map == {"display name": "col_0", "seen": "col_1"}

    def test_prepare_update_renders_with_remapped_record(self, builder):
        from sql_plus.infrastructure.sql import remap_records

        sql, param_map = builder.prepare_update("t", ["name"], {"id": 3})
        record = remap_records([{"name": "it's"}], param_map)[0]
        assert builder.escaper.format(sql, record) == "UPDATE `t` SET `name`='it''s' WHERE `id`=3"

    def test_prepare_update_requires_columns(self, builder):
        with pytest.raises(ValueError):
            builder.prepare_update("t", [], {"id": 1})

    def test_delete(self, builder):
        assert builder.delete("t", {"id": [1, 2]}) == "DELETE FROM `t` WHERE `id` IN (1, 2)"

    def test_delete_with_limit(self, builder):
        assert builder.delete("t", "a < 5", limit=100) == "DELETE FROM `t` WHERE a < 5 LIMIT 100"

    def test_truncate(self, builder):
        assert builder.truncate("app.t") == "TRUNCATE TABLE `app`.`t`"

    def test_limit_on_delete_unsupported_in_postgresql(self):
        builder = StatementBuilder(Escaper(dialect=PostgreSQLDialect()))
        with pytest.raises(ValueError, match="does not support LIMIT"):
            builder.delete("t", {"id": 1}, limit=1)

"""
Unit tests for the SQL template formatter.

The formatter is exercised through ``format_query`` (connection-less MySQL
escaper) so expected output shows real quoting.
"""

import pytest

from sql_plus.infrastructure.sql import format_query, raw
from sql_plus.infrastructure.sql.core.exceptions import (
    MissingNamedParamError,
    MixedParamsError,
    NotEnoughParamsError,
    TemplateError,
)


class TestPositionalPlaceholders:
    """``?`` and ``??`` placeholders."""

    def test_value_and_identifier(self):
        sql = format_query("SELECT ?? FROM ?? WHERE id = ?", ["name", "users", 5])
        assert sql == "SELECT `name` FROM `users` WHERE id = 5"

    def test_string_value_is_quoted(self):
        assert format_query("SELECT ?", ["it's"]) == "SELECT 'it''s'"

    def test_list_value_expands(self):
        assert format_query("id IN ?", [[1, 2, 3]]) == "id IN (1, 2, 3)"

    def test_identifier_list(self):
        assert format_query("SELECT ?? FROM t", [["a", "b"]]) == "SELECT `a`,`b` FROM t"

    def test_surplus_params_ignored(self):
        assert format_query("SELECT ?", [1, 2, 3]) == "SELECT 1"

    def test_not_enough_params(self):
        with pytest.raises(NotEnoughParamsError) as exc_info:
            format_query("SELECT ?, ?", [1])
        assert exc_info.value.position == 1

    def test_tuple_params(self):
        assert format_query("SELECT ?, ?", (1, None)) == "SELECT 1, NULL"


class TestNamedPlaceholders:
    """``:name`` and ``::name`` placeholders."""

    def test_value_and_identifier(self):
        sql = format_query("SELECT ::col FROM t WHERE id = :id", {"col": "name", "id": 7})
        assert sql == "SELECT `name` FROM t WHERE id = 7"

    def test_repeated_name(self):
        assert format_query(":a + :a", {"a": 2}) == "2 + 2"

    def test_unicode_name(self):
        assert format_query("x = :计划", {"计划": "A"}) == "x = 'A'"

    def test_missing_name(self):
        with pytest.raises(MissingNamedParamError, match='"id" param not provided'):
            format_query("WHERE id = :id", {"other": 1})

    def test_digit_after_colon_is_not_a_name(self):
        assert format_query("SELECT :a, '1:2', 3:4", {"a": 1}) == "SELECT 1, '1:2', 3:4"


class TestQuotedSpans:
    """Placeholders inside quoted spans are left alone."""

    def test_question_mark_in_string(self):
        assert format_query("SELECT '?' , ?", [1]) == "SELECT '?' , 1"

    def test_question_mark_in_backticks(self):
        assert format_query("SELECT `a?b` FROM t WHERE x=?", [1]) == "SELECT `a?b` FROM t WHERE x=1"

    def test_name_in_double_quotes(self):
        assert format_query('SELECT ":x", :x', {"x": 1}) == 'SELECT ":x", 1'

    def test_doubled_delimiter_stays_in_span(self):
        assert format_query("SELECT 'it''s ?', ?", [1]) == "SELECT 'it''s ?', 1"

    def test_backslash_escape_stays_in_span(self):
        assert format_query(r"SELECT 'a\'?', ?", [1]) == r"SELECT 'a\'?', 1"

    def test_substituted_values_are_not_rescanned(self):
        assert format_query("SELECT ?, ?", ["?", 2]) == "SELECT '?', 2"

    def test_lone_quote_is_literal(self):
        assert format_query("SELECT ? -- don't cache", [1]) == "SELECT 1 -- don't cache"

    def test_lone_backtick_is_literal(self):
        assert format_query("SELECT `a, ?", [2]) == "SELECT `a, 2"

    def test_lone_apostrophe_pairs_with_later_literal(self):
        sql = format_query("SELECT ? -- don't\nFROM t WHERE a = ? AND b = 'x'", [1, 2])
        assert sql == "SELECT 1 -- don't\nFROM t WHERE a = ? AND b = 'x'"


class TestParamsHandling:
    """How the params argument itself is interpreted."""

    def test_none_returns_template(self):
        assert format_query("SELECT ? FROM `x`") == "SELECT ? FROM `x`"

    def test_positional_with_mapping(self):
        with pytest.raises(MixedParamsError):
            format_query("SELECT ?", {"a": 1})

    def test_named_with_sequence(self):
        with pytest.raises(MixedParamsError):
            format_query("SELECT :a", [1])

    def test_scalar_params_rejected(self):
        with pytest.raises(TemplateError):
            format_query("SELECT ?", "abc")

    def test_template_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            format_query("SELECT ?", [])

    def test_raw_value(self):
        assert format_query("SELECT ?", [raw("NOW()")]) == "SELECT NOW()"

"""
Unit tests for PostgreSQL column mapping.
"""

import pytest

from entity_codegen.codegen.core.schema import FieldType
from entity_codegen.codegen.languages.go.sql import index_name, sql_default, sql_identifier, sql_type


class TestSqlType:
    @pytest.mark.parametrize(
        "tag, expected",
        [
            ("text", "TEXT"),
            ("int", "BIGINT"),
            ("integer", "BIGINT"),
            ("bigint", "BIGINT"),
            ("float", "DOUBLE PRECISION"),
            ("decimal", "NUMERIC"),
            ("bool", "BOOLEAN"),
            ("date", "DATE"),
            ("datetime", "TIMESTAMP"),
            ("timestamp", "TIMESTAMP"),
            ("json", "JSONB"),
            ("uuid", "UUID"),
        ],
    )
    def test_column_types(self, tag, expected):
        assert sql_type(tag) == expected

    def test_string_uses_length(self):
        assert sql_type("string", 100) == "VARCHAR(100)"
        assert sql_type("string") == "VARCHAR(255)"

    def test_unknown_tag_is_varchar(self):
        assert sql_type("money", 12) == "VARCHAR(12)"

    def test_accepts_field_type(self):
        assert sql_type(FieldType.BOOLEAN) == "BOOLEAN"


class TestSqlDefault:
    def test_text_is_quoted(self):
        assert sql_default("active", "string") == "'active'"

    def test_embedded_quotes_are_doubled(self):
        assert sql_default("O'Brien", "text") == "'O''Brien'"

    def test_already_quoted_value_is_kept(self):
        assert sql_default("'draft'", "string") == "'draft'"

    @pytest.mark.parametrize("value", ["now()", "gen_random_uuid()", "CURRENT_TIMESTAMP"])
    def test_functions_and_keywords_are_verbatim(self, value):
        assert sql_default(value, "timestamp") == value

    @pytest.mark.parametrize("value, tag", [("0", "int"), ("1.5", "decimal"), ("true", "bool")])
    def test_non_text_values_are_verbatim(self, value, tag):
        assert sql_default(value, tag) == value


def test_index_name():
    assert index_name("users", "created_at") == "idx_users_created_at"
    assert index_name("InvoiceLines", "deletedAt") == "idx_invoice_lines_deleted_at"
    assert index_name("public.users", "uuid") == "idx_users_uuid"


class TestSqlIdentifier:
    @pytest.mark.parametrize("name", ["users", "invoice_lines", "created_at", "_internal"])
    def test_plain_names_stay_bare(self, name):
        assert sql_identifier(name) == name

    @pytest.mark.parametrize("name", ["user", "order", "group", "select"])
    def test_reserved_words_are_quoted(self, name):
        assert sql_identifier(name) == f'"{name}"'

    def test_schema_qualified_table(self):
        assert sql_identifier("public.users") == "public.users"
        assert sql_identifier("sales.order") == 'sales."order"'

    def test_unusual_characters_are_quoted_and_escaped(self):
        assert sql_identifier("Users") == '"Users"'
        assert sql_identifier('odd"name') == '"odd""name"'

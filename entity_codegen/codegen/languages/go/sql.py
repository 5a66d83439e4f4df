"""
PostgreSQL column mapping for generated migrations.
"""

import re

from ...core.naming import to_snake_case
from ...core.schema import FieldType

DEFAULT_VARCHAR_LENGTH = 255

SQL_COLUMN_TYPES = {
    FieldType.STRING: "VARCHAR",
    FieldType.TEXT: "TEXT",
    FieldType.INT: "BIGINT",
    FieldType.INTEGER: "BIGINT",
    FieldType.BIGINT: "BIGINT",
    FieldType.FLOAT: "DOUBLE PRECISION",
    FieldType.DECIMAL: "NUMERIC",
    FieldType.BOOL: "BOOLEAN",
    FieldType.BOOLEAN: "BOOLEAN",
    FieldType.DATE: "DATE",
    FieldType.DATETIME: "TIMESTAMP",
    FieldType.TIMESTAMP: "TIMESTAMP",
    FieldType.JSON: "JSONB",
    FieldType.UUID: "UUID",
}

# Column types whose literal defaults need quoting
_QUOTED_TYPES = {
    FieldType.STRING,
    FieldType.TEXT,
    FieldType.DATE,
    FieldType.DATETIME,
    FieldType.TIMESTAMP,
    FieldType.JSON,
    FieldType.UUID,
}

_FUNCTION_CALL = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*\(.*\)$")
_SQL_KEYWORDS = {"CURRENT_TIMESTAMP", "CURRENT_DATE", "CURRENT_TIME", "NULL", "TRUE", "FALSE"}

_BARE_IDENTIFIER = re.compile(r"[a-z_][a-z0-9_]*")

# Keywords PostgreSQL does not accept as bare column or table names
POSTGRES_RESERVED_WORDS = frozenset(
    {
        "all", "analyse", "analyze", "and", "any", "array", "as", "asc",
        "asymmetric", "authorization", "binary", "both", "case", "cast",
        "check", "collate", "collation", "column", "concurrently",
        "constraint", "create", "cross", "current_catalog", "current_date",
        "current_role", "current_schema", "current_time", "current_timestamp",
        "current_user", "default", "deferrable", "desc", "distinct", "do",
        "else", "end", "except", "false", "fetch", "for", "foreign", "freeze",
        "from", "full", "grant", "group", "having", "ilike", "in", "initially",
        "inner", "intersect", "into", "is", "isnull", "join", "lateral",
        "leading", "left", "like", "limit", "localtime", "localtimestamp",
        "natural", "not", "notnull", "null", "offset", "on", "only", "or",
        "order", "outer", "overlaps", "placing", "primary", "references",
        "returning", "right", "select", "session_user", "similar", "some",
        "symmetric", "system_user", "table", "tablesample", "then", "to",
        "trailing", "true", "union", "unique", "user", "using", "variadic",
        "verbose", "when", "where", "window", "with",
    }
)


def sql_type(type_tag, length: int = 0) -> str:
    """
    Map an abstract type tag to a PostgreSQL column type.

    Strings become ``VARCHAR(length)``, falling back to 255 characters.
    """
    field_type = type_tag if isinstance(type_tag, FieldType) else FieldType.from_tag(type_tag)
    column = SQL_COLUMN_TYPES[field_type]
    if field_type == FieldType.STRING:
        return f"{column}({length if length and length > 0 else DEFAULT_VARCHAR_LENGTH})"
    return column


def sql_default(value: str, type_tag) -> str:
    """
    Render a ``DEFAULT`` literal.

    Text-like values are single-quoted unless they already are, or look like
    a function call or SQL keyword.
    """
    text = str(value).strip()
    field_type = type_tag if isinstance(type_tag, FieldType) else FieldType.from_tag(type_tag)

    if field_type not in _QUOTED_TYPES:
        return text
    if text.startswith("'") and text.endswith("'") and len(text) >= 2:
        return text
    if _FUNCTION_CALL.match(text) or text.upper() in _SQL_KEYWORDS:
        return text
    return "'" + text.replace("'", "''") + "'"


def sql_identifier(name: str) -> str:
    """
    Quote a table or column name where PostgreSQL would reject it bare.

    Reserved words and names outside ``[a-z_][a-z0-9_]*`` are double-quoted.
    Schema-qualified names (``public.users``) are quoted part by part.
    """
    return ".".join(_quote_part(part) for part in name.split("."))


def _quote_part(part: str) -> str:
    if _BARE_IDENTIFIER.fullmatch(part) and part not in POSTGRES_RESERVED_WORDS:
        return part
    return '"' + part.replace('"', '""') + '"'


def index_name(table_name: str, column: str) -> str:
    """
    Index name for a column, e.g. ``idx_users_created_at``.

    Indexes live in their table's schema, so a schema prefix is dropped.
    """
    table = to_snake_case(table_name.rsplit(".", 1)[-1])
    return re.sub(r"[^a-z0-9_]", "_", f"idx_{table}_{to_snake_case(column)}")

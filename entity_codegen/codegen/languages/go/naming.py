"""
Go-specific identifier safety.

Generated code declares receivers and local variables named after the
entity. Those names must not be Go keywords, and must not shadow builtins,
imported packages or the fixed locals the templates declare.
"""

# Go reserved words
GO_RESERVED_WORDS = frozenset(
    {
        "break",
        "case",
        "chan",
        "const",
        "continue",
        "default",
        "defer",
        "else",
        "fallthrough",
        "for",
        "func",
        "go",
        "goto",
        "if",
        "import",
        "interface",
        "map",
        "package",
        "range",
        "return",
        "select",
        "struct",
        "switch",
        "type",
        "var",
    }
)

# Go builtin types, constants and functions
GO_BUILTINS = frozenset(
    {
        "any",
        "bool",
        "byte",
        "comparable",
        "complex64",
        "complex128",
        "error",
        "float32",
        "float64",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "rune",
        "string",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "uintptr",
        "true",
        "false",
        "iota",
        "nil",
        "append",
        "cap",
        "clear",
        "close",
        "complex",
        "copy",
        "delete",
        "imag",
        "len",
        "make",
        "max",
        "min",
        "new",
        "panic",
        "print",
        "println",
        "real",
        "recover",
    }
)

# Package names imported by the generated files
TEMPLATE_PACKAGES = frozenset(
    {
        "context",
        "dto",
        "errors",
        "fmt",
        "gin",
        "handlers",
        "http",
        "json",
        "models",
        "repository",
        "service",
        "sql",
        "sqlx",
        "strconv",
        "time",
        "uuid",
    }
)

# Receivers, parameters and locals the templates declare themselves
TEMPLATE_LOCALS = frozenset(
    {
        "c",
        "count",
        "ctx",
        "db",
        "err",
        "existing",
        "externalID",
        "group",
        "h",
        "i",
        "id",
        "idStr",
        "item",
        "limit",
        "now",
        "offset",
        "query",
        "r",
        "repo",
        "req",
        "response",
        "result",
        "routes",
        "rows",
        "s",
        "total",
    }
)

RESERVED_IDENTIFIERS = GO_RESERVED_WORDS | GO_BUILTINS | TEMPLATE_PACKAGES | TEMPLATE_LOCALS


def safe_identifier(name: str, suffix_on_conflict: str = "_") -> str:
    """
    Make a generated local identifier safe to declare.

    Args:
        name: Candidate identifier (usually the camelCased entity name)
        suffix_on_conflict: Appended until the name no longer collides

    Returns:
        ``name`` unchanged, or suffixed when it is reserved
    """
    while name in RESERVED_IDENTIFIERS:
        name += suffix_on_conflict
    return name

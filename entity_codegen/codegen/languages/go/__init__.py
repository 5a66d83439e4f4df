"""
Go code generator module.

Generates a Go model, sqlx repository, service, gin handler and DTOs,
plus PostgreSQL migrations, for one entity.
"""

from .generator import GoGenerator, create_go_generator
from .naming import RESERVED_IDENTIFIERS, safe_identifier
from .sql import index_name, sql_default, sql_identifier, sql_type
from .types import (
    GoType,
    GoTypeConfig,
    GoTypeMapper,
)

__all__ = [
    "GoGenerator",
    "GoType",
    "GoTypeConfig",
    "GoTypeMapper",
    "RESERVED_IDENTIFIERS",
    "create_go_generator",
    "index_name",
    "safe_identifier",
    "sql_default",
    "sql_identifier",
    "sql_type",
]

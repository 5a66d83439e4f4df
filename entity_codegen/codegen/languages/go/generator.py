"""
Go code generator implementation.

Generates a Go model, repository, service, gin handler and DTOs plus
PostgreSQL migrations for one entity.
"""

from typing import Any, Dict, List, Optional
from pathlib import Path

from ...core.config import GeneratorConfig
from ...core.context import GenerationContext
from ...core.generator import CodeGenerator
from ...core.templates import FunctionTable
from .naming import safe_identifier
from .sql import index_name, sql_default, sql_identifier, sql_type
from .types import GoTypeConfig, GoTypeMapper


class GoGenerator(CodeGenerator):
    """Code generator for Go service layers."""

    def get_template_directory(self) -> Optional[Path]:
        """Return the Go templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    def create_type_mapper(self) -> GoTypeMapper:
        """Build the type mapper from generator config."""
        config = self.config
        return GoTypeMapper(
            GoTypeConfig(
                int_type=config.int_type,
                float_type=config.float_type,
                time_type=config.time_type,
                omit_empty_optional=config.json_tag_omitempty,
                generate_validate_tags=config.generate_validate_tags,
            )
        )

    def build_function_table(self) -> FunctionTable:
        mapper = self.type_mapper
        return super().build_function_table().extend(
            {
                "go_type": mapper.map_type,
                "json_tag": mapper.serialization_tag,
                "db_tag": mapper.persistence_tag,
                "empty_check": mapper.empty_check,
                "sql_type": sql_type,
                "sql_default": sql_default,
                "sql_identifier": sql_identifier,
                "index_name": index_name,
            }
        )

    def build_template_context(self, context: GenerationContext) -> Dict[str, Any]:
        template_context = super().build_template_context(context)
        template_context["receiver_name"] = safe_identifier(context.entity_name_camel)
        template_context["imports"] = self.used_imports(context)
        return template_context

    def used_imports(self, context: GenerationContext) -> List[str]:
        """
        Imports for the model and DTO files.

        The baseline time package is left out when no timestamp column and
        no temporal field refers to it, since Go rejects unused imports.
        """
        type_config = self.type_mapper.config
        uses_time = context.has_timestamps or any(
            field.base_type == type_config.time_type for field in context.fields
        )
        return [
            imp for imp in context.sorted_imports()
            if uses_time or imp != type_config.time_import
        ]

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "go"

    @property
    def file_extension(self) -> str:
        """Return Go file extension."""
        return ".go"


def create_go_generator(config: Optional[GeneratorConfig] = None) -> GoGenerator:
    """Create a Go generator with default configuration."""
    return GoGenerator(config or GeneratorConfig())

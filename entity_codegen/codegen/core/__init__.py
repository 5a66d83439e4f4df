"""
Core code generation components.

Provides the language-neutral pieces every generator is built from.
"""

from .generator import (
    ArtifactKind,
    CodeGenerator,
    GeneratedArtifact,
    GenerationError,
    GenerationResult,
    GeneratorError,
)
from .schema import DecodeError, Entity, EntityField, FieldType, Project, decode_fields
from .naming import (
    NamingCase,
    convert_case,
    pluralize,
    singularize,
    split_words,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
)
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .context import ContextPreparer, FieldContext, GenerationContext, ValidationError
from .templates import FunctionTable, TemplateEngine, TemplateError, create_template_engine, render
from .types import TypeMapper
from .writer import ArtifactWriteError, ArtifactWriter, FileArtifactWriter

__all__ = [
    # Generator interface
    "ArtifactKind",
    "CodeGenerator",
    "GeneratedArtifact",
    "GenerationError",
    "GenerationResult",
    "GeneratorError",
    # Entity definitions
    "DecodeError",
    "Entity",
    "EntityField",
    "FieldType",
    "Project",
    "decode_fields",
    # Naming utilities
    "NamingCase",
    "convert_case",
    "pluralize",
    "singularize",
    "split_words",
    "to_camel_case",
    "to_kebab_case",
    "to_pascal_case",
    "to_snake_case",
    # Configuration
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Context
    "ContextPreparer",
    "FieldContext",
    "GenerationContext",
    "ValidationError",
    # Templates
    "FunctionTable",
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
    "render",
    # Output
    "TypeMapper",
    "ArtifactWriteError",
    "ArtifactWriter",
    "FileArtifactWriter",
]

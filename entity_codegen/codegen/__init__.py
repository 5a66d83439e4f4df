"""
Entity code generation.

Turns entity definitions into Go service layers and PostgreSQL migrations.
"""

from .core.config import GeneratorConfig, ConfigManager, load_config
from .core.generator import ArtifactKind, CodeGenerator, GeneratedArtifact, GenerationResult, GeneratorError
from .core.schema import Entity, EntityField, FieldType, Project
from .registry import GeneratorRegistry, get_generator, get_registry, list_supported_languages
from .service import GeneratorService
from .store import EntityStore, InMemoryEntityStore, NotFoundError


def generate_entity(project: Project, entity: Entity, language: str = "go", config=None) -> GenerationResult:
    """
    Generate all artifacts for an entity without a store.

    Args:
        project: Owning project
        entity: Entity definition
        language: Target language name
        config: Generator configuration, dict overrides or JSON file path

    Returns:
        GenerationResult with the artifacts in generation order
    """
    store = InMemoryEntityStore()
    store.add_project(project)
    store.add_entity(entity)
    return GeneratorService(store, get_generator(language, config)).generate(entity.id)


__all__ = [
    "ArtifactKind",
    "CodeGenerator",
    "ConfigManager",
    "Entity",
    "EntityField",
    "EntityStore",
    "FieldType",
    "GeneratedArtifact",
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "GeneratorRegistry",
    "GeneratorService",
    "InMemoryEntityStore",
    "NotFoundError",
    "Project",
    "generate_entity",
    "get_generator",
    "get_registry",
    "list_supported_languages",
    "load_config",
]

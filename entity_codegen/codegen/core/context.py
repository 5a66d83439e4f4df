"""
Generation context preparation.

Turns a (project, entity) pair into a fully resolved, template-ready view:
derived names, per-field type and tag data, and the dependency set.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from ...logging_config import get_logger
from .config import GeneratorConfig
from .naming import (
    pluralize,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
)
from .schema import Entity, EntityField, FieldType, Project
from .types import TypeMapper

logger = get_logger(__name__)

PLAIN_IDENTIFIER = re.compile(r"[a-z][a-z0-9_]*")


class ValidationError(Exception):
    """Raised when a generation context violates its invariants."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


@dataclass(frozen=True)
class FieldContext:
    """Template-ready view of one entity field."""

    name: str
    name_camel: str
    name_pascal: str
    name_snake: str
    type_tag: FieldType
    type: str
    base_type: str
    nullable: bool
    json_tag: str
    db_tag: str
    validate_tag: str
    required: bool
    unique: bool = False
    default_value: str = ""
    length: int = 0
    description: str = ""


@dataclass
class GenerationContext:
    """Everything the artifact templates need for one entity."""

    project: Project
    entity: Entity
    fields: List[FieldContext]
    package_name: str
    module_path: str
    imports: Set[str]
    entity_name: str
    entity_name_camel: str
    entity_name_snake: str
    entity_name_plural: str
    table_name: str
    has_external_id: bool = True
    has_timestamps: bool = True
    warnings: List[str] = field(default_factory=list)

    def sorted_imports(self) -> List[str]:
        return sorted(self.imports)

    def to_template_context(self) -> Dict[str, Any]:
        """Explicit variable set handed to every artifact template."""
        return {
            "project": self.project,
            "entity": self.entity,
            "fields": self.fields,
            "package_name": self.package_name,
            "module_path": self.module_path,
            "imports": self.sorted_imports(),
            "entity_name": self.entity_name,
            "entity_name_camel": self.entity_name_camel,
            "entity_name_snake": self.entity_name_snake,
            "entity_name_plural": self.entity_name_plural,
            "table_name": self.table_name,
            "has_external_id": self.has_external_id,
            "has_timestamps": self.has_timestamps,
        }


def validate_context(context: GenerationContext):
    """
    Check the context invariants.

    Raises:
        ValidationError: Naming the first violated constraint
    """
    if not context.entity_name:
        raise ValidationError("entity_name", "entity name is required")
    if not PLAIN_IDENTIFIER.fullmatch(context.entity_name_snake):
        raise ValidationError(
            "entity_name",
            f"entity name must start with a letter and use only letters, digits and separators, got '{context.entity.name}'",
        )
    if not (context.table_name or "").strip():
        raise ValidationError("table_name", "table name is required")
    if not context.fields:
        raise ValidationError("fields", "at least one field is required")


class ContextPreparer:
    """Builds GenerationContext objects with a language type mapper."""

    def __init__(self, type_mapper: TypeMapper, config: Optional[GeneratorConfig] = None):
        self.type_mapper = type_mapper
        self.config = config or GeneratorConfig()

    def prepare(self, project: Project, entity: Entity) -> GenerationContext:
        """
        Prepare the generation context for an entity.

        Raises:
            DecodeError: If the entity's field list is malformed
            ValidationError: If the resulting context is incomplete
        """
        entity_fields = entity.decoded_fields()

        mapped_types = []
        fields = []
        for entity_field in entity_fields:
            mapped = self.type_mapper.map_field_type(entity_field)
            mapped_types.append(mapped)
            fields.append(self._build_field_context(entity_field, mapped))

        entity_name = to_pascal_case(entity.name)
        context = GenerationContext(
            project=project,
            entity=entity,
            fields=fields,
            package_name=self.config.package_name,
            module_path=self.config.module_path or self._default_module_path(project),
            imports=set(),
            entity_name=entity_name,
            entity_name_camel=to_camel_case(entity.name),
            entity_name_snake=to_snake_case(entity.name),
            entity_name_plural=pluralize(entity_name),
            table_name=(entity.table_name or "").strip(),
            has_external_id=self.config.has_external_id,
            has_timestamps=self.config.has_timestamps,
            warnings=self.type_mapper.get_validation_summary(mapped_types),
        )
        context.imports = self.determine_imports(context, mapped_types)

        validate_context(context)

        logger.debug(
            "Prepared context for %s (%d fields, imports=%s)",
            context.entity_name,
            len(fields),
            context.sorted_imports(),
        )
        return context

    def _build_field_context(self, entity_field: EntityField, mapped: Any) -> FieldContext:
        mapper = self.type_mapper
        return FieldContext(
            name=entity_field.name,
            name_camel=to_camel_case(entity_field.name),
            name_pascal=to_pascal_case(entity_field.name),
            name_snake=to_snake_case(entity_field.name),
            type_tag=entity_field.field_type,
            type=mapped.name,
            base_type=mapped.base_name,
            nullable=not entity_field.required,
            json_tag=mapper.serialization_tag(entity_field.name, entity_field.required),
            db_tag=mapper.persistence_tag(entity_field.name),
            validate_tag=mapper.validation_tag(entity_field),
            required=entity_field.required,
            unique=entity_field.unique,
            default_value=entity_field.default_value,
            length=entity_field.length,
            description=entity_field.description,
        )

    def determine_imports(self, context: GenerationContext, mapped_types: List[Any]) -> Set[str]:
        """Union of the baseline, external-id and per-field imports."""
        imports = set(self.type_mapper.baseline_imports())
        if context.has_external_id:
            imports |= self.type_mapper.external_id_imports()
        imports |= self.type_mapper.get_all_imports(mapped_types)
        return imports

    @staticmethod
    def _default_module_path(project: Project) -> str:
        return to_kebab_case(project.name) or "app"

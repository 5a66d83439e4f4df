"""
Go-specific type system for code generation.

Provides clean, extensible type mapping with configuration-driven behavior.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Set, Tuple

from ...core.naming import to_snake_case
from ...core.schema import EntityField, FieldType
from ...core.types import TypeMapper


UUID_IMPORT = "github.com/google/uuid"
JSON_IMPORT = "encoding/json"
TIME_IMPORT = "time"


@dataclass(frozen=True)
class GoType:
    """
    Immutable representation of a Go type with all metadata.

    This is the core type representation that carries everything needed
    to generate proper Go code with imports, validation, etc.
    """

    name: str  # The Go type name (e.g., "string", "*int64")
    base_name: str = field(default="")  # Base name without pointer (e.g., "int64")
    is_pointer: bool = field(default=False)
    imports_needed: FrozenSet[str] = field(default_factory=frozenset)
    is_nilable: bool = field(default=False)  # Can be nil
    validation_hints: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Set base_name if not provided."""
        if not self.base_name:
            object.__setattr__(self, "base_name", self.name.lstrip("*"))

    def as_pointer(self) -> "GoType":
        """Return a pointer version of this type."""
        if self.is_pointer:
            return self

        return GoType(
            name=f"*{self.name}",
            base_name=self.base_name,
            is_pointer=True,
            imports_needed=self.imports_needed,
            is_nilable=True,
            validation_hints=self.validation_hints,
        )

    def with_validation_hint(self, hint: str) -> "GoType":
        """Add a validation hint to this type."""
        return GoType(
            name=self.name,
            base_name=self.base_name,
            is_pointer=self.is_pointer,
            imports_needed=self.imports_needed,
            is_nilable=self.is_nilable,
            validation_hints=self.validation_hints + (hint,),
        )


@dataclass
class GoTypeConfig:
    """Configuration for Go type mapping behavior."""

    # Numeric type preferences
    int_type: str = "int64"
    float_type: str = "float64"

    # String and basic types
    string_type: str = "string"
    bool_type: str = "bool"

    # Time handling
    time_type: str = "time.Time"
    time_import: str = TIME_IMPORT

    # Structured data and identifiers
    json_type: str = "json.RawMessage"
    uuid_type: str = "uuid.UUID"

    # JSON tag preferences
    omit_empty_optional: bool = True
    generate_validate_tags: bool = True


class GoTypeMapper(TypeMapper):
    """
    Maps entity fields to Go types and struct tags.

    Every FieldType member has an explicit entry; tags outside the
    vocabulary take the string arm and carry a validation hint.
    """

    def __init__(self, config: Optional[GoTypeConfig] = None):
        """Initialize with type configuration."""
        self.config = config or GoTypeConfig()
        self._types = self._build_type_map()

    def _build_type_map(self) -> Dict[FieldType, GoType]:
        config = self.config
        string = GoType(name=config.string_type)
        integer = GoType(name=config.int_type)
        floating = GoType(name=config.float_type)
        boolean = GoType(name=config.bool_type)
        moment = GoType(
            name=config.time_type,
            imports_needed=frozenset({config.time_import}),
        )

        return {
            FieldType.STRING: string,
            FieldType.TEXT: string,
            FieldType.INT: integer,
            FieldType.INTEGER: integer,
            FieldType.BIGINT: integer,
            FieldType.FLOAT: floating,
            FieldType.DECIMAL: floating,
            FieldType.BOOL: boolean,
            FieldType.BOOLEAN: boolean,
            FieldType.DATE: moment,
            FieldType.DATETIME: moment,
            FieldType.TIMESTAMP: moment,
            FieldType.JSON: GoType(
                name=config.json_type,
                imports_needed=frozenset({JSON_IMPORT}),
            ),
            FieldType.UUID: GoType(
                name=config.uuid_type,
                imports_needed=frozenset({UUID_IMPORT}),
            ),
        }

    def map_type(self, type_tag: str) -> str:
        """Map an abstract type tag to a Go type name."""
        return self._types[FieldType.from_tag(type_tag)].name

    def map_field_type(self, field: EntityField) -> GoType:
        """
        Map an entity field to a Go type.

        Args:
            field: The field to map

        Returns:
            Complete GoType with all metadata
        """
        base_type = self._types[field.field_type]

        if not FieldType.is_known(field.type):
            base_type = base_type.with_validation_hint(
                f"Unknown type '{field.type}' on field '{field.name}', "
                f"using {base_type.name}"
            )

        # Optional fields are pointers so that "absent" differs from the zero value
        if field.required:
            return base_type
        return base_type.as_pointer()

    def serialization_tag(self, field_name: str, required: bool) -> str:
        """Build the ``json`` struct tag."""
        tag = to_snake_case(field_name)
        if not required and self.config.omit_empty_optional:
            tag += ",omitempty"
        return f'json:"{tag}"'

    def persistence_tag(self, field_name: str) -> str:
        """Build the ``db`` struct tag."""
        return f'db:"{to_snake_case(field_name)}"'

    def validation_tag(self, field: EntityField) -> str:
        """Build the ``validate`` struct tag, or an empty string."""
        if not self.config.generate_validate_tags:
            return ""
        rules = self.validation_rules(field)
        if not rules:
            return ""
        return f'validate:"{",".join(rules)}"'

    def baseline_imports(self) -> Set[str]:
        return {self.config.time_import}

    def external_id_imports(self) -> Set[str]:
        return {UUID_IMPORT}

    def empty_check(self, go_type: str, expr: str) -> str:
        """
        Go expression that is true when ``expr`` holds no value.

        Returns an empty string for types whose zero value is legal input
        (numbers and booleans).
        """
        config = self.config
        if go_type.startswith("*"):
            return f"{expr} == nil"
        if go_type == config.string_type:
            return f'{expr} == ""'
        if go_type == config.time_type:
            return f"{expr}.IsZero()"
        if go_type == config.uuid_type:
            return f"{expr} == uuid.Nil"
        if go_type == config.json_type:
            return f"len({expr}) == 0"
        return ""

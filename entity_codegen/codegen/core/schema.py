"""
Core schema representation for code generation.

Holds the caller-supplied entity definitions (projects, entities and their
typed fields) and decodes raw field lists into a normalized form that
generators can work with consistently.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
from enum import Enum


class DecodeError(Exception):
    """Raised when an entity's raw field list cannot be decoded."""

    pass


class FieldType(Enum):
    """Abstract field types accepted in entity definitions."""

    STRING = "string"
    TEXT = "text"
    INT = "int"
    INTEGER = "integer"
    BIGINT = "bigint"
    FLOAT = "float"
    DECIMAL = "decimal"
    BOOL = "bool"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    JSON = "json"
    UUID = "uuid"

    @classmethod
    def is_known(cls, tag: Optional[str]) -> bool:
        """Check whether a raw tag belongs to the vocabulary."""
        return (tag or "").strip().lower() in cls._value2member_map_

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> "FieldType":
        """
        Resolve a raw type tag.

        Lookup is case-insensitive. Unknown or empty tags resolve to
        ``STRING``.
        """
        key = (tag or "").strip().lower()
        if key in cls._value2member_map_:
            return cls(key)
        return cls.STRING

    @property
    def is_temporal(self) -> bool:
        return self in (FieldType.DATE, FieldType.DATETIME, FieldType.TIMESTAMP)


@dataclass(frozen=True)
class EntityField:
    """A single field in an entity definition."""

    name: str
    type: str = FieldType.STRING.value
    required: bool = False
    unique: bool = False
    default_value: str = ""
    length: int = 0
    description: str = ""

    @property
    def field_type(self) -> FieldType:
        return FieldType.from_tag(self.type)


@dataclass
class Project:
    """The project that owns one or more entities."""

    id: int
    name: str
    description: str = ""
    status: str = "active"
    namespace: str = ""


RawFields = Union[str, bytes, List[Dict[str, Any]]]


@dataclass
class Entity:
    """A data record type as stored by the entity management API."""

    id: int
    project_id: int
    name: str
    table_name: str
    fields: RawFields = field(default_factory=list)
    description: str = ""

    def decoded_fields(self) -> List[EntityField]:
        """Decode this entity's raw field list."""
        return decode_fields(self.fields)


def _expect(condition: bool, message: str):
    if not condition:
        raise DecodeError(message)


def decode_field(raw: Any, index: int = 0) -> EntityField:
    """
    Decode one field mapping.

    Args:
        raw: Mapping with at least ``name`` and ``type``
        index: Position in the field list, used in error messages

    Returns:
        Decoded EntityField

    Raises:
        DecodeError: If the mapping is malformed
    """
    where = f"field #{index}"
    _expect(isinstance(raw, dict), f"{where}: expected an object, got {type(raw).__name__}")

    name = raw.get("name")
    _expect(isinstance(name, str) and name.strip() != "", f"{where}: 'name' must be a non-empty string")
    where = f"field '{name}'"

    type_tag = raw.get("type", FieldType.STRING.value)
    _expect(isinstance(type_tag, str), f"{where}: 'type' must be a string")

    for flag in ("required", "unique"):
        _expect(isinstance(raw.get(flag, False), bool), f"{where}: '{flag}' must be a boolean")

    length = raw.get("length", 0)
    if length is None:
        length = 0
    _expect(
        isinstance(length, int) and not isinstance(length, bool) and length >= 0,
        f"{where}: 'length' must be a non-negative integer",
    )

    default_value = raw.get("default_value", raw.get("defaultValue", ""))
    if default_value is None:
        default_value = ""
    _expect(
        isinstance(default_value, (str, int, float)) and not isinstance(default_value, bool),
        f"{where}: 'default_value' must be a string or number",
    )

    description = raw.get("description") or ""
    _expect(isinstance(description, str), f"{where}: 'description' must be a string")

    return EntityField(
        name=name,
        type=type_tag,
        required=raw.get("required", False),
        unique=raw.get("unique", False),
        default_value=str(default_value),
        length=length,
        description=description,
    )


def decode_fields(raw_fields: RawFields) -> List[EntityField]:
    """
    Decode a raw field list.

    Accepts JSON text, UTF-8 bytes, or an already parsed list of mappings.
    Declaration order is preserved.

    Raises:
        DecodeError: If the payload or any field is malformed
    """
    payload = raw_fields
    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Field list is not valid UTF-8: {e}") from e

    if isinstance(payload, str):
        try:
            payload = json.loads(payload) if payload.strip() else []
        except json.JSONDecodeError as e:
            raise DecodeError(f"Field list is not valid JSON: {e}") from e

    if payload is None:
        payload = []

    if not isinstance(payload, list):
        raise DecodeError(f"Field list must be an array, got {type(payload).__name__}")

    return [decode_field(item, index) for index, item in enumerate(payload)]

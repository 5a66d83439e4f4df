"""
Language-agnostic type mapping interface.

A type mapper turns an abstract field type into a target-language type and
synthesizes the serialization, persistence and validation tags that go with
it. Language modules provide the concrete mapper.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Set

from .schema import EntityField


class TypeMapper(ABC):
    """Abstract base class for target-language type mappers."""

    @abstractmethod
    def map_type(self, type_tag: str) -> str:
        """
        Map an abstract type tag to a target type name.

        Must be total: unknown tags map to the string representation.
        """
        pass

    @abstractmethod
    def map_field_type(self, field: EntityField) -> Any:
        """
        Map a field to a target type object, applying optional wrapping.

        The returned object exposes ``name``, ``base_name``, ``is_pointer``,
        ``imports_needed`` and ``validation_hints``.
        """
        pass

    @abstractmethod
    def serialization_tag(self, field_name: str, required: bool) -> str:
        pass

    @abstractmethod
    def persistence_tag(self, field_name: str) -> str:
        pass

    @abstractmethod
    def validation_tag(self, field: EntityField) -> str:
        pass

    def validation_rules(self, field: EntityField) -> List[str]:
        """Collect constraint rules from ``required`` and ``length``."""
        rules = []
        if field.required:
            rules.append("required")
        if field.length > 0:
            rules.append(f"max={field.length}")
        return rules

    def baseline_imports(self) -> Set[str]:
        """Imports every generated model needs."""
        return set()

    def external_id_imports(self) -> Set[str]:
        """Imports needed when entities carry an external identifier."""
        return set()

    def get_all_imports(self, types: Iterable[Any]) -> Set[str]:
        """Extract all unique imports needed for a list of types."""
        imports = set()
        for mapped in types:
            imports.update(mapped.imports_needed)
        return imports

    def get_validation_summary(self, types: Iterable[Any]) -> List[str]:
        """Get all validation hints from a list of types."""
        all_hints = []
        for mapped in types:
            all_hints.extend(mapped.validation_hints)
        return all_hints

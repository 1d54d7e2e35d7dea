"""Type Catalog - static lookup of component definitions keyed by type."""

from collections.abc import Iterable
from functools import lru_cache

from .definitions import BUILTIN_DEFINITIONS
from .types import ComponentCategory, ComponentDefinition, ComponentType


class TypeCatalog:
    """
    Read-only table of component definitions.

    Lookups accept either a ComponentType or its string tag; anything that is
    not a known tag resolves to None rather than raising.
    """

    def __init__(self, definitions: Iterable[ComponentDefinition]) -> None:
        self._definitions: dict[ComponentType, ComponentDefinition] = {}
        for definition in definitions:
            if definition.type in self._definitions:
                raise ValueError(f"Duplicate definition for type '{definition.type.value}'")
            self._definitions[definition.type] = definition

    @staticmethod
    def coerce(type_: ComponentType | str) -> ComponentType | None:
        """Resolve a tag to a ComponentType, or None if it is not one."""
        if isinstance(type_, ComponentType):
            return type_
        try:
            return ComponentType(type_)
        except ValueError:
            return None

    def get(self, type_: ComponentType | str) -> ComponentDefinition | None:
        """Definition for a type, or None if unknown."""
        component_type = self.coerce(type_)
        if component_type is None:
            return None
        return self._definitions.get(component_type)

    def definitions(self) -> list[ComponentDefinition]:
        """All definitions in palette order."""
        return list(self._definitions.values())

    def by_category(self, category: ComponentCategory | str) -> list[ComponentDefinition]:
        return [d for d in self._definitions.values() if d.category == category]

    def types(self) -> list[ComponentType]:
        return list(self._definitions)

    def __contains__(self, type_: object) -> bool:
        if not isinstance(type_, (str, ComponentType)):
            return False
        return self.get(type_) is not None

    def __len__(self) -> int:
        return len(self._definitions)


@lru_cache
def default_catalog() -> TypeCatalog:
    """Catalog of the built-in component types."""
    return TypeCatalog(BUILTIN_DEFINITIONS)

"""
Type Catalog
Component kinds and their default properties/styles
"""

from .types import (
    ComponentCategory,
    ComponentDefinition,
    ComponentStyles,
    ComponentType,
    DragData,
    PropSchema,
    SelectOption,
    StyleSchema,
)
from .catalog import TypeCatalog, default_catalog

__all__ = [
    "ComponentCategory",
    "ComponentDefinition",
    "ComponentStyles",
    "ComponentType",
    "DragData",
    "PropSchema",
    "SelectOption",
    "StyleSchema",
    "TypeCatalog",
    "default_catalog",
]

"""
pagebuilder
Component-tree editing engine for a visual page builder
"""

from .assets import AssetRegistry, IngestionError, LocalAsset, is_local_reference
from .catalog import ComponentType, TypeCatalog, default_catalog
from .editor import EditError, EditErrorCode, Node, TreeStore
from .persistence import MemoryAdapter, PersistenceError, RecordNotFound, dumps_forest, loads_forest
from .session import EditorSession

__version__ = "0.1.0"

__all__ = [
    "AssetRegistry",
    "IngestionError",
    "LocalAsset",
    "is_local_reference",
    "ComponentType",
    "TypeCatalog",
    "default_catalog",
    "EditError",
    "EditErrorCode",
    "Node",
    "TreeStore",
    "MemoryAdapter",
    "PersistenceError",
    "RecordNotFound",
    "dumps_forest",
    "loads_forest",
    "EditorSession",
]

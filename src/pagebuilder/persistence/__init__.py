"""
Persistence
Stored form of a forest and the stores that hold it
"""

from .adapter import PersistenceAdapter, TemplateProvider
from .codec import dumps_forest, loads_forest
from .errors import PersistenceError, RecordNotFound
from .memory import MemoryAdapter
from .records import ProjectRecord, TemplateRecord
from .templates import BUILTIN_TEMPLATES

__all__ = [
    "PersistenceAdapter",
    "TemplateProvider",
    "dumps_forest",
    "loads_forest",
    "PersistenceError",
    "RecordNotFound",
    "MemoryAdapter",
    "ProjectRecord",
    "TemplateRecord",
    "BUILTIN_TEMPLATES",
]

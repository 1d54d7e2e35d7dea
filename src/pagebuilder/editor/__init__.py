"""
Editing Engine
Component tree model and structural edits
"""

from .models import Node
from .results import EditError, EditErrorCode, EditResult
from .store import TreeStore

__all__ = [
    "Node",
    "EditError",
    "EditErrorCode",
    "EditResult",
    "TreeStore",
]

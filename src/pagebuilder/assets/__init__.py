"""
Asset Registry
Session-held binaries referenced by image nodes
"""

from .models import IngestionError, LocalAsset
from .references import is_local_reference
from .registry import AssetRegistry

__all__ = [
    "AssetRegistry",
    "IngestionError",
    "LocalAsset",
    "is_local_reference",
]

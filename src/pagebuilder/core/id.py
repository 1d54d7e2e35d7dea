"""ID Generation.

ULID-based identifiers for editor objects.

- Unique across the whole forest, not just among siblings
- Prefixed by kind so a node id is never mistaken for an asset id in logs
- K-sortable: creation order is recoverable from the id alone
"""

from typing import NewType

from ulid import ULID

# ============================================================================
# Type-Safe ID Wrappers
# ============================================================================

NodeID = NewType("NodeID", str)
"""Component node identifier"""

AssetID = NewType("AssetID", str)
"""Local asset identifier (used as an image node's ``props.src``)"""

RecordID = NewType("RecordID", str)
"""Saved project/template record identifier"""

SessionID = NewType("SessionID", str)
"""Editing session identifier"""


class Prefix:
    """ID prefix constants."""

    COMPONENT = "cmp"
    ASSET = "img"
    PROJECT = "prj"
    TEMPLATE = "tpl"
    SESSION = "sess"


# ============================================================================
# ULID Generator
# ============================================================================


class Generator:
    """ULID generator."""

    def generate(self) -> str:
        """Generate a new ULID."""
        return str(ULID())

    def generate_with_prefix(self, prefix: str) -> str:
        """Generate ULID with type prefix."""
        return f"{prefix}_{self.generate()}"


_generator = Generator()


# ============================================================================
# Typed ID Generators
# ============================================================================


def new_node_id() -> NodeID:
    """Generate new component node ID."""
    return NodeID(_generator.generate_with_prefix(Prefix.COMPONENT))


def new_asset_id() -> AssetID:
    """Generate new local asset ID."""
    return AssetID(_generator.generate_with_prefix(Prefix.ASSET))


def new_project_id() -> RecordID:
    """Generate new project record ID."""
    return RecordID(_generator.generate_with_prefix(Prefix.PROJECT))


def new_template_id() -> RecordID:
    """Generate new template record ID."""
    return RecordID(_generator.generate_with_prefix(Prefix.TEMPLATE))


def new_session_id() -> SessionID:
    """Generate new editing session ID."""
    return SessionID(_generator.generate_with_prefix(Prefix.SESSION))

"""
Forest Codec

Stored form of a forest: a UTF-8 JSON array of nodes with camelCase style
keys. ``children`` is written only for nodes that have a children list, so a
leaf that never held children and a container that was emptied stay distinct.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..catalog import TypeCatalog, default_catalog
from ..core import (
    JSONParseError,
    Settings,
    ValidationError,
    dumps,
    get_logger,
    get_settings,
    parse_forest_json,
    validate_json_depth,
)
from ..editor.models import Node

logger = get_logger(__name__)


def dumps_forest(forest: Iterable[Node], indent: int = 0) -> str:
    """Serialize a forest to JSON text."""
    return dumps([node.to_dict() for node in forest], indent=indent)


def loads_forest(
    text: str,
    catalog: TypeCatalog | None = None,
    settings: Settings | None = None,
) -> list[Node]:
    """
    Parse a stored forest.

    A node without ``name`` gets its type's display name; missing ``props``
    and ``styles`` default to empty.

    Raises:
        ValidationError: On malformed JSON, limits exceeded, unknown types,
            invalid node shapes or repeated ids
    """
    catalog = catalog or default_catalog()
    settings = settings or get_settings()

    data = parse_forest_json(text, settings.max_forest_size, settings.max_tree_depth, settings.max_prop_depth)

    forest: list[Node] = []
    for position, item in enumerate(data):
        prepared = _prepare(item, catalog, settings.max_prop_depth, f"[{position}]")
        try:
            forest.append(Node.model_validate(prepared))
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid node at [{position}]: {e}") from e

    _check_unique_ids(forest)
    logger.debug("forest_decoded", roots=len(forest))
    return forest


def _prepare(item: Any, catalog: TypeCatalog, max_prop_depth: int, path: str) -> dict[str, Any]:
    if not isinstance(item, dict):
        raise ValidationError(f"Node at {path} must be an object, got {type(item).__name__}")

    node_id = item.get("id")
    if not isinstance(node_id, str) or not node_id:
        raise ValidationError(f"Node at {path} has no id")

    definition = catalog.get(item.get("type"))
    if definition is None:
        raise ValidationError(f"Node '{node_id}' has unknown type '{item.get('type')}'")

    prepared = dict(item)
    if prepared.get("name") is None:
        prepared["name"] = definition.name
    if prepared.get("props") is None:
        prepared["props"] = {}
    try:
        validate_json_depth(prepared["props"], max_prop_depth)
    except JSONParseError as e:
        raise ValidationError(f"Props of '{node_id}': {e}") from e
    if prepared.get("styles") is None:
        prepared["styles"] = {}

    children = item.get("children")
    if children is not None:
        if not isinstance(children, list):
            raise ValidationError(f"Children of '{node_id}' must be an array")
        prepared["children"] = [
            _prepare(child, catalog, max_prop_depth, f"{path}.children[{i}]") for i, child in enumerate(children)
        ]
    return prepared


def _check_unique_ids(forest: list[Node]) -> None:
    seen: set[str] = set()
    for root in forest:
        for node in root.walk():
            if node.id in seen:
                raise ValidationError(f"Duplicate node id '{node.id}' in forest")
            seen.add(node.id)

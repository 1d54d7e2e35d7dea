"""Tree Store - the forest of component nodes and every structural edit on it."""

import copy
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from returns.result import Success

from ..catalog import ComponentDefinition, ComponentStyles, ComponentType, DragData, TypeCatalog, default_catalog
from ..core import JSONParseError, Settings, ValidationError, get_logger, get_settings, validate_json_depth
from ..core.id import new_node_id
from ..monitoring import MetricsCollector, metrics_collector
from .models import Node
from .results import EditError, EditResult, invalid_value, not_found, unknown_type

logger = get_logger(__name__)

# Fields of a node that only the store may change
STRUCTURAL_FIELDS = frozenset({"id", "children"})
EDITABLE_FIELDS = frozenset({"name", "type", "props", "styles"})


class TreeStore:
    """
    Owns the ordered forest, the selection and the editor mode flags.

    Besides the nested forest the store keeps two flat tables, ``id -> Node``
    and ``id -> parent id`` (None for roots). Every mutation updates them
    together with the nested lists, so lookups never walk the tree and a
    move or delete only touches the sibling list that owns the node.

    Mutators return ``Success(node)`` or ``Failure(EditError)`` and never
    raise for an unknown id or type; the forest is unchanged on failure.
    Nesting stops at ``settings.max_tree_depth`` levels and props at
    ``settings.max_prop_depth``, the same limits a stored forest must meet.

    Nodes handed out by ``forest``, ``locate`` and the mutators are the live
    ones. Change them only through store operations: assigning ``id`` or
    ``children`` directly leaves the flat tables stale. Use ``snapshot()`` for
    a copy that can be changed freely.
    """

    def __init__(
        self,
        catalog: TypeCatalog | None = None,
        metrics: MetricsCollector | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.catalog = catalog or default_catalog()
        self.metrics = metrics or metrics_collector
        self.settings = settings or get_settings()

        self._roots: list[Node] = []
        self._index: dict[str, Node] = {}
        self._parents: dict[str, str | None] = {}

        self.selected_id: str | None = None
        self.is_preview = False
        self.is_dragging = False
        self.drag_type: ComponentType | None = None

    # ========================================================================
    # Queries
    # ========================================================================

    def locate(self, node_id: str) -> Node | None:
        """Node with this id at any depth, or None."""
        return self._index.get(node_id)

    def parent_of(self, node_id: str) -> Node | None:
        """Owning node, or None for roots and unknown ids."""
        parent_id = self._parents.get(node_id)
        return self._index.get(parent_id) if parent_id is not None else None

    def depth_of(self, node_id: str) -> int:
        """Nesting level of a node (roots are 1), or 0 for unknown ids."""
        depth = 0
        current: str | None = node_id if node_id in self._index else None
        while current is not None:
            depth += 1
            current = self._parents[current]
        return depth

    @property
    def forest(self) -> list[Node]:
        """Top-level nodes in order (the list is a copy, the nodes are live)."""
        return list(self._roots)

    @property
    def selected_node(self) -> Node | None:
        if self.selected_id is None:
            return None
        return self.locate(self.selected_id)

    def iter_nodes(self) -> Iterator[Node]:
        """Every node in the forest, pre-order."""
        for root in self._roots:
            yield from root.walk()

    def snapshot(self) -> list[Node]:
        """Deep copy of the forest."""
        return [root.model_copy(deep=True) for root in self._roots]

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    # ========================================================================
    # Creation
    # ========================================================================

    def add_node(self, type_: ComponentType | str, parent_id: str | None = None) -> EditResult[Node]:
        """
        Append a new node of ``type_`` to ``parent_id``'s children, or to the
        root list when no parent is given. The new node becomes selected.

        Any type may receive children; there is no schema enforcement.
        """
        definition = self.catalog.get(type_)
        if definition is None:
            return self._reject("add_node", unknown_type(type_))

        parent: Node | None = None
        if parent_id is not None:
            parent = self.locate(parent_id)
            if parent is None:
                return self._reject("add_node", not_found(parent_id, "Parent"))
            limit = self.settings.max_tree_depth
            if self.depth_of(parent_id) >= limit:
                return self._reject("add_node", invalid_value(parent_id, f"Nesting depth limit {limit} reached"))

        node = self._instantiate(definition)
        if parent is None:
            self._roots.append(node)
            self._register(node, None)
        else:
            if parent.children is None:
                parent.children = []
            parent.children.append(node)
            self._register(node, parent.id)

        self.selected_id = node.id
        logger.debug("node_added", node_id=node.id, type=node.type.value, parent_id=parent_id)
        return self._accept("add_node", node)

    def add_child(self, parent_id: str, type_: ComponentType | str) -> EditResult[Node]:
        """Same as ``add_node(type_, parent_id)``."""
        return self.add_node(type_, parent_id)

    def insert_at(self, type_: ComponentType | str, index: int) -> EditResult[Node]:
        """
        Insert a new node into the root list at ``index``.

        The index is clamped to ``[0, len(forest)]``: 0 puts it first, anything
        past the end appends.
        """
        definition = self.catalog.get(type_)
        if definition is None:
            return self._reject("insert_at", unknown_type(type_))

        position = max(0, min(index, len(self._roots)))
        node = self._instantiate(definition)
        self._roots.insert(position, node)
        self._register(node, None)

        self.selected_id = node.id
        logger.debug("node_inserted", node_id=node.id, type=node.type.value, index=position)
        return self._accept("insert_at", node)

    # ========================================================================
    # Updates
    # ========================================================================

    def update_node(self, node_id: str, fields: Mapping[str, Any]) -> EditResult[Node]:
        """
        Shallow-merge ``fields`` into a node.

        ``name``, ``type``, ``props`` and ``styles`` replace the current value
        wholesale. ``id`` and ``children`` belong to the store and are ignored.
        """
        node = self.locate(node_id)
        if node is None:
            return self._reject("update_node", not_found(node_id))

        ignored = set(fields) - EDITABLE_FIELDS
        if ignored:
            logger.warning("fields_ignored", node_id=node_id, fields=sorted(ignored))

        changes: dict[str, Any] = {}
        if "name" in fields:
            changes["name"] = str(fields["name"])
        if "type" in fields:
            component_type = self.catalog.coerce(fields["type"])
            if component_type is None or component_type not in self.catalog:
                return self._reject("update_node", unknown_type(fields["type"]))
            changes["type"] = component_type
        if "props" in fields:
            props = dict(fields["props"] or {})
            problem = self._props_problem(props)
            if problem:
                return self._reject("update_node", invalid_value(node_id, problem))
            changes["props"] = props
        if "styles" in fields:
            try:
                changes["styles"] = _coerce_styles(fields["styles"])
            except (PydanticValidationError, TypeError) as e:
                return self._reject("update_node", invalid_value(node_id, f"Invalid styles: {e}"))

        for key, value in changes.items():
            setattr(node, key, value)

        return self._accept("update_node", node)

    def update_styles(self, node_id: str, styles: Mapping[str, Any]) -> EditResult[Node]:
        """Shallow-merge style keys; a None value clears that key."""
        node = self.locate(node_id)
        if node is None:
            return self._reject("update_styles", not_found(node_id))

        unknown = set(styles) - ComponentStyles.known_keys()
        if unknown:
            logger.warning("unknown_style_keys", node_id=node_id, keys=sorted(unknown))

        try:
            patch = ComponentStyles.model_validate(dict(styles))
        except PydanticValidationError as e:
            return self._reject("update_styles", invalid_value(node_id, f"Invalid styles: {e}"))

        for field_name in patch.model_fields_set:
            setattr(node.styles, field_name, getattr(patch, field_name))

        return self._accept("update_styles", node)

    def update_props(self, node_id: str, props: Mapping[str, Any]) -> EditResult[Node]:
        """Shallow-merge into ``props``."""
        node = self.locate(node_id)
        if node is None:
            return self._reject("update_props", not_found(node_id))

        merged = {**node.props, **props}
        problem = self._props_problem(merged)
        if problem:
            return self._reject("update_props", invalid_value(node_id, problem))

        node.props = merged
        return self._accept("update_props", node)

    # ========================================================================
    # Structural edits
    # ========================================================================

    def delete_node(self, node_id: str) -> EditResult[Node]:
        """
        Remove a node and its subtree from whichever list owns it.

        Clears the selection when the selected node was in the removed subtree.
        Returns the detached node.
        """
        node = self.locate(node_id)
        if node is None:
            return self._reject("delete_node", not_found(node_id))

        siblings = self._siblings(node_id)
        del siblings[_position(siblings, node_id)]
        removed = self._unregister(node)

        if self.selected_id is not None and self.selected_id in removed:
            self.selected_id = None

        logger.debug("node_deleted", node_id=node_id, removed=len(removed))
        return self._accept("delete_node", node)

    def duplicate_node(self, node_id: str) -> EditResult[Node]:
        """
        Deep-copy a subtree with fresh ids throughout and insert the copy
        right after the original, in the same sibling list. The copy becomes
        selected.
        """
        node = self.locate(node_id)
        if node is None:
            return self._reject("duplicate_node", not_found(node_id))

        clone = node.model_copy(deep=True)
        self._assign_fresh_ids(clone)

        siblings = self._siblings(node_id)
        siblings.insert(_position(siblings, node_id) + 1, clone)
        self._register(clone, self._parents[node_id])

        self.selected_id = clone.id
        logger.debug("node_duplicated", source_id=node_id, node_id=clone.id)
        return self._accept("duplicate_node", clone)

    def move_up(self, node_id: str) -> EditResult[Node]:
        """Swap with the previous sibling; no change when already first."""
        return self._shift("move_up", node_id, -1)

    def move_down(self, node_id: str) -> EditResult[Node]:
        """Swap with the next sibling; no change when already last."""
        return self._shift("move_down", node_id, 1)

    # ========================================================================
    # Selection, modes, drag state
    # ========================================================================

    def select_component(self, node_id: str | None) -> None:
        """Set the selection. The id is not checked against the forest."""
        self.selected_id = node_id

    def deselect(self) -> None:
        self.selected_id = None

    def clear_canvas(self) -> None:
        """Empty the forest and clear the selection."""
        self._roots = []
        self._index.clear()
        self._parents.clear()
        self.selected_id = None
        logger.info("canvas_cleared")

    def toggle_preview(self) -> bool:
        """Flip preview mode; entering it clears the selection."""
        self.is_preview = not self.is_preview
        if self.is_preview:
            self.deselect()
        return self.is_preview

    def start_drag(self, type_: ComponentType | str) -> EditResult[DragData]:
        """Begin dragging a palette item of ``type_``."""
        component_type = self.catalog.coerce(type_)
        if component_type is None or component_type not in self.catalog:
            return self._reject("start_drag", unknown_type(type_))

        self.is_dragging = True
        self.drag_type = component_type
        return Success(DragData(component_type=component_type))

    def end_drag(self) -> None:
        self.is_dragging = False
        self.drag_type = None

    def drag_data(self) -> DragData | None:
        """Payload of the drag in progress, if any."""
        if self.drag_type is None:
            return None
        return DragData(component_type=self.drag_type)

    # ========================================================================
    # Load boundary
    # ========================================================================

    def load(self, forest: Iterable[Node]) -> None:
        """
        Replace the whole forest (e.g. after loading a saved project).

        The nodes are copied. Selection is cleared.

        Raises:
            ValidationError: If node ids repeat anywhere in the forest, or
                nodes or props nest past the configured limits
        """
        forest = list(forest)
        limit = self.settings.max_tree_depth

        seen: set[str] = set()
        stack = [(root, 1) for root in forest]
        while stack:
            node, depth = stack.pop()
            if depth > limit:
                raise ValidationError(f"Component nesting depth {depth} exceeds maximum {limit}")
            if node.id in seen:
                raise ValidationError(f"Duplicate node id '{node.id}' in forest")
            seen.add(node.id)
            problem = self._props_problem(node.props)
            if problem:
                raise ValidationError(f"Props of '{node.id}': {problem}")
            stack.extend((child, depth + 1) for child in node.children or [])

        roots = [node.model_copy(deep=True) for node in forest]
        self.clear_canvas()
        self._roots = roots
        for root in roots:
            self._register(root, None)

        logger.info("forest_loaded", roots=len(roots), nodes=len(self._index))

    # ========================================================================
    # Internals
    # ========================================================================

    def _instantiate(self, definition: ComponentDefinition) -> Node:
        return Node(
            id=self._fresh_id(),
            type=definition.type,
            name=definition.name,
            props=copy.deepcopy(definition.default_props),
            styles=definition.default_styles.model_copy(deep=True),
        )

    def _props_problem(self, props: dict[str, Any]) -> str | None:
        try:
            validate_json_depth(props, self.settings.max_prop_depth)
        except JSONParseError as e:
            return f"Invalid props: {e}"
        return None

    def _fresh_id(self, taken: set[str] | None = None) -> str:
        node_id = new_node_id()
        while node_id in self._index or (taken is not None and node_id in taken):
            node_id = new_node_id()
        return node_id

    def _assign_fresh_ids(self, root: Node) -> None:
        assigned: set[str] = set()
        for node in root.walk():
            node.id = self._fresh_id(assigned)
            assigned.add(node.id)

    def _siblings(self, node_id: str) -> list[Node]:
        """The list that owns ``node_id`` (root list or parent's children)."""
        parent_id = self._parents[node_id]
        if parent_id is None:
            return self._roots
        children = self._index[parent_id].children
        assert children is not None
        return children

    def _register(self, root: Node, parent_id: str | None) -> None:
        stack: list[tuple[Node, str | None]] = [(root, parent_id)]
        while stack:
            node, owner = stack.pop()
            self._index[node.id] = node
            self._parents[node.id] = owner
            for child in node.children or []:
                stack.append((child, node.id))

    def _unregister(self, root: Node) -> set[str]:
        removed: set[str] = set()
        for node in root.walk():
            self._index.pop(node.id, None)
            self._parents.pop(node.id, None)
            removed.add(node.id)
        return removed

    def _shift(self, operation: str, node_id: str, offset: int) -> EditResult[Node]:
        node = self.locate(node_id)
        if node is None:
            return self._reject(operation, not_found(node_id))

        siblings = self._siblings(node_id)
        index = _position(siblings, node_id)
        target = index + offset
        if 0 <= target < len(siblings):
            siblings[index], siblings[target] = siblings[target], siblings[index]
        else:
            logger.debug("move_at_boundary", op=operation, node_id=node_id)

        return self._accept(operation, node)

    def _accept(self, operation: str, node: Node) -> EditResult[Node]:
        self.metrics.record_edit(operation, "success", len(self._index))
        return Success(node)

    def _reject(self, operation: str, failure):
        error: EditError = failure.failure()
        self.metrics.record_edit(operation, error.code.value)
        logger.debug("edit_ignored", op=operation, code=error.code.value, target=error.target)
        return failure


def _position(siblings: list[Node], node_id: str) -> int:
    for i, sibling in enumerate(siblings):
        if sibling.id == node_id:
            return i
    raise KeyError(node_id)


def _coerce_styles(value: Any) -> ComponentStyles:
    if isinstance(value, ComponentStyles):
        return value.model_copy(deep=True)
    if value is None:
        return ComponentStyles()
    if not isinstance(value, Mapping):
        raise TypeError(f"styles must be a mapping, got {type(value).__name__}")
    return ComponentStyles.model_validate(dict(value))

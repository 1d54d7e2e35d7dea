"""Property tests for tree store invariants."""

import pytest
from hypothesis import given, settings, strategies as st
from prometheus_client import CollectorRegistry

from pagebuilder.catalog import ComponentType
from pagebuilder.editor import TreeStore
from pagebuilder.monitoring import MetricsCollector

# Shared across generated examples
_metrics = MetricsCollector(CollectorRegistry())

component_types = st.sampled_from(list(ComponentType))

# ("add", type, parent pick) or ("delete", pick) or ("duplicate", pick)
operations = st.lists(
    st.one_of(
        st.tuples(st.just("add"), component_types, st.integers(min_value=-1, max_value=50)),
        st.tuples(st.just("delete"), st.integers(min_value=0, max_value=50)),
        st.tuples(st.just("duplicate"), st.integers(min_value=0, max_value=50)),
    ),
    max_size=40,
)


def _pick(store, index):
    ids = [node.id for node in store.iter_nodes()]
    if not ids:
        return None
    return ids[index % len(ids)]


def _run(store, ops):
    for op in ops:
        if op[0] == "add":
            _, type_, parent_index = op
            parent_id = None if parent_index < 0 else _pick(store, parent_index)
            store.add_node(type_, parent_id)
        elif op[0] == "delete":
            target = _pick(store, op[1])
            if target is not None:
                store.delete_node(target)
        else:
            target = _pick(store, op[1])
            if target is not None:
                store.duplicate_node(target)


def _shape(node):
    """Structure of a subtree with ids left out."""
    return (
        node.type,
        node.name,
        node.props,
        node.styles.to_dict(),
        None if node.children is None else [_shape(child) for child in node.children],
    )


@pytest.mark.unit
@settings(max_examples=60, deadline=None)
@given(operations)
def test_ids_unique_and_indexed(ops):
    """Every reachable node has a distinct id, and the index matches the tree."""
    store = TreeStore(metrics=_metrics)
    _run(store, ops)

    ids = [node.id for node in store.iter_nodes()]
    assert len(ids) == len(set(ids))
    assert len(store) == len(ids)
    for node in store.iter_nodes():
        assert store.locate(node.id) is node


@pytest.mark.unit
@settings(max_examples=60, deadline=None)
@given(operations, st.integers(min_value=0, max_value=50))
def test_duplicate_clones_subtree(ops, pick):
    """Duplicate adds exactly N fresh ids and an id-free deep-equal copy right after the source."""
    store = TreeStore(metrics=_metrics)
    _run(store, ops)
    source_id = _pick(store, pick)
    if source_id is None:
        return

    before = {node.id for node in store.iter_nodes()}
    source = store.locate(source_id)
    size = sum(1 for _ in source.walk())

    clone = store.duplicate_node(source_id).unwrap()

    clone_ids = {node.id for node in clone.walk()}
    assert len(clone_ids) == size
    assert not clone_ids & before
    assert len(store) == len(before) + size
    assert _shape(clone) == _shape(source)

    parent = store.parent_of(source_id)
    siblings = store.forest if parent is None else parent.children
    position = [node.id for node in siblings].index(source_id)
    assert siblings[position + 1] is clone


@pytest.mark.unit
@settings(max_examples=60, deadline=None)
@given(operations, st.integers(min_value=0, max_value=50))
def test_delete_selected_clears_selection(ops, pick):
    store = TreeStore(metrics=_metrics)
    _run(store, ops)
    target = _pick(store, pick)
    if target is None:
        return

    store.select_component(target)
    store.delete_node(target)

    assert store.selected_id is None
    assert target not in store


@pytest.mark.unit
@settings(max_examples=60, deadline=None)
@given(operations, st.integers(min_value=0, max_value=50))
def test_move_up_down_inverse(ops, pick):
    """move_up then move_down restores sibling order unless the node was first."""
    store = TreeStore(metrics=_metrics)
    _run(store, ops)
    target = _pick(store, pick)
    if target is None:
        return

    parent = store.parent_of(target)
    siblings = store.forest if parent is None else parent.children
    order = [node.id for node in siblings]
    position = order.index(target)

    store.move_up(target)
    store.move_down(target)

    siblings = store.forest if parent is None else parent.children
    after = [node.id for node in siblings]
    if position > 0:
        assert after == order
    else:
        # move_up was a no-op; move_down then swapped with the next sibling
        expected = order[1:2] + order[:1] + order[2:] if len(order) > 1 else order
        assert after == expected

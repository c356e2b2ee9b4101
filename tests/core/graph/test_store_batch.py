"""Tests for batch application."""

import pytest

from tm8.core.enums import ChangeOperation, EntityKind
from tm8.core.exceptions import BatchRejectedError
from tm8.core.graph import EntityUpdate, GraphBatch


def test_batch_is_one_history_entry(store, make_node, make_edge):
    """Test that a batch is undone in a single step."""
    batch = GraphBatch(
        add_nodes=[make_node("a"), make_node("b")],
        add_edges=[make_edge("ab", "a", ["b"])],
    )

    result = store.apply_batch(batch)

    assert result.is_complete
    assert len(result.applied) == 3
    assert store.get_stats().history.undo_stack_size == 1

    store.undo()
    assert store.get_all_nodes() == []
    assert store.get_all_edges() == []


def test_batch_notifies_once(store, make_node):
    """Test that listeners see one graph-wide notification per batch."""
    events = []
    store.add_change_listener(lambda kind, entity_id, op: events.append((kind, entity_id, op)))

    store.apply_batch(GraphBatch(add_nodes=[make_node("a"), make_node("b")]))

    assert events == [(EntityKind.GRAPH, "batch", ChangeOperation.UPDATE)]


def test_batch_skips_invalid_items(store, make_node, make_edge):
    """Test that rejected items are reported while the rest is applied."""
    bad = make_node("bad")
    bad.name = ""
    batch = GraphBatch(
        add_nodes=[make_node("a"), bad],
        add_edges=[make_edge("ax", "a", ["bad"])],
        delete_edges=["missing-edge"],
    )

    result = store.apply_batch(batch)

    assert not result.is_complete
    assert [item.id for item in result.applied] == ["a"]
    assert [item.id for item in result.rejected] == ["bad", "ax", "missing-edge"]
    codes = [issue.code for issue in result.errors]
    assert "NODE_INVALID_NAME" in codes
    assert "EDGE_TARGET_NOT_FOUND" in codes
    assert "EDGE_NOT_FOUND" in codes
    assert store.get_node("a") is not None


def test_atomic_batch_rolls_back(store, make_node):
    """Test that an atomic batch with a rejected item changes nothing."""
    store.add_node(make_node("existing"))
    bad = make_node("bad")
    bad.name = ""
    events = []
    store.add_change_listener(lambda kind, entity_id, op: events.append(entity_id))

    with pytest.raises(BatchRejectedError) as exc_info:
        store.apply_batch(
            GraphBatch(
                add_nodes=[make_node("new"), bad],
                update_nodes=[EntityUpdate("existing", {"name": "Renamed"})],
            ),
            atomic=True,
        )

    assert len(exc_info.value.result.rejected) == 1
    assert [n.id for n in store.get_all_nodes()] == ["existing"]
    assert store.get_node("existing").name == "EXISTING"
    assert store.get_stats().history.undo_stack_size == 1
    assert events == []


def test_batch_updates_and_deletes(store, make_node, make_edge):
    """Test updates and cascading deletes inside a batch."""
    for node_id in ("a", "b", "c"):
        store.add_node(make_node(node_id))
    store.add_edge(make_edge("ab", "a", ["b"]))
    store.add_edge(make_edge("bc", "b", ["c"]))

    result = store.apply_batch(
        GraphBatch(
            update_nodes=[EntityUpdate("c", {"name": "Sink"}), EntityUpdate("zz", {"name": "x"})],
            delete_nodes=["a"],
        )
    )

    assert [item.result.error_codes for item in result.rejected] == [["NODE_NOT_FOUND"]]
    assert store.get_node("c").name == "Sink"
    assert store.get_edge("ab") is None
    assert store.get_edge("bc") is not None


def test_empty_batch_records_nothing(store):
    """Test that an empty batch neither records history nor notifies."""
    events = []
    store.add_change_listener(lambda kind, entity_id, op: events.append(entity_id))

    result = store.apply_batch(GraphBatch())

    assert GraphBatch().is_empty()
    assert result.is_complete
    assert not store.can_undo()
    assert events == []

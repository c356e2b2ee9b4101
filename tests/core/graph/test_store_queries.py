"""Tests for store queries: adjacency, spatial, search and visibility."""

from tm8.core.enums import NodeType
from tm8.core.graph import SearchOptions, VisibilityState, fuzzy_match
from tm8.core.models import Position, ViewportBounds


def test_connected_nodes_merges_directions(store, make_node, make_edge):
    """Test neighbours across incoming, outgoing and multi-target edges."""
    for node_id in ("a", "b", "c", "d"):
        store.add_node(make_node(node_id))
    store.add_edge(make_edge("e1", "a", ["b", "c"]))
    store.add_edge(make_edge("e2", "d", ["a"]))
    store.add_edge(make_edge("loop", "a", ["a"]))

    assert [n.id for n in store.get_connected_nodes("a")] == ["b", "c", "d"]
    assert [n.id for n in store.get_connected_nodes("b")] == ["a"]
    assert {e.id for e in store.get_connected_edges("a")} == {"e1", "e2", "loop"}


def test_connected_nodes_of_unknown_node(store):
    """Test adjacency queries for ids that are not in the store."""
    assert store.get_connected_nodes("ghost") == []
    assert store.get_connected_edges("ghost") == []


def test_region_query(populated_store):
    """Test viewport queries with inclusive edges."""
    found = populated_store.get_nodes_in_region(ViewportBounds(0, -10, 100, 20))
    assert {n.id for n in found} == {"a", "b"}
    assert populated_store.get_nodes_in_region(ViewportBounds(0, 0, 0, 0)) == []


def test_find_nearest_node(populated_store):
    """Test hit testing with and without a distance limit."""
    assert populated_store.find_nearest_node(Position(390, 390)).id == "e"
    assert populated_store.find_nearest_node(Position(160, 0)).id == "c"
    assert populated_store.find_nearest_node(Position(150, 300), max_distance=10) is None


def test_find_nodes_by_name(store, make_node):
    """Test case-insensitive substring search on names."""
    store.add_node(make_node("n1", name="Payment API"))
    store.add_node(make_node("n2", name="User DB"))

    assert [n.id for n in store.find_nodes_by_name("api")] == ["n1"]
    assert store.find_nodes_by_name("") == []


def test_search_nodes_in_properties_and_types(store, make_node):
    """Test search across fields with a type filter."""
    store.add_node(make_node("n1", name="Orders", node_type=NodeType.DATASTORE, engine="postgres"))
    store.add_node(make_node("n2", name="Worker", engine="postgres-client"))

    everything = SearchOptions(query="postgres")
    assert [n.id for n in store.search_nodes(everything)] == ["n1", "n2"]

    stores_only = SearchOptions(query="postgres", node_types=[NodeType.DATASTORE])
    assert [n.id for n in store.search_nodes(stores_only)] == ["n1"]

    names_only = SearchOptions(query="postgres", search_fields=["name"])
    assert store.search_nodes(names_only) == []
    assert store.search_nodes(SearchOptions(query="")) == []


def test_fuzzy_search(store, make_node):
    """Test subsequence matching."""
    store.add_node(make_node("n1", name="Authentication Service"))

    assert fuzzy_match("authentication service", "athsvc")
    assert not fuzzy_match("auth", "htua")
    assert [n.id for n in store.search_nodes(SearchOptions(query="AthSvc", fuzzy_match=True))] == ["n1"]
    assert store.search_nodes(SearchOptions(query="AthSvc")) == []


def test_visibility_filter(populated_store):
    """Test focus, neighbour expansion and hiding."""
    assert len(populated_store.apply_visibility_filter(VisibilityState())) == 5

    focused = VisibilityState(focused_nodes={"b"})
    assert [n.id for n in populated_store.apply_visibility_filter(focused)] == ["b"]

    expanded = VisibilityState(focused_nodes={"b"}, show_only_connected=True)
    assert [n.id for n in populated_store.apply_visibility_filter(expanded)] == ["a", "b", "c"]

    hidden = VisibilityState(focused_nodes={"b"}, show_only_connected=True, hidden_nodes={"a"})
    assert [n.id for n in populated_store.apply_visibility_filter(hidden)] == ["b", "c"]


def test_stats(populated_store, make_boundary):
    """Test store statistics."""
    populated_store.add_boundary(make_boundary("zone", 0, 0, 10, 10))
    stats = populated_store.get_stats()

    assert stats.node_count == 5
    assert stats.edge_count == 3
    assert stats.boundary_count == 1
    assert stats.nodes_by_type == {"process": 5}
    assert stats.spatial.total_nodes == 5
    assert stats.history.can_undo


def test_has_entity(populated_store):
    """Test identity lookups across entity kinds."""
    assert populated_store.has_entity("a")
    assert populated_store.has_entity("ab")
    assert not populated_store.has_entity("zz")
    assert populated_store.get_entity_kind("zz") is None

"""Tests for the quadtree spatial index."""

import math
import random

import pytest

from tm8.core.config import SpatialConfig
from tm8.core.graph.spatial import QuadTree, SpatialIndex
from tm8.core.models import Position, ViewportBounds


@pytest.fixture
def small_index() -> SpatialIndex:
    """Index over a 1000x1000 area with a low capacity to force subdivision."""
    return SpatialIndex(SpatialConfig(bounds=ViewportBounds(0, 0, 1000, 1000), max_items=2, max_depth=6))


def test_query_matches_brute_force(small_index, make_node):
    """Test that region queries agree with a linear scan."""
    rng = random.Random(7)
    nodes = [make_node(f"n{i}", rng.uniform(0, 1000), rng.uniform(0, 1000)) for i in range(300)]
    for node in nodes:
        small_index.insert(node)

    for _ in range(50):
        x, y = rng.uniform(-100, 1000), rng.uniform(-100, 1000)
        bounds = ViewportBounds(x, y, rng.uniform(1, 400), rng.uniform(1, 400))
        expected = {n.id for n in nodes if bounds.contains_point(n.position.x, n.position.y)}
        assert {n.id for n in small_index.query(bounds)} == expected


def test_query_after_removals_and_moves(small_index, make_node):
    """Test query correctness after deleting and relocating nodes."""
    rng = random.Random(11)
    nodes = {f"n{i}": make_node(f"n{i}", rng.uniform(0, 1000), rng.uniform(0, 1000)) for i in range(100)}
    for node in nodes.values():
        small_index.insert(node)

    for node_id in list(nodes)[:30]:
        small_index.remove(node_id)
        del nodes[node_id]
    for node_id in list(nodes)[:30]:
        moved = make_node(node_id, rng.uniform(0, 1000), rng.uniform(0, 1000))
        small_index.update(moved)
        nodes[node_id] = moved

    everything = ViewportBounds(0, 0, 1000, 1000)
    assert {n.id for n in small_index.query(everything)} == set(nodes)
    assert small_index.size() == 70


def test_inclusive_query_edges(small_index, make_node):
    """Test that nodes on the query border are returned."""
    small_index.insert(make_node("corner", 100, 100))
    assert [n.id for n in small_index.query(ViewportBounds(0, 0, 100, 100))] == ["corner"]


def test_degenerate_query_returns_nothing(small_index, make_node):
    """Test that empty rectangles match no nodes."""
    small_index.insert(make_node("a", 10, 10))
    assert small_index.query(ViewportBounds(10, 10, 0, 0)) == []
    assert small_index.query(ViewportBounds(0, 0, math.nan, 10)) == []


def test_out_of_bounds_nodes_are_kept(small_index, make_node):
    """Test that nodes outside the root bounds are still found."""
    small_index.insert(make_node("far", 5000, 5000))

    stats = small_index.get_stats()
    assert stats.overflow_nodes == 1
    assert [n.id for n in small_index.query(ViewportBounds(4000, 4000, 2000, 2000))] == ["far"]

    small_index.remove("far")
    assert small_index.size() == 0
    assert small_index.get_stats().overflow_nodes == 0


def test_update_without_move_refreshes_node(small_index, make_node):
    """Test that renaming a node updates query results in place."""
    small_index.insert(make_node("a", 10, 10, name="Old"))
    small_index.update(make_node("a", 10, 10, name="New"))

    found = small_index.query(ViewportBounds(0, 0, 20, 20))
    assert [n.name for n in found] == ["New"]


def test_find_nearest(small_index, make_node):
    """Test nearest-node lookup with a distance limit."""
    small_index.insert(make_node("a", 10, 10))
    small_index.insert(make_node("b", 50, 50))
    small_index.insert(make_node("c", 500, 500))

    assert small_index.find_nearest(Position(45, 45)).id == "b"
    assert small_index.find_nearest(Position(45, 45), max_distance=5) is None
    assert small_index.find_nearest(Position(490, 490)).id == "c"
    assert small_index.find_nearest(Position(10, 10), max_distance=0).id == "a"


def test_nearest_orders_by_distance(small_index, make_node):
    """Test that nearest results are sorted by Euclidean distance."""
    for node_id, x in (("x3", 30), ("x1", 10), ("x2", 20)):
        small_index.insert(make_node(node_id, x, 0))

    assert [n.id for n in small_index.nearest(Position(0, 0), 25)] == ["x1", "x2"]
    assert small_index.nearest(Position(0, 0), -1) == []


def test_subdivision_respects_max_depth():
    """Test that coincident points stop subdividing at the depth limit."""
    tree = QuadTree(ViewportBounds(0, 0, 100, 100), max_items=1, max_depth=3)
    for i in range(10):
        tree.insert(f"p{i}", i, Position(1, 1))

    assert tree.depth() == 3
    assert len(tree.query(ViewportBounds(0, 0, 2, 2))) == 10


def test_clear(small_index, make_node):
    """Test that clearing empties the index."""
    small_index.insert(make_node("a", 1, 1))
    small_index.clear()
    assert small_index.size() == 0
    assert not small_index.has("a")
    assert small_index.get_stats().tree_nodes == 1

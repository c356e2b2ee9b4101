"""Tests for undirected graph traversal."""

from tm8.core.graph_operations import EdgeMap, Traversal
from tm8.core.models import Graph


def ids(nodes):
    return [node.id for node in nodes]


def test_dfs_visits_component(chain_graph):
    """Test depth-first order along a chain, ignoring direction."""
    assert ids(Traversal.depth_first_search(chain_graph, "a")) == ["a", "b", "c", "d"]
    assert ids(Traversal.depth_first_search(chain_graph, "c")) == ["c", "b", "a", "d"]


def test_bfs_visits_by_distance(make_node, make_edge):
    """Test breadth-first order on a small tree."""
    graph = Graph(
        nodes=[make_node(n) for n in ("root", "l", "r", "ll", "rr")],
        edges=[
            make_edge("e1", "root", ["l", "r"]),
            make_edge("e2", "l", ["ll"]),
            make_edge("e3", "rr", ["r"]),
        ],
    )

    assert ids(Traversal.breadth_first_search(graph, "root")) == ["root", "l", "r", "ll", "rr"]
    assert ids(Traversal.depth_first_search(graph, "root")) == ["root", "l", "ll", "r", "rr"]


def test_traversal_of_isolated_and_unknown_nodes(chain_graph):
    """Test start nodes without edges and unknown start ids."""
    assert ids(Traversal.breadth_first_search(chain_graph, "e")) == ["e"]
    assert Traversal.depth_first_search(chain_graph, "ghost") == []
    assert Traversal.breadth_first_search(chain_graph, "ghost") == []


def test_traversal_handles_long_chains(make_node, make_edge):
    """Test that deep graphs do not hit recursion limits."""
    size = 5000
    graph = Graph(
        nodes=[make_node(f"n{i}") for i in range(size)],
        edges=[make_edge(f"e{i}", f"n{i}", [f"n{i + 1}"]) for i in range(size - 1)],
    )

    assert len(Traversal.depth_first_search(graph, "n0")) == size


def test_edge_map_ignores_dangling_references(make_node, make_edge):
    """Test that edges to unknown nodes contribute no adjacency."""
    graph = Graph(nodes=[make_node("a"), make_node("b")], edges=[make_edge("e1", "a", ["b", "ghost"])])
    edge_map = EdgeMap(graph)

    assert edge_map.neighbors("a") == ["b"]
    assert [target for _, target in edge_map.steps("a")] == ["b"]
    assert "ghost" not in edge_map.incoming

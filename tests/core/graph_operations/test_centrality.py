"""Tests for node centrality metrics and the memory manager."""

import pytest

from tm8.core.graph_operations import CentralityCalculator, MemoryManager, get_memory_usage
from tm8.core.models import Graph


@pytest.fixture
def path_graph(make_node, make_edge) -> Graph:
    """Undirected-looking path a - b - c - d built from mixed directions."""
    return Graph(
        nodes=[make_node(n) for n in ("a", "b", "c", "d")],
        edges=[
            make_edge("ab", "a", ["b"]),
            make_edge("cb", "c", ["b"]),
            make_edge("cd", "c", ["d"]),
        ],
    )


def test_degree_counts_both_directions(path_graph):
    """Test that degree is incoming plus outgoing."""
    centrality = CentralityCalculator(path_graph).calculate_node_centrality()

    assert {node_id: c.degree for node_id, c in centrality.items()} == {"a": 1, "b": 2, "c": 2, "d": 1}


def test_multi_target_degree(make_node, make_edge):
    """Test that multi-target edges count once per target for receivers."""
    graph = Graph(nodes=[make_node(n) for n in ("s", "t", "u")], edges=[make_edge("fan", "s", ["t", "u"])])
    centrality = CentralityCalculator(graph).calculate_node_centrality()

    assert centrality["s"].degree == 1
    assert centrality["t"].degree == 1


def test_betweenness_on_path(path_graph):
    """Test Brandes betweenness on a path of four nodes."""
    centrality = CentralityCalculator(path_graph).calculate_node_centrality()

    assert centrality["a"].betweenness == 0.0
    assert centrality["b"].betweenness == pytest.approx(2.0)
    assert centrality["c"].betweenness == pytest.approx(2.0)
    assert centrality["d"].betweenness == 0.0


def test_betweenness_splits_equal_paths(make_node, make_edge):
    """Test that parallel shortest paths share credit."""
    graph = Graph(
        nodes=[make_node(n) for n in ("s", "x", "y", "t")],
        edges=[
            make_edge("sx", "s", ["x"]),
            make_edge("sy", "s", ["y"]),
            make_edge("xt", "x", ["t"]),
            make_edge("yt", "y", ["t"]),
        ],
    )
    centrality = CentralityCalculator(graph).calculate_node_centrality()

    assert centrality["x"].betweenness == pytest.approx(0.5)
    assert centrality["y"].betweenness == pytest.approx(0.5)


def test_closeness(path_graph, chain_graph):
    """Test closeness from hop distances."""
    centrality = CentralityCalculator(path_graph).calculate_node_centrality()

    assert centrality["a"].closeness == pytest.approx(3 / 6)
    assert centrality["b"].closeness == pytest.approx(3 / 4)
    assert CentralityCalculator(chain_graph).calculate_closeness("e") == 0.0


def test_memory_manager_without_limit():
    """Test that an unlimited manager never raises."""
    manager = MemoryManager()
    manager.check_memory()
    assert manager.max_memory is None
    assert get_memory_usage() > 0
    assert manager.peak_memory_mb > 0

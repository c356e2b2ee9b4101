"""Shared test fixtures."""

from typing import List, Optional

import pytest

from tm8.core.config import HistoryConfig, SpatialConfig, StoreConfig
from tm8.core.enums import BoundaryType, EdgeType, NodeType
from tm8.core.graph import GraphStore
from tm8.core.models import Boundary, Edge, Graph, Node, Position, Size


def build_node(
    node_id: str,
    x: float = 0.0,
    y: float = 0.0,
    name: Optional[str] = None,
    node_type: NodeType = NodeType.PROCESS,
    **properties,
) -> Node:
    return Node(
        id=node_id,
        type=node_type,
        name=name or node_id.upper(),
        position=Position(x, y),
        properties=dict(properties),
    )


def build_edge(edge_id: str, source: str, targets: List[str], edge_type: EdgeType = EdgeType.HTTPS) -> Edge:
    return Edge(id=edge_id, type=edge_type, source=source, targets=list(targets))


def build_boundary(
    boundary_id: str,
    x: float,
    y: float,
    width: float,
    height: float,
    boundary_type: BoundaryType = BoundaryType.TRUST_BOUNDARY,
) -> Boundary:
    return Boundary(
        id=boundary_id,
        type=boundary_type,
        name=boundary_id.upper(),
        position=Position(x, y),
        bounds=Size(width, height),
    )


@pytest.fixture
def make_node():
    """Factory for nodes with a default type and name."""
    return build_node


@pytest.fixture
def make_edge():
    """Factory for edges with a default type."""
    return build_edge


@pytest.fixture
def make_boundary():
    """Factory for trust boundaries."""
    return build_boundary


@pytest.fixture
def store_config() -> StoreConfig:
    """Store configuration with a small quadtree capacity."""
    return StoreConfig(
        history=HistoryConfig(max_history_size=50, compression_threshold=10),
        spatial=SpatialConfig(max_items=4, max_depth=8),
    )


@pytest.fixture
def store(store_config) -> GraphStore:
    """Empty graph store."""
    return GraphStore(store_config)


@pytest.fixture
def chain_graph() -> Graph:
    """A -> B -> C -> D plus an isolated node E."""
    return Graph(
        nodes=[
            build_node("a", 0, 0),
            build_node("b", 100, 0),
            build_node("c", 200, 0),
            build_node("d", 300, 0),
            build_node("e", 400, 400),
        ],
        edges=[
            build_edge("ab", "a", ["b"]),
            build_edge("bc", "b", ["c"]),
            build_edge("cd", "c", ["d"]),
        ],
    )


@pytest.fixture
def populated_store(store, chain_graph) -> GraphStore:
    """Store loaded with the chain graph."""
    result = store.load_graph(chain_graph)
    assert result.is_valid
    return store

"""
Secondary indices over the entities of a store.

The GraphIndex mirrors the primary entity maps with lookup structures keyed
by node type, edge source and edge target, so that adjacency and cascade
queries never scan every edge. It holds ids only, never entity objects, and
is kept pure: no validation, events or history.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, Set

from ..enums import NodeType
from ..models import Edge, Node


@dataclass
class GraphIndex:
    """
    Id-based secondary indices.

    Attributes:
        nodes_by_type (Dict[NodeType, Set[str]]): Node ids per node type
        edges_by_source (Dict[str, Set[str]]): Edge ids per source node id
        edges_by_target (Dict[str, Set[str]]): Edge ids per target node id
    """

    nodes_by_type: Dict[NodeType, Set[str]] = field(default_factory=lambda: defaultdict(set))
    edges_by_source: Dict[str, Set[str]] = field(default_factory=lambda: defaultdict(set))
    edges_by_target: Dict[str, Set[str]] = field(default_factory=lambda: defaultdict(set))

    def add_node(self, node: Node) -> None:
        self.nodes_by_type[node.type].add(node.id)

    def remove_node(self, node: Node) -> None:
        self._discard(self.nodes_by_type, node.type, node.id)

    def add_edge(self, edge: Edge) -> None:
        self.edges_by_source[edge.source].add(edge.id)
        for target in edge.targets:
            self.edges_by_target[target].add(edge.id)

    def remove_edge(self, edge: Edge) -> None:
        self._discard(self.edges_by_source, edge.source, edge.id)
        for target in edge.targets:
            self._discard(self.edges_by_target, target, edge.id)

    def node_ids_of_type(self, node_type: NodeType) -> Set[str]:
        return set(self.nodes_by_type.get(node_type, ()))

    def outgoing(self, node_id: str) -> Set[str]:
        return set(self.edges_by_source.get(node_id, ()))

    def incoming(self, node_id: str) -> Set[str]:
        return set(self.edges_by_target.get(node_id, ()))

    def incident(self, node_id: str) -> Set[str]:
        """Ids of every edge where the node is source or a target."""
        return self.outgoing(node_id) | self.incoming(node_id)

    def rebuild(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        self.clear()
        for node in nodes:
            self.add_node(node)
        for edge in edges:
            self.add_edge(edge)

    def clear(self) -> None:
        self.nodes_by_type.clear()
        self.edges_by_source.clear()
        self.edges_by_target.clear()

    @staticmethod
    def _discard(index: Dict, key, value: str) -> None:
        ids = index.get(key)
        if ids is None:
            return
        ids.discard(value)
        if not ids:
            del index[key]

"""
Adjacency views of a graph value.

Algorithms work on a Graph snapshot, never on a live store. The EdgeMap built
here turns the edge list into per-node lookups. A multi-target edge
contributes one directed step per target. References to nodes that are not
part of the graph are ignored.
"""

from collections import defaultdict
from typing import Dict, Iterator, List, Set, Tuple

from ..models import Edge, Graph, Node

Step = Tuple[Edge, str]


class EdgeMap:
    """
    Directed and undirected adjacency of a graph.

    Attributes:
        nodes (Dict[str, Node]): Nodes by id, in graph order
        outgoing (Dict[str, List[Edge]]): Edges by source id
        incoming (Dict[str, List[Edge]]): Edges by target id, once per target occurrence
    """

    def __init__(self, graph: Graph):
        self.nodes: Dict[str, Node] = {node.id: node for node in graph.nodes}
        self.outgoing: Dict[str, List[Edge]] = defaultdict(list)
        self.incoming: Dict[str, List[Edge]] = defaultdict(list)
        self._neighbors: Dict[str, List[str]] = defaultdict(list)

        for edge in graph.edges:
            if edge.source not in self.nodes:
                continue
            self.outgoing[edge.source].append(edge)
            for target in edge.targets:
                if target not in self.nodes:
                    continue
                self.incoming[target].append(edge)
                self._link(edge.source, target)

    def _link(self, source: str, target: str) -> None:
        if target not in self._neighbors[source]:
            self._neighbors[source].append(target)
        if source not in self._neighbors[target]:
            self._neighbors[target].append(source)

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    def steps(self, node_id: str) -> Iterator[Step]:
        """Directed (edge, target) steps leaving a node, in edge order."""
        for edge in self.outgoing.get(node_id, ()):
            for target in edge.targets:
                if target in self.nodes:
                    yield edge, target

    def neighbors(self, node_id: str) -> List[str]:
        """
        Undirected neighbours of a node.

        Targets of outgoing edges come before sources of incoming edges, each
        in edge order, without repetition.
        """
        return list(self._neighbors.get(node_id, ()))

    def undirected_adjacency(self) -> Dict[str, Set[str]]:
        return {node_id: set(self._neighbors.get(node_id, ())) for node_id in self.nodes}

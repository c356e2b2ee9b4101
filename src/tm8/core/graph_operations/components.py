"""Graph component analysis functionality."""

from collections import deque
from dataclasses import dataclass, field
from typing import List, Set

from ..models import Edge, Graph, Node
from .adjacency import EdgeMap


@dataclass
class ConnectedComponent:
    """
    A maximal set of nodes connected when edge direction is ignored.

    Attributes:
        nodes (List[Node]): Members, in breadth-first order from the first member
        edges (List[Edge]): Edges whose source and at least one target are members
    """

    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.nodes)


class ComponentAnalysis:
    """
    Analyzes connected components in a graph.

    Components are computed over the undirected view: an edge joins its
    source with each of its targets.
    """

    @staticmethod
    def find_isolated_nodes(graph: Graph) -> List[Node]:
        """Nodes that are neither the source nor a target of any edge."""
        connected: Set[str] = set()
        for edge in graph.edges:
            connected.add(edge.source)
            connected.update(edge.targets)
        return [node for node in graph.nodes if node.id not in connected]

    @staticmethod
    def find_connected_components(graph: Graph) -> List[ConnectedComponent]:
        """
        Partition the nodes into connected components.

        Returns:
            Components sorted by size, largest first; equal sizes keep the
            graph order of their first node
        """
        edge_map = EdgeMap(graph)
        visited: Set[str] = set()
        components: List[ConnectedComponent] = []

        for start in edge_map.nodes:
            if start in visited:
                continue

            members: List[str] = []
            visited.add(start)
            queue = deque([start])
            while queue:
                node_id = queue.popleft()
                members.append(node_id)
                for neighbor in edge_map.neighbors(node_id):
                    if neighbor not in visited:
                        visited.add(neighbor)
                        queue.append(neighbor)

            member_set = set(members)
            edges = [
                edge
                for edge in graph.edges
                if edge.source in member_set and any(target in member_set for target in edge.targets)
            ]
            components.append(
                ConnectedComponent(nodes=[edge_map.nodes[node_id] for node_id in members], edges=edges)
            )

        components.sort(key=lambda component: component.size, reverse=True)
        return components

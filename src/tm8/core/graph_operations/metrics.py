"""Node centrality metrics."""

from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Set

from ..models import Graph
from .adjacency import EdgeMap


@dataclass
class NodeCentrality:
    """
    Centrality measures of one node.

    Attributes:
        degree (int): Incoming plus outgoing edge count; a multi-target edge
            counts once per target it points at
        closeness (float): Reachable node count divided by the sum of hop
            distances to them; 0.0 for a node that reaches nothing
        betweenness (float): Sum over node pairs of the share of shortest
            paths that pass through the node, each unordered pair counted once
    """

    degree: int
    closeness: float
    betweenness: float


class CentralityCalculator:
    """
    Calculates centrality measures for every node of a graph.

    Closeness and betweenness are computed over the undirected view, where an
    edge joins its source with each target.
    """

    def __init__(self, graph: Graph):
        self.graph = graph
        self.edge_map = EdgeMap(graph)
        self.adjacency: Dict[str, Set[str]] = self.edge_map.undirected_adjacency()

    def calculate_node_centrality(self) -> Dict[str, NodeCentrality]:
        """Centrality of each node, keyed by node id in graph order."""
        betweenness = self.calculate_betweenness()
        return {
            node_id: NodeCentrality(
                degree=self.calculate_degree(node_id),
                closeness=self.calculate_closeness(node_id),
                betweenness=betweenness[node_id],
            )
            for node_id in self.edge_map.nodes
        }

    def calculate_degree(self, node_id: str) -> int:
        incoming = len(self.edge_map.incoming.get(node_id, ()))
        outgoing = len(self.edge_map.outgoing.get(node_id, ()))
        return incoming + outgoing

    def calculate_closeness(self, node_id: str) -> float:
        distances = self._hop_distances(node_id)
        total = sum(distances.values())
        if total == 0:
            return 0.0
        return (len(distances) - 1) / total

    def calculate_betweenness(self) -> Dict[str, float]:
        """Brandes' algorithm on the unweighted undirected view."""
        betweenness: Dict[str, float] = {node_id: 0.0 for node_id in self.adjacency}

        for source in self.adjacency:
            order: List[str] = []
            predecessors: Dict[str, List[str]] = {node_id: [] for node_id in self.adjacency}
            path_counts: Dict[str, int] = {node_id: 0 for node_id in self.adjacency}
            distances: Dict[str, int] = {source: 0}
            path_counts[source] = 1

            queue = deque([source])
            while queue:
                current = queue.popleft()
                order.append(current)
                for neighbor in self.adjacency[current]:
                    if neighbor not in distances:
                        distances[neighbor] = distances[current] + 1
                        queue.append(neighbor)
                    if distances[neighbor] == distances[current] + 1:
                        path_counts[neighbor] += path_counts[current]
                        predecessors[neighbor].append(current)

            dependency: Dict[str, float] = {node_id: 0.0 for node_id in self.adjacency}
            for target in reversed(order):
                for predecessor in predecessors[target]:
                    share = path_counts[predecessor] / path_counts[target]
                    dependency[predecessor] += share * (1.0 + dependency[target])
                if target != source:
                    betweenness[target] += dependency[target]

        # Every unordered pair was counted from both ends
        return {node_id: value / 2.0 for node_id, value in betweenness.items()}

    def _hop_distances(self, start: str) -> Dict[str, int]:
        distances = {start: 0}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for neighbor in self.adjacency.get(current, ()):
                if neighbor not in distances:
                    distances[neighbor] = distances[current] + 1
                    queue.append(neighbor)
        return distances

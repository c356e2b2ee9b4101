"""Reachability over the undirected view of a graph."""

from collections import deque
from typing import List, Set

from ..models import Graph, Node
from .adjacency import EdgeMap


class Traversal:
    """
    Depth-first and breadth-first visits.

    Edges are followed in both directions. Each reachable node is visited
    exactly once and returned in visitation order, start node first. An
    unknown start node yields an empty list.
    """

    @staticmethod
    def depth_first_search(graph: Graph, start_id: str) -> List[Node]:
        edge_map = EdgeMap(graph)
        if not edge_map.has_node(start_id):
            return []

        visited: Set[str] = set()
        order: List[Node] = []
        stack = [start_id]
        while stack:
            node_id = stack.pop()
            if node_id in visited:
                continue
            visited.add(node_id)
            order.append(edge_map.nodes[node_id])
            # Reversed so that the first neighbour is visited first
            for neighbor in reversed(edge_map.neighbors(node_id)):
                if neighbor not in visited:
                    stack.append(neighbor)
        return order

    @staticmethod
    def breadth_first_search(graph: Graph, start_id: str) -> List[Node]:
        edge_map = EdgeMap(graph)
        if not edge_map.has_node(start_id):
            return []

        visited = {start_id}
        order: List[Node] = []
        queue = deque([start_id])
        while queue:
            node_id = queue.popleft()
            order.append(edge_map.nodes[node_id])
            for neighbor in edge_map.neighbors(node_id):
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)
        return order

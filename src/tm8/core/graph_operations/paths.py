"""
Data flow path analysis.

Paths follow edge direction only: a step goes from an edge's source to one
of its targets. This differs from traversal, which ignores direction.
"""

import logging
from dataclasses import dataclass, field
from heapq import heappop, heappush
from typing import Dict, Iterator, List, Optional, Set, Tuple

from ..models import Edge, Graph, Node
from .adjacency import EdgeMap, Step
from .utils import MemoryManager

logger = logging.getLogger(__name__)

DEFAULT_MAX_PATHS = 10
DEFAULT_MAX_DEPTH = 20


@dataclass
class DataFlowPath:
    """
    A directed walk through the graph.

    Attributes:
        edges (List[Edge]): Edges in walk order
        nodes (List[Node]): Visited nodes, start first; one more than edges
    """

    edges: List[Edge] = field(default_factory=list)
    nodes: List[Node] = field(default_factory=list)

    @property
    def length(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]


class PathAnalysis:
    """Directed path search between two nodes."""

    @staticmethod
    def find_data_flow_paths(
        graph: Graph,
        from_id: str,
        to_id: str,
        max_paths: int = DEFAULT_MAX_PATHS,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_memory_mb: Optional[float] = None,
    ) -> List[DataFlowPath]:
        """
        Enumerate simple directed paths from one node to another.

        Search stops once ``max_paths`` paths were found; paths longer than
        ``max_depth`` edges are not explored.

        Args:
            graph: Graph to search
            from_id: Start node id
            to_id: End node id
            max_paths: Maximum number of paths returned
            max_depth: Maximum number of edges per path
            max_memory_mb: Optional ceiling on memory growth during the search

        Returns:
            Paths sorted by edge count, shortest first. Empty when either
            endpoint is unknown or ``max_paths`` is not positive.

        Raises:
            MemoryError: If ``max_memory_mb`` is exceeded
        """
        edge_map = EdgeMap(graph)
        if not edge_map.has_node(from_id) or not edge_map.has_node(to_id) or max_paths <= 0:
            return []
        if from_id == to_id:
            return [DataFlowPath(edges=[], nodes=[edge_map.nodes[from_id]])]

        memory = MemoryManager(max_memory_mb) if max_memory_mb else None
        paths: List[DataFlowPath] = []
        path_edges: List[Edge] = []
        path_nodes: List[str] = [from_id]
        on_path: Set[str] = {from_id}
        stack: List[Iterator[Step]] = [edge_map.steps(from_id)]

        while stack and len(paths) < max_paths:
            if memory is not None:
                memory.check_memory()

            step = next(stack[-1], None)
            if step is None:
                stack.pop()
                on_path.discard(path_nodes.pop())
                if path_edges:
                    path_edges.pop()
                continue

            edge, target = step
            if target in on_path:
                continue
            depth = len(path_edges) + 1
            if depth > max_depth:
                continue
            if target == to_id:
                paths.append(
                    DataFlowPath(
                        edges=path_edges + [edge],
                        nodes=[edge_map.nodes[node_id] for node_id in path_nodes + [target]],
                    )
                )
                continue

            path_edges.append(edge)
            path_nodes.append(target)
            on_path.add(target)
            stack.append(edge_map.steps(target))

        paths.sort(key=lambda path: path.length)
        logger.debug(f"Found {len(paths)} data flow paths from {from_id} to {to_id}")
        return paths

    @staticmethod
    def find_shortest_path(graph: Graph, from_id: str, to_id: str) -> Optional[DataFlowPath]:
        """
        Fewest-edges directed path using Dijkstra with unit weights.

        Returns:
            The path, or None when either endpoint is unknown or ``to_id`` is
            unreachable
        """
        edge_map = EdgeMap(graph)
        if not edge_map.has_node(from_id) or not edge_map.has_node(to_id):
            return None

        distances: Dict[str, int] = {from_id: 0}
        predecessors: Dict[str, Tuple[str, Edge]] = {}
        settled: Set[str] = set()
        counter = 0
        queue: List[Tuple[int, int, str]] = [(0, counter, from_id)]

        while queue:
            distance, _, node_id = heappop(queue)
            if node_id in settled:
                continue
            settled.add(node_id)
            if node_id == to_id:
                break
            for edge, target in edge_map.steps(node_id):
                candidate = distance + 1
                if candidate < distances.get(target, candidate + 1):
                    distances[target] = candidate
                    predecessors[target] = (node_id, edge)
                    counter += 1
                    heappush(queue, (candidate, counter, target))

        if to_id not in settled:
            return None

        edges: List[Edge] = []
        node_ids = [to_id]
        current = to_id
        while current != from_id:
            previous, edge = predecessors[current]
            edges.append(edge)
            node_ids.append(previous)
            current = previous

        edges.reverse()
        node_ids.reverse()
        return DataFlowPath(edges=edges, nodes=[edge_map.nodes[node_id] for node_id in node_ids])

"""Directed cycle detection."""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, List, Set, Tuple

from ..models import Edge, Graph, Node
from .adjacency import EdgeMap, Step

logger = logging.getLogger(__name__)


@dataclass
class CycleInfo:
    """
    A directed cycle.

    Attributes:
        edges (List[Edge]): Edges around the cycle, in order
        nodes (List[Node]): Distinct nodes on the cycle, starting where it was entered
    """

    edges: List[Edge] = field(default_factory=list)
    nodes: List[Node] = field(default_factory=list)

    @property
    def length(self) -> int:
        return len(self.edges)


class CycleDetection:
    """Find cycles with a depth-first search over directed steps."""

    @staticmethod
    def detect_cycles(graph: Graph) -> List[CycleInfo]:
        """
        Report each cycle reachable by back edges of a depth-first search.

        Every node is used as a search root in graph order. A back edge to a
        node on the current search path closes a cycle. The same cycle found
        again through a different root is reported once. A self-loop is a
        cycle of one node and one edge.

        Returns:
            Cycles in discovery order
        """
        edge_map = EdgeMap(graph)
        visited: Set[str] = set()
        seen: Set[FrozenSet[Tuple[str, str]]] = set()
        cycles: List[CycleInfo] = []

        for root in edge_map.nodes:
            if root in visited:
                continue

            path_nodes: List[str] = [root]
            path_steps: List[Step] = []
            on_stack: Set[str] = {root}
            visited.add(root)
            stack: List[Iterator[Step]] = [edge_map.steps(root)]

            while stack:
                step = next(stack[-1], None)
                if step is None:
                    stack.pop()
                    on_stack.discard(path_nodes.pop())
                    if path_steps:
                        path_steps.pop()
                    continue

                edge, target = step
                if target in on_stack:
                    start = path_nodes.index(target)
                    cycle_steps = path_steps[start:] + [step]
                    key = frozenset((cycle_edge.id, cycle_target) for cycle_edge, cycle_target in cycle_steps)
                    if key not in seen:
                        seen.add(key)
                        cycles.append(
                            CycleInfo(
                                edges=[cycle_edge for cycle_edge, _ in cycle_steps],
                                nodes=[edge_map.nodes[node_id] for node_id in path_nodes[start:]],
                            )
                        )
                elif target not in visited:
                    visited.add(target)
                    on_stack.add(target)
                    path_nodes.append(target)
                    path_steps.append(step)
                    stack.append(edge_map.steps(target))

        logger.debug(f"Detected {len(cycles)} cycles in {len(edge_map.nodes)} nodes")
        return cycles

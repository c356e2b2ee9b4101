"""Grouping of nodes by the boundary that contains them."""

from enum import Enum
from typing import Dict, List, Optional

from ..models import Boundary, Graph, Node

NO_BOUNDARY_GROUP = "__no_boundary__"


class BoundaryTieBreak(Enum):
    """How to choose among several boundaries containing the same node."""

    SMALLEST_AREA = "smallest-area"
    FIRST_MATCH = "first-match"


class BoundaryClustering:
    """Cluster nodes by trust boundary or network zone."""

    @staticmethod
    def containing_boundary(
        node: Node, boundaries: List[Boundary], tie_break: BoundaryTieBreak = BoundaryTieBreak.SMALLEST_AREA
    ) -> Optional[Boundary]:
        """
        Boundary a node is assigned to, or None.

        With SMALLEST_AREA the innermost of nested boundaries wins and equal
        areas go to the earlier boundary. FIRST_MATCH takes the first
        containing boundary in graph order.
        """
        chosen: Optional[Boundary] = None
        for boundary in boundaries:
            if not boundary.contains(node.position):
                continue
            if tie_break is BoundaryTieBreak.FIRST_MATCH:
                return boundary
            if chosen is None or boundary.area < chosen.area:
                chosen = boundary
        return chosen

    @staticmethod
    def group_by_boundary(
        graph: Graph, tie_break: BoundaryTieBreak = BoundaryTieBreak.SMALLEST_AREA
    ) -> Dict[str, List[Node]]:
        """
        Map boundary ids to the nodes they contain.

        Every node appears in exactly one group. Nodes outside all boundaries
        go to NO_BOUNDARY_GROUP, which is omitted when empty. Boundaries that
        contain no node get no group. Groups appear in the order their first
        node was seen.
        """
        groups: Dict[str, List[Node]] = {}
        for node in graph.nodes:
            boundary = BoundaryClustering.containing_boundary(node, graph.boundaries, tie_break)
            key = boundary.id if boundary is not None else NO_BOUNDARY_GROUP
            groups.setdefault(key, []).append(node)
        return groups

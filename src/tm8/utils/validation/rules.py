"""
Built-in validation rules for diagram entities and graphs.

Each rule covers one concern (identity, geometry, properties, type, references)
and reports every violation it finds rather than stopping at the first one.
Thresholds for advisory warnings are module constants.
"""

import json
import math
from typing import Any, List, Optional

from ...core.enums import BoundaryType, EdgeType, EntityKind, NodeType
from ...core.models import Boundary, Edge, Graph, Node, Position, Size
from ...core.types import GraphContext
from .base import ValidationIssue, ValidationRule, error, warning

MAX_NAME_LENGTH = 100
MAX_COORDINATE = 1_000_000
MAX_PROPERTY_COUNT = 50
MAX_PROPERTY_SIZE = 10_000
MAX_EDGE_TARGETS = 10
MAX_BOUNDARY_EXTENT = 100_000
MAX_GRAPH_NODES = 10_000
MAX_GRAPH_EDGES = 50_000


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def is_finite_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _allowed(enum_type) -> str:
    return ", ".join(member.value for member in enum_type)


def _edge_targets(edge: Edge) -> List[str]:
    """Targets of an edge, or an empty list when the field is malformed."""
    return edge.targets if isinstance(edge.targets, list) else []


# Nodes


class NodeBasicsRule(ValidationRule):
    name = "node_basics"

    def check(self, node: Node, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        issues = []
        if not is_non_empty_string(node.id):
            issues.append(
                error("NODE_INVALID_ID", "Node must have a valid non-empty ID", node.id, EntityKind.NODE)
            )
        if not is_non_empty_string(node.name):
            issues.append(
                error("NODE_INVALID_NAME", "Node must have a valid non-empty name", node.id, EntityKind.NODE)
            )
        elif len(node.name) > MAX_NAME_LENGTH:
            issues.append(
                warning(
                    "NODE_NAME_TOO_LONG",
                    f"Node name is unusually long (>{MAX_NAME_LENGTH} characters)",
                    node.id,
                    EntityKind.NODE,
                )
            )
        return issues


class NodePositionRule(ValidationRule):
    name = "node_position"

    def check(self, node: Node, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        if not isinstance(node.position, Position):
            return [
                error(
                    "NODE_INVALID_POSITION",
                    "Node must have a valid position object",
                    node.id,
                    EntityKind.NODE,
                )
            ]

        issues = []
        x, y = node.position.x, node.position.y
        if not is_finite_number(x):
            issues.append(
                error("NODE_INVALID_X", "Node position.x must be a finite number", node.id, EntityKind.NODE)
            )
        if not is_finite_number(y):
            issues.append(
                error("NODE_INVALID_Y", "Node position.y must be a finite number", node.id, EntityKind.NODE)
            )
        if (is_finite_number(x) and abs(x) > MAX_COORDINATE) or (
            is_finite_number(y) and abs(y) > MAX_COORDINATE
        ):
            issues.append(
                warning(
                    "NODE_EXTREME_POSITION",
                    "Node position is extremely far from origin, may cause rendering issues",
                    node.id,
                    EntityKind.NODE,
                )
            )
        return issues


class NodePropertiesRule(ValidationRule):
    name = "node_properties"

    def check(self, node: Node, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        if node.properties is None:
            return []
        if not isinstance(node.properties, dict):
            return [
                error("NODE_INVALID_PROPERTIES", "Node properties must be an object", node.id, EntityKind.NODE)
            ]

        issues = []
        count = len(node.properties)
        if count > MAX_PROPERTY_COUNT:
            issues.append(
                warning(
                    "NODE_TOO_MANY_PROPERTIES",
                    f"Node has {count} properties, which may impact performance",
                    node.id,
                    EntityKind.NODE,
                )
            )
        for key, value in node.properties.items():
            size = len(json.dumps(value, default=str))
            if size > MAX_PROPERTY_SIZE:
                issues.append(
                    warning(
                        "NODE_LARGE_PROPERTY",
                        f"Property '{key}' is very large ({size} chars)",
                        node.id,
                        EntityKind.NODE,
                    )
                )
        return issues


class NodeTypeRule(ValidationRule):
    name = "node_type"

    def check(self, node: Node, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        if isinstance(node.type, NodeType):
            return []
        return [
            error(
                "NODE_INVALID_TYPE",
                f"Invalid node type: {node.type}. Must be one of: {_allowed(NodeType)}",
                node.id,
                EntityKind.NODE,
            )
        ]


class NodeUniquenessRule(ValidationRule):
    """Rejects a new node whose id is already used in the store."""

    name = "node_uniqueness"

    def check(self, node: Node, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        if context is None or not is_non_empty_string(node.id) or not context.has_entity(node.id):
            return []
        return [error("NODE_DUPLICATE_ID", f"ID '{node.id}' is already in use", node.id, EntityKind.NODE)]


# Edges


class EdgeBasicsRule(ValidationRule):
    name = "edge_basics"

    def check(self, edge: Edge, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        issues = []
        if not is_non_empty_string(edge.id):
            issues.append(
                error("EDGE_INVALID_ID", "Edge must have a valid non-empty ID", edge.id, EntityKind.EDGE)
            )
        if not is_non_empty_string(edge.source):
            issues.append(
                error("EDGE_INVALID_SOURCE", "Edge must have a valid source node ID", edge.id, EntityKind.EDGE)
            )
        return issues


class EdgeTargetsRule(ValidationRule):
    name = "edge_targets"

    def check(self, edge: Edge, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        if not isinstance(edge.targets, list):
            return [error("EDGE_INVALID_TARGETS", "Edge targets must be a list", edge.id, EntityKind.EDGE)]

        issues = []
        count = len(edge.targets)
        if count == 0:
            issues.append(
                error("EDGE_NO_TARGETS", "Edge must have at least one target", edge.id, EntityKind.EDGE)
            )
        if count > MAX_EDGE_TARGETS:
            issues.append(
                warning(
                    "EDGE_MANY_TARGETS",
                    f"Edge has {count} targets, which may be unusually complex",
                    edge.id,
                    EntityKind.EDGE,
                )
            )
        for target in edge.targets:
            if not is_non_empty_string(target):
                issues.append(
                    error(
                        "EDGE_INVALID_TARGET",
                        "All edge targets must be valid non-empty node IDs",
                        edge.id,
                        EntityKind.EDGE,
                    )
                )

        named = [target for target in edge.targets if isinstance(target, str)]
        if len(set(named)) != len(named):
            issues.append(
                warning("EDGE_DUPLICATE_TARGETS", "Edge has duplicate targets", edge.id, EntityKind.EDGE)
            )
        if edge.source in named:
            issues.append(
                warning(
                    "EDGE_SELF_LOOP",
                    "Edge creates a self-loop (source equals target)",
                    edge.id,
                    EntityKind.EDGE,
                )
            )
        return issues


class EdgePropertiesRule(ValidationRule):
    name = "edge_properties"

    def check(self, edge: Edge, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        if edge.properties is None or isinstance(edge.properties, dict):
            return []
        return [error("EDGE_INVALID_PROPERTIES", "Edge properties must be an object", edge.id, EntityKind.EDGE)]


class EdgeTypeRule(ValidationRule):
    name = "edge_type"

    def check(self, edge: Edge, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        if isinstance(edge.type, EdgeType):
            return []
        return [
            error(
                "EDGE_INVALID_TYPE",
                f"Invalid edge type: {edge.type}. Must be one of: {_allowed(EdgeType)}",
                edge.id,
                EntityKind.EDGE,
            )
        ]


class EdgeConnectionsRule(ValidationRule):
    """Checks edge endpoints against the store; skipped without context."""

    name = "edge_connections"

    def check(self, edge: Edge, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        if context is None:
            return []

        issues = []
        if not isinstance(edge.source, str) or context.get_node(edge.source) is None:
            issues.append(
                error(
                    "EDGE_SOURCE_NOT_FOUND",
                    f"Edge source node '{edge.source}' not found",
                    edge.id,
                    EntityKind.EDGE,
                )
            )
        for target in _edge_targets(edge):
            if not isinstance(target, str) or context.get_node(target) is None:
                issues.append(
                    error(
                        "EDGE_TARGET_NOT_FOUND",
                        f"Edge target node '{target}' not found",
                        edge.id,
                        EntityKind.EDGE,
                    )
                )
        return issues


class EdgeUniquenessRule(ValidationRule):
    """Rejects a new edge whose id is already used in the store."""

    name = "edge_uniqueness"

    def check(self, edge: Edge, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        if context is None or not is_non_empty_string(edge.id) or not context.has_entity(edge.id):
            return []
        return [error("EDGE_DUPLICATE_ID", f"ID '{edge.id}' is already in use", edge.id, EntityKind.EDGE)]


# Boundaries


class BoundaryBasicsRule(ValidationRule):
    name = "boundary_basics"

    def check(self, boundary: Boundary, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        issues = []
        if not is_non_empty_string(boundary.id):
            issues.append(
                error(
                    "BOUNDARY_INVALID_ID",
                    "Boundary must have a valid non-empty ID",
                    boundary.id,
                    EntityKind.BOUNDARY,
                )
            )
        if not is_non_empty_string(boundary.name):
            issues.append(
                error(
                    "BOUNDARY_INVALID_NAME",
                    "Boundary must have a valid non-empty name",
                    boundary.id,
                    EntityKind.BOUNDARY,
                )
            )
        return issues


class BoundaryPositionRule(ValidationRule):
    name = "boundary_position"

    def check(self, boundary: Boundary, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        if not isinstance(boundary.position, Position):
            return [
                error(
                    "BOUNDARY_INVALID_POSITION",
                    "Boundary must have a valid position object",
                    boundary.id,
                    EntityKind.BOUNDARY,
                )
            ]

        issues = []
        if not is_finite_number(boundary.position.x):
            issues.append(
                error(
                    "BOUNDARY_INVALID_X",
                    "Boundary position.x must be a finite number",
                    boundary.id,
                    EntityKind.BOUNDARY,
                )
            )
        if not is_finite_number(boundary.position.y):
            issues.append(
                error(
                    "BOUNDARY_INVALID_Y",
                    "Boundary position.y must be a finite number",
                    boundary.id,
                    EntityKind.BOUNDARY,
                )
            )
        return issues


class BoundarySizeRule(ValidationRule):
    name = "boundary_size"

    def check(self, boundary: Boundary, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        if not isinstance(boundary.bounds, Size):
            return [
                error(
                    "BOUNDARY_INVALID_BOUNDS",
                    "Boundary must have a valid bounds object",
                    boundary.id,
                    EntityKind.BOUNDARY,
                )
            ]

        issues = []
        width, height = boundary.bounds.width, boundary.bounds.height
        width_ok = is_finite_number(width) and width > 0
        height_ok = is_finite_number(height) and height > 0
        if not width_ok:
            issues.append(
                error(
                    "BOUNDARY_INVALID_WIDTH",
                    "Boundary width must be a positive finite number",
                    boundary.id,
                    EntityKind.BOUNDARY,
                )
            )
        if not height_ok:
            issues.append(
                error(
                    "BOUNDARY_INVALID_HEIGHT",
                    "Boundary height must be a positive finite number",
                    boundary.id,
                    EntityKind.BOUNDARY,
                )
            )
        if (width_ok and width > MAX_BOUNDARY_EXTENT) or (height_ok and height > MAX_BOUNDARY_EXTENT):
            issues.append(
                warning(
                    "BOUNDARY_VERY_LARGE",
                    "Boundary is extremely large, may cause performance issues",
                    boundary.id,
                    EntityKind.BOUNDARY,
                )
            )
        return issues


class BoundaryPropertiesRule(ValidationRule):
    name = "boundary_properties"

    def check(self, boundary: Boundary, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        if boundary.properties is None or isinstance(boundary.properties, dict):
            return []
        return [
            error(
                "BOUNDARY_INVALID_PROPERTIES",
                "Boundary properties must be an object",
                boundary.id,
                EntityKind.BOUNDARY,
            )
        ]


class BoundaryTypeRule(ValidationRule):
    name = "boundary_type"

    def check(self, boundary: Boundary, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        if isinstance(boundary.type, BoundaryType):
            return []
        return [
            error(
                "BOUNDARY_INVALID_TYPE",
                f"Invalid boundary type: {boundary.type}. Must be one of: {_allowed(BoundaryType)}",
                boundary.id,
                EntityKind.BOUNDARY,
            )
        ]


class BoundaryUniquenessRule(ValidationRule):
    """Rejects a new boundary whose id is already used in the store."""

    name = "boundary_uniqueness"

    def check(self, boundary: Boundary, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        if context is None or not is_non_empty_string(boundary.id) or not context.has_entity(boundary.id):
            return []
        return [
            error(
                "BOUNDARY_DUPLICATE_ID",
                f"ID '{boundary.id}' is already in use",
                boundary.id,
                EntityKind.BOUNDARY,
            )
        ]


# Whole graphs


class GraphStructureRule(ValidationRule):
    """One GRAPH_DUPLICATE_ID per id used more than once across all entities."""

    name = "graph_structure"

    def check(self, graph: Graph, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        seen = set()
        duplicates = []
        for entity in [*graph.nodes, *graph.edges, *graph.boundaries]:
            if entity.id in seen and entity.id not in duplicates:
                duplicates.append(entity.id)
            seen.add(entity.id)
        return [error("GRAPH_DUPLICATE_ID", f"Duplicate ID found: {entity_id}", entity_id) for entity_id in duplicates]


class GraphConnectivityRule(ValidationRule):
    name = "graph_connectivity"

    def check(self, graph: Graph, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        node_ids = {node.id for node in graph.nodes}
        issues = []
        for edge in graph.edges:
            if edge.source not in node_ids:
                issues.append(
                    error(
                        "GRAPH_ORPHANED_EDGE",
                        f"Edge '{edge.id}' references non-existent source node '{edge.source}'",
                        edge.id,
                        EntityKind.EDGE,
                    )
                )
            for target in _edge_targets(edge):
                if target not in node_ids:
                    issues.append(
                        error(
                            "GRAPH_ORPHANED_EDGE",
                            f"Edge '{edge.id}' references non-existent target node '{target}'",
                            edge.id,
                            EntityKind.EDGE,
                        )
                    )
        return issues


class GraphConsistencyRule(ValidationRule):
    name = "graph_consistency"

    def check(self, graph: Graph, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        issues = []
        if len(graph.nodes) > MAX_GRAPH_NODES:
            issues.append(
                warning(
                    "GRAPH_VERY_LARGE",
                    f"Graph has {len(graph.nodes)} nodes, which may impact performance",
                )
            )
        if len(graph.edges) > MAX_GRAPH_EDGES:
            issues.append(
                warning(
                    "GRAPH_MANY_EDGES",
                    f"Graph has {len(graph.edges)} edges, which may impact performance",
                )
            )

        connected = set()
        for edge in graph.edges:
            connected.add(edge.source)
            connected.update(target for target in _edge_targets(edge) if isinstance(target, str))
        isolated = [node for node in graph.nodes if node.id not in connected]
        if isolated:
            issues.append(
                warning(
                    "GRAPH_ISOLATED_NODES",
                    f"Found {len(isolated)} isolated nodes with no connections",
                )
            )
        return issues


def default_node_rules() -> List[ValidationRule]:
    return [NodeBasicsRule(), NodePositionRule(), NodePropertiesRule(), NodeTypeRule()]


def default_edge_rules() -> List[ValidationRule]:
    return [
        EdgeBasicsRule(),
        EdgeTargetsRule(),
        EdgePropertiesRule(),
        EdgeTypeRule(),
        EdgeConnectionsRule(),
    ]


def default_boundary_rules() -> List[ValidationRule]:
    return [
        BoundaryBasicsRule(),
        BoundaryPositionRule(),
        BoundarySizeRule(),
        BoundaryPropertiesRule(),
        BoundaryTypeRule(),
    ]


def default_graph_rules() -> List[ValidationRule]:
    return [GraphStructureRule(), GraphConnectivityRule(), GraphConsistencyRule()]

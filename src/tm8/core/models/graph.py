"""
Graph value model.

A Graph is the unit of snapshotting, persistence and undo: the complete set of
nodes, edges and boundaries plus descriptive metadata. The dictionary form is
the exchange format with the persistence collaborator.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from jsonschema import ValidationError as JsonSchemaError
from jsonschema import validate as json_validate

from ..exceptions import ValidationError
from .boundary import Boundary
from .edge import Edge
from .node import Node

DEFAULT_GRAPH_NAME = "Untitled"
DEFAULT_GRAPH_VERSION = "1.0"

_ENTITY_SCHEMA = {"type": "object", "required": ["id"]}

GRAPH_ENVELOPE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "nodes": {"type": "array", "items": _ENTITY_SCHEMA},
        "edges": {"type": "array", "items": _ENTITY_SCHEMA},
        "boundaries": {"type": "array", "items": _ENTITY_SCHEMA},
        "metadata": {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "version": {"type": "string"},
                "created": {"type": "string"},
                "modified": {"type": "string"},
            },
        },
    },
    "required": ["nodes", "edges"],
}


@dataclass
class GraphMetadata:
    """
    Descriptive information about a graph.

    Attributes:
        name (str): Display name of the diagram
        version (str): Format version of the diagram
        created (datetime): Creation timestamp
        modified (datetime): Timestamp of the last committed change
    """

    name: str = DEFAULT_GRAPH_NAME
    version: str = DEFAULT_GRAPH_VERSION
    created: datetime = field(default_factory=datetime.now)
    modified: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "created": self.created.isoformat(),
            "modified": self.modified.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GraphMetadata":
        data = data or {}
        now = datetime.now()
        try:
            created = datetime.fromisoformat(data["created"]) if "created" in data else now
            modified = datetime.fromisoformat(data["modified"]) if "modified" in data else now
        except ValueError as e:
            raise ValidationError(f"Invalid metadata timestamp: {e}") from e
        return cls(
            name=data.get("name", DEFAULT_GRAPH_NAME),
            version=data.get("version", DEFAULT_GRAPH_VERSION),
            created=created,
            modified=modified,
        )


@dataclass
class Graph:
    """
    Complete diagram state.

    Attributes:
        nodes (List[Node]): All nodes
        edges (List[Edge]): All edges
        boundaries (List[Boundary]): All boundaries
        metadata (GraphMetadata): Descriptive metadata
    """

    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    boundaries: List[Boundary] = field(default_factory=list)
    metadata: GraphMetadata = field(default_factory=GraphMetadata)

    def get_node(self, node_id: str) -> Optional[Node]:
        """Linear lookup of a node by id."""
        return next((node for node in self.nodes if node.id == node_id), None)

    def same_content(self, other: "Graph") -> bool:
        """Field-wise comparison of entities, ignoring metadata."""
        return (
            self.nodes == other.nodes
            and self.edges == other.edges
            and self.boundaries == other.boundaries
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "boundaries": [boundary.to_dict() for boundary in self.boundaries],
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Graph":
        """
        Build a graph from its dictionary form.

        Only the envelope is checked here. Entity contents are converted as
        faithfully as possible and left for a GraphValidator to judge.

        Args:
            data: Dictionary with "nodes", "edges" and optional "boundaries"
                and "metadata" entries

        Returns:
            Graph: The converted graph

        Raises:
            ValidationError: If the envelope does not match the expected shape
        """
        try:
            json_validate(instance=data, schema=GRAPH_ENVELOPE_SCHEMA)
        except JsonSchemaError as e:
            raise ValidationError(f"Malformed graph data: {e.message}") from e

        return cls(
            nodes=[Node.from_dict(item) for item in data["nodes"]],
            edges=[Edge.from_dict(item) for item in data["edges"]],
            boundaries=[Boundary.from_dict(item) for item in data.get("boundaries", [])],
            metadata=GraphMetadata.from_dict(data.get("metadata")),
        )

"""
Edge model for the diagram graph.

An edge is a data flow from one source node to an ordered, non-empty list of
target nodes. Multi-target edges are treated as one (source, target) step per
target by every algorithm.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..enums import EdgeType
from ..types import PropertyBag
from .base import coerce_enum, enum_value


@dataclass
class Edge:
    """
    A directed, possibly multi-target data flow.

    Attributes:
        id (str): Identifier, unique across all entities of a graph
        type (EdgeType): Transport of the flow
        source (str): Id of the originating node
        targets (List[str]): Ordered ids of receiving nodes
        properties (PropertyBag): Free-form property values
    """

    id: str
    type: EdgeType
    source: str
    targets: List[str]
    properties: PropertyBag = field(default_factory=dict)

    def connects(self, node_id: str) -> bool:
        """Whether the node is this edge's source or one of its targets."""
        return self.source == node_id or node_id in self.targets

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": enum_value(self.type),
            "source": self.source,
            "targets": list(self.targets) if isinstance(self.targets, list) else self.targets,
            "properties": self.properties,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Edge":
        """Build an edge from its dictionary form."""
        return cls(
            id=data.get("id"),
            type=coerce_enum(EdgeType, data.get("type")),
            source=data.get("source"),
            targets=data.get("targets"),
            properties=data.get("properties", {}),
        )

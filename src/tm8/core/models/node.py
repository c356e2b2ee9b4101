"""
Node model for the diagram graph.

Nodes are the vertices of the diagram: processes, data stores, external
entities and services placed at a position on the canvas.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from ..enums import NodeType
from ..types import PropertyBag
from .base import Position, coerce_enum, enum_value, position_from_dict, position_to_dict


@dataclass
class Node:
    """
    A diagram vertex.

    The model performs no validation of its own; a GraphValidator decides
    whether a node may enter a store.

    Attributes:
        id (str): Identifier, unique across all entities of a graph
        type (NodeType): Kind of node
        name (str): Display name
        position (Position): Location on the canvas
        properties (PropertyBag): Free-form property values
    """

    id: str
    type: NodeType
    name: str
    position: Position
    properties: PropertyBag = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": enum_value(self.type),
            "name": self.name,
            "position": position_to_dict(self.position),
            "properties": self.properties,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        """Build a node from its dictionary form."""
        return cls(
            id=data.get("id"),
            type=coerce_enum(NodeType, data.get("type")),
            name=data.get("name"),
            position=position_from_dict(data.get("position")),
            properties=data.get("properties", {}),
        )

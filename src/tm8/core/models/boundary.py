"""
Boundary model for the diagram graph.

Boundaries are rectangular regions such as trust boundaries and network zones.
A node belongs to a boundary when its position lies inside the rectangle.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from ..enums import BoundaryType
from ..types import PropertyBag
from .base import (
    Position,
    Size,
    coerce_enum,
    enum_value,
    position_from_dict,
    position_to_dict,
)


@dataclass
class Boundary:
    """
    A rectangular region of the diagram.

    Attributes:
        id (str): Identifier, unique across all entities of a graph
        type (BoundaryType): Kind of region
        name (str): Display name
        position (Position): Top-left corner
        bounds (Size): Width and height of the region
        properties (PropertyBag): Free-form property values
    """

    id: str
    type: BoundaryType
    name: str
    position: Position
    bounds: Size
    properties: PropertyBag = field(default_factory=dict)

    @property
    def area(self) -> float:
        return self.bounds.width * self.bounds.height

    def contains(self, position: Position) -> bool:
        """Inclusive test of whether a point lies inside the region."""
        left = self.position.x
        top = self.position.y
        return (
            left <= position.x <= left + self.bounds.width
            and top <= position.y <= top + self.bounds.height
        )

    def to_dict(self) -> Dict[str, Any]:
        bounds = self.bounds.to_dict() if isinstance(self.bounds, Size) else self.bounds
        return {
            "id": self.id,
            "type": enum_value(self.type),
            "name": self.name,
            "position": position_to_dict(self.position),
            "bounds": bounds,
            "properties": self.properties,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Boundary":
        """Build a boundary from its dictionary form."""
        bounds = data.get("bounds")
        if isinstance(bounds, dict) and "width" in bounds and "height" in bounds:
            bounds = Size(bounds["width"], bounds["height"])
        return cls(
            id=data.get("id"),
            type=coerce_enum(BoundaryType, data.get("type")),
            name=data.get("name"),
            position=position_from_dict(data.get("position")),
            bounds=bounds,
            properties=data.get("properties", {}),
        )

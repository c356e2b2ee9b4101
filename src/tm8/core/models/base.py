"""
Geometric value types shared by diagram entities.

This module defines the small immutable value objects used to place entities on
the canvas, along with the conversion helpers the entity models share.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Type


@dataclass(frozen=True)
class Position:
    """
    A point on the diagram canvas.

    Attributes:
        x (float): Horizontal coordinate
        y (float): Vertical coordinate
    """

    x: float
    y: float

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y}

    def distance_to(self, other: "Position") -> float:
        """Euclidean distance to another position."""
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Size:
    """
    Extent of a rectangular entity.

    Attributes:
        width (float): Horizontal extent
        height (float): Vertical extent
    """

    width: float
    height: float

    def to_dict(self) -> Dict[str, Any]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class ViewportBounds:
    """
    Axis-aligned rectangle used for spatial queries.

    All containment and intersection tests are inclusive of the rectangle
    edges.

    Attributes:
        x (float): Left edge
        y (float): Top edge
        width (float): Horizontal extent
        height (float): Vertical extent
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def is_degenerate(self) -> bool:
        """True when a dimension is non-finite or not strictly positive."""
        for value in (self.x, self.y, self.width, self.height):
            if not math.isfinite(value):
                return True
        return self.width <= 0 or self.height <= 0

    def contains_point(self, x: float, y: float) -> bool:
        """Inclusive point containment test."""
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def intersects(self, other: "ViewportBounds") -> bool:
        """Inclusive rectangle overlap test."""
        return not (
            other.x > self.right
            or other.right < self.x
            or other.y > self.bottom
            or other.bottom < self.y
        )


def coerce_enum(enum_type: Type[Enum], value: Any) -> Any:
    """
    Map a raw value onto an enum member when possible.

    Values that are already members are returned unchanged. Unknown values are
    returned as-is so that validation can report them instead of failing at
    conversion time.
    """
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        return value


def enum_value(value: Any) -> Any:
    """Serialize an enum member to its value, passing other values through."""
    return value.value if isinstance(value, Enum) else value


def position_from_dict(data: Any) -> Any:
    """Build a Position from a mapping; other values are passed through."""
    if isinstance(data, dict) and "x" in data and "y" in data:
        return Position(data["x"], data["y"])
    return data


def position_to_dict(position: Any) -> Any:
    return position.to_dict() if isinstance(position, Position) else position

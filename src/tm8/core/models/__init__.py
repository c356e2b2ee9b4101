"""Diagram entity models."""

from .base import Position, Size, ViewportBounds
from .boundary import Boundary
from .edge import Edge
from .graph import DEFAULT_GRAPH_NAME, DEFAULT_GRAPH_VERSION, Graph, GraphMetadata
from .node import Node

__all__ = [
    "Position",
    "Size",
    "ViewportBounds",
    "Node",
    "Edge",
    "Boundary",
    "Graph",
    "GraphMetadata",
    "DEFAULT_GRAPH_NAME",
    "DEFAULT_GRAPH_VERSION",
]

"""
Core package of the TM8 graph library.

Holds the entity models, enumerations, exceptions and configuration shared by
the graph store and the analysis algorithms.
"""

from .config import HistoryConfig, SpatialConfig, StoreConfig
from .enums import BoundaryType, ChangeOperation, EdgeType, EntityKind, NodeType, Severity
from .exceptions import (
    BatchRejectedError,
    BoundaryNotFoundError,
    ConfigurationError,
    EdgeNotFoundError,
    GraphOperationError,
    NodeNotFoundError,
    ResourceNotFoundError,
    ValidationError,
)
from .models import Boundary, Edge, Graph, GraphMetadata, Node, Position, Size, ViewportBounds

__all__ = [
    "HistoryConfig",
    "SpatialConfig",
    "StoreConfig",
    "NodeType",
    "EdgeType",
    "BoundaryType",
    "EntityKind",
    "ChangeOperation",
    "Severity",
    "ValidationError",
    "GraphOperationError",
    "BatchRejectedError",
    "ConfigurationError",
    "ResourceNotFoundError",
    "NodeNotFoundError",
    "EdgeNotFoundError",
    "BoundaryNotFoundError",
    "Node",
    "Edge",
    "Boundary",
    "Graph",
    "GraphMetadata",
    "Position",
    "Size",
    "ViewportBounds",
]

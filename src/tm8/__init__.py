"""
TM8 - In-memory diagram graph core for threat modeling

This package maintains the authoritative representation of a threat-model
diagram and the services an interactive editor builds on. It includes:

- A validated graph store with secondary indices and change notification
- A quadtree spatial index for viewport and hit-testing queries
- Snapshot-based undo/redo with checkpoints
- Rule-based validation of entities and whole graphs
- Graph analysis algorithms (traversal, data-flow paths, cycles, components,
  boundary grouping, centrality)
"""

__version__ = "0.1.0"
__author__ = "TM8 Team"

# Version compatibility check
import sys

if sys.version_info < (3, 11):
    raise RuntimeError("TM8 requires Python 3.11 or higher")

# Import commonly used components for easier access
from .core.graph import GraphStore
from .core.models import Boundary, Edge, Graph, Node, Position, Size, ViewportBounds
from .utils.validation import GraphValidator, ValidationResult

__all__ = [
    "GraphStore",
    "GraphValidator",
    "ValidationResult",
    "Graph",
    "Node",
    "Edge",
    "Boundary",
    "Position",
    "Size",
    "ViewportBounds",
]

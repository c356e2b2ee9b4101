"""
Read-only algorithms over graph values.

Every function takes a Graph, typically from GraphStore.get_graph(), and never
mutates it.
"""

from .adjacency import EdgeMap
from .clustering import NO_BOUNDARY_GROUP, BoundaryClustering, BoundaryTieBreak
from .components import ComponentAnalysis, ConnectedComponent
from .cycles import CycleDetection, CycleInfo
from .metrics import CentralityCalculator, NodeCentrality
from .paths import DataFlowPath, PathAnalysis
from .traversal import Traversal
from .utils import MemoryManager, get_memory_usage

__all__ = [
    "EdgeMap",
    "Traversal",
    "PathAnalysis",
    "DataFlowPath",
    "CycleDetection",
    "CycleInfo",
    "ComponentAnalysis",
    "ConnectedComponent",
    "BoundaryClustering",
    "BoundaryTieBreak",
    "NO_BOUNDARY_GROUP",
    "CentralityCalculator",
    "NodeCentrality",
    "MemoryManager",
    "get_memory_usage",
]

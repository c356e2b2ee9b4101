"""
Graph state management.

This package contains the store and the collaborators it keeps consistent:
secondary indices, the spatial index, undo history and change notification.
"""

from .base import GraphIndex
from .batch import BatchItemOutcome, BatchResult, EntityUpdate, GraphBatch
from .events import GraphEventManager
from .history import CheckpointInfo, GraphHistory, HistoryStats, Snapshot
from .search import SearchOptions, VisibilityState, fuzzy_match
from .spatial import QuadTree, SpatialIndex, SpatialStats
from .store import GraphStore, StoreStats

__all__ = [
    "GraphStore",
    "StoreStats",
    "GraphIndex",
    "GraphBatch",
    "EntityUpdate",
    "BatchResult",
    "BatchItemOutcome",
    "GraphEventManager",
    "GraphHistory",
    "HistoryStats",
    "CheckpointInfo",
    "Snapshot",
    "SearchOptions",
    "VisibilityState",
    "fuzzy_match",
    "QuadTree",
    "SpatialIndex",
    "SpatialStats",
]

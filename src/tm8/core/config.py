"""
Configuration objects for the graph store and its collaborators.

Each configuration is a dataclass validated on construction. Invalid values
raise ConfigurationError immediately rather than surfacing later as odd
runtime behaviour.
"""

import math
from dataclasses import dataclass, field

from .exceptions import ConfigurationError
from .models import DEFAULT_GRAPH_NAME, DEFAULT_GRAPH_VERSION, ViewportBounds

DEFAULT_SPATIAL_BOUNDS = ViewportBounds(x=-10000, y=-10000, width=20000, height=20000)


@dataclass
class HistoryConfig:
    """
    Undo history settings.

    Attributes:
        max_history_size (int): Maximum number of undo entries kept
        compression_threshold (int): Number of recorded snapshots between
            compaction checks
    """

    max_history_size: int = 50
    compression_threshold: int = 10

    def __post_init__(self):
        if self.max_history_size < 2:
            raise ConfigurationError("max_history_size must be at least 2")
        if self.compression_threshold < 1:
            raise ConfigurationError("compression_threshold must be at least 1")


@dataclass
class SpatialConfig:
    """
    Quadtree settings.

    Attributes:
        bounds (ViewportBounds): Area covered by the root of the tree
        max_items (int): Items a tree node holds before subdividing
        max_depth (int): Depth below which tree nodes never subdivide
    """

    bounds: ViewportBounds = DEFAULT_SPATIAL_BOUNDS
    max_items: int = 10
    max_depth: int = 10

    def __post_init__(self):
        if self.bounds.is_degenerate:
            raise ConfigurationError(f"Spatial bounds must be finite and non-empty: {self.bounds}")
        if self.max_items < 1:
            raise ConfigurationError("max_items must be at least 1")
        if self.max_depth < 0 or not math.isfinite(self.max_depth):
            raise ConfigurationError("max_depth must be a non-negative integer")


@dataclass
class StoreConfig:
    """
    Graph store settings.

    Attributes:
        history (HistoryConfig): Undo history settings
        spatial (SpatialConfig): Spatial index settings
        graph_name (str): Metadata name given to new graphs
        graph_version (str): Metadata version given to new graphs
    """

    history: HistoryConfig = field(default_factory=HistoryConfig)
    spatial: SpatialConfig = field(default_factory=SpatialConfig)
    graph_name: str = DEFAULT_GRAPH_NAME
    graph_version: str = DEFAULT_GRAPH_VERSION

"""
Spatial indexing of node positions.

This module provides a region quadtree over point items and the SpatialIndex
wrapper the store uses to answer viewport and hit-testing queries without
scanning every node.

Each tree node holds up to ``max_items`` entries. Past capacity, and while
above ``max_depth``, it splits into four equal quadrants (top-left, top-right,
bottom-left, bottom-right) and pushes its entries down. An entry lives in
exactly one tree node. Removal never merges quadrants back.

Points outside the root bounds cannot be placed in the tree; they are kept in
an overflow bucket that every query scans linearly.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Generic, List, Optional, Tuple, TypeVar

from ..config import SpatialConfig
from ..models import Node, Position, ViewportBounds

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class SpatialEntry(Generic[T]):
    """An indexed item and its position."""

    id: str
    item: T
    position: Position


@dataclass
class QuadTreeNode(Generic[T]):
    """A region of the quadtree; ``children`` is empty for leaves."""

    bounds: ViewportBounds
    depth: int
    items: List[SpatialEntry[T]] = field(default_factory=list)
    children: List["QuadTreeNode[T]"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children


class QuadTree(Generic[T]):
    """
    Point quadtree with inclusive rectangle queries.

    Attributes:
        bounds (ViewportBounds): Area covered by the root
        max_items (int): Capacity of a tree node before it subdivides
        max_depth (int): Depth at which tree nodes stop subdividing
    """

    def __init__(self, bounds: ViewportBounds, max_items: int = 10, max_depth: int = 10):
        self.bounds = bounds
        self.max_items = max_items
        self.max_depth = max_depth
        self._root: QuadTreeNode[T] = QuadTreeNode(bounds, 0)
        self._overflow: Dict[str, SpatialEntry[T]] = {}

    def insert(self, id: str, item: T, position: Position) -> None:
        """
        Insert an item at a position.

        Args:
            id: Identifier of the item
            item: Payload returned by queries
            position: Location of the item
        """
        entry = SpatialEntry(id, item, position)
        if not self._root.bounds.contains_point(position.x, position.y):
            logger.warning(f"Position ({position.x}, {position.y}) of {id} is outside the spatial bounds")
            self._overflow[id] = entry
            return
        self._insert_into(self._root, entry)

    def _insert_into(self, node: QuadTreeNode[T], entry: SpatialEntry[T]) -> None:
        while True:
            if node.is_leaf:
                if len(node.items) < self.max_items or node.depth >= self.max_depth:
                    node.items.append(entry)
                    return
                self._subdivide(node)
            child = self._child_for(node, entry.position)
            if child is None:
                node.items.append(entry)
                return
            node = child

    def _subdivide(self, node: QuadTreeNode[T]) -> None:
        b = node.bounds
        half_w = b.width / 2
        half_h = b.height / 2
        depth = node.depth + 1
        node.children = [
            QuadTreeNode(ViewportBounds(b.x, b.y, half_w, half_h), depth),
            QuadTreeNode(ViewportBounds(b.x + half_w, b.y, half_w, half_h), depth),
            QuadTreeNode(ViewportBounds(b.x, b.y + half_h, half_w, half_h), depth),
            QuadTreeNode(ViewportBounds(b.x + half_w, b.y + half_h, half_w, half_h), depth),
        ]
        items, node.items = node.items, []
        for entry in items:
            child = self._child_for(node, entry.position)
            if child is None:
                node.items.append(entry)
            else:
                self._insert_into(child, entry)

    @staticmethod
    def _child_for(node: QuadTreeNode[T], position: Position) -> Optional[QuadTreeNode[T]]:
        for child in node.children:
            if child.bounds.contains_point(position.x, position.y):
                return child
        return None

    def remove(self, id: str, position: Optional[Position] = None) -> bool:
        """
        Remove an item.

        Args:
            id: Identifier of the item
            position: Last known position, used to descend directly to the
                item instead of searching every branch

        Returns:
            bool: True if the item was found and removed
        """
        if self._overflow.pop(id, None) is not None:
            return True
        return self._remove_from(self._root, id, position)

    def _remove_from(self, node: QuadTreeNode[T], id: str, position: Optional[Position]) -> bool:
        for index, entry in enumerate(node.items):
            if entry.id == id:
                del node.items[index]
                return True
        for child in node.children:
            if position is not None and not child.bounds.contains_point(position.x, position.y):
                continue
            if self._remove_from(child, id, position):
                return True
        return False

    def query(self, bounds: ViewportBounds) -> List[SpatialEntry[T]]:
        """
        Find every item inside a rectangle.

        Args:
            bounds: Inclusive query rectangle

        Returns:
            List[SpatialEntry[T]]: Matching entries; empty for degenerate bounds
        """
        if bounds.is_degenerate:
            return []

        results: List[SpatialEntry[T]] = []
        stack = [self._root]
        while stack:
            node = stack.pop()
            if not node.bounds.intersects(bounds):
                continue
            for entry in node.items:
                if bounds.contains_point(entry.position.x, entry.position.y):
                    results.append(entry)
            stack.extend(node.children)

        for entry in self._overflow.values():
            if bounds.contains_point(entry.position.x, entry.position.y):
                results.append(entry)
        return results

    def nearest(self, point: Position, max_distance: float) -> List[Tuple[SpatialEntry[T], float]]:
        """
        Find items within a distance of a point.

        The candidate set comes from a square probe of side ``2 * max_distance``
        and is filtered by Euclidean distance. An infinite distance scans every
        item.

        Args:
            point: Probe location
            max_distance: Inclusive search radius

        Returns:
            List[Tuple[SpatialEntry[T], float]]: Entries with their distance,
                nearest first
        """
        if math.isnan(max_distance) or max_distance < 0:
            return []

        if math.isinf(max_distance):
            candidates = self.all_entries()
        else:
            probe = ViewportBounds(
                point.x - max_distance,
                point.y - max_distance,
                max_distance * 2,
                max_distance * 2,
            )
            if max_distance == 0:
                candidates = [
                    entry
                    for entry in self.all_entries()
                    if entry.position.x == point.x and entry.position.y == point.y
                ]
            else:
                candidates = self.query(probe)

        hits = []
        for entry in candidates:
            distance = entry.position.distance_to(point)
            if distance <= max_distance:
                hits.append((entry, distance))
        hits.sort(key=lambda hit: hit[1])
        return hits

    def all_entries(self) -> List[SpatialEntry[T]]:
        entries: List[SpatialEntry[T]] = []
        stack = [self._root]
        while stack:
            node = stack.pop()
            entries.extend(node.items)
            stack.extend(node.children)
        entries.extend(self._overflow.values())
        return entries

    def clear(self) -> None:
        self._root = QuadTreeNode(self.bounds, 0)
        self._overflow.clear()

    def depth(self) -> int:
        """Depth of the deepest tree node, 0 for an undivided root."""
        deepest = 0
        stack = [self._root]
        while stack:
            node = stack.pop()
            deepest = max(deepest, node.depth)
            stack.extend(node.children)
        return deepest

    def node_count(self) -> int:
        count = 0
        stack = [self._root]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children)
        return count

    @property
    def overflow_count(self) -> int:
        return len(self._overflow)


@dataclass
class SpatialStats:
    """Shape of a spatial index."""

    total_nodes: int
    tree_depth: int
    tree_nodes: int
    overflow_nodes: int


class SpatialIndex:
    """
    Quadtree index of diagram nodes by position.

    The tree stores node ids; the current node objects are kept beside it so
    that an update which does not move a node only refreshes the object and
    leaves the tree untouched.
    """

    def __init__(self, config: Optional[SpatialConfig] = None):
        config = config or SpatialConfig()
        self._tree: QuadTree[str] = QuadTree(config.bounds, config.max_items, config.max_depth)
        self._nodes: Dict[str, Node] = {}

    def insert(self, node: Node) -> None:
        if node.id in self._nodes:
            self.remove(node.id)
        self._tree.insert(node.id, node.id, node.position)
        self._nodes[node.id] = node

    def remove(self, node_id: str) -> None:
        node = self._nodes.pop(node_id, None)
        if node is not None:
            self._tree.remove(node_id, node.position)

    def update(self, node: Node) -> None:
        """Reindex a node, touching the tree only when its position changed."""
        current = self._nodes.get(node.id)
        if current is not None and current.position == node.position:
            self._nodes[node.id] = node
            return
        self.insert(node)

    def query(self, bounds: ViewportBounds) -> List[Node]:
        return [self._nodes[entry.id] for entry in self._tree.query(bounds)]

    def nearest(self, point: Position, max_distance: float) -> List[Node]:
        return [self._nodes[entry.id] for entry, _ in self._tree.nearest(point, max_distance)]

    def find_nearest(self, point: Position, max_distance: float = math.inf) -> Optional[Node]:
        hits = self._tree.nearest(point, max_distance)
        return self._nodes[hits[0][0].id] if hits else None

    def clear(self) -> None:
        self._tree.clear()
        self._nodes.clear()

    def size(self) -> int:
        return len(self._nodes)

    def has(self, node_id: str) -> bool:
        return node_id in self._nodes

    def get_stats(self) -> SpatialStats:
        return SpatialStats(
            total_nodes=len(self._nodes),
            tree_depth=self._tree.depth(),
            tree_nodes=self._tree.node_count(),
            overflow_nodes=self._tree.overflow_count,
        )

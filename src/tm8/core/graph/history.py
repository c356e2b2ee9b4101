"""
Snapshot-based undo/redo history.

History keeps two stacks of immutable snapshots. The model is explicit: the
top of the undo stack is always the current committed state, so the store
records a snapshot after every successful mutation and undo returns the entry
below the top.

Memory is bounded in two ways. The undo stack is trimmed first-in-first-out
to ``max_history_size`` entries and the redo stack to half of that. In
addition, every ``compression_threshold`` recorded snapshots the undo stack is
compacted once it exceeds 80% of capacity: it is reduced to 60% of capacity by
keeping the most recent 30% of the kept entries verbatim and sampling older
entries at a fixed stride. Compaction is lossy. Intermediate states dropped by
it can no longer be reached through undo, although named checkpoints that
survive sampling remain usable.
"""

import copy
import json
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional

from ..config import HistoryConfig
from ..models import Boundary, Edge, Graph, Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """
    Deep copy of the entity collections at one point in time.

    Attributes:
        nodes (List[Node]): Copied nodes
        edges (List[Edge]): Copied edges
        boundaries (List[Boundary]): Copied boundaries
        timestamp (datetime): When the snapshot was taken
        checkpoint_name (Optional[str]): Tag of a named checkpoint
    """

    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    boundaries: List[Boundary] = field(default_factory=list)
    timestamp: datetime = field(default_factory=datetime.now)
    checkpoint_name: Optional[str] = None

    @classmethod
    def from_graph(cls, graph: Graph, checkpoint_name: Optional[str] = None) -> "Snapshot":
        return cls(
            nodes=copy.deepcopy(graph.nodes),
            edges=copy.deepcopy(graph.edges),
            boundaries=copy.deepcopy(graph.boundaries),
            checkpoint_name=checkpoint_name,
        )

    def same_content(self, other: Optional["Snapshot"]) -> bool:
        """Field-wise comparison of the entities, ignoring timestamp and tag."""
        if other is None:
            return False
        return (
            self.nodes == other.nodes
            and self.edges == other.edges
            and self.boundaries == other.boundaries
        )

    def estimated_size(self) -> int:
        """Rough size in bytes of the serialized entities."""
        payload = {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "boundaries": [boundary.to_dict() for boundary in self.boundaries],
        }
        return len(json.dumps(payload, default=str).encode("utf-8"))


@dataclass
class HistoryStats:
    """Sizes and capabilities of a history."""

    undo_stack_size: int
    redo_stack_size: int
    memory_usage: int
    can_undo: bool
    can_redo: bool


@dataclass
class CheckpointInfo:
    """A named checkpoint and its position in the undo stack."""

    name: str
    timestamp: datetime
    index: int


class GraphHistory:
    """
    Bounded undo/redo stacks of graph snapshots.

    Attributes:
        max_history_size (int): Capacity of the undo stack
        compression_threshold (int): Recorded snapshots between compaction checks
    """

    def __init__(self, config: Optional[HistoryConfig] = None):
        config = config or HistoryConfig()
        self.max_history_size = config.max_history_size
        self.compression_threshold = config.compression_threshold
        self._undo_stack: List[Snapshot] = []
        self._redo_stack: List[Snapshot] = []
        self._last_snapshot: Optional[Snapshot] = None
        self._snapshot_count = 0

    def snapshot(self, graph: Graph) -> bool:
        """
        Record the committed state of a graph.

        Args:
            graph: State to record

        Returns:
            bool: True if a new entry was pushed, False if the state was
                identical to the last recorded one
        """
        snapshot = Snapshot.from_graph(graph)
        if snapshot.same_content(self._last_snapshot):
            return False

        self._undo_stack.append(snapshot)
        self._last_snapshot = snapshot
        self._snapshot_count += 1
        self._redo_stack.clear()
        self._trim()

        if self._snapshot_count % self.compression_threshold == 0:
            self._compact()
        return True

    def undo(self) -> Optional[Snapshot]:
        """
        Step back one entry.

        Returns:
            Optional[Snapshot]: The state to restore, an empty snapshot when the
                undo stack became empty, or None if there was nothing to undo
        """
        if not self._undo_stack:
            return None

        self._redo_stack.append(self._undo_stack.pop())
        self._trim()
        previous = self._undo_stack[-1] if self._undo_stack else Snapshot()
        self._last_snapshot = previous
        return previous

    def redo(self) -> Optional[Snapshot]:
        """
        Step forward one entry.

        Returns:
            Optional[Snapshot]: The state to restore, or None if there was
                nothing to redo
        """
        if not self._redo_stack:
            return None

        snapshot = self._redo_stack.pop()
        self._undo_stack.append(snapshot)
        self._last_snapshot = snapshot
        return snapshot

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def get_stats(self) -> HistoryStats:
        memory = sum(s.estimated_size() for s in self._undo_stack)
        memory += sum(s.estimated_size() for s in self._redo_stack)
        return HistoryStats(
            undo_stack_size=len(self._undo_stack),
            redo_stack_size=len(self._redo_stack),
            memory_usage=memory,
            can_undo=self.can_undo(),
            can_redo=self.can_redo(),
        )

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._last_snapshot = None
        self._snapshot_count = 0

    def get_current_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    def set_current_snapshot(self, graph: Graph) -> None:
        """Record a graph as the baseline state, e.g. after loading a file."""
        snapshot = Snapshot.from_graph(graph)
        self._undo_stack.append(snapshot)
        self._last_snapshot = snapshot
        self._redo_stack.clear()
        self._trim()

    def get_snapshots(self) -> List[Snapshot]:
        """Undo stack entries, oldest first."""
        return list(self._undo_stack)

    # Checkpoints

    def create_checkpoint(self, name: str, graph: Graph) -> None:
        """
        Tag the current state with a name.

        If the state equals an untagged top of the undo stack, the top entry
        is tagged in place; otherwise a new tagged entry is pushed, so an
        earlier checkpoint on the same state stays restorable. Redo is
        cleared either way.

        Args:
            name: Checkpoint name
            graph: Current state
        """
        snapshot = Snapshot.from_graph(graph, checkpoint_name=name)
        top = self._undo_stack[-1] if self._undo_stack else None
        if top is not None and top.checkpoint_name in (None, name) and snapshot.same_content(top):
            snapshot = replace(top, checkpoint_name=name)
            self._undo_stack[-1] = snapshot
        else:
            self._undo_stack.append(snapshot)
        self._last_snapshot = snapshot
        self._redo_stack.clear()
        self._trim()
        logger.debug(f"Created checkpoint {name}")

    def restore_to_checkpoint(self, name: str) -> Optional[Snapshot]:
        """
        Return to the most recent checkpoint with the given name.

        Entries recorded after the checkpoint move to the redo stack so that
        repeated redo replays them in their original order.

        Args:
            name: Checkpoint name

        Returns:
            Optional[Snapshot]: The checkpoint state, or None if no checkpoint
                has that name
        """
        for index in range(len(self._undo_stack) - 1, -1, -1):
            snapshot = self._undo_stack[index]
            if snapshot.checkpoint_name == name:
                after = self._undo_stack[index + 1:]
                del self._undo_stack[index + 1:]
                self._redo_stack.extend(reversed(after))
                self._trim()
                self._last_snapshot = snapshot
                return snapshot
        return None

    def get_checkpoints(self) -> List[CheckpointInfo]:
        return [
            CheckpointInfo(snapshot.checkpoint_name, snapshot.timestamp, index)
            for index, snapshot in enumerate(self._undo_stack)
            if snapshot.checkpoint_name
        ]

    # Memory management

    def _trim(self) -> None:
        overflow = len(self._undo_stack) - self.max_history_size
        if overflow > 0:
            del self._undo_stack[:overflow]

        redo_limit = self.max_history_size // 2
        overflow = len(self._redo_stack) - redo_limit
        if overflow > 0:
            # The front of the redo stack is the furthest future state.
            del self._redo_stack[:overflow]

    def _compact(self) -> None:
        size = len(self._undo_stack)
        if size <= self.max_history_size * 0.8:
            return

        # The newest entry is the current state and always survives.
        keep_count = max(1, int(self.max_history_size * 0.6))
        recent_count = max(1, int(keep_count * 0.3))
        old_count = keep_count - recent_count

        older = self._undo_stack[: size - recent_count]
        recent = self._undo_stack[size - recent_count:]

        sampled: List[Snapshot] = []
        if old_count > 0:
            step = max(1, len(older) // old_count)
            sampled = older[::step][:old_count]

        self._undo_stack = sampled + recent
        logger.warning(f"Compacted history from {size} to {len(self._undo_stack)} entries")

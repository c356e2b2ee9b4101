"""
Authoritative in-memory store of a diagram graph.

The GraphStore owns the canonical node, edge and boundary maps and keeps every
derived structure consistent with them: the secondary indices, the spatial
index and the undo history. Every mutation is validated first and committed
only if validation produced no error; the outcome is always returned to the
caller as a ValidationResult.

A committed mutation runs in a fixed sequence: primary map, secondary
indices, spatial index, history snapshot, listener notification. The store is
not thread-safe. Hosts must funnel mutations through a single writer and hand
concurrent readers the deep copy returned by get_graph().
"""

import copy
import itertools
import logging
import math
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Any, Dict, Generator, Iterable, List, Mapping, Optional, Tuple

from ..config import StoreConfig
from ..enums import ChangeOperation, EntityKind, NodeType
from ..exceptions import (
    BatchRejectedError,
    BoundaryNotFoundError,
    EdgeNotFoundError,
    NodeNotFoundError,
)
from ..models import Boundary, Edge, Graph, GraphMetadata, Node, Position, ViewportBounds
from ..types import ChangeListener
from ...utils.validation import GraphValidator, ValidationIssue, ValidationResult
from ...utils.validation.base import error
from .base import GraphIndex
from .batch import BatchItemOutcome, BatchResult, GraphBatch
from .events import (
    BATCH_EVENT_ID,
    CHECKPOINT_EVENT_ID,
    CLEAR_EVENT_ID,
    LOAD_EVENT_ID,
    REDO_EVENT_ID,
    UNDO_EVENT_ID,
    GraphEventManager,
)
from .history import CheckpointInfo, GraphHistory, HistoryStats, Snapshot
from .search import SearchOptions, VisibilityState, matches_search
from .spatial import SpatialIndex, SpatialStats

logger = logging.getLogger(__name__)

Change = Tuple[EntityKind, str, ChangeOperation]


@dataclass
class StoreStats:
    """Entity counts and the state of the store's collaborators."""

    node_count: int
    edge_count: int
    boundary_count: int
    nodes_by_type: Dict[str, int]
    history: HistoryStats
    spatial: SpatialStats


class GraphStore:
    """
    Validated, indexed and undoable graph state.

    Entities handed to the store are copied on entry. Objects returned by the
    get_* accessors are the stored instances and must be treated as
    read-only; change them through the update_* methods.

    Attributes:
        config (StoreConfig): Store settings
        validator (GraphValidator): Gate applied to every mutation
    """

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        validator: Optional[GraphValidator] = None,
    ):
        """
        Initialize an empty store.

        Args:
            config: Store settings; defaults apply when omitted
            validator: Validator to use; a validator with the built-in rules
                is created when omitted
        """
        self.config = config or StoreConfig()
        self.validator = validator or GraphValidator()

        self._nodes: Dict[str, Node] = {}
        self._edges: Dict[str, Edge] = {}
        self._boundaries: Dict[str, Boundary] = {}
        # Insertion rank of node and edge ids, for ordering index lookups
        self._rank: Dict[str, int] = {}
        self._ranks = itertools.count()
        self._index = GraphIndex()
        self._spatial = SpatialIndex(self.config.spatial)
        self._history = GraphHistory(self.config.history)
        self._events = GraphEventManager()
        self._metadata = GraphMetadata(name=self.config.graph_name, version=self.config.graph_version)

    # Nodes

    def add_node(self, node: Node) -> ValidationResult:
        """
        Add a node.

        Args:
            node: Node to add; the store keeps its own copy

        Returns:
            ValidationResult: Outcome; the node was added if ``is_valid``
        """
        result = self._add_node(node)
        if result.is_valid:
            self._commit([(EntityKind.NODE, node.id, ChangeOperation.ADD)])
        return result

    def update_node(self, node_id: str, updates: Mapping[str, Any]) -> ValidationResult:
        """
        Apply a partial update to a node.

        Args:
            node_id: Id of the node
            updates: Field names mapped to new values

        Returns:
            ValidationResult: Outcome; the node was updated if ``is_valid``

        Raises:
            NodeNotFoundError: If no node has this id
        """
        result = self._update_node(node_id, updates)
        if result.is_valid:
            self._commit([(EntityKind.NODE, node_id, ChangeOperation.UPDATE)])
        return result

    def delete_node(self, node_id: str) -> ValidationResult:
        """
        Delete a node and every edge that references it.

        The cascade is recorded as a single history entry. Listeners are
        notified for each removed edge, then for the node.

        Args:
            node_id: Id of the node

        Returns:
            ValidationResult: Always valid; ``context["deleted_edges"]`` lists
                the cascaded edge ids

        Raises:
            NodeNotFoundError: If no node has this id
        """
        if node_id not in self._nodes:
            raise NodeNotFoundError(f"Node {node_id} not found")
        changes = self._delete_node(node_id)
        self._commit(changes)
        return ValidationResult(
            is_valid=True,
            context={"deleted_edges": [change[1] for change in changes[:-1]]},
        )

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._nodes.get(node_id)

    def get_all_nodes(self) -> List[Node]:
        return list(self._nodes.values())

    def get_nodes_by_type(self, node_type: NodeType) -> List[Node]:
        ids = self._index.node_ids_of_type(node_type)
        return [self._nodes[node_id] for node_id in self._in_insertion_order(ids)]

    # Edges

    def add_edge(self, edge: Edge) -> ValidationResult:
        """
        Add an edge.

        The source and every target must name existing nodes.

        Args:
            edge: Edge to add; the store keeps its own copy

        Returns:
            ValidationResult: Outcome; the edge was added if ``is_valid``
        """
        result = self._add_edge(edge)
        if result.is_valid:
            self._commit([(EntityKind.EDGE, edge.id, ChangeOperation.ADD)])
        return result

    def update_edge(self, edge_id: str, updates: Mapping[str, Any]) -> ValidationResult:
        """
        Apply a partial update to an edge.

        Raises:
            EdgeNotFoundError: If no edge has this id
        """
        result = self._update_edge(edge_id, updates)
        if result.is_valid:
            self._commit([(EntityKind.EDGE, edge_id, ChangeOperation.UPDATE)])
        return result

    def delete_edge(self, edge_id: str) -> ValidationResult:
        """
        Delete an edge.

        Raises:
            EdgeNotFoundError: If no edge has this id
        """
        if edge_id not in self._edges:
            raise EdgeNotFoundError(f"Edge {edge_id} not found")
        self._remove_edge(edge_id)
        self._commit([(EntityKind.EDGE, edge_id, ChangeOperation.DELETE)])
        return ValidationResult(is_valid=True)

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self._edges.get(edge_id)

    def get_all_edges(self) -> List[Edge]:
        return list(self._edges.values())

    # Boundaries

    def add_boundary(self, boundary: Boundary) -> ValidationResult:
        """Add a boundary; the store keeps its own copy."""
        result = self._add_boundary(boundary)
        if result.is_valid:
            self._commit([(EntityKind.BOUNDARY, boundary.id, ChangeOperation.ADD)])
        return result

    def update_boundary(self, boundary_id: str, updates: Mapping[str, Any]) -> ValidationResult:
        """
        Apply a partial update to a boundary.

        Raises:
            BoundaryNotFoundError: If no boundary has this id
        """
        result = self._update_boundary(boundary_id, updates)
        if result.is_valid:
            self._commit([(EntityKind.BOUNDARY, boundary_id, ChangeOperation.UPDATE)])
        return result

    def delete_boundary(self, boundary_id: str) -> ValidationResult:
        """
        Delete a boundary. Nodes inside it are not affected.

        Raises:
            BoundaryNotFoundError: If no boundary has this id
        """
        if boundary_id not in self._boundaries:
            raise BoundaryNotFoundError(f"Boundary {boundary_id} not found")
        del self._boundaries[boundary_id]
        self._commit([(EntityKind.BOUNDARY, boundary_id, ChangeOperation.DELETE)])
        return ValidationResult(is_valid=True)

    def get_boundary(self, boundary_id: str) -> Optional[Boundary]:
        return self._boundaries.get(boundary_id)

    def get_all_boundaries(self) -> List[Boundary]:
        return list(self._boundaries.values())

    # Identity

    def has_entity(self, entity_id: str) -> bool:
        """Whether any node, edge or boundary uses this id."""
        return self.get_entity_kind(entity_id) is not None

    def get_entity_kind(self, entity_id: str) -> Optional[EntityKind]:
        if entity_id in self._nodes:
            return EntityKind.NODE
        if entity_id in self._edges:
            return EntityKind.EDGE
        if entity_id in self._boundaries:
            return EntityKind.BOUNDARY
        return None

    # Spatial and adjacency queries

    def get_nodes_in_region(self, bounds: ViewportBounds) -> List[Node]:
        """Nodes inside an inclusive rectangle; empty for degenerate bounds."""
        return self._spatial.query(bounds)

    def find_nearest_node(self, point: Position, max_distance: float = math.inf) -> Optional[Node]:
        """Closest node within ``max_distance`` of a point, if any."""
        return self._spatial.find_nearest(point, max_distance)

    def get_connected_nodes(self, node_id: str) -> List[Node]:
        """
        Nodes sharing an edge with a node, in either direction.

        Targets of outgoing edges and sources of incoming edges are merged.
        The node itself is not included, even when it has a self-loop.
        """
        connected = set()
        for edge_id in self._index.outgoing(node_id):
            connected.update(self._edges[edge_id].targets)
        for edge_id in self._index.incoming(node_id):
            connected.add(self._edges[edge_id].source)
        connected.discard(node_id)
        return [self._nodes[other] for other in self._in_insertion_order(connected)]

    def get_connected_edges(self, node_id: str) -> List[Edge]:
        """Edges where the node is the source or one of the targets."""
        edge_ids = self._index.incident(node_id)
        return [self._edges[edge_id] for edge_id in self._in_insertion_order(edge_ids)]

    # Search and filtering

    def find_nodes_by_name(self, query: str) -> List[Node]:
        """Case-insensitive substring match on node names; empty query gives no nodes."""
        if not query:
            return []
        term = query.lower()
        return [node for node in self._nodes.values() if term in node.name.lower()]

    def search_nodes(self, options: SearchOptions) -> List[Node]:
        """
        Search nodes by name and properties.

        Args:
            options: Query text, matching mode, fields and type filter

        Returns:
            List[Node]: Matching nodes in insertion order; empty for an empty query
        """
        if not options.query:
            return []
        return [node for node in self._nodes.values() if matches_search(node, options)]

    def apply_visibility_filter(self, state: VisibilityState) -> List[Node]:
        """
        Nodes a view should display.

        With focused nodes, only those (and, if requested, their direct
        neighbours) remain. Hidden nodes are always removed.
        """
        visible = list(self._nodes.values())
        if state.focused_nodes:
            shown = set(state.focused_nodes)
            if state.show_only_connected:
                for node_id in state.focused_nodes:
                    shown.update(node.id for node in self.get_connected_nodes(node_id))
            visible = [node for node in visible if node.id in shown]
        return [node for node in visible if node.id not in state.hidden_nodes]

    # Batches

    def apply_batch(self, batch: GraphBatch, atomic: bool = False) -> BatchResult:
        """
        Apply grouped mutations as one logical operation.

        Items are applied adds first, then updates, then deletes with edges
        before nodes. The whole batch produces one history entry and one
        notification. Invalid items are skipped and reported in the result
        while the rest of the batch is still applied, unless ``atomic`` is set.

        Args:
            batch: Mutations to apply
            atomic: Roll everything back if any item is rejected

        Returns:
            BatchResult: Applied and rejected items

        Raises:
            BatchRejectedError: If ``atomic`` is set and an item was rejected;
                the store is unchanged
        """
        if atomic:
            with self._transaction():
                result = self._apply_batch_items(batch)
                if not result.is_complete:
                    raise BatchRejectedError(
                        f"{len(result.rejected)} batch items were rejected", result=result
                    )
        else:
            result = self._apply_batch_items(batch)

        if result.rejected:
            logger.debug(f"Batch skipped {len(result.rejected)} invalid items")
        if result.applied:
            self._commit([(EntityKind.GRAPH, BATCH_EVENT_ID, ChangeOperation.UPDATE)])
        return result

    def _apply_batch_items(self, batch: GraphBatch) -> BatchResult:
        result = BatchResult()

        def record(kind: EntityKind, entity_id, operation: ChangeOperation, outcome: ValidationResult):
            item = BatchItemOutcome(kind, entity_id, operation, outcome)
            (result.applied if outcome.is_valid else result.rejected).append(item)

        for node in batch.add_nodes:
            record(EntityKind.NODE, node.id, ChangeOperation.ADD, self._add_node(node))
        for edge in batch.add_edges:
            record(EntityKind.EDGE, edge.id, ChangeOperation.ADD, self._add_edge(edge))
        for boundary in batch.add_boundaries:
            record(EntityKind.BOUNDARY, boundary.id, ChangeOperation.ADD, self._add_boundary(boundary))

        updates = (
            (EntityKind.NODE, batch.update_nodes, self._nodes, self._update_node),
            (EntityKind.EDGE, batch.update_edges, self._edges, self._update_edge),
            (EntityKind.BOUNDARY, batch.update_boundaries, self._boundaries, self._update_boundary),
        )
        for kind, items, entities, apply in updates:
            for item in items:
                if item.id not in entities:
                    outcome = self._not_found(kind, item.id)
                else:
                    outcome = apply(item.id, item.updates)
                record(kind, item.id, ChangeOperation.UPDATE, outcome)

        for edge_id in batch.delete_edges:
            if edge_id in self._edges:
                self._remove_edge(edge_id)
                record(EntityKind.EDGE, edge_id, ChangeOperation.DELETE, ValidationResult(True))
            else:
                record(EntityKind.EDGE, edge_id, ChangeOperation.DELETE, self._not_found(EntityKind.EDGE, edge_id))
        for node_id in batch.delete_nodes:
            if node_id in self._nodes:
                self._delete_node(node_id)
                record(EntityKind.NODE, node_id, ChangeOperation.DELETE, ValidationResult(True))
            else:
                record(EntityKind.NODE, node_id, ChangeOperation.DELETE, self._not_found(EntityKind.NODE, node_id))
        for boundary_id in batch.delete_boundaries:
            if self._boundaries.pop(boundary_id, None) is not None:
                record(EntityKind.BOUNDARY, boundary_id, ChangeOperation.DELETE, ValidationResult(True))
            else:
                record(
                    EntityKind.BOUNDARY,
                    boundary_id,
                    ChangeOperation.DELETE,
                    self._not_found(EntityKind.BOUNDARY, boundary_id),
                )
        return result

    @contextmanager
    def _transaction(self) -> Generator[None, None, None]:
        """
        Context manager for atomic store operations.

        If an exception escapes the block, entities, indices and metadata are
        restored to their state on entry and the exception is re-raised.
        History and listeners are not touched inside the block.
        """
        nodes = list(self._nodes.values())
        edges = list(self._edges.values())
        boundaries = list(self._boundaries.values())
        metadata = copy.deepcopy(self._metadata)
        try:
            yield
        except Exception:
            self._rebuild(nodes, edges, boundaries)
            self._metadata = metadata
            logger.debug("Rolled back store transaction")
            raise

    # Whole graph

    def get_graph(self) -> Graph:
        """Deep copy of the current state, safe to hand to other readers."""
        return copy.deepcopy(self._current_graph())

    def load_graph(self, graph: Graph, partial: bool = False) -> ValidationResult:
        """
        Replace the whole state with a graph.

        By default the graph is validated as a whole first and nothing changes
        if it has any error. With ``partial`` set, the store is cleared and
        each entity is added through the normal validated path, skipping the
        ones that are rejected. Either way a successful load becomes the new
        history baseline.

        Args:
            graph: Graph to load
            partial: Accept the valid subset of an invalid graph

        Returns:
            ValidationResult: Outcome of validating the graph
        """
        if partial:
            result = self._load_partial(graph)
        else:
            result = self.validator.validate_graph(graph)
            if not result.is_valid:
                logger.info(f"Rejected graph load with {len(result.errors)} errors")
                return result
            self._rebuild(graph.nodes, graph.edges, graph.boundaries)

        self._metadata = copy.deepcopy(graph.metadata)
        self._history.clear()
        self._history.set_current_snapshot(self._current_graph())
        logger.info(
            f"Loaded graph with {len(self._nodes)} nodes, {len(self._edges)} edges, "
            f"{len(self._boundaries)} boundaries"
        )
        self._events.notify(EntityKind.GRAPH, LOAD_EVENT_ID, ChangeOperation.UPDATE)
        return result

    def _load_partial(self, graph: Graph) -> ValidationResult:
        self._rebuild([], [], [])
        result = ValidationResult(is_valid=True)
        for node in graph.nodes:
            result = result.merge(self._add_node(node))
        for edge in graph.edges:
            result = result.merge(self._add_edge(edge))
        for boundary in graph.boundaries:
            result = result.merge(self._add_boundary(boundary))
        graph_issues = self.validator.graph_rules.apply(self._current_graph())
        return result.merge(ValidationResult.from_issues(graph_issues))

    def clear(self) -> None:
        """Remove every entity. The removal is recorded and can be undone."""
        self._rebuild([], [], [])
        self._commit([(EntityKind.GRAPH, CLEAR_EVENT_ID, ChangeOperation.DELETE)])

    def get_stats(self) -> StoreStats:
        return StoreStats(
            node_count=len(self._nodes),
            edge_count=len(self._edges),
            boundary_count=len(self._boundaries),
            nodes_by_type={
                node_type.value: len(ids) for node_type, ids in self._index.nodes_by_type.items()
            },
            history=self._history.get_stats(),
            spatial=self._spatial.get_stats(),
        )

    # History

    def undo(self) -> Optional[Graph]:
        """
        Restore the previous committed state.

        Returns:
            Optional[Graph]: The restored state, or None if there is nothing to undo
        """
        snapshot = self._history.undo()
        if snapshot is None:
            return None
        return self._restore(snapshot, UNDO_EVENT_ID)

    def redo(self) -> Optional[Graph]:
        """
        Re-apply the most recently undone state.

        Returns:
            Optional[Graph]: The restored state, or None if there is nothing to redo
        """
        snapshot = self._history.redo()
        if snapshot is None:
            return None
        return self._restore(snapshot, REDO_EVENT_ID)

    def can_undo(self) -> bool:
        return self._history.can_undo()

    def can_redo(self) -> bool:
        return self._history.can_redo()

    def create_checkpoint(self, name: str) -> None:
        """Tag the current state so that it can be restored by name."""
        self._history.create_checkpoint(name, self._current_graph())

    def restore_to_checkpoint(self, name: str) -> Optional[Graph]:
        """
        Restore the most recent checkpoint with the given name.

        Returns:
            Optional[Graph]: The restored state, or None if there is no such checkpoint
        """
        snapshot = self._history.restore_to_checkpoint(name)
        if snapshot is None:
            return None
        return self._restore(snapshot, CHECKPOINT_EVENT_ID)

    def get_checkpoints(self) -> List[CheckpointInfo]:
        return self._history.get_checkpoints()

    def _restore(self, snapshot: Snapshot, event_id: str) -> Graph:
        # History entries are trusted; they were validated when first committed.
        self._rebuild(snapshot.nodes, snapshot.edges, snapshot.boundaries)
        self._metadata.modified = datetime.now()
        logger.info(f"Restored state via {event_id}")
        self._events.notify(EntityKind.GRAPH, event_id, ChangeOperation.UPDATE)
        return self.get_graph()

    # Listeners

    def add_change_listener(self, listener: ChangeListener) -> None:
        self._events.add_listener(listener)

    def remove_change_listener(self, listener: ChangeListener) -> None:
        self._events.remove_listener(listener)

    # Internal mutation steps: validate and apply, without history or events

    def _add_node(self, node: Node) -> ValidationResult:
        candidate = copy.deepcopy(node)
        result = self.validator.validate_node_integrity(candidate, self, is_new=True)
        if not result.is_valid:
            logger.debug(f"Rejected node {node.id}: {result.error_codes}")
            return result
        self._nodes[candidate.id] = candidate
        self._index.add_node(candidate)
        self._rank[candidate.id] = next(self._ranks)
        self._spatial.insert(candidate)
        return result

    def _update_node(self, node_id: str, updates: Mapping[str, Any]) -> ValidationResult:
        existing = self._nodes.get(node_id)
        if existing is None:
            raise NodeNotFoundError(f"Node {node_id} not found")
        candidate, issues = self._merge_updates(existing, updates, EntityKind.NODE)
        if issues:
            return ValidationResult.from_issues(issues, context={"entity_id": node_id})
        result = self.validator.validate_node_integrity(candidate, self)
        if not result.is_valid:
            logger.debug(f"Rejected update of node {node_id}: {result.error_codes}")
            return result
        self._index.remove_node(existing)
        self._nodes[node_id] = candidate
        self._index.add_node(candidate)
        self._spatial.update(candidate)
        return result

    def _delete_node(self, node_id: str) -> List[Change]:
        incident = self._index.incident(node_id)
        changes: List[Change] = []
        for edge_id in self._in_insertion_order(incident):
            self._remove_edge(edge_id)
            changes.append((EntityKind.EDGE, edge_id, ChangeOperation.DELETE))

        node = self._nodes.pop(node_id)
        del self._rank[node_id]
        self._index.remove_node(node)
        self._spatial.remove(node_id)
        changes.append((EntityKind.NODE, node_id, ChangeOperation.DELETE))
        return changes

    def _add_edge(self, edge: Edge) -> ValidationResult:
        candidate = copy.deepcopy(edge)
        result = self.validator.validate_edge_integrity(candidate, self, is_new=True)
        if not result.is_valid:
            logger.debug(f"Rejected edge {edge.id}: {result.error_codes}")
            return result
        self._edges[candidate.id] = candidate
        self._index.add_edge(candidate)
        self._rank[candidate.id] = next(self._ranks)
        return result

    def _update_edge(self, edge_id: str, updates: Mapping[str, Any]) -> ValidationResult:
        existing = self._edges.get(edge_id)
        if existing is None:
            raise EdgeNotFoundError(f"Edge {edge_id} not found")
        candidate, issues = self._merge_updates(existing, updates, EntityKind.EDGE)
        if issues:
            return ValidationResult.from_issues(issues, context={"entity_id": edge_id})
        result = self.validator.validate_edge_integrity(candidate, self)
        if not result.is_valid:
            logger.debug(f"Rejected update of edge {edge_id}: {result.error_codes}")
            return result
        self._index.remove_edge(existing)
        self._edges[edge_id] = candidate
        self._index.add_edge(candidate)
        return result

    def _remove_edge(self, edge_id: str) -> None:
        edge = self._edges.pop(edge_id)
        del self._rank[edge_id]
        self._index.remove_edge(edge)

    def _add_boundary(self, boundary: Boundary) -> ValidationResult:
        candidate = copy.deepcopy(boundary)
        result = self.validator.validate_boundary_integrity(candidate, self, is_new=True)
        if not result.is_valid:
            logger.debug(f"Rejected boundary {boundary.id}: {result.error_codes}")
            return result
        self._boundaries[candidate.id] = candidate
        return result

    def _update_boundary(self, boundary_id: str, updates: Mapping[str, Any]) -> ValidationResult:
        existing = self._boundaries.get(boundary_id)
        if existing is None:
            raise BoundaryNotFoundError(f"Boundary {boundary_id} not found")
        candidate, issues = self._merge_updates(existing, updates, EntityKind.BOUNDARY)
        if issues:
            return ValidationResult.from_issues(issues, context={"entity_id": boundary_id})
        result = self.validator.validate_boundary_integrity(candidate, self)
        if not result.is_valid:
            logger.debug(f"Rejected update of boundary {boundary_id}: {result.error_codes}")
            return result
        self._boundaries[boundary_id] = candidate
        return result

    @staticmethod
    def _merge_updates(entity, updates: Mapping[str, Any], kind: EntityKind):
        """Synthesize the would-be entity of a partial update."""
        allowed = {f.name for f in fields(entity)}
        issues: List[ValidationIssue] = []
        for name in updates:
            if name not in allowed:
                issues.append(
                    error("UPDATE_UNKNOWN_FIELD", f"Unknown {kind.value} field '{name}'", entity.id, kind)
                )
        if "id" in updates and updates["id"] != entity.id:
            issues.append(error("UPDATE_ID_CHANGE", f"The id of {entity.id} cannot change", entity.id, kind))
        if issues:
            return None, issues
        return replace(entity, **copy.deepcopy(dict(updates))), []

    @staticmethod
    def _not_found(kind: EntityKind, entity_id: str) -> ValidationResult:
        issue = error(f"{kind.name}_NOT_FOUND", f"{kind.value.capitalize()} {entity_id} not found", entity_id, kind)
        return ValidationResult.from_issues([issue])

    # State plumbing

    def _current_graph(self) -> Graph:
        return Graph(
            nodes=list(self._nodes.values()),
            edges=list(self._edges.values()),
            boundaries=list(self._boundaries.values()),
            metadata=self._metadata,
        )

    def _rebuild(self, nodes: List[Node], edges: List[Edge], boundaries: List[Boundary]) -> None:
        """Replace all entities with copies of the given ones and rebuild every index."""
        self._nodes = {node.id: copy.deepcopy(node) for node in nodes}
        self._edges = {edge.id: copy.deepcopy(edge) for edge in edges}
        self._boundaries = {boundary.id: copy.deepcopy(boundary) for boundary in boundaries}
        self._rank = {entity_id: next(self._ranks) for entity_id in itertools.chain(self._nodes, self._edges)}
        self._index.rebuild(self._nodes.values(), self._edges.values())
        self._spatial.clear()
        for node in self._nodes.values():
            self._spatial.insert(node)

    def _in_insertion_order(self, ids: Iterable[str]) -> List[str]:
        """Sort a small id set from the indices into store insertion order."""
        return sorted(ids, key=self._rank.__getitem__)

    def _commit(self, changes: List[Change]) -> None:
        self._metadata.modified = datetime.now()
        self._history.snapshot(self._current_graph())
        for kind, entity_id, operation in changes:
            logger.debug(f"Committed {operation.value} of {kind.value} {entity_id}")
            self._events.notify(kind, entity_id, operation)

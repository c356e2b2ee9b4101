"""
Grouped mutations applied to a store as one logical operation.

A batch is applied in a fixed order: adds (nodes, edges, boundaries), then
updates (nodes, edges, boundaries), then deletes (edges, nodes, boundaries).
Edges are added after nodes so that they can reference nodes of the same
batch, and deleted before nodes so that explicit edge deletions are not
pre-empted by cascades.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..enums import ChangeOperation, EntityKind
from ..models import Boundary, Edge, Node
from ...utils.validation import ValidationIssue, ValidationResult


@dataclass
class EntityUpdate:
    """Partial update of one entity: field name to new value."""

    id: str
    updates: Dict[str, Any]


@dataclass
class GraphBatch:
    """Add, update and delete lists for every entity kind."""

    add_nodes: List[Node] = field(default_factory=list)
    update_nodes: List[EntityUpdate] = field(default_factory=list)
    delete_nodes: List[str] = field(default_factory=list)
    add_edges: List[Edge] = field(default_factory=list)
    update_edges: List[EntityUpdate] = field(default_factory=list)
    delete_edges: List[str] = field(default_factory=list)
    add_boundaries: List[Boundary] = field(default_factory=list)
    update_boundaries: List[EntityUpdate] = field(default_factory=list)
    delete_boundaries: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not any(
            (
                self.add_nodes,
                self.update_nodes,
                self.delete_nodes,
                self.add_edges,
                self.update_edges,
                self.delete_edges,
                self.add_boundaries,
                self.update_boundaries,
                self.delete_boundaries,
            )
        )


@dataclass
class BatchItemOutcome:
    """What happened to one batch item."""

    kind: EntityKind
    id: Optional[str]
    operation: ChangeOperation
    result: ValidationResult


@dataclass
class BatchResult:
    """
    Outcome of applying a batch.

    Rejected items were skipped; the rest of the batch was still applied
    unless the batch was atomic.

    Attributes:
        applied (List[BatchItemOutcome]): Items that were committed
        rejected (List[BatchItemOutcome]): Items that were skipped
    """

    applied: List[BatchItemOutcome] = field(default_factory=list)
    rejected: List[BatchItemOutcome] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.rejected

    @property
    def errors(self) -> List[ValidationIssue]:
        return [issue for outcome in self.rejected for issue in outcome.result.errors]

    @property
    def warnings(self) -> List[ValidationIssue]:
        outcomes = self.applied + self.rejected
        return [issue for outcome in outcomes for issue in outcome.result.warnings]

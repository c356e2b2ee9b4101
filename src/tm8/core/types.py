"""
Shared type definitions for the diagram graph core.

This module holds the type aliases and protocols that several packages refer to,
so that the validator can depend on a store-shaped context without importing the
store itself.
"""

from typing import TYPE_CHECKING, Callable, Dict, Optional, Protocol, Union

from .enums import ChangeOperation, EntityKind

if TYPE_CHECKING:
    from .models import Boundary, Edge, Node

# Variant-valued property payload; nested mappings are allowed.
PropertyValue = Union[str, int, float, bool, Dict[str, "PropertyValue"]]
PropertyBag = Dict[str, PropertyValue]

ChangeListener = Callable[[EntityKind, str, ChangeOperation], None]


class GraphContext(Protocol):
    """
    Read-only view of a store used for referential validation.

    The validator only needs existence checks and node lookup, so any object
    exposing these methods can serve as validation context.
    """

    def get_node(self, node_id: str) -> Optional["Node"]: ...

    def get_edge(self, edge_id: str) -> Optional["Edge"]: ...

    def get_boundary(self, boundary_id: str) -> Optional["Boundary"]: ...

    def has_entity(self, entity_id: str) -> bool: ...

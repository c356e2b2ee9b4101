"""
Enumerations for diagram entities and change notifications.

This module defines the enumeration types used throughout the system to classify
the elements of a threat-model diagram and the changes applied to them.

The enumerations are organized into three groups:
- NodeType, EdgeType, BoundaryType: Taxonomy of diagram elements
- EntityKind, ChangeOperation: Vocabulary of change notifications
- Severity: Classification of validation findings
"""

from enum import Enum


class NodeType(Enum):
    """Kinds of diagram nodes."""

    PROCESS = "process"  # A running process or component
    DATASTORE = "datastore"  # Persistent storage
    EXTERNAL_ENTITY = "external-entity"  # Actor outside the system
    SERVICE = "service"  # Hosted service


class EdgeType(Enum):
    """Transport used by a data flow."""

    HTTPS = "https"
    GRPC = "grpc"


class BoundaryType(Enum):
    """Kinds of rectangular regions grouping nodes."""

    TRUST_BOUNDARY = "trust-boundary"
    NETWORK_ZONE = "network-zone"


class EntityKind(Enum):
    """Kind of entity referenced by a change notification or validation issue."""

    NODE = "node"
    EDGE = "edge"
    BOUNDARY = "boundary"
    GRAPH = "graph"


class ChangeOperation(Enum):
    """Operation carried by a change notification."""

    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"


class Severity(Enum):
    """
    Severity of a validation issue.

    Errors block a mutation; warnings are advisory and never block.
    """

    ERROR = "error"
    WARNING = "warning"

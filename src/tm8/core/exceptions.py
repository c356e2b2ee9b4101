"""
Custom exceptions for the diagram graph core.

This module defines the hierarchy of custom exceptions used throughout the system
to handle programming errors in a structured and meaningful way. Rejected
mutations are not exceptions: they are reported through ValidationResult values.
Exceptions are reserved for contract violations such as addressing an entity
that does not exist or passing malformed configuration.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .graph.batch import BatchResult


class ValidationError(Exception):
    """
    Raised when structural data validation fails.

    This exception is raised when input data cannot even be turned into model
    objects, such as a graph dictionary missing its top-level collections.

    Examples:
        * Graph dictionary without a "nodes" list
        * Position given as a string
        * Schema validation failures of a graph envelope
    """

    def __str__(self) -> str:
        """Format validation error message."""
        return f"Validation Error: {super().__str__()}"


class GraphOperationError(Exception):
    """
    Raised when graph operations fail.

    This exception is raised when operations on the graph structure encounter
    errors that cannot be reported as validation issues.

    Examples:
        * Atomic batch with rejected items
        * Graph integrity violations
    """

    def __str__(self) -> str:
        """Format graph operation error message."""
        return f"Graph Operation Error: {super().__str__()}"


class BatchRejectedError(GraphOperationError):
    """
    Raised when an atomic batch contains rejected items.

    The store has already been rolled back when this is raised. The per-item
    outcome is available on the ``result`` attribute.
    """

    def __init__(self, message: str, result: Optional["BatchResult"] = None):
        super().__init__(message)
        self.result = result


class ConfigurationError(Exception):
    """
    Raised when configuration is invalid.

    Examples:
        * Non-positive history size
        * Spatial bounds with zero width
        * Quadtree capacity below one
    """


class ResourceNotFoundError(Exception):
    """
    Raised when a requested resource is not found.

    This exception is raised when attempting to update or delete an entity
    that does not exist in the store.
    """


class NodeNotFoundError(ResourceNotFoundError):
    """
    Raised when a requested node is not found.

    Examples:
        * Node update for missing node
        * Node deletion for non-existent node
    """


class EdgeNotFoundError(ResourceNotFoundError):
    """
    Raised when a requested edge is not found.

    Examples:
        * Edge update for missing edge
        * Edge deletion for non-existent edge
    """


class BoundaryNotFoundError(ResourceNotFoundError):
    """
    Raised when a requested boundary is not found.

    Examples:
        * Boundary update for missing boundary
        * Boundary deletion for non-existent boundary
    """

"""
Schema Validation Components for the TM8 Graph Core

This module provides JSON schema-based validation of entity property bags.
It supports:
- Registration of JSON schemas for node, edge, and boundary types
- Validation of an entity's properties against the schema of its type
- A rule adapter so that schema checks run inside a GraphValidator

Entities whose type has no registered schema always pass.
"""

from typing import Any, Dict, List, Optional, Union

from jsonschema import ValidationError as JsonSchemaError
from jsonschema import validate as json_validate

from ...core.enums import BoundaryType, EdgeType, EntityKind, NodeType
from ...core.models import Boundary, Edge, Node
from ...core.types import GraphContext
from .base import ValidationIssue, ValidationResult, ValidationRule, error

EntityTypeKey = Union[NodeType, EdgeType, BoundaryType]
Entity = Union[Node, Edge, Boundary]

_KIND_BY_ENUM = {
    NodeType: EntityKind.NODE,
    EdgeType: EntityKind.EDGE,
    BoundaryType: EntityKind.BOUNDARY,
}


class PropertySchemaValidator:
    """
    JSON Schema-based validator for entity properties.

    This class manages JSON schemas for the types of nodes, edges and
    boundaries. Each schema describes the ``properties`` bag of entities of
    that type.

    Attributes:
        schemas (Dict[EntityTypeKey, Dict[str, Any]]): Dictionary mapping
            entity types to their JSON schemas
    """

    def __init__(self):
        self.schemas: Dict[EntityTypeKey, Dict[str, Any]] = {}

    def register_schema(self, entity_type: EntityTypeKey, schema: Dict[str, Any]) -> None:
        """
        Register a JSON schema for an entity type.

        Args:
            entity_type: NodeType, EdgeType or BoundaryType member
            schema: JSON schema definition as a dictionary

        Raises:
            TypeError: If entity_type is not a member of one of the entity type enums

        Example:
            >>> validator = PropertySchemaValidator()
            >>> validator.register_schema(NodeType.DATASTORE, {
            ...     "type": "object",
            ...     "properties": {"encrypted": {"type": "boolean"}},
            ...     "required": ["encrypted"],
            ... })
        """
        if type(entity_type) not in _KIND_BY_ENUM:
            raise TypeError(f"Unsupported entity type for schema registration: {entity_type!r}")
        self.schemas[entity_type] = schema

    def get_schema(self, entity_type: Any) -> Optional[Dict[str, Any]]:
        if type(entity_type) not in _KIND_BY_ENUM:
            return None
        return self.schemas.get(entity_type)

    def check(self, entity: Entity) -> List[ValidationIssue]:
        """
        Validate an entity's properties against the schema of its type.

        Args:
            entity: Node, edge or boundary to validate

        Returns:
            List[ValidationIssue]: A single error issue on mismatch, else empty
        """
        schema = self.get_schema(entity.type)
        if schema is None:
            return []

        kind = _KIND_BY_ENUM[type(entity.type)]
        try:
            json_validate(instance=entity.properties or {}, schema=schema)
        except JsonSchemaError as e:
            return [
                error(
                    f"{kind.name}_PROPERTIES_SCHEMA",
                    f"Properties do not match schema for {entity.type.value}: {e.message}",
                    entity.id,
                    kind,
                )
            ]
        return []

    def validate(self, entity: Entity) -> ValidationResult:
        """Validate an entity's properties and wrap the outcome in a result."""
        return ValidationResult.from_issues(self.check(entity), context={"entity_id": entity.id})


class PropertySchemaRule(ValidationRule):
    """Adapter running a PropertySchemaValidator as part of a rule set."""

    name = "property_schema"

    def __init__(self, schema_validator: PropertySchemaValidator):
        self.schema_validator = schema_validator

    def check(self, entity: Entity, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        return self.schema_validator.check(entity)

"""
Graph validation engine.

The GraphValidator holds one ordered rule set per kind of item and applies
them to single entities (optionally against a store, for referential checks)
or to a whole graph. It never raises for invalid data; every outcome is a
list of coded issues.
"""

import logging
from typing import List, Optional, Union

from ...core.enums import EntityKind
from ...core.models import Boundary, Edge, Graph, Node
from ...core.types import GraphContext
from .base import RuleFunc, ValidationIssue, ValidationReport, ValidationResult, ValidationRule
from .rules import (
    BoundaryUniquenessRule,
    EdgeUniquenessRule,
    NodeUniquenessRule,
    default_boundary_rules,
    default_edge_rules,
    default_graph_rules,
    default_node_rules,
)
from .ruleset import ValidationRuleSet
from .schema import PropertySchemaRule, PropertySchemaValidator

logger = logging.getLogger(__name__)

Rule = Union[ValidationRule, RuleFunc]


class GraphValidator:
    """
    Rule-based validator for nodes, edges, boundaries and graphs.

    Rule sets run in order and all issues are collected. Uniqueness rules are
    kept apart from the regular rule sets because they only apply to entities
    that are about to be added to a store.

    Attributes:
        node_rules (ValidationRuleSet): Rules applied to nodes
        edge_rules (ValidationRuleSet): Rules applied to edges
        boundary_rules (ValidationRuleSet): Rules applied to boundaries
        graph_rules (ValidationRuleSet): Rules applied to whole graphs
        schema_validator (Optional[PropertySchemaValidator]): Property schema
            registry, if schema checks are enabled
    """

    def __init__(self, schema_validator: Optional[PropertySchemaValidator] = None):
        """
        Initialize a validator with the built-in rules.

        Args:
            schema_validator: Optional registry of property schemas. When given,
                a schema rule is appended to the node, edge and boundary rule sets.
        """
        self.node_rules = ValidationRuleSet(EntityKind.NODE, default_node_rules())
        self.edge_rules = ValidationRuleSet(EntityKind.EDGE, default_edge_rules())
        self.boundary_rules = ValidationRuleSet(EntityKind.BOUNDARY, default_boundary_rules())
        self.graph_rules = ValidationRuleSet(EntityKind.GRAPH, default_graph_rules())

        self._uniqueness_rules = {
            EntityKind.NODE: ValidationRuleSet(EntityKind.NODE, [NodeUniquenessRule()]),
            EntityKind.EDGE: ValidationRuleSet(EntityKind.EDGE, [EdgeUniquenessRule()]),
            EntityKind.BOUNDARY: ValidationRuleSet(EntityKind.BOUNDARY, [BoundaryUniquenessRule()]),
        }

        self.schema_validator = schema_validator
        if schema_validator is not None:
            schema_rule = PropertySchemaRule(schema_validator)
            for rule_set in (self.node_rules, self.edge_rules, self.boundary_rules):
                rule_set.add_rule(schema_rule)

    # Rule configuration

    def add_node_rule(self, rule: Rule) -> None:
        self.node_rules.add_rule(rule)

    def add_edge_rule(self, rule: Rule) -> None:
        self.edge_rules.add_rule(rule)

    def add_boundary_rule(self, rule: Rule) -> None:
        self.boundary_rules.add_rule(rule)

    def add_graph_rule(self, rule: Rule) -> None:
        self.graph_rules.add_rule(rule)

    # Single entities

    def validate_node(self, node: Node, store: Optional[GraphContext] = None) -> bool:
        """Whether the node produces no error-severity issue."""
        return self.validate_node_integrity(node, store).is_valid

    def validate_edge(self, edge: Edge, store: Optional[GraphContext] = None) -> bool:
        """Whether the edge produces no error-severity issue."""
        return self.validate_edge_integrity(edge, store).is_valid

    def validate_boundary(self, boundary: Boundary, store: Optional[GraphContext] = None) -> bool:
        """Whether the boundary produces no error-severity issue."""
        return self.validate_boundary_integrity(boundary, store).is_valid

    def validate_node_integrity(
        self, node: Node, store: Optional[GraphContext] = None, is_new: bool = False
    ) -> ValidationResult:
        """
        Validate a node and return all issues.

        Args:
            node: Node to validate
            store: Optional store context
            is_new: Also reject ids already present in the store

        Returns:
            ValidationResult: Errors and warnings for the node
        """
        return self._validate_entity(EntityKind.NODE, self.node_rules, node, store, is_new)

    def validate_edge_integrity(
        self, edge: Edge, store: Optional[GraphContext] = None, is_new: bool = False
    ) -> ValidationResult:
        """
        Validate an edge and return all issues.

        Referential checks (EDGE_SOURCE_NOT_FOUND, EDGE_TARGET_NOT_FOUND) only
        run when a store is given.

        Args:
            edge: Edge to validate
            store: Optional store context
            is_new: Also reject ids already present in the store

        Returns:
            ValidationResult: Errors and warnings for the edge
        """
        return self._validate_entity(EntityKind.EDGE, self.edge_rules, edge, store, is_new)

    def validate_boundary_integrity(
        self, boundary: Boundary, store: Optional[GraphContext] = None, is_new: bool = False
    ) -> ValidationResult:
        """
        Validate a boundary and return all issues.

        Args:
            boundary: Boundary to validate
            store: Optional store context
            is_new: Also reject ids already present in the store

        Returns:
            ValidationResult: Errors and warnings for the boundary
        """
        return self._validate_entity(EntityKind.BOUNDARY, self.boundary_rules, boundary, store, is_new)

    def _validate_entity(
        self,
        kind: EntityKind,
        rule_set: ValidationRuleSet,
        entity,
        store: Optional[GraphContext],
        is_new: bool,
    ) -> ValidationResult:
        issues = rule_set.apply(entity, store)
        if is_new and store is not None:
            issues.extend(self._uniqueness_rules[kind].apply(entity, store))
        return ValidationResult.from_issues(
            issues, context={"entity_id": getattr(entity, "id", None), "entity_type": kind.value}
        )

    # Whole graphs

    def validate_graph(self, graph: Graph) -> ValidationResult:
        """
        Validate every entity of a graph and the graph as a whole.

        Entities are validated without store context; referential integrity is
        covered by the graph-level GRAPH_ORPHANED_EDGE rule instead.

        Args:
            graph: Graph to validate

        Returns:
            ValidationResult: All errors and warnings, entity issues first
        """
        report = self.get_validation_report(graph)
        issues: List[ValidationIssue] = []
        for per_entity in (report.node_issues, report.edge_issues, report.boundary_issues):
            for entity_issues in per_entity.values():
                issues.extend(entity_issues)
        issues.extend(report.graph_issues)

        result = ValidationResult.from_issues(
            issues,
            context={
                "nodes": len(graph.nodes),
                "edges": len(graph.edges),
                "boundaries": len(graph.boundaries),
            },
        )
        if not result.is_valid:
            logger.debug(f"Graph validation found {len(result.errors)} errors")
        return result

    def get_validation_report(self, graph: Graph) -> ValidationReport:
        """
        Build a per-entity validation report for a graph.

        Args:
            graph: Graph to validate

        Returns:
            ValidationReport: Summary counts, issues grouped by entity id,
                and graph-level issues
        """
        report = ValidationReport()
        sections = (
            (graph.nodes, self.node_rules, report.node_issues),
            (graph.edges, self.edge_rules, report.edge_issues),
            (graph.boundaries, self.boundary_rules, report.boundary_issues),
        )
        for entities, rule_set, target in sections:
            for entity in entities:
                issues = rule_set.apply(entity)
                if issues:
                    key = entity.id if isinstance(entity.id, str) else repr(entity.id)
                    target.setdefault(key, []).extend(issues)

        report.graph_issues = self.graph_rules.apply(graph)

        all_issues = list(report.graph_issues)
        for section in (report.node_issues, report.edge_issues, report.boundary_issues):
            for issues in section.values():
                all_issues.extend(issues)
        report.total_errors = sum(1 for issue in all_issues if issue.is_error)
        report.total_warnings = len(all_issues) - report.total_errors
        return report

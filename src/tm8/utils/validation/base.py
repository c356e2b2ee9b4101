"""
Base Validation Components for the TM8 Graph Core

This module provides the foundational validation components used throughout the validation system.
It includes the ValidationIssue record produced by rules, the ValidationResult class returned by
every validating operation, the ValidationReport produced for whole graphs, and the ValidationRule
hierarchy from which concrete rules are built.

The module implements a flexible and extensible validation framework that supports:
- Coded issues with error or warning severity
- Results carrying errors, warnings, and context
- Per-entity issue reports for diagnostics
- Custom validation functions wrapped as rules

These components form the building blocks of the GraphValidator.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from ...core.enums import EntityKind, Severity
from ...core.types import GraphContext


@dataclass
class ValidationIssue:
    """
    A single validation finding.

    Attributes:
        severity (Severity): ERROR blocks a mutation, WARNING is advisory
        code (str): Stable machine-readable code such as "EDGE_NO_TARGETS"
        message (str): Human-readable description
        entity_id (Optional[str]): Id of the offending entity, if any
        entity_type (Optional[EntityKind]): Kind of the offending entity, if any
    """

    severity: Severity
    code: str
    message: str
    entity_id: Optional[str] = None
    entity_type: Optional[EntityKind] = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


@dataclass
class ValidationResult:
    """
    Container for validation results providing comprehensive validation outcome details.

    Attributes:
        is_valid (bool): Whether the validation passed successfully
        errors (List[ValidationIssue]): Error-severity issues
        warnings (List[ValidationIssue]): Warning-severity issues
        context (Optional[Dict[str, Any]]): Additional context about the validation
    """

    is_valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    context: Optional[Dict[str, Any]] = None

    @classmethod
    def from_issues(
        cls, issues: Iterable[ValidationIssue], context: Optional[Dict[str, Any]] = None
    ) -> "ValidationResult":
        """Split a flat issue list into errors and warnings."""
        issues = list(issues)
        errors = [issue for issue in issues if issue.is_error]
        warnings = [issue for issue in issues if not issue.is_error]
        return cls(is_valid=not errors, errors=errors, warnings=warnings, context=context)

    @property
    def issues(self) -> List[ValidationIssue]:
        return self.errors + self.warnings

    @property
    def error_codes(self) -> List[str]:
        return [issue.code for issue in self.errors]

    @property
    def warning_codes(self) -> List[str]:
        return [issue.code for issue in self.warnings]

    def has_code(self, code: str) -> bool:
        """Whether any error or warning carries the given code."""
        return any(issue.code == code for issue in self.issues)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Combine two results; context entries of ``other`` win on conflict."""
        context = None
        if self.context or other.context:
            context = {**(self.context or {}), **(other.context or {})}
        return ValidationResult(
            is_valid=self.is_valid and other.is_valid,
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings,
            context=context,
        )


@dataclass
class ValidationReport:
    """
    Detailed validation outcome of a whole graph.

    Entity maps only contain entities that produced at least one issue,
    in graph order.

    Attributes:
        total_errors (int): Number of error-severity issues
        total_warnings (int): Number of warning-severity issues
        node_issues (Dict[str, List[ValidationIssue]]): Issues per node id
        edge_issues (Dict[str, List[ValidationIssue]]): Issues per edge id
        boundary_issues (Dict[str, List[ValidationIssue]]): Issues per boundary id
        graph_issues (List[ValidationIssue]): Graph-level issues
    """

    total_errors: int = 0
    total_warnings: int = 0
    node_issues: Dict[str, List[ValidationIssue]] = field(default_factory=dict)
    edge_issues: Dict[str, List[ValidationIssue]] = field(default_factory=dict)
    boundary_issues: Dict[str, List[ValidationIssue]] = field(default_factory=dict)
    graph_issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.total_errors == 0

    @property
    def summary(self) -> Dict[str, Any]:
        return {
            "total_errors": self.total_errors,
            "total_warnings": self.total_warnings,
            "is_valid": self.is_valid,
        }


RuleFunc = Callable[[Any, Optional[GraphContext]], List[ValidationIssue]]


class ValidationRule:
    """
    Base class for all validation rules in the system.

    A rule inspects one entity (or a whole graph) and returns the issues it
    finds. Rules never raise for invalid input; an exception escaping a rule
    is treated as a fault of the rule itself.

    Attributes:
        name (str): Name used in logs when the rule faults
    """

    name: str = "rule"

    def check(self, item: Any, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        """
        Validate an item against the rule.

        Args:
            item: Entity or graph to inspect
            context: Optional store used for referential checks

        Returns:
            List[ValidationIssue]: Issues found, empty when the item passes

        Raises:
            NotImplementedError: If the subclass doesn't implement this method
        """
        raise NotImplementedError("Validation rules must implement check()")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class CustomRule(ValidationRule):
    """
    Rule for custom validation functions.

    This rule allows for arbitrary validation logic to be implemented
    through a callable taking the item and the optional store context.

    Attributes:
        rule_func: Function returning the list of issues for an item
    """

    def __init__(self, rule_func: RuleFunc, name: Optional[str] = None):
        """
        Initialize a custom validation rule.

        Args:
            rule_func: Function that takes an item and context and returns issues
            name: Name used in logs, defaults to the function name
        """
        self.rule_func = rule_func
        self.name = name or getattr(rule_func, "__name__", "custom_rule")

    def check(self, item: Any, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        return list(self.rule_func(item, context))


def error(
    code: str,
    message: str,
    entity_id: Optional[str] = None,
    entity_type: Optional[EntityKind] = None,
) -> ValidationIssue:
    """Build an error-severity issue."""
    return ValidationIssue(Severity.ERROR, code, message, entity_id, entity_type)


def warning(
    code: str,
    message: str,
    entity_id: Optional[str] = None,
    entity_type: Optional[EntityKind] = None,
) -> ValidationIssue:
    """Build a warning-severity issue."""
    return ValidationIssue(Severity.WARNING, code, message, entity_id, entity_type)

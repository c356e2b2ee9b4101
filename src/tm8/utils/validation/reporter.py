"""
Validation Reporter Components for the TM8 Graph Core

This module provides components for formatting and outputting validation results
in various formats. It supports:
- Human-readable string formatting of results and graph reports
- Dictionary conversion
- JSON serialization

The reporter components help in presenting validation outcomes to diagnostics
panels and logs in a clear and consistent manner.
"""

import json
from typing import Any, Dict, List

from .base import ValidationIssue, ValidationReport, ValidationResult


def _issue_to_dict(issue: ValidationIssue) -> Dict[str, Any]:
    return {
        "severity": issue.severity.value,
        "code": issue.code,
        "message": issue.message,
        "entity_id": issue.entity_id,
        "entity_type": issue.entity_type.value if issue.entity_type else None,
    }


def _issues_to_dicts(issues: List[ValidationIssue]) -> List[Dict[str, Any]]:
    return [_issue_to_dict(issue) for issue in issues]


class ValidationReporter:
    """
    Reporter for formatting and outputting validation results.

    This class provides static methods for converting ValidationResult and
    ValidationReport instances into various formats suitable for different use
    cases, such as human-readable output, dictionary representation, or JSON
    serialization.
    """

    @staticmethod
    def format_result(result: ValidationResult) -> str:
        """
        Format a validation result as a human-readable string.

        Args:
            result: ValidationResult instance to format

        Returns:
            str: Formatted string representation of the validation result

        Example:
            >>> print(ValidationReporter.format_result(store.add_edge(edge)))
            Validation failed with the following errors:
              - [EDGE_NO_TARGETS] Edge must have at least one target
        """
        lines = []

        if not result.is_valid:
            lines.append("Validation failed with the following errors:")
            for issue in result.errors:
                lines.append(f"  - {issue}")

        if result.warnings:
            lines.append("\nWarnings:")
            for issue in result.warnings:
                lines.append(f"  - {issue}")

        if result.context:
            lines.append("\nContext:")
            for key, value in result.context.items():
                lines.append(f"  {key}: {value}")

        if not lines:
            lines.append("Validation passed successfully")

        return "\n".join(lines)

    @staticmethod
    def format_report(report: ValidationReport) -> str:
        """
        Format a graph validation report as a human-readable string.

        Args:
            report: ValidationReport instance to format

        Returns:
            str: Summary line followed by issues grouped per entity
        """
        status = "valid" if report.is_valid else "invalid"
        lines = [f"Graph is {status}: {report.total_errors} errors, {report.total_warnings} warnings"]

        sections = (
            ("Node", report.node_issues),
            ("Edge", report.edge_issues),
            ("Boundary", report.boundary_issues),
        )
        for label, per_entity in sections:
            for entity_id, issues in per_entity.items():
                lines.append(f"{label} {entity_id}:")
                lines.extend(f"  - {issue}" for issue in issues)

        if report.graph_issues:
            lines.append("Graph:")
            lines.extend(f"  - {issue}" for issue in report.graph_issues)

        return "\n".join(lines)

    @staticmethod
    def to_dict(result: ValidationResult) -> Dict[str, Any]:
        """
        Convert a validation result to a dictionary.

        Args:
            result: ValidationResult instance to convert

        Returns:
            Dict[str, Any]: Dictionary representation of the validation result
        """
        return {
            "is_valid": result.is_valid,
            "errors": _issues_to_dicts(result.errors),
            "warnings": _issues_to_dicts(result.warnings),
            "context": result.context,
        }

    @staticmethod
    def report_to_dict(report: ValidationReport) -> Dict[str, Any]:
        """Convert a graph validation report to a dictionary."""
        return {
            "summary": report.summary,
            "node_issues": {key: _issues_to_dicts(value) for key, value in report.node_issues.items()},
            "edge_issues": {key: _issues_to_dicts(value) for key, value in report.edge_issues.items()},
            "boundary_issues": {
                key: _issues_to_dicts(value) for key, value in report.boundary_issues.items()
            },
            "graph_issues": _issues_to_dicts(report.graph_issues),
        }

    @staticmethod
    def to_json(result: ValidationResult) -> str:
        """
        Convert a validation result to JSON.

        Args:
            result: ValidationResult instance to convert

        Returns:
            str: Indented JSON string representation of the validation result
        """
        return json.dumps(ValidationReporter.to_dict(result), indent=2, default=str)

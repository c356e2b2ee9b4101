"""
Validation Package for the TM8 Graph Core

This package provides the rule-based validation of diagram entities and whole
graphs, JSON schema validation of entity properties, and reporting helpers.
"""

from .base import (
    CustomRule,
    ValidationIssue,
    ValidationReport,
    ValidationResult,
    ValidationRule,
)
from .reporter import ValidationReporter
from .ruleset import VALIDATOR_ERROR, ValidationRuleSet
from .schema import PropertySchemaRule, PropertySchemaValidator
from .validator import GraphValidator

__all__ = [
    "ValidationIssue",
    "ValidationResult",
    "ValidationReport",
    "ValidationRule",
    "CustomRule",
    "ValidationRuleSet",
    "VALIDATOR_ERROR",
    "PropertySchemaValidator",
    "PropertySchemaRule",
    "ValidationReporter",
    "GraphValidator",
]

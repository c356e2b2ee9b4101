"""
Rule Set Validation Components for the TM8 Graph Core

This module provides the ordered collection in which validation rules are
registered and applied. Rules run in registration order and their issues are
concatenated. A rule that raises is converted into a VALIDATOR_ERROR issue so
that one faulty rule can never abort validation of an entity.
"""

import logging
from typing import Any, List, Optional, Union

from ...core.enums import EntityKind
from ...core.types import GraphContext
from .base import CustomRule, RuleFunc, ValidationIssue, ValidationRule, error

logger = logging.getLogger(__name__)

VALIDATOR_ERROR = "VALIDATOR_ERROR"


class ValidationRuleSet:
    """
    Ordered collection of validation rules for one kind of item.

    Attributes:
        kind (EntityKind): Kind of item the rules inspect
        rules (List[ValidationRule]): Rules in application order
    """

    def __init__(self, kind: EntityKind, rules: Optional[List[ValidationRule]] = None):
        self.kind = kind
        self.rules: List[ValidationRule] = list(rules or [])

    def add_rule(self, rule: Union[ValidationRule, RuleFunc]) -> None:
        """
        Append a rule to the set.

        Plain callables are wrapped in a CustomRule.

        Args:
            rule: ValidationRule instance or function returning issues
        """
        if not isinstance(rule, ValidationRule):
            rule = CustomRule(rule)
        self.rules.append(rule)

    def apply(self, item: Any, context: Optional[GraphContext] = None) -> List[ValidationIssue]:
        """
        Run every rule against an item.

        Args:
            item: Entity or graph to inspect
            context: Optional store used for referential checks

        Returns:
            List[ValidationIssue]: Issues of all rules in rule order
        """
        issues: List[ValidationIssue] = []
        for rule in self.rules:
            try:
                issues.extend(rule.check(item, context))
            except Exception as e:
                logger.error(f"Validation rule {rule.name} failed on {self.kind.value}: {e}")
                issues.append(
                    error(
                        VALIDATOR_ERROR,
                        f"Validation error: {e}",
                        entity_id=getattr(item, "id", None),
                        entity_type=None if self.kind is EntityKind.GRAPH else self.kind,
                    )
                )
        return issues

    def __len__(self) -> int:
        return len(self.rules)

"""Validation rules: rule models, rule sources, and the rule cache."""

from linebuild.rules.cache import RuleCache
from linebuild.rules.checks import (
    RuleDefinitionIssue,
    validate_rule_definition,
    validate_rule_definitions,
)
from linebuild.rules.models import (
    Operator,
    RuleCondition,
    RuleType,
    SemanticRule,
    StructuredRule,
    ValidationRule,
)
from linebuild.rules.source import JsonFileRuleSource, RuleSource, StaticRuleSource

__all__ = [
    "JsonFileRuleSource",
    "Operator",
    "RuleCache",
    "RuleCondition",
    "RuleDefinitionIssue",
    "RuleSource",
    "RuleType",
    "SemanticRule",
    "StaticRuleSource",
    "StructuredRule",
    "ValidationRule",
    "validate_rule_definition",
    "validate_rule_definitions",
]

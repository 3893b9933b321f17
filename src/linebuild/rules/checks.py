"""Rule definition checks.

Static checks over rule definitions, independent of any workflow. A rule that
fails these checks still loads and still evaluates (as a rule error); these
checks let the rule author find the problem before a validation run does.
"""

from pydantic import BaseModel, ConfigDict

from linebuild.rules.models import Operator, SemanticRule, StructuredRule, ValidationRule


class RuleDefinitionIssue(BaseModel):
    """A problem found in a rule definition."""

    rule_id: str
    message: str

    model_config = ConfigDict(frozen=True)


def is_number(value: object) -> bool:
    """True for int and float values. Booleans are not numbers here."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def validate_rule_definition(rule: ValidationRule) -> list[RuleDefinitionIssue]:
    """Check one rule definition.

    Returns:
        Issues found (empty if the rule is well-formed)
    """
    issues: list[str] = []

    if not rule.id.strip() or not rule.name.strip():
        issues.append("Rule missing required fields (id, name)")

    if isinstance(rule, StructuredRule):
        condition = rule.condition
        if not condition.field.strip():
            issues.append("Rule condition has an empty field path")
        elif any(not segment for segment in condition.field.split(".")):
            issues.append(f"Rule condition field path is malformed: {condition.field!r}")

        if condition.operator == Operator.IN and not isinstance(condition.value, list):
            issues.append(
                f"'in' operator requires an array value, got {type(condition.value).__name__}"
            )
        elif condition.operator in (Operator.GREATER_THAN, Operator.LESS_THAN) and not is_number(
            condition.value
        ):
            issues.append(
                f"'{condition.operator}' operator requires a numeric value, "
                f"got {type(condition.value).__name__}"
            )
        elif condition.operator == Operator.NOT_EMPTY and condition.value is not None:
            issues.append("'notEmpty' operator ignores its value; remove it")

    elif isinstance(rule, SemanticRule):
        if not rule.prompt.strip():
            issues.append("Semantic rule missing or empty prompt")

    if rule.applies_to != "all" and not rule.applies_to:
        issues.append("Rule applies to an empty set of actions and will never run")

    return [RuleDefinitionIssue(rule_id=rule.id, message=message) for message in issues]


def validate_rule_definitions(rules: list[ValidationRule]) -> list[RuleDefinitionIssue]:
    """Check many rule definitions, including duplicate ids.

    Returns:
        All issues found, in rule order
    """
    issues: list[RuleDefinitionIssue] = []
    seen: set[str] = set()
    for rule in rules:
        if rule.id in seen:
            issues.append(RuleDefinitionIssue(rule_id=rule.id, message="Duplicate rule id"))
        seen.add(rule.id)
        issues.extend(validate_rule_definition(rule))
    return issues

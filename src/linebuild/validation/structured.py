"""Structured validation evaluator.

Evaluates structured rules against workflow steps. Pure and synchronous: no
I/O, no shared state, so any number of (rule, step) pairs can be evaluated
independently.

Operators:
- equals: primitive equality (str, number, bool, null); containers never compare equal
- in: membership by the same primitive equality; value must be a list
- notEmpty: fails on absent, null, "" and []; 0 and false pass
- greaterThan / lessThan: numeric comparison; both sides must be numbers
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

from linebuild.rules.checks import is_number
from linebuild.rules.models import Operator, RuleCondition, RuleType, StructuredRule
from linebuild.validation.models import ResultError, ResultSummary, ValidationResult, summarize
from linebuild.validation.paths import ABSENT, resolve
from linebuild.workflow.models import Step, Workflow

logger = logging.getLogger(__name__)

SKIP_DISABLED = "Skipped: rule disabled"


@dataclass(frozen=True)
class ConditionOutcome:
    """Result of evaluating one condition."""

    passed: bool
    failure: str | None = None
    rule_error: bool = False


def skip_not_applicable(action: str) -> str:
    """Reasoning for a rule that does not cover the step's action category."""
    return f"Skipped: rule does not apply to {action} actions"


def evaluate_rule(rule: StructuredRule, step: Step, workflow: Workflow) -> ValidationResult:
    """Evaluate one structured rule against one step.

    Args:
        rule: Structured rule to evaluate
        step: Step being validated
        workflow: Workflow the step belongs to

    Returns:
        ValidationResult for the (rule, step) pair
    """
    if not rule.enabled:
        return _skipped(rule, step, SKIP_DISABLED)

    if not rule.applies_to_action(step.tags.action):
        return _skipped(rule, step, skip_not_applicable(step.tags.action))

    outcome = evaluate_condition(step.model_dump(mode="json"), rule.condition)

    failures: list[str] = []
    reasoning = ""
    if not outcome.passed:
        failures.append(outcome.failure or f"{rule.condition.field} failed {rule.name}")
        if outcome.rule_error:
            reasoning = f"Rule '{rule.name}' has a definition error and could not be evaluated"
        elif rule.failure_message:
            failures.append(rule.failure_message)

    return ValidationResult(
        rule_id=rule.id,
        rule_name=rule.name,
        rule_type=RuleType.STRUCTURED,
        step_id=step.id,
        passed=outcome.passed,
        failures=failures,
        reasoning=reasoning,
        error=ResultError.RULE_ERROR if outcome.rule_error else None,
    )


def evaluate_build(workflow: Workflow, rules: list[StructuredRule]) -> list[ValidationResult]:
    """Evaluate every rule against every step.

    Output is rules-major, steps-minor; callers identify results by
    (rule_id, step_id), not by position.
    """
    return [evaluate_rule(rule, step, workflow) for rule in rules for step in workflow.steps]


def summarize_results(results: list[ValidationResult]) -> ResultSummary:
    """Count passes and failures; group failing results by step id."""
    return summarize(results)


def evaluate_condition(tree: Any, condition: RuleCondition) -> ConditionOutcome:
    """Evaluate a condition against a step's JSON value tree."""
    field = condition.field
    expected = condition.value
    actual = resolve(tree, field)

    match condition.operator:
        case Operator.EQUALS:
            if primitive_equals(actual, expected):
                return ConditionOutcome(passed=True)
            return ConditionOutcome(
                passed=False,
                failure=f"{field} must equal {_show(expected)}, but got {_show(actual)}",
            )

        case Operator.IN:
            if not isinstance(expected, list):
                return ConditionOutcome(
                    passed=False,
                    failure="Validation rule error: 'in' operator requires an array value, "
                    f"got {_type_name(expected)}",
                    rule_error=True,
                )
            if any(primitive_equals(actual, option) for option in expected):
                return ConditionOutcome(passed=True)
            return ConditionOutcome(
                passed=False,
                failure=f"{field} must be one of {_show(expected)}, but got {_show(actual)}",
            )

        case Operator.NOT_EMPTY:
            if actual is ABSENT or actual is None or actual == "" or actual == []:
                return ConditionOutcome(passed=False, failure=f"{field} is required but is empty")
            return ConditionOutcome(passed=True)

        case Operator.GREATER_THAN | Operator.LESS_THAN:
            return _compare(field, condition.operator, actual, expected)

    return ConditionOutcome(  # pragma: no cover
        passed=False,
        failure=f"Validation rule error: unknown operator {condition.operator}",
        rule_error=True,
    )


def primitive_equals(left: Any, right: Any) -> bool:
    """Equality over JSON primitives.

    Booleans only equal booleans (True != 1). Numbers compare by value across
    int/float. Dicts, lists, and ABSENT never compare equal to anything.
    """
    if left is ABSENT or right is ABSENT:
        return False
    if isinstance(left, dict | list) or isinstance(right, dict | list):
        return False
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) and is_number(right):
        return left == right
    return type(left) is type(right) and left == right


def _compare(field: str, operator: Operator, actual: Any, expected: Any) -> ConditionOutcome:
    if not is_number(expected):
        return ConditionOutcome(
            passed=False,
            failure=f"Validation rule error: '{operator}' operator requires a numeric value, "
            f"got {_type_name(expected)}",
            rule_error=True,
        )
    if not is_number(actual):
        return ConditionOutcome(
            passed=False,
            failure=f"{field} must be a number to use '{operator}' operator, "
            f"but got {_show(actual)}",
        )

    if operator == Operator.GREATER_THAN:
        if actual > expected:
            return ConditionOutcome(passed=True)
        return ConditionOutcome(
            passed=False, failure=f"{field} must be > {expected}, but got {actual}"
        )

    if actual < expected:
        return ConditionOutcome(passed=True)
    return ConditionOutcome(passed=False, failure=f"{field} must be < {expected}, but got {actual}")


def _skipped(rule: StructuredRule, step: Step, reasoning: str) -> ValidationResult:
    logger.debug("Rule %s skipped for step %s: %s", rule.id, step.id, reasoning)
    return ValidationResult(
        rule_id=rule.id,
        rule_name=rule.name,
        rule_type=RuleType.STRUCTURED,
        step_id=step.id,
        passed=True,
        failures=[],
        reasoning=reasoning,
    )


def _show(value: Any) -> str:
    if value is ABSENT:
        return "nothing (field is absent)"
    return json.dumps(value, default=str)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    return type(value).__name__

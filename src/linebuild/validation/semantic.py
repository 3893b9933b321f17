"""Semantic validation evaluator.

Evaluates semantic rules by sending step context plus the rule prompt to a
ReasoningClient and parsing its pass/fail answer.

Nothing escapes `evaluate_rule` or `evaluate_build`: timeouts, rate limits,
connection failures, and unparseable answers all become failing results whose
reasoning mentions the error. One bad call never aborts a batch.
"""

import asyncio
import logging

from linebuild.providers.base import ReasoningClient
from linebuild.rules.models import RuleType, SemanticRule
from linebuild.validation.models import (
    ResultError,
    SemanticResultSummary,
    ValidationResult,
    summarize,
)
from linebuild.validation.parsing import ParseFailure, parse_verdict
from linebuild.validation.prompts import build_rule_prompt, get_system_instruction
from linebuild.validation.structured import SKIP_DISABLED, skip_not_applicable
from linebuild.workflow.models import Step, Workflow

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 4

_TIMEOUT_SIGNS = ("timeout", "timed out", "deadline exceeded")
_RATE_LIMIT_SIGNS = ("429", "rate limit", "quota", "resource exhausted", "too many requests")


def classify_failure(error: BaseException) -> ResultError:
    """Classify a reasoning call failure by its message."""
    message = str(error).lower()
    if any(sign in message for sign in _TIMEOUT_SIGNS):
        return ResultError.TIMEOUT
    if any(sign in message for sign in _RATE_LIMIT_SIGNS):
        return ResultError.RATE_LIMIT
    return ResultError.SERVICE_ERROR


async def evaluate_rule(
    rule: SemanticRule,
    step: Step,
    workflow: Workflow,
    client: ReasoningClient,
) -> ValidationResult:
    """Evaluate one semantic rule against one step.

    Disabled or non-applicable rules are skipped without calling the client.

    Args:
        rule: Semantic rule to evaluate
        step: Step being validated
        workflow: Workflow the step belongs to
        client: Reasoning service client

    Returns:
        ValidationResult for the (rule, step) pair
    """
    if not rule.enabled:
        return _result(rule, step, passed=True, reasoning=SKIP_DISABLED)

    if not rule.applies_to_action(step.tags.action):
        return _result(rule, step, passed=True, reasoning=skip_not_applicable(step.tags.action))

    try:
        prompt = build_rule_prompt(rule, step, workflow)
        answer = await client.generate(prompt, get_system_instruction(rule))
    except Exception as e:
        return _error_result(rule, step, e)

    verdict = parse_verdict(answer)

    if isinstance(verdict, ParseFailure):
        logger.warning(
            "Unparseable answer for rule %s on step %s: %s", rule.id, step.id, verdict.message
        )
        return _result(
            rule,
            step,
            passed=False,
            failures=[f"Validation engine error: could not parse AI response ({verdict.message})"],
            reasoning="The semantic validation engine encountered an error while processing "
            f"the AI response: {verdict.message}",
            error=ResultError.PARSE_ERROR,
        )

    failures = [] if verdict.passed else list(verdict.failures)
    if not verdict.passed and not failures:
        failures = [verdict.reasoning or f"Step failed semantic rule '{rule.name}'"]

    return _result(
        rule,
        step,
        passed=verdict.passed,
        failures=failures,
        reasoning=verdict.reasoning,
    )


async def evaluate_build(
    workflow: Workflow,
    rules: list[SemanticRule],
    client: ReasoningClient,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> list[ValidationResult]:
    """Evaluate every rule against every step with bounded concurrency.

    Every (rule, step) pair yields exactly one result, including skipped pairs.
    Results come back rules-major, steps-minor, but callers should identify
    them by (rule_id, step_id).

    Args:
        workflow: Workflow to validate
        rules: Semantic rules to apply
        client: Reasoning service client
        max_concurrency: Maximum in-flight reasoning calls (1 = sequential)

    Raises:
        ValueError: If max_concurrency is less than 1
    """
    if max_concurrency < 1:
        raise ValueError("max_concurrency must be at least 1")

    semaphore = asyncio.Semaphore(max_concurrency)

    async def run_pair(rule: SemanticRule, step: Step) -> ValidationResult:
        async with semaphore:
            try:
                return await evaluate_rule(rule, step, workflow, client)
            except Exception as e:
                # evaluate_rule already converts failures; this keeps the batch alive
                return _error_result(rule, step, e)

    return list(
        await asyncio.gather(*(run_pair(rule, step) for rule in rules for step in workflow.steps))
    )


def summarize_results(results: list[ValidationResult]) -> SemanticResultSummary:
    """Count passes and failures, group failures by step, and average reasoning length."""
    summary = summarize(results)
    total_reasoning = sum(len(r.reasoning) for r in results)
    avg_reasoning_length = total_reasoning / len(results) if results else 0.0

    return SemanticResultSummary(
        pass_count=summary.pass_count,
        fail_count=summary.fail_count,
        failures_by_step=summary.failures_by_step,
        avg_reasoning_length=avg_reasoning_length,
    )


def _error_result(rule: SemanticRule, step: Step, error: Exception) -> ValidationResult:
    kind = classify_failure(error)
    message = str(error) or type(error).__name__
    logger.warning(
        "Reasoning call failed (%s) for rule %s on step %s: %s", kind, rule.id, step.id, message
    )

    if kind == ResultError.TIMEOUT:
        failure = f"Validation error: reasoning service timeout ({message})"
    elif kind == ResultError.RATE_LIMIT:
        failure = f"Validation error: reasoning service rate limit ({message})"
    else:
        failure = f"Validation error: {message}"

    return _result(
        rule,
        step,
        passed=False,
        failures=[failure],
        reasoning=f"The semantic validation engine encountered an error: {message}",
        error=kind,
    )


def _result(
    rule: SemanticRule,
    step: Step,
    passed: bool,
    failures: list[str] | None = None,
    reasoning: str = "",
    error: ResultError | None = None,
) -> ValidationResult:
    return ValidationResult(
        rule_id=rule.id,
        rule_name=rule.name,
        rule_type=RuleType.SEMANTIC,
        step_id=step.id,
        passed=passed,
        failures=failures or [],
        reasoning=reasoning,
        error=error,
    )

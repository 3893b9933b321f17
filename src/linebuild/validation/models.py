"""Validation data models.

ValidationResult is the normalized output of both evaluators. AggregateStatus
is the immutable snapshot of one validation run over a whole workflow; it is
what the promotion gate reads.
"""

from collections import defaultdict
from datetime import UTC, datetime
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from linebuild.rules.models import RuleType


class ResultError(StrEnum):
    """Why a result failed when the cause is not the workflow data itself."""

    RULE_ERROR = "rule_error"  # Malformed rule definition
    TIMEOUT = "timeout"  # Reasoning service timed out
    RATE_LIMIT = "rate_limit"  # Reasoning service refused: rate limit / quota
    SERVICE_ERROR = "service_error"  # Any other reasoning service failure
    PARSE_ERROR = "parse_error"  # Reasoning service answer could not be parsed


class ValidationResult(BaseModel):
    """Outcome of one rule against one step.

    Identity is the (rule_id, step_id) pair. A failing result always carries at
    least one failure message; a skipped rule passes with a reasoning string
    saying why it was skipped.
    """

    rule_id: str
    rule_name: str
    rule_type: RuleType
    step_id: str
    passed: bool
    failures: list[str] = Field(default_factory=list)
    reasoning: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    error: ResultError | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _failed_results_have_failures(self) -> "ValidationResult":
        if not self.passed and not self.failures:
            raise ValueError("a failing result must carry at least one failure message")
        return self

    @property
    def key(self) -> tuple[str, str]:
        """(rule_id, step_id) identity of this result."""
        return (self.rule_id, self.step_id)


class ResultSummary(BaseModel):
    """Pass/fail counts and failing results grouped by step."""

    pass_count: int
    fail_count: int
    failures_by_step: dict[str, list[ValidationResult]]


class SemanticResultSummary(ResultSummary):
    """ResultSummary plus mean reasoning length."""

    avg_reasoning_length: float


def summarize(results: list[ValidationResult]) -> ResultSummary:
    """Count passes and failures; group failing results by step id."""
    failures_by_step: dict[str, list[ValidationResult]] = defaultdict(list)
    pass_count = 0
    fail_count = 0

    for result in results:
        if result.passed:
            pass_count += 1
        else:
            fail_count += 1
            failures_by_step[result.step_id].append(result)

    return ResultSummary(
        pass_count=pass_count,
        fail_count=fail_count,
        failures_by_step=dict(failures_by_step),
    )


class AggregateStatus(BaseModel):
    """Merged result of one validation run over a workflow.

    Produced fresh on every run. When the run could not begin, `error` is set,
    result lists are empty, and the status is not valid.
    """

    pass_count: int = 0
    fail_count: int = 0
    total_count: int = 0
    all_results: list[ValidationResult] = Field(default_factory=list)
    results_by_rule: dict[str, list[ValidationResult]] = Field(default_factory=dict)
    has_structured_failures: bool = False
    has_semantic_failures: bool = False
    last_checked_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    duration_ms: int = 0
    error: str | None = None

    model_config = ConfigDict(frozen=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        """True when nothing failed and the run completed."""
        return self.fail_count == 0 and self.error is None

    @property
    def failed_results(self) -> list[ValidationResult]:
        """Get list of failing results."""
        return [r for r in self.all_results if not r.passed]

    @property
    def failures_by_rule(self) -> dict[str, list[ValidationResult]]:
        """Failing results grouped by rule id (rules with no failures omitted)."""
        grouped: dict[str, list[ValidationResult]] = {}
        for rule_id, results in self.results_by_rule.items():
            failed = [r for r in results if not r.passed]
            if failed:
                grouped[rule_id] = failed
        return grouped

    @property
    def structured_failure_count(self) -> int:
        """Number of failing structured results."""
        return len([r for r in self.failed_results if r.rule_type == RuleType.STRUCTURED])

    @property
    def semantic_failure_count(self) -> int:
        """Number of failing semantic results."""
        return len([r for r in self.failed_results if r.rule_type == RuleType.SEMANTIC])

    @property
    def state(self) -> Literal["valid", "invalid", "error"]:
        """Display state: error if the run did not complete, else valid/invalid."""
        if self.error is not None:
            return "error"
        return "valid" if self.is_valid else "invalid"

    @classmethod
    def from_results(
        cls,
        results: list[ValidationResult],
        last_checked_at: datetime,
        duration_ms: int,
    ) -> "AggregateStatus":
        """Build a status from the merged results of a completed run."""
        results_by_rule: dict[str, list[ValidationResult]] = defaultdict(list)
        for result in results:
            results_by_rule[result.rule_id].append(result)

        summary = summarize(results)
        failed = [r for r in results if not r.passed]

        return cls(
            pass_count=summary.pass_count,
            fail_count=summary.fail_count,
            total_count=len(results),
            all_results=list(results),
            results_by_rule=dict(results_by_rule),
            has_structured_failures=any(r.rule_type == RuleType.STRUCTURED for r in failed),
            has_semantic_failures=any(r.rule_type == RuleType.SEMANTIC for r in failed),
            last_checked_at=last_checked_at,
            duration_ms=duration_ms,
        )

    @classmethod
    def from_error(
        cls, message: str, last_checked_at: datetime, duration_ms: int
    ) -> "AggregateStatus":
        """Build the status of a run that could not begin."""
        return cls(
            last_checked_at=last_checked_at,
            duration_ms=duration_ms,
            error=message,
        )

"""Validation orchestrator: runs both rule tiers over a workflow."""

import logging
import time
from datetime import UTC, datetime

from linebuild.providers.base import ReasoningClient, UnconfiguredReasoningClient
from linebuild.rules.cache import RuleCache
from linebuild.rules.models import RuleType, SemanticRule, StructuredRule
from linebuild.validation import semantic, structured
from linebuild.validation.models import AggregateStatus
from linebuild.workflow.models import Workflow

logger = logging.getLogger(__name__)


class ValidationOrchestrator:
    """Runs every enabled rule against every step and merges the outcome.

    Structured rules are evaluated in-process; semantic rules go to the
    reasoning service with bounded concurrency. Individual rule failures become
    failing results. Only a failure to load rules at all is reported as a
    run-level error.
    """

    def __init__(
        self,
        rule_cache: RuleCache,
        reasoning_client: ReasoningClient | None = None,
        max_concurrency: int = semantic.DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        """Initialize orchestrator.

        Args:
            rule_cache: Shared cache of enabled rules (invalidated by the rule owner)
            reasoning_client: Client for semantic rules; without one, applicable
                semantic rules fail
            max_concurrency: Maximum in-flight reasoning calls per run

        Raises:
            ValueError: If max_concurrency is less than 1
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

        self.rule_cache = rule_cache
        self.reasoning_client = reasoning_client or UnconfiguredReasoningClient()
        self.max_concurrency = max_concurrency

    async def run(self, workflow: Workflow) -> AggregateStatus:
        """Validate a workflow.

        Args:
            workflow: Workflow to validate

        Returns:
            Fresh AggregateStatus snapshot for this run
        """
        start = time.monotonic()

        try:
            rules = self.rule_cache.get_rules()
        except Exception as e:
            logger.warning("Validation of %s could not start", workflow.id, exc_info=True)
            return AggregateStatus.from_error(
                f"Failed to load validation rules: {e}",
                last_checked_at=datetime.now(UTC),
                duration_ms=self._elapsed_ms(start),
            )

        structured_rules: list[StructuredRule] = []
        semantic_rules: list[SemanticRule] = []
        for rule in rules:
            if rule.type == RuleType.STRUCTURED:
                structured_rules.append(rule)
            elif rule.type == RuleType.SEMANTIC:
                semantic_rules.append(rule)

        structured_results = structured.evaluate_build(workflow, structured_rules)
        semantic_results = await semantic.evaluate_build(
            workflow,
            semantic_rules,
            self.reasoning_client,
            max_concurrency=self.max_concurrency,
        )

        status = AggregateStatus.from_results(
            [*structured_results, *semantic_results],
            last_checked_at=datetime.now(UTC),
            duration_ms=self._elapsed_ms(start),
        )

        logger.info(
            "Validated %s: %d passed, %d failed of %d in %dms",
            workflow.id,
            status.pass_count,
            status.fail_count,
            status.total_count,
            status.duration_ms,
        )
        return status

    @staticmethod
    def _elapsed_ms(start: float) -> int:
        return int((time.monotonic() - start) * 1000)

"""Promotion gate — the draft/active state machine.

Rules:
- active → draft is always allowed
- draft → active requires a completed validation run with no structured and
  no semantic failures
- anything else (including same-state) is refused

The gate is fail-closed: a missing status, or a status whose run errored
before evaluating any rule, never allows promotion. All functions are pure.
"""

from linebuild.promotion.models import AppliedTransition, TransitionResult
from linebuild.validation.models import AggregateStatus
from linebuild.workflow.models import Workflow, WorkflowStatus

_BLOCKED_PREFIX = "Cannot transition to active"


def get_possible_transitions(current: WorkflowStatus) -> list[WorkflowStatus]:
    """Get statuses reachable from the current one (ignoring validation)."""
    if current == WorkflowStatus.DRAFT:
        return [WorkflowStatus.ACTIVE]
    if current == WorkflowStatus.ACTIVE:
        return [WorkflowStatus.DRAFT]
    return []


def requires_validation_for_transition(current: WorkflowStatus, target: WorkflowStatus) -> bool:
    """True if moving from current to target is gated by validation."""
    return current == WorkflowStatus.DRAFT and target == WorkflowStatus.ACTIVE


def can_transition(
    current: WorkflowStatus,
    target: WorkflowStatus,
    status: AggregateStatus | None = None,
) -> bool:
    """Check whether a transition is allowed.

    Args:
        current: Current workflow status
        target: Requested status
        status: Latest validation status for the workflow, if any

    Returns:
        True if the transition may proceed
    """
    if current == target:
        return False

    if current == WorkflowStatus.ACTIVE and target == WorkflowStatus.DRAFT:
        return True

    if current == WorkflowStatus.DRAFT and target == WorkflowStatus.ACTIVE:
        if status is None or status.error is not None:
            return False
        return not status.has_structured_failures and not status.has_semantic_failures

    return False


def transition_to(
    current: WorkflowStatus,
    target: WorkflowStatus,
    status: AggregateStatus | None = None,
) -> TransitionResult:
    """Attempt a transition and explain the outcome.

    Mirrors can_transition; every refusal carries a reason.

    Args:
        current: Current workflow status
        target: Requested status
        status: Latest validation status for the workflow, if any

    Returns:
        TransitionResult with the resulting status
    """
    if current == target:
        return TransitionResult(
            success=False, new_status=current, reason="Already in target status"
        )

    if current == WorkflowStatus.ACTIVE and target == WorkflowStatus.DRAFT:
        return TransitionResult(success=True, new_status=WorkflowStatus.DRAFT)

    if current == WorkflowStatus.DRAFT and target == WorkflowStatus.ACTIVE:
        if status is None:
            reason = f"{_BLOCKED_PREFIX}: No validation results. Run validation first."
        elif status.error is not None:
            reason = f"{_BLOCKED_PREFIX}: validation did not complete ({status.error})"
        elif status.has_structured_failures:
            reason = (
                f"{_BLOCKED_PREFIX}: {status.structured_failure_count or status.fail_count} "
                "structured validation failure(s) found"
            )
        elif status.has_semantic_failures:
            reason = (
                f"{_BLOCKED_PREFIX}: {status.semantic_failure_count or status.fail_count} "
                "semantic validation failure(s) found"
            )
        else:
            return TransitionResult(success=True, new_status=WorkflowStatus.ACTIVE)

        return TransitionResult(success=False, new_status=WorkflowStatus.DRAFT, reason=reason)

    return TransitionResult(
        success=False,
        new_status=current,
        reason=f"Invalid transition from {current} to {target}",
    )


def apply_transition(
    workflow: Workflow,
    target: WorkflowStatus,
    status: AggregateStatus | None = None,
) -> AppliedTransition:
    """Apply a transition to a workflow without mutating it.

    Returns:
        AppliedTransition holding a copy with the new status on success, or the
        original workflow on failure
    """
    result = transition_to(workflow.status, target, status)

    if not result.success:
        return AppliedTransition(workflow=workflow, result=result)

    updated = workflow.model_copy(
        update={"metadata": workflow.metadata.model_copy(update={"status": result.new_status})}
    )
    return AppliedTransition(workflow=updated, result=result)


def default_status() -> WorkflowStatus:
    """Status of a newly created workflow."""
    return WorkflowStatus.DRAFT


def is_editable_status(current: WorkflowStatus) -> bool:
    """Drafts are editable; active workflows must be demoted first."""
    return current == WorkflowStatus.DRAFT


def status_label(current: WorkflowStatus) -> str:
    """Human-readable status label."""
    return current.value.capitalize()


def status_description(current: WorkflowStatus, status: AggregateStatus | None = None) -> str:
    """Status label with the validation issue count for drafts."""
    if current == WorkflowStatus.DRAFT and status is not None:
        plural = "" if status.fail_count == 1 else "s"
        return f"Draft ({status.fail_count} validation issue{plural})"
    return status_label(current)


def suggested_action(current: WorkflowStatus, status: AggregateStatus | None = None) -> str:
    """Next step to suggest for a workflow in the given state."""
    if current == WorkflowStatus.ACTIVE:
        return "Demote to draft to make edits"

    if status is None:
        return "Run validation to check for issues"
    if status.error is not None:
        return "Validation did not complete; re-run validation"
    if status.is_valid:
        return "Ready to activate - all validations passed"

    plural = "" if status.fail_count == 1 else "s"
    return f"Fix {status.fail_count} validation issue{plural} before activating"

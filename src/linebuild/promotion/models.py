"""Promotion data models."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from linebuild.workflow.models import Workflow, WorkflowStatus


class TransitionResult(BaseModel):
    """Outcome of a requested status transition.

    On failure `new_status` is the status the workflow stays in and `reason`
    explains why.
    """

    success: bool
    new_status: WorkflowStatus
    reason: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = ConfigDict(frozen=True)


class AppliedTransition(BaseModel):
    """Workflow after a transition attempt, with the attempt's result.

    `workflow` is a new object on success and the unchanged input on failure.
    """

    workflow: Workflow
    result: TransitionResult

    model_config = ConfigDict(frozen=True)

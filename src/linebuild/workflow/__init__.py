"""Workflow data model: steps, workflows, and lifecycle status."""

from linebuild.workflow.files import load_workflow, save_workflow
from linebuild.workflow.models import (
    ItemReference,
    Step,
    StepTags,
    StepTime,
    Workflow,
    WorkflowMetadata,
    WorkflowStatus,
)

__all__ = [
    "ItemReference",
    "Step",
    "StepTags",
    "StepTime",
    "Workflow",
    "WorkflowMetadata",
    "WorkflowStatus",
    "load_workflow",
    "save_workflow",
]

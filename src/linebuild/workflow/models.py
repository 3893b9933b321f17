"""Workflow data models.

A Workflow is an ordered list of Steps plus lifecycle metadata. Steps are
read-only inputs to validation: every model here is frozen.

StepTags allows extra keys so that tags this package does not know about are
kept and remain addressable by structured rule field paths.
"""

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class WorkflowStatus(StrEnum):
    """Lifecycle status of a workflow."""

    DRAFT = "draft"
    ACTIVE = "active"


class ItemReference(BaseModel):
    """Reference to the item a step works on."""

    name: str
    bom_id: str | None = None

    model_config = ConfigDict(frozen=True)


class StepTime(BaseModel):
    """Duration of a step.

    `type` distinguishes hands-on (active) time from waiting (passive) time.
    """

    value: int | float
    unit: str = "min"
    type: Literal["active", "passive"] = "active"

    model_config = ConfigDict(frozen=True)

    def render(self) -> str:
        """Render as "<value> <unit>", e.g. "15 min"."""
        return f"{self.value} {self.unit}"


class StepTags(BaseModel):
    """Tagged attributes of a step."""

    action: str
    target: ItemReference
    equipment: str | list[str] | None = None
    time: StepTime | None = None
    phase: str | None = None
    station: str | None = None
    timing_mode: str | None = None
    requires_order: bool | None = None
    prep_type: str | None = None
    storage_location: str | None = None
    bulk_prep: bool | None = None

    model_config = ConfigDict(frozen=True, extra="allow")


class Step(BaseModel):
    """One unit of work in a workflow."""

    id: str
    tags: StepTags
    depends_on: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class WorkflowMetadata(BaseModel):
    """Lifecycle metadata.

    Only `status` matters to validation and promotion; it changes exclusively
    through the promotion gate.
    """

    author: str = ""
    version: int = Field(default=1, ge=1)
    status: WorkflowStatus = WorkflowStatus.DRAFT

    model_config = ConfigDict(frozen=True)


class Workflow(BaseModel):
    """A line build: named, ordered steps plus metadata."""

    id: str
    name: str
    steps: list[Step] = Field(default_factory=list)
    metadata: WorkflowMetadata = Field(default_factory=WorkflowMetadata)

    model_config = ConfigDict(frozen=True)

    @property
    def status(self) -> WorkflowStatus:
        """Current lifecycle status."""
        return self.metadata.status

    def get_step(self, step_id: str) -> Step | None:
        """Find a step by id, or None."""
        for step in self.steps:
            if step.id == step_id:
                return step
        return None

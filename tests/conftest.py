"""Shared test fixtures."""

from collections.abc import Iterator

import pytest
from pydantic_ai import models

from linebuild.workflow.models import ItemReference, Step, StepTags, StepTime, Workflow


@pytest.fixture(autouse=True)
def _prevent_real_api_calls() -> Iterator[None]:
    """Safety: block real API calls in all tests."""
    original = models.ALLOW_MODEL_REQUESTS
    models.ALLOW_MODEL_REQUESTS = False
    yield
    models.ALLOW_MODEL_REQUESTS = original


@pytest.fixture(autouse=True)
def _clear_model_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer credentials out of config resolution."""
    for name in (
        "LINEBUILD_MODEL",
        "LINEBUILD_TIMEOUT_SECONDS",
        "LINEBUILD_MAX_CONCURRENCY",
        "ANTHROPIC_API_KEY",
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_workflow() -> Workflow:
    """Three-step burger build: prep, cook, assemble."""
    return Workflow(
        id="wf-burger",
        name="Classic Burger",
        steps=[
            Step(
                id="step-1",
                tags=StepTags(
                    action="PREP",
                    target=ItemReference(name="Onion", bom_id="bom-onion"),
                    equipment="knife",
                    time=StepTime(value=5, unit="min", type="active"),
                    phase="pre_service",
                ),
            ),
            Step(
                id="step-2",
                tags=StepTags(
                    action="COOK",
                    target=ItemReference(name="Beef Patty", bom_id="bom-patty"),
                    equipment=["grill", "spatula"],
                    time=StepTime(value=8, unit="min", type="active"),
                    station="grill",
                    requires_order=True,
                ),
                depends_on=["step-1"],
            ),
            Step(
                id="step-3",
                tags=StepTags(
                    action="ASSEMBLE",
                    target=ItemReference(name="Burger"),
                    station="pass",
                ),
                depends_on=["step-1", "step-2"],
            ),
        ],
    )

"""Tests for validation CLI commands."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from linebuild.validation.cli import build_orchestrator, validate_command
from linebuild.workflow.models import Workflow

STRUCTURED_RULES = [
    {
        "id": "action-set",
        "name": "Action set",
        "type": "structured",
        "condition": {"field": "tags.action", "operator": "notEmpty"},
    }
]
STATION_RULE = {
    "id": "station-required",
    "name": "Station required",
    "type": "structured",
    "condition": {"field": "tags.station", "operator": "notEmpty"},
}
SEMANTIC_RULE = {
    "id": "safe-cooking",
    "name": "Safe cooking",
    "type": "semantic",
    "prompt": "Is it safe?",
    "appliesTo": ["COOK"],
}


@pytest.fixture
def workflow_file(tmp_path: Path, sample_workflow: Workflow) -> Path:
    path = tmp_path / "workflow.json"
    path.write_text(sample_workflow.model_dump_json())
    return path


def _rules_file(tmp_path: Path, rules: list[dict[str, object]]) -> Path:
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"rules": rules}))
    return path


class TestBuildOrchestrator:
    """Test build_orchestrator."""

    def test_without_model_warns(self, tmp_path: Path) -> None:
        """No model configured gives a warning and an unconfigured client."""
        orchestrator, warning = build_orchestrator(_rules_file(tmp_path, STRUCTURED_RULES))

        assert warning is not None
        assert "No reasoning model configured" in warning
        assert orchestrator.max_concurrency == 4

    def test_with_model(self, tmp_path: Path) -> None:
        """An explicit model builds a pydantic-ai client."""
        orchestrator, warning = build_orchestrator(
            _rules_file(tmp_path, STRUCTURED_RULES),
            model="test",
            timeout_seconds=5,
            max_concurrency=2,
        )

        assert warning is None
        assert orchestrator.max_concurrency == 2
        assert orchestrator.reasoning_client.timeout_seconds == 5  # type: ignore[attr-defined]

    def test_zero_concurrency_rejected(self, tmp_path: Path) -> None:
        """--concurrency 0 is an error, with or without a model."""
        rules_path = _rules_file(tmp_path, STRUCTURED_RULES)

        with pytest.raises(ValueError):
            build_orchestrator(rules_path, max_concurrency=0)
        with pytest.raises(ValueError):
            build_orchestrator(rules_path, model="test", max_concurrency=0)


class TestValidateCommand:
    """Test validate_command."""

    def test_valid_workflow(
        self, tmp_path: Path, workflow_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Exit 0 when every rule passes."""
        exit_code = validate_command(workflow_file, _rules_file(tmp_path, STRUCTURED_RULES))

        assert exit_code == 0
        assert "All validation rules passed" in capsys.readouterr().out

    def test_invalid_workflow(
        self, tmp_path: Path, workflow_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Exit 1 and a failure table when a rule fails."""
        exit_code = validate_command(workflow_file, _rules_file(tmp_path, [STATION_RULE]))

        output = capsys.readouterr().out
        assert exit_code == 1
        assert "Validation failed" in output
        assert "2 passed, 1 failed of 3 checks" in output

    def test_json_output(
        self, tmp_path: Path, workflow_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """JSON output is the aggregate status."""
        exit_code = validate_command(
            workflow_file, _rules_file(tmp_path, [STATION_RULE]), format="json"
        )

        data = json.loads(capsys.readouterr().out)
        assert exit_code == 1
        assert data["is_valid"] is False
        assert data["fail_count"] == 1
        assert data["has_structured_failures"] is True

    def test_semantic_rules_with_mocked_client(
        self,
        tmp_path: Path,
        workflow_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Semantic rules go through the configured reasoning client."""
        client = AsyncMock()
        client.generate.return_value = '{"pass": true, "reasoning": "Cooked through"}'

        with patch("linebuild.validation.cli.PydanticAIReasoningClient", return_value=client):
            exit_code = validate_command(
                workflow_file, _rules_file(tmp_path, [SEMANTIC_RULE]), model="test"
            )

        assert exit_code == 0
        client.generate.assert_awaited_once()

    def test_semantic_rules_without_model_fail(
        self, tmp_path: Path, workflow_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Without a model, applicable semantic rules fail closed."""
        exit_code = validate_command(workflow_file, _rules_file(tmp_path, [SEMANTIC_RULE]))

        output = capsys.readouterr().out
        assert exit_code == 1
        assert "Warning:" in output

    def test_missing_workflow(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Exit 2 for a missing workflow file."""
        exit_code = validate_command(
            tmp_path / "missing.json", _rules_file(tmp_path, STRUCTURED_RULES)
        )

        assert exit_code == 2
        assert "Error:" in capsys.readouterr().out

    def test_missing_rules(
        self, tmp_path: Path, workflow_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Exit 2 for a missing rules file, as JSON when asked."""
        exit_code = validate_command(workflow_file, tmp_path / "missing.json", format="json")

        assert exit_code == 2
        assert "Rules file not found" in json.loads(capsys.readouterr().out)["error"]

    def test_unreadable_rules(
        self, tmp_path: Path, workflow_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A rules file that fails to load gives an errored run."""
        rules_path = tmp_path / "rules.json"
        rules_path.write_text("{broken")

        exit_code = validate_command(workflow_file, rules_path)

        assert exit_code == 1
        assert "Validation could not run" in capsys.readouterr().out

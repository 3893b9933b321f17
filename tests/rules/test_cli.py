"""Tests for rule CLI commands."""

import json
from pathlib import Path

import pytest

from linebuild.rules.cli import rules_check_command


def _write(tmp_path: Path, rules: object) -> Path:
    path = tmp_path / "rules.json"
    path.write_text(json.dumps(rules))
    return path


GOOD_RULE = {
    "id": "action-set",
    "name": "Action set",
    "type": "structured",
    "condition": {"field": "tags.action", "operator": "notEmpty"},
}
BAD_RULE = {
    "id": "phase-in",
    "name": "Phase allowed",
    "type": "structured",
    "condition": {"field": "tags.phase", "operator": "in", "value": "pre_service"},
}


class TestRulesCheckCommand:
    """Test rules_check_command."""

    def test_clean(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Well-formed rules exit 0."""
        exit_code = rules_check_command(_write(tmp_path, [GOOD_RULE]))

        assert exit_code == 0
        assert "1 rules OK" in capsys.readouterr().out

    def test_issues(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Problems are listed and exit 1."""
        exit_code = rules_check_command(_write(tmp_path, [GOOD_RULE, BAD_RULE]), format="json")

        data = json.loads(capsys.readouterr().out)
        assert exit_code == 1
        assert data["rule_count"] == 2
        assert data["issues"][0]["rule_id"] == "phase-in"

    def test_issues_human(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Human output summarizes the issue count."""
        exit_code = rules_check_command(_write(tmp_path, [BAD_RULE]))

        assert exit_code == 1
        assert "1 issue(s) in 1 rules" in capsys.readouterr().out

    def test_unloadable(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A file that cannot be loaded exits 2."""
        exit_code = rules_check_command(tmp_path / "missing.json")

        assert exit_code == 2
        assert "Rules file not found" in capsys.readouterr().out

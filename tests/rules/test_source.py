"""Tests for rule sources."""

import json
from pathlib import Path

import pytest

from linebuild.errors import RuleSourceError
from linebuild.rules.models import Operator, RuleCondition, SemanticRule, StructuredRule
from linebuild.rules.source import JsonFileRuleSource, StaticRuleSource
from linebuild.validation.structured import evaluate_build
from linebuild.workflow.models import Workflow

RULES = [
    {
        "id": "r-equipment",
        "name": "Equipment required",
        "type": "structured",
        "condition": {"field": "tags.equipment", "operator": "notEmpty"},
    },
    {
        "id": "r-disabled",
        "name": "Disabled rule",
        "type": "semantic",
        "prompt": "Anything?",
        "enabled": False,
    },
]


class TestStaticRuleSource:
    """Test StaticRuleSource."""

    def test_filters_disabled(self) -> None:
        """Only enabled rules are returned."""
        enabled = SemanticRule(id="a", name="A", prompt="?")
        disabled = StructuredRule(
            id="b",
            name="B",
            enabled=False,
            condition=RuleCondition(field="tags.action", operator=Operator.NOT_EMPTY),
        )
        source = StaticRuleSource([enabled, disabled])

        assert source.load_enabled_rules() == [enabled]

    def test_empty(self) -> None:
        """No rules by default."""
        assert StaticRuleSource().load_enabled_rules() == []


class TestJsonFileRuleSource:
    """Test JsonFileRuleSource."""

    def test_bare_list(self, tmp_path: Path) -> None:
        """A top-level list of rules loads."""
        path = tmp_path / "rules.json"
        path.write_text(json.dumps(RULES))

        rules = JsonFileRuleSource(path).load_all_rules()

        assert [r.id for r in rules] == ["r-equipment", "r-disabled"]

    def test_wrapped_list(self, tmp_path: Path) -> None:
        """A {"rules": [...]} wrapper with metadata loads."""
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({"rules": RULES, "_metadata": {"version": "1.0"}}))

        rules = JsonFileRuleSource(path).load_all_rules()

        assert len(rules) == 2

    def test_enabled_only(self, tmp_path: Path) -> None:
        """load_enabled_rules drops disabled rules."""
        path = tmp_path / "rules.json"
        path.write_text(json.dumps(RULES))

        rules = JsonFileRuleSource(path).load_enabled_rules()

        assert [r.id for r in rules] == ["r-equipment"]

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises RuleSourceError."""
        with pytest.raises(RuleSourceError, match="Rules file not found"):
            JsonFileRuleSource(tmp_path / "missing.json").load_all_rules()

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Malformed JSON raises RuleSourceError."""
        path = tmp_path / "rules.json"
        path.write_text("[{")

        with pytest.raises(RuleSourceError, match="Failed to read rules"):
            JsonFileRuleSource(path).load_all_rules()

    def test_wrong_structure(self, tmp_path: Path) -> None:
        """A JSON object without a rules list raises RuleSourceError."""
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({"items": []}))

        with pytest.raises(RuleSourceError, match="Invalid rules structure"):
            JsonFileRuleSource(path).load_all_rules()

    def test_invalid_rule(self, tmp_path: Path) -> None:
        """A rule that does not match either variant raises RuleSourceError."""
        path = tmp_path / "rules.json"
        path.write_text(json.dumps([{"id": "x", "name": "X", "type": "magic"}]))

        with pytest.raises(RuleSourceError, match="Invalid rule definition"):
            JsonFileRuleSource(path).load_all_rules()

    def test_camel_case_keys(self, tmp_path: Path, sample_workflow: Workflow) -> None:
        """appliesTo and failureMessage from a rules file are honored."""
        path = tmp_path / "rules.json"
        rule = {
            "id": "r1",
            "name": "Cook station",
            "type": "structured",
            "condition": {"field": "tags.station", "operator": "notEmpty"},
            "failureMessage": "Cook steps need a station",
            "appliesTo": ["COOK"],
        }
        path.write_text(json.dumps({"rules": [rule]}))

        rules = JsonFileRuleSource(path).load_all_rules()

        assert rules[0].applies_to == ["COOK"]
        assert rules[0].failure_message == "Cook steps need a station"
        results = evaluate_build(sample_workflow, rules)
        assert [(r.step_id, r.passed) for r in results] == [
            ("step-1", True),
            ("step-2", True),
            ("step-3", True),
        ]

    def test_misspelled_key(self, tmp_path: Path) -> None:
        """Unknown rule keys are reported instead of dropped."""
        path = tmp_path / "rules.json"
        rule = {"id": "r1", "name": "R", "type": "semantic", "prompt": "?", "appliesto": ["COOK"]}
        path.write_text(json.dumps([rule]))

        with pytest.raises(RuleSourceError, match="appliesto"):
            JsonFileRuleSource(path).load_all_rules()

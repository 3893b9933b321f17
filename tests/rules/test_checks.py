"""Tests for rule definition checks."""

from linebuild.rules.checks import is_number, validate_rule_definition, validate_rule_definitions
from linebuild.rules.models import Operator, RuleCondition, SemanticRule, StructuredRule


def _structured(
    operator: Operator, value: object = None, field: str = "tags.time.value"
) -> StructuredRule:
    return StructuredRule(
        id="r1",
        name="Rule",
        condition=RuleCondition(field=field, operator=operator, value=value),
    )


class TestIsNumber:
    """Test is_number."""

    def test_numbers(self) -> None:
        """Ints and floats are numbers."""
        assert is_number(3)
        assert is_number(2.5)

    def test_non_numbers(self) -> None:
        """Booleans, strings, and None are not."""
        assert not is_number(True)
        assert not is_number("3")
        assert not is_number(None)


class TestValidateRuleDefinition:
    """Test validate_rule_definition."""

    def test_well_formed_rules(self) -> None:
        """Valid rules produce no issues."""
        assert validate_rule_definition(_structured(Operator.GREATER_THAN, 5)) == []
        assert validate_rule_definition(_structured(Operator.IN, ["a", "b"])) == []
        assert validate_rule_definition(_structured(Operator.NOT_EMPTY)) == []
        assert validate_rule_definition(SemanticRule(id="s", name="S", prompt="Is it ok?")) == []

    def test_missing_id_or_name(self) -> None:
        """Blank id or name is reported."""
        rule = SemanticRule(id=" ", name="", prompt="?")
        messages = [issue.message for issue in validate_rule_definition(rule)]
        assert "Rule missing required fields (id, name)" in messages

    def test_in_requires_list(self) -> None:
        """'in' with a scalar value is reported."""
        issues = validate_rule_definition(_structured(Operator.IN, "a"))
        assert len(issues) == 1
        assert "'in' operator requires an array value" in issues[0].message

    def test_comparison_requires_number(self) -> None:
        """Comparison operators need a numeric value."""
        issues = validate_rule_definition(_structured(Operator.LESS_THAN, "10"))
        assert "'lessThan' operator requires a numeric value, got str" in issues[0].message

    def test_not_empty_with_value(self) -> None:
        """A value on notEmpty is flagged as ignored."""
        issues = validate_rule_definition(_structured(Operator.NOT_EMPTY, "x"))
        assert "ignores its value" in issues[0].message

    def test_malformed_field_path(self) -> None:
        """Empty path segments are reported."""
        issues = validate_rule_definition(_structured(Operator.NOT_EMPTY, field="tags..action"))
        assert "malformed" in issues[0].message

    def test_empty_field_path(self) -> None:
        """An empty path is reported."""
        issues = validate_rule_definition(_structured(Operator.NOT_EMPTY, field=""))
        assert "empty field path" in issues[0].message

    def test_empty_prompt(self) -> None:
        """Semantic rules need a prompt."""
        issues = validate_rule_definition(SemanticRule(id="s", name="S", prompt="  "))
        assert issues[0].message == "Semantic rule missing or empty prompt"

    def test_empty_applies_to(self) -> None:
        """An empty action list means the rule never runs."""
        rule = SemanticRule(id="s", name="S", prompt="?", applies_to=[])
        issues = validate_rule_definition(rule)
        assert "never run" in issues[0].message


class TestValidateRuleDefinitions:
    """Test validate_rule_definitions."""

    def test_duplicate_ids(self) -> None:
        """Repeated ids are reported once per repeat."""
        rules = [
            SemanticRule(id="dup", name="A", prompt="?"),
            SemanticRule(id="dup", name="B", prompt="?"),
        ]
        issues = validate_rule_definitions(rules)
        assert [(i.rule_id, i.message) for i in issues] == [("dup", "Duplicate rule id")]

    def test_collects_all_issues(self) -> None:
        """Issues from every rule are returned in order."""
        rules = [
            SemanticRule(id="a", name="A", prompt=""),
            _structured(Operator.IN, 3),
        ]
        issues = validate_rule_definitions(rules)
        assert [i.rule_id for i in issues] == ["a", "r1"]

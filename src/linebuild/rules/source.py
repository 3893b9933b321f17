"""Rule sources: where enabled rules come from.

The rule-management surface that creates, edits, and deletes rules lives
outside this package. These sources only read.
"""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from linebuild.errors import RuleSourceError
from linebuild.rules.models import ValidationRule, rule_list_adapter


class RuleSource(Protocol):
    """Supplies the current set of enabled rules."""

    def load_enabled_rules(self) -> list[ValidationRule]: ...


class StaticRuleSource:
    """In-memory rule source."""

    def __init__(self, rules: Iterable[ValidationRule] = ()) -> None:
        self.rules = list(rules)

    def load_enabled_rules(self) -> list[ValidationRule]:
        return [rule for rule in self.rules if rule.enabled]


class JsonFileRuleSource:
    """Reads rules from a JSON file.

    Accepts either a bare list of rules or a `{"rules": [...]}` wrapper (the
    layout written by the rule-management surface, which adds `_metadata`).
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load_all_rules(self) -> list[ValidationRule]:
        """Load every rule in the file, enabled or not.

        Raises:
            RuleSourceError: If the file is missing, not JSON, or not valid rules
        """
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise RuleSourceError(f"Rules file not found: {self.path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise RuleSourceError(f"Failed to read rules from {self.path}: {e}") from e

        if isinstance(data, dict) and isinstance(data.get("rules"), list):
            data = data["rules"]
        if not isinstance(data, list):
            raise RuleSourceError(f"Invalid rules structure in {self.path}")

        try:
            return rule_list_adapter.validate_python(data)
        except ValidationError as e:
            raise RuleSourceError(f"Invalid rule definition in {self.path}: {e}") from e

    def load_enabled_rules(self) -> list[ValidationRule]:
        return [rule for rule in self.load_all_rules() if rule.enabled]

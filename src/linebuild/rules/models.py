"""Validation rule models.

A rule is one of two variants, discriminated by the frozen `type` tag:
- StructuredRule: a deterministic condition over one field path of a step
- SemanticRule: a natural-language prompt judged by the reasoning service
"""

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class RuleType(StrEnum):
    """Rule variant tag."""

    STRUCTURED = "structured"
    SEMANTIC = "semantic"


class Operator(StrEnum):
    """Structured condition operators."""

    EQUALS = "equals"
    IN = "in"
    NOT_EMPTY = "notEmpty"
    GREATER_THAN = "greaterThan"
    LESS_THAN = "lessThan"


class RuleCondition(BaseModel):
    """Field-path condition of a structured rule.

    `value` is deliberately untyped: a value that does not fit the operator is
    reported at evaluation time as a rule error, not rejected at load time.
    """

    field: str
    operator: Operator
    value: Any = None

    model_config = ConfigDict(frozen=True, extra="forbid")


class _RuleBase(BaseModel):
    """Fields shared by both rule variants.

    Rule files use camelCase keys (`appliesTo`, `failureMessage`); snake_case
    field names are accepted too. Unknown keys are rejected.
    """

    id: str
    name: str
    description: str | None = None
    enabled: bool = True
    applies_to: Literal["all"] | list[str] = "all"

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def applies_to_action(self, action: str) -> bool:
        """Check whether this rule covers steps with the given action category."""
        if self.applies_to == "all":
            return True
        return action in self.applies_to


class StructuredRule(_RuleBase):
    """Deterministic rule evaluated against one field path of a step."""

    type: Literal[RuleType.STRUCTURED] = RuleType.STRUCTURED
    condition: RuleCondition
    failure_message: str | None = None


class SemanticRule(_RuleBase):
    """Rule whose verdict comes from the reasoning service."""

    type: Literal[RuleType.SEMANTIC] = RuleType.SEMANTIC
    prompt: str
    guidance: str = ""


ValidationRule = Annotated[StructuredRule | SemanticRule, Field(discriminator="type")]

rule_list_adapter: TypeAdapter[list[ValidationRule]] = TypeAdapter(list[ValidationRule])

"""Reasoning client abstraction.

The semantic evaluator depends only on this protocol. Implementations must
raise (preferably ReasoningError) with a descriptive message on any failure:
the evaluator classifies timeouts and rate limits by that message.

No pydantic-ai dependency here.
"""

from typing import Protocol, runtime_checkable

from linebuild.errors import ReasoningError


@runtime_checkable
class ReasoningClient(Protocol):
    """Single capability wrapper around a natural-language reasoning service."""

    async def generate(self, prompt: str, system_instruction: str) -> str:
        """Generate a text answer.

        Args:
            prompt: User prompt
            system_instruction: System instruction for this call

        Returns:
            Raw text answer
        """
        ...


class UnconfiguredReasoningClient:
    """ReasoningClient used when no model is configured.

    Every call fails, so semantic rules fail closed instead of passing silently.
    """

    def __init__(self, reason: str = "No reasoning model configured") -> None:
        self.reason = reason

    async def generate(self, prompt: str, system_instruction: str) -> str:
        raise ReasoningError(self.reason)

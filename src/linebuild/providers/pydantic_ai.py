"""Pydantic AI reasoning client.

Wraps a Pydantic AI Agent behind the ReasoningClient protocol. Each call is a
single attempt bounded by a timeout; there are no retries.
"""

import asyncio
import time

from pydantic_ai import Agent
from pydantic_ai.exceptions import ModelHTTPError
from pydantic_ai.models import KnownModelName, Model

from linebuild.errors import ReasoningError


class PydanticAIReasoningClient:
    """ReasoningClient backed by a Pydantic AI model.

    Example:
        # Standard provider (API key required)
        client = PydanticAIReasoningClient(model="anthropic:claude-sonnet-4-5")

        # Tests
        client = PydanticAIReasoningClient(model=FunctionModel(answer))
    """

    def __init__(
        self,
        model: Model | KnownModelName | str,
        timeout_seconds: float = 30.0,
    ) -> None:
        """Initialize client.

        Args:
            model: Pydantic AI model (Model instance or "provider:model" string)
            timeout_seconds: Per-call timeout in seconds (default: 30)

        Raises:
            ValueError: If timeout_seconds is not positive
        """
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        self.model = model
        self.timeout_seconds = timeout_seconds
        self.last_duration_ms: int | None = None
        # One agent per distinct system instruction
        self._agents: dict[str, Agent[None, str]] = {}

    @property
    def model_name(self) -> str:
        """Model identifier for display."""
        if isinstance(self.model, str):
            return self.model
        return f"{self.model.system}:{self.model.model_name}"

    async def generate(self, prompt: str, system_instruction: str) -> str:
        """Send one prompt and return the text answer.

        Args:
            prompt: User prompt
            system_instruction: System prompt for the agent

        Returns:
            Raw text output

        Raises:
            ReasoningError: On timeout, rate limiting, or any other model failure
        """
        start = time.monotonic()
        try:
            agent = self._agent_for(system_instruction)
            result = await asyncio.wait_for(agent.run(prompt), timeout=self.timeout_seconds)
        except TimeoutError as e:
            raise ReasoningError(
                f"Reasoning request timeout after {self.timeout_seconds:g}s"
            ) from e
        except ModelHTTPError as e:
            if e.status_code == 429:
                raise ReasoningError(
                    f"Reasoning service rate limit exceeded (429): {e}"
                ) from e
            raise ReasoningError(
                f"Reasoning service returned HTTP {e.status_code}: {e}"
            ) from e
        except ReasoningError:
            raise
        except Exception as e:
            raise ReasoningError(f"Reasoning request failed: {e}") from e
        finally:
            self.last_duration_ms = int((time.monotonic() - start) * 1000)

        return result.output

    def _agent_for(self, system_instruction: str) -> Agent[None, str]:
        agent = self._agents.get(system_instruction)
        if agent is None:
            agent = Agent(model=self.model, output_type=str, system_prompt=system_instruction)
            self._agents[system_instruction] = agent
        return agent

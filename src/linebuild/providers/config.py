"""Provider configuration.

Uses BaseModel (not BaseSettings) for simplicity; `from_env` reads the few
environment variables we support. The CLI loads `.env` before calling it.
"""

import os

from pydantic import BaseModel, Field

DEFAULT_ANTHROPIC_MODEL = "anthropic:claude-sonnet-4-5"
DEFAULT_GEMINI_MODEL = "google-gla:gemini-2.5-flash"


def resolve_default_model() -> str:
    """Resolve the reasoning model based on available configuration.

    Checks in order:
    1. LINEBUILD_MODEL set → that model string
    2. ANTHROPIC_API_KEY set → Claude Sonnet
    3. GEMINI_API_KEY or GOOGLE_API_KEY set → Gemini Flash
    4. None → raise RuntimeError with clear instructions

    Returns:
        Model string ready for PydanticAIReasoningClient.
    """
    if model := os.environ.get("LINEBUILD_MODEL"):
        return model

    if os.environ.get("ANTHROPIC_API_KEY"):
        return DEFAULT_ANTHROPIC_MODEL

    if os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_API_KEY"):
        return DEFAULT_GEMINI_MODEL

    msg = (
        "No reasoning model configured. Either:\n"
        "  1. Set LINEBUILD_MODEL (e.g. anthropic:claude-sonnet-4-5), or\n"
        "  2. Set ANTHROPIC_API_KEY, or\n"
        "  3. Set GEMINI_API_KEY, or\n"
        "  4. Pass --model explicitly"
    )
    raise RuntimeError(msg)


class ProviderConfig(BaseModel):
    """Reasoning service settings for a validation run."""

    model: str
    timeout_seconds: float = Field(default=30.0, gt=0)
    max_concurrency: int = Field(default=4, ge=1)

    @classmethod
    def from_env(
        cls,
        model: str | None = None,
        timeout_seconds: float | None = None,
        max_concurrency: int | None = None,
    ) -> "ProviderConfig":
        """Build config from explicit values, falling back to environment variables.

        Environment:
            LINEBUILD_MODEL, LINEBUILD_TIMEOUT_SECONDS, LINEBUILD_MAX_CONCURRENCY

        Raises:
            RuntimeError: If no model can be resolved
        """
        values: dict[str, object] = {"model": model or resolve_default_model()}

        timeout = timeout_seconds
        if timeout is None:
            timeout = os.environ.get("LINEBUILD_TIMEOUT_SECONDS")
        if timeout is not None:
            values["timeout_seconds"] = timeout

        concurrency = max_concurrency
        if concurrency is None:
            concurrency = os.environ.get("LINEBUILD_MAX_CONCURRENCY")
        if concurrency is not None:
            values["max_concurrency"] = concurrency

        return cls.model_validate(values)

"""Linebuild providers — reasoning service abstraction layer."""

from linebuild.providers.base import ReasoningClient, UnconfiguredReasoningClient
from linebuild.providers.config import ProviderConfig, resolve_default_model
from linebuild.providers.pydantic_ai import PydanticAIReasoningClient

__all__ = [
    "ProviderConfig",
    "PydanticAIReasoningClient",
    "ReasoningClient",
    "UnconfiguredReasoningClient",
    "resolve_default_model",
]

"""Generation backends (Claude, GPT-4) behind a single interface."""

from app_builder.providers.base import AIProvider, StreamCallbacks
from app_builder.providers.claude import ClaudeProvider
from app_builder.providers.exceptions import (
    ProviderError,
    ProviderNotConfiguredError,
    UnknownProviderError,
)
from app_builder.providers.openai_provider import OpenAIProvider
from app_builder.providers.registry import get_provider, resolve_provider_type

__all__ = [
    "AIProvider",
    "ClaudeProvider",
    "OpenAIProvider",
    "ProviderError",
    "ProviderNotConfiguredError",
    "StreamCallbacks",
    "UnknownProviderError",
    "get_provider",
    "resolve_provider_type",
]

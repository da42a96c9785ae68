"""Tests for provider lookup."""

import pytest

from app_builder.config import ProviderConfig
from app_builder.models import ProviderType
from app_builder.providers.claude import ClaudeProvider
from app_builder.providers.exceptions import ProviderNotConfiguredError, UnknownProviderError
from app_builder.providers.openai_provider import OpenAIProvider
from app_builder.providers.registry import get_provider, resolve_provider_type


@pytest.fixture
def config():
    return ProviderConfig(
        anthropic_api_key="anthropic-key",
        openai_api_key="openai-key",
        claude_model="claude-x",
        openai_model="gpt-x",
        max_tokens=1000,
        openai_temperature=0.3,
    )


def test_get_provider_claude(config):
    provider = get_provider(ProviderType.CLAUDE, config)
    assert isinstance(provider, ClaudeProvider)
    assert provider.api_key == "anthropic-key"
    assert provider.model == "claude-x"
    assert provider.max_tokens == 1000


def test_get_provider_openai_by_name(config):
    provider = get_provider("openai", config)
    assert isinstance(provider, OpenAIProvider)
    assert provider.model == "gpt-x"
    assert provider.temperature == 0.3


def test_get_provider_model_override(config):
    assert get_provider(ProviderType.OPENAI, config, model="gpt-4o").model == "gpt-4o"


def test_get_provider_unknown(config):
    with pytest.raises(UnknownProviderError, match="Unknown provider: GEMINI"):
        get_provider("GEMINI", config)


def test_resolve_requested_when_available(config):
    assert resolve_provider_type("OPENAI", config) == ProviderType.OPENAI


def test_resolve_defaults_when_not_requested(config):
    assert resolve_provider_type(None, config) == ProviderType.CLAUDE


def test_resolve_falls_back_when_requested_unavailable():
    config = ProviderConfig(openai_api_key="openai-key")
    assert resolve_provider_type(ProviderType.CLAUDE, config) == ProviderType.OPENAI


def test_resolve_raises_when_nothing_configured():
    with pytest.raises(ProviderNotConfiguredError, match="No AI provider available"):
        resolve_provider_type(None, ProviderConfig())

"""Provider lookup driven by an explicit ProviderConfig."""

from app_builder.config import ProviderConfig
from app_builder.models import ProviderType
from app_builder.providers.base import AIProvider
from app_builder.providers.claude import ClaudeProvider
from app_builder.providers.exceptions import ProviderNotConfiguredError, UnknownProviderError
from app_builder.providers.openai_provider import OpenAIProvider


def _coerce_provider_type(value: ProviderType | str) -> ProviderType:
    if isinstance(value, ProviderType):
        return value
    try:
        return ProviderType(str(value).upper())
    except ValueError as exc:
        raise UnknownProviderError(f"Unknown provider: {value}") from exc


def get_provider(
    provider_type: ProviderType | str,
    config: ProviderConfig,
    model: str | None = None,
) -> AIProvider:
    """Instantiate the provider for ``provider_type``.

    Args:
        provider_type: CLAUDE or OPENAI (enum or case-insensitive name).
        config: Source of API keys and default models.
        model: Optional model override.

    Raises:
        UnknownProviderError: If the provider type is not recognized.
    """
    resolved = _coerce_provider_type(provider_type)
    if resolved == ProviderType.CLAUDE:
        return ClaudeProvider(
            api_key=config.anthropic_api_key,
            model=model or config.claude_model,
            max_tokens=config.max_tokens,
        )
    if resolved == ProviderType.OPENAI:
        return OpenAIProvider(
            api_key=config.openai_api_key,
            model=model or config.openai_model,
            max_tokens=config.max_tokens,
            temperature=config.openai_temperature,
        )
    raise UnknownProviderError(f"Unknown provider: {provider_type}")


def resolve_provider_type(
    requested: ProviderType | str | None,
    config: ProviderConfig,
) -> ProviderType:
    """Pick the provider to use for a request.

    The requested provider wins when it is configured; otherwise the config's
    default provider is used.

    Raises:
        UnknownProviderError: If ``requested`` names no known provider.
        ProviderNotConfiguredError: If no provider has an API key.
    """
    provider_type = _coerce_provider_type(requested) if requested else config.default_provider()
    if config.is_available(provider_type):
        return provider_type

    provider_type = config.default_provider()
    if not config.is_available(provider_type):
        raise ProviderNotConfiguredError(
            "No AI provider available. Please configure API keys."
        )
    return provider_type

"""Provider configuration for the app builder.

Provider selection is driven by an explicit ``ProviderConfig`` rather than by
inspecting the process environment at call time. ``ProviderConfig.from_env``
is the single place environment variables are read.
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from app_builder.models import ProviderType

DEFAULT_CLAUDE_MODEL = "claude-sonnet-4-20250514"
DEFAULT_OPENAI_MODEL = "gpt-4-turbo-preview"
DEFAULT_MAX_TOKENS = 8192
DEFAULT_OPENAI_TEMPERATURE = 0.7


class ProviderConfig(BaseModel):
    """API keys and model settings for all generation backends."""

    model_config = ConfigDict(frozen=True)

    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    claude_model: str = DEFAULT_CLAUDE_MODEL
    openai_model: str = DEFAULT_OPENAI_MODEL
    max_tokens: int = Field(DEFAULT_MAX_TOKENS, gt=0)
    openai_temperature: float = Field(DEFAULT_OPENAI_TEMPERATURE, ge=0.0, le=2.0)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProviderConfig":
        """Build a config from environment variables.

        Reads ANTHROPIC_API_KEY, OPENAI_API_KEY, APP_BUILDER_CLAUDE_MODEL,
        APP_BUILDER_OPENAI_MODEL and APP_BUILDER_MAX_TOKENS. Empty values are
        treated as unset.
        """
        env = os.environ if environ is None else environ
        values: dict = {
            "anthropic_api_key": env.get("ANTHROPIC_API_KEY") or None,
            "openai_api_key": env.get("OPENAI_API_KEY") or None,
        }
        if env.get("APP_BUILDER_CLAUDE_MODEL"):
            values["claude_model"] = env["APP_BUILDER_CLAUDE_MODEL"]
        if env.get("APP_BUILDER_OPENAI_MODEL"):
            values["openai_model"] = env["APP_BUILDER_OPENAI_MODEL"]
        max_tokens = env.get("APP_BUILDER_MAX_TOKENS")
        if max_tokens:
            try:
                values["max_tokens"] = int(max_tokens)
            except ValueError:
                pass
        return cls(**values)

    def is_available(self, provider: ProviderType) -> bool:
        if provider == ProviderType.CLAUDE:
            return bool(self.anthropic_api_key)
        if provider == ProviderType.OPENAI:
            return bool(self.openai_api_key)
        return False

    def available_providers(self) -> list[ProviderType]:
        return [p for p in (ProviderType.CLAUDE, ProviderType.OPENAI) if self.is_available(p)]

    def default_provider(self) -> ProviderType:
        """Prefer Claude, then OpenAI; Claude when neither is configured."""
        if self.anthropic_api_key:
            return ProviderType.CLAUDE
        if self.openai_api_key:
            return ProviderType.OPENAI
        return ProviderType.CLAUDE

    def api_key_for(self, provider: ProviderType) -> Optional[str]:
        if provider == ProviderType.CLAUDE:
            return self.anthropic_api_key
        return self.openai_api_key

    def model_for(self, provider: ProviderType) -> str:
        if provider == ProviderType.CLAUDE:
            return self.claude_model
        return self.openai_model

"""GPT-4 generation backend (OpenAI Chat Completions API)."""

import math
from typing import Any

import openai

from app_builder.config import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_OPENAI_MODEL,
    DEFAULT_OPENAI_TEMPERATURE,
)
from app_builder.models import GenerationContext, GenerationResult, ProviderType, TokenUsage
from app_builder.prompts import build_system_prompt, build_user_prompt
from app_builder.providers.base import AIProvider, StreamCallbacks
from app_builder.providers.exceptions import ProviderNotConfiguredError

CHARS_PER_TOKEN = 4  # Rough estimate when the stream carries no usage


def estimate_tokens(text: str) -> int:
    return math.ceil(len(text) / CHARS_PER_TOKEN)


class OpenAIProvider(AIProvider):
    """Generates project files with GPT-4."""

    name = ProviderType.OPENAI

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_OPENAI_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_OPENAI_TEMPERATURE,
    ) -> None:
        super().__init__(api_key=api_key, model=model, max_tokens=max_tokens)
        self.temperature = temperature
        self._client: openai.OpenAI | None = None

    def _get_client(self) -> openai.OpenAI:
        if self._client is None:
            if not self.api_key:
                raise ProviderNotConfiguredError("OPENAI_API_KEY is not configured")
            self._client = openai.OpenAI(api_key=self.api_key)
        return self._client

    def _build_messages(self, context: GenerationContext) -> list[dict[str, str]]:
        messages = [{"role": "system", "content": build_system_prompt(context)}]
        messages.extend(
            {"role": msg.role, "content": msg.content}
            for msg in context.conversation_history
        )
        messages.append({"role": "user", "content": build_user_prompt(context)})
        return messages

    def _request_kwargs(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": messages,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

    def generate(self, context: GenerationContext) -> GenerationResult:
        try:
            client = self._get_client()
            response = client.chat.completions.create(
                **self._request_kwargs(self._build_messages(context))
            )

            response_text = ""
            if response.choices:
                response_text = response.choices[0].message.content or ""

            usage = response.usage
            tokens = TokenUsage(
                prompt=getattr(usage, "prompt_tokens", 0) or 0,
                completion=getattr(usage, "completion_tokens", 0) or 0,
                total=getattr(usage, "total_tokens", 0) or 0,
            )
            return self._build_result(response_text, context, tokens)
        except Exception as exc:
            self._report("OpenAI generation error", exc)
            return self._failed_result(exc)

    def generate_stream(self, context: GenerationContext, callbacks: StreamCallbacks) -> None:
        try:
            client = self._get_client()
            messages = self._build_messages(context)
            stream = client.chat.completions.create(
                **self._request_kwargs(messages),
                stream=True,
            )

            chunks: list[str] = []
            for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    chunks.append(content)
                    callbacks.token(content)

            response_text = "".join(chunks)
            prompt_tokens = estimate_tokens("".join(m["content"] for m in messages))
            completion_tokens = estimate_tokens(response_text)
            result = self._build_result(
                response_text,
                context,
                TokenUsage(
                    prompt=prompt_tokens,
                    completion=completion_tokens,
                    total=prompt_tokens + completion_tokens,
                ),
            )
        except Exception as exc:
            self._report("OpenAI streaming error", exc)
            callbacks.error(exc)
            return

        callbacks.complete(result)

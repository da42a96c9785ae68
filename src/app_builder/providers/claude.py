"""Claude generation backend (Anthropic Messages API)."""

from typing import Any

from anthropic import Anthropic

from app_builder.config import DEFAULT_CLAUDE_MODEL, DEFAULT_MAX_TOKENS
from app_builder.models import GenerationContext, GenerationResult, ProviderType, TokenUsage
from app_builder.prompts import build_system_prompt, build_user_prompt
from app_builder.providers.base import AIProvider, StreamCallbacks
from app_builder.providers.exceptions import ProviderNotConfiguredError


class ClaudeProvider(AIProvider):
    """Generates project files with Claude."""

    name = ProviderType.CLAUDE

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_CLAUDE_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> None:
        super().__init__(api_key=api_key, model=model, max_tokens=max_tokens)
        self._client: Anthropic | None = None

    def _get_client(self) -> Anthropic:
        # Created lazily so constructing a provider never needs a key
        if self._client is None:
            if not self.api_key:
                raise ProviderNotConfiguredError("ANTHROPIC_API_KEY is not configured")
            self._client = Anthropic(api_key=self.api_key)
        return self._client

    def _build_messages(self, context: GenerationContext) -> list[dict[str, str]]:
        """History plus the current prompt; system turns go via ``system=``."""
        messages = [
            {"role": msg.role, "content": msg.content}
            for msg in context.conversation_history
            if msg.role in ("user", "assistant")
        ]
        messages.append({"role": "user", "content": build_user_prompt(context)})
        return messages

    def _request_kwargs(self, context: GenerationContext) -> dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "system": build_system_prompt(context),
            "messages": self._build_messages(context),
        }

    def generate(self, context: GenerationContext) -> GenerationResult:
        try:
            client = self._get_client()
            response = client.messages.create(**self._request_kwargs(context))

            response_text = "\n".join(
                block.text for block in response.content if block.type == "text"
            )
            usage = TokenUsage(
                prompt=response.usage.input_tokens,
                completion=response.usage.output_tokens,
                total=response.usage.input_tokens + response.usage.output_tokens,
            )
            return self._build_result(response_text, context, usage)
        except Exception as exc:
            self._report("Claude generation error", exc)
            return self._failed_result(exc)

    def generate_stream(self, context: GenerationContext, callbacks: StreamCallbacks) -> None:
        try:
            client = self._get_client()
            chunks: list[str] = []

            with client.messages.stream(**self._request_kwargs(context)) as stream:
                for text in stream.text_stream:
                    if text:
                        chunks.append(text)
                        callbacks.token(text)
                final_message = stream.get_final_message()

            input_tokens = final_message.usage.input_tokens
            output_tokens = final_message.usage.output_tokens
            result = self._build_result(
                "".join(chunks),
                context,
                TokenUsage(
                    prompt=input_tokens,
                    completion=output_tokens,
                    total=input_tokens + output_tokens,
                ),
            )
        except Exception as exc:
            self._report("Claude streaming error", exc)
            callbacks.error(exc)
            return

        callbacks.complete(result)

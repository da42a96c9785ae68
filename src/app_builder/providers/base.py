"""Common interface for generation backends."""

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from app_builder.models import (
    GenerationContext,
    GenerationResult,
    ProviderType,
    TokenUsage,
)
from app_builder.parsing import process_response


@dataclass
class StreamCallbacks:
    """Receivers for a streamed generation.

    ``on_token`` may fire any number of times; afterwards exactly one of
    ``on_complete`` or ``on_error`` fires.
    """

    on_token: Optional[Callable[[str], None]] = None
    on_complete: Optional[Callable[[GenerationResult], None]] = None
    on_error: Optional[Callable[[Exception], None]] = None

    def token(self, text: str) -> None:
        if self.on_token is not None:
            self.on_token(text)

    def complete(self, result: GenerationResult) -> None:
        if self.on_complete is not None:
            self.on_complete(result)

    def error(self, exc: Exception) -> None:
        if self.on_error is not None:
            self.on_error(exc)


class AIProvider(ABC):
    """A backend that turns a GenerationContext into generated files."""

    name: ProviderType

    def __init__(self, api_key: str | None, model: str, max_tokens: int) -> None:
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens

    @abstractmethod
    def generate(self, context: GenerationContext) -> GenerationResult:
        """Run one generation. Never raises; failures set ``success=False``."""

    @abstractmethod
    def generate_stream(self, context: GenerationContext, callbacks: StreamCallbacks) -> None:
        """Run one generation, relaying tokens as they arrive."""

    def _build_result(self, response_text: str, context: GenerationContext, usage: TokenUsage) -> GenerationResult:
        extraction = process_response(response_text, context.existing_paths())
        return GenerationResult(
            success=True,
            response=response_text,
            files=extraction.files,
            explanation=extraction.explanation,
            security_issues=extraction.security_issues,
            tokens_used=usage,
            model=self.model,
            provider=self.name,
        )

    def _failed_result(self, exc: Exception) -> GenerationResult:
        return GenerationResult(
            success=False,
            model=self.model,
            provider=self.name,
            error=str(exc) or type(exc).__name__,
        )

    def _report(self, label: str, exc: Exception) -> None:
        print(f"[{type(self).__name__}] {label}: {exc}", file=sys.stderr)

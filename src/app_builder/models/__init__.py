"""Data models for the app builder."""

from app_builder.models.file_models import (
    ExtractionResult,
    FileAction,
    FileChange,
    ProjectFile,
)
from app_builder.models.generation_models import (
    GenerationContext,
    GenerationRecord,
    GenerationResult,
    GenerationStatus,
    Message,
    ProviderType,
    TokenUsage,
)

__all__ = [
    "ExtractionResult",
    "FileAction",
    "FileChange",
    "GenerationContext",
    "GenerationRecord",
    "GenerationResult",
    "GenerationStatus",
    "Message",
    "ProjectFile",
    "ProviderType",
    "TokenUsage",
]

"""Models for AI generation requests and results."""

import uuid
from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from app_builder.models.file_models import FileChange, ProjectFile


class ProviderType(str, Enum):
    """Supported generation backends."""

    CLAUDE = "CLAUDE"
    OPENAI = "OPENAI"


class Message(BaseModel):
    """A single chat message in a project conversation."""

    model_config = ConfigDict(frozen=False)

    role: Literal["user", "assistant", "system"]
    content: str


class GenerationContext(BaseModel):
    """Everything a provider needs to produce one generation."""

    model_config = ConfigDict(frozen=False)

    project_id: str
    project_name: str
    framework: Optional[str] = None
    existing_files: list[ProjectFile] = Field(default_factory=list)
    conversation_history: list[Message] = Field(default_factory=list)
    prompt: str

    def existing_paths(self) -> set[str]:
        return {f.path for f in self.existing_files}


class TokenUsage(BaseModel):
    """Token accounting for one generation."""

    model_config = ConfigDict(frozen=False)

    prompt: int = 0
    completion: int = 0
    total: int = 0


class GenerationResult(BaseModel):
    """Outcome of a generate / generate_stream call."""

    model_config = ConfigDict(frozen=False)

    success: bool
    response: str = ""
    files: list[FileChange] = Field(default_factory=list)
    explanation: str = ""
    security_issues: list[str] = Field(default_factory=list)
    tokens_used: TokenUsage = Field(default_factory=TokenUsage)
    model: str
    provider: ProviderType
    error: Optional[str] = None


class GenerationStatus(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class GenerationRecord(BaseModel):
    """Persisted log entry for one chat turn."""

    model_config = ConfigDict(frozen=False)

    generation_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    prompt: str
    provider: ProviderType
    model: str = ""
    status: GenerationStatus = GenerationStatus.IN_PROGRESS
    files_changed: list[FileChange] = Field(default_factory=list)
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    error_message: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None  # Set only on COMPLETED

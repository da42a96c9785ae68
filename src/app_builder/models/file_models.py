"""Models for files produced by AI generations."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class FileAction(str, Enum):
    """What a generation does to a single project file."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class FileChange(BaseModel):
    """One file operation extracted from an AI response."""

    model_config = ConfigDict(frozen=True)

    path: str  # Relative path, no leading slash, no ".." segments
    action: FileAction = FileAction.CREATE
    content: str | None = None  # None for deletions


class ProjectFile(BaseModel):
    """A file currently stored for a project."""

    model_config = ConfigDict(frozen=False)

    path: str
    content: str


class ExtractionResult(BaseModel):
    """Structured output of processing one raw AI response."""

    model_config = ConfigDict(frozen=False)

    files: list[FileChange]
    explanation: str  # Includes the security warning suffix, if any
    security_issues: list[str]

"""Exceptions for project workspace operations."""


class WorkspaceError(Exception):
    """Base exception for project workspace operations."""


class UnsafePathError(WorkspaceError):
    """Raised when a file change targets a path outside the project."""

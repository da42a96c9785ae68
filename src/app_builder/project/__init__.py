"""Project storage and export."""

from app_builder.project.exceptions import UnsafePathError, WorkspaceError
from app_builder.project.export import (
    build_project_zip,
    export_filename,
    generate_package_json,
    generate_readme,
)
from app_builder.project.workspace import ProjectWorkspace

__all__ = [
    "ProjectWorkspace",
    "UnsafePathError",
    "WorkspaceError",
    "build_project_zip",
    "export_filename",
    "generate_package_json",
    "generate_readme",
]

"""Classify extracted file changes against a project's existing files."""

from typing import Iterable

from app_builder.models import FileAction, FileChange


def classify_file_actions(
    changes: Iterable[FileChange],
    existing_paths: Iterable[str],
) -> list[FileChange]:
    """Return copies of ``changes`` marked ``update`` or ``create``.

    A change is an update when its path is already stored for the project.
    Paths and content are left untouched. Deletions are never produced here.
    """
    existing = set(existing_paths)
    return [
        change.model_copy(
            update={
                "action": FileAction.UPDATE if change.path in existing else FileAction.CREATE
            }
        )
        for change in changes
    ]

"""Directory-backed project storage.

A ``ProjectWorkspace`` keeps a project's files in a directory, backs up the
previous content of every updated file as a numbered version, and stores the
recent conversation and a log of generations under ``.app_builder/``.
"""

import json
import re
from pathlib import Path, PurePosixPath
from typing import Any, Iterable

from app_builder.models import FileAction, FileChange, GenerationRecord, Message, ProjectFile
from app_builder.parsing import is_valid_path
from app_builder.project.exceptions import UnsafePathError, WorkspaceError

METADATA_DIR = ".app_builder"
VERSIONS_DIR = "versions"
HISTORY_FILE = "history.json"
GENERATIONS_FILE = "generations.json"
DEFAULT_HISTORY_LIMIT = 20
SKIPPED_DIRS = frozenset({METADATA_DIR, ".git", "node_modules", "__pycache__"})

# Matched against the file name: .env, .env.local, .env.production, ...
ENV_FILE_PATTERN = re.compile(r"\.env(?:\..+)?")
WITHHELD_CONTENT = "(contents withheld: environment file)"


def is_env_file(relative_path: str) -> bool:
    return ENV_FILE_PATTERN.fullmatch(PurePosixPath(relative_path).name) is not None


class ProjectWorkspace:
    """Stores a project's files, chat history and generation log under ``root``."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).resolve()

    @property
    def metadata_dir(self) -> Path:
        return self.root / METADATA_DIR

    def _resolve(self, relative_path: str) -> Path:
        """Map a project path to disk, refusing anything that escapes root."""
        if not is_valid_path(relative_path):
            raise UnsafePathError(f"Refusing to write invalid path '{relative_path}'")
        target = (self.root / relative_path).resolve()
        if not target.is_relative_to(self.root):
            raise UnsafePathError(f"Path '{relative_path}' escapes the project root")
        if METADATA_DIR in Path(relative_path).parts:
            raise UnsafePathError(f"Path '{relative_path}' is reserved")
        return target

    def load_files(self) -> list[ProjectFile]:
        """Read every project file with a valid path, sorted by path.

        Files that are not UTF-8 text are skipped.
        """
        if not self.root.is_dir():
            return []

        files: list[ProjectFile] = []
        for file_path in sorted(self.root.rglob("*")):
            if not file_path.is_file():
                continue
            relative = file_path.relative_to(self.root)
            if any(part in SKIPPED_DIRS for part in relative.parts[:-1]):
                continue
            relative_path = relative.as_posix()
            if not is_valid_path(relative_path):
                continue
            try:
                content = file_path.read_text(encoding="utf-8")
            except (UnicodeDecodeError, OSError):
                continue
            files.append(ProjectFile(path=relative_path, content=content))
        return files

    def context_files(self) -> list[ProjectFile]:
        """Project files as they may be sent to a provider.

        Environment files keep their path but their content is withheld.
        """
        return [
            ProjectFile(path=f.path, content=WITHHELD_CONTENT) if is_env_file(f.path) else f
            for f in self.load_files()
        ]

    def existing_paths(self) -> set[str]:
        return {f.path for f in self.load_files()}

    def _version_dir(self, relative_path: str) -> Path:
        return self.metadata_dir / VERSIONS_DIR / Path(relative_path).parent

    def list_versions(self, relative_path: str) -> list[Path]:
        """Return backups of ``relative_path``, oldest first."""
        name = Path(relative_path).name
        version_dir = self._version_dir(relative_path)
        if not version_dir.is_dir():
            return []
        backups = []
        for candidate in version_dir.glob(f"{name}.v*"):
            suffix = candidate.name[len(name) + 2:]
            if suffix.isdigit():
                backups.append((int(suffix), candidate))
        return [path for _, path in sorted(backups)]

    def _backup(self, relative_path: str, content: bytes) -> Path:
        version = len(self.list_versions(relative_path)) + 1
        version_dir = self._version_dir(relative_path)
        version_dir.mkdir(parents=True, exist_ok=True)
        backup_path = version_dir / f"{Path(relative_path).name}.v{version}"
        backup_path.write_bytes(content)
        return backup_path

    def apply_changes(self, changes: Iterable[FileChange]) -> list[str]:
        """Persist ``changes`` and return the paths that were touched.

        Updates back up the current bytes first, whatever their encoding.
        Creates for a path that already exists on disk are treated as
        updates. Deletes also remove the file's backups.

        Raises:
            UnsafePathError: If any change targets an invalid path. No file
                is written in that case.
            WorkspaceError: If a file cannot be written or removed.
        """
        changes = list(changes)
        targets = [(change, self._resolve(change.path)) for change in changes]

        applied: list[str] = []
        for change, target in targets:
            try:
                if change.action == FileAction.DELETE:
                    if target.is_file():
                        target.unlink()
                        for backup in self.list_versions(change.path):
                            backup.unlink()
                        applied.append(change.path)
                    continue

                if change.content is None:
                    continue

                if target.is_file():
                    self._backup(change.path, target.read_bytes())
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(change.content, encoding="utf-8")
                applied.append(change.path)
            except OSError as exc:
                raise WorkspaceError(f"Failed to apply change to '{change.path}': {exc}") from exc

        return applied

    def _read_json(self, file_name: str) -> list[dict[str, Any]]:
        json_path = self.metadata_dir / file_name
        if not json_path.is_file():
            return []
        try:
            return json.loads(json_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            raise WorkspaceError(f"Unreadable {file_name} in {self.metadata_dir}: {exc}") from exc

    def _write_json(self, file_name: str, items: list[dict[str, Any]]) -> None:
        try:
            self.metadata_dir.mkdir(parents=True, exist_ok=True)
            (self.metadata_dir / file_name).write_text(
                json.dumps(items, indent=2),
                encoding="utf-8",
            )
        except OSError as exc:
            raise WorkspaceError(f"Failed to write {file_name}: {exc}") from exc

    def load_history(self, limit: int = DEFAULT_HISTORY_LIMIT) -> list[Message]:
        """Return the most recent ``limit`` messages of the conversation."""
        if limit <= 0:
            return []
        return [Message(**item) for item in self._read_json(HISTORY_FILE)][-limit:]

    def append_history(self, messages: Iterable[Message]) -> None:
        history = self._read_json(HISTORY_FILE)
        history.extend(m.model_dump() for m in messages)
        self._write_json(HISTORY_FILE, history)

    def _read_generations(self) -> list[GenerationRecord]:
        return [GenerationRecord.model_validate(item) for item in self._read_json(GENERATIONS_FILE)]

    def _write_generations(self, records: list[GenerationRecord]) -> None:
        self._write_json(GENERATIONS_FILE, [r.model_dump(mode="json") for r in records])

    def record_generation(self, record: GenerationRecord) -> GenerationRecord:
        """Append ``record`` to the generation log."""
        records = self._read_generations()
        records.append(record)
        self._write_generations(records)
        return record

    def update_generation(self, generation_id: str, **changes: Any) -> GenerationRecord:
        """Update fields of a logged generation and return the new record.

        Raises:
            WorkspaceError: If no generation with ``generation_id`` is logged.
        """
        records = self._read_generations()
        for index, record in enumerate(records):
            if record.generation_id == generation_id:
                records[index] = record.model_copy(update=changes)
                self._write_generations(records)
                return records[index]
        raise WorkspaceError(f"Unknown generation '{generation_id}'")

    def load_generations(self, limit: int = DEFAULT_HISTORY_LIMIT) -> list[GenerationRecord]:
        """Return up to ``limit`` logged generations, newest first."""
        if limit <= 0:
            return []
        return list(reversed(self._read_generations()))[:limit]

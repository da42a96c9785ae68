"""Extract file changes from fenced code blocks in AI responses.

Two independent heuristics are applied because completions do not always
follow the requested format:

1. Tagged blocks, where the fence header is the path
   (```filepath:src/App.tsx).
2. Language-tagged blocks whose first line names the path
   (```tsx followed by ``// src/App.tsx``).

Results are merged by path; the first occurrence of a path wins.
"""

import re
from typing import Iterable

from app_builder.models import FileAction, FileChange
from app_builder.parsing.paths import is_valid_path

FILEPATH_PREFIX = "filepath:"

# Headers that name a language rather than a file
LANGUAGE_ONLY = frozenset({
    "typescript", "javascript", "tsx", "jsx", "ts", "js",
    "json", "html", "css", "python", "go", "rust",
})

TAGGED_BLOCK_PATTERN = re.compile(r"```([^\n`]+)\n(.*?)```", re.DOTALL)
FIRST_LINE_PATH_PATTERN = re.compile(
    r"```(\w+)\n(//\s*)?([^\n]+\.[a-z]+)\n(.*?)```",
    re.DOTALL,
)


def _clean_header(raw_header: str) -> str | None:
    """Turn a fence header into a candidate path, or None to skip the block."""
    header = raw_header
    # The fence and the header may each carry the prefix
    if header.startswith(FILEPATH_PREFIX):
        header = header[len(FILEPATH_PREFIX):]
    header = header.strip()
    if not header:
        return None

    has_prefix = header.startswith(FILEPATH_PREFIX)
    if " " in header and not has_prefix:
        return None

    if has_prefix:
        header = header[len(FILEPATH_PREFIX):].strip()

    if header.lower() in LANGUAGE_ONLY:
        return None

    # Too ambiguous to be a path
    if not header or ("." not in header and "/" not in header):
        return None

    return header


def extract_tagged_blocks(response: str) -> list[FileChange]:
    """Pass 1: blocks whose fence header is a (optionally ``filepath:``) path."""
    changes: list[FileChange] = []
    seen: set[str] = set()

    for match in TAGGED_BLOCK_PATTERN.finditer(response or ""):
        path = _clean_header(match.group(1))
        if path is None or path in seen or not is_valid_path(path):
            continue
        seen.add(path)
        changes.append(
            FileChange(path=path, action=FileAction.CREATE, content=match.group(2).strip())
        )

    return changes


def extract_first_line_path_blocks(
    response: str,
    known_paths: Iterable[str] = (),
) -> list[FileChange]:
    """Pass 2: language-tagged blocks whose first line is the file path.

    Args:
        response: Raw AI response text.
        known_paths: Paths already produced elsewhere; matching blocks are skipped.
    """
    changes: list[FileChange] = []
    seen = set(known_paths)

    for match in FIRST_LINE_PATH_PATTERN.finditer(response or ""):
        path = match.group(3).strip()
        if path in seen or not is_valid_path(path):
            continue
        seen.add(path)
        changes.append(
            FileChange(path=path, action=FileAction.CREATE, content=match.group(4).strip())
        )

    return changes


def extract_file_changes(response: str) -> list[FileChange]:
    """Extract all file changes from a raw AI response.

    Every change is returned with action ``create``; use
    :func:`app_builder.parsing.actions.classify_file_actions` to mark updates.
    """
    tagged = extract_tagged_blocks(response)
    fallback = extract_first_line_path_blocks(
        response,
        known_paths=[change.path for change in tagged],
    )
    return tagged + fallback

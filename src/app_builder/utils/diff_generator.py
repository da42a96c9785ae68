"""Unified diffs for showing how a generation changes existing files."""

import difflib


def generate_unified_diff(
    file_path: str,
    original_content: str,
    modified_content: str,
) -> str:
    """Generate a git-style unified diff.

    Args:
        file_path: Project-relative path (e.g. "src/App.tsx").
        original_content: Stored file content.
        modified_content: Content proposed by the generation.

    Returns:
        Diff text with a/ b/ prefixes, or an empty string if nothing changed.
    """
    if original_content == modified_content:
        return ""

    diff_lines = difflib.unified_diff(
        original_content.splitlines(),
        modified_content.splitlines(),
        fromfile=f"a/{file_path}",
        tofile=f"b/{file_path}",
        lineterm="",
    )
    return "\n".join(diff_lines)

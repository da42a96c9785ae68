"""Parsing of raw AI responses into structured file changes."""

from app_builder.parsing.actions import classify_file_actions
from app_builder.parsing.code_blocks import (
    extract_file_changes,
    extract_first_line_path_blocks,
    extract_tagged_blocks,
)
from app_builder.parsing.explanation import DEFAULT_EXPLANATION, extract_explanation
from app_builder.parsing.paths import is_valid_path
from app_builder.parsing.pipeline import format_explanation, process_response

__all__ = [
    "DEFAULT_EXPLANATION",
    "classify_file_actions",
    "extract_explanation",
    "extract_file_changes",
    "extract_first_line_path_blocks",
    "extract_tagged_blocks",
    "format_explanation",
    "is_valid_path",
    "process_response",
]

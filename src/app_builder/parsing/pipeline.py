"""Coordinator for the response-to-file-changes pipeline."""

from typing import Iterable

from app_builder.models import ExtractionResult
from app_builder.parsing.actions import classify_file_actions
from app_builder.parsing.code_blocks import extract_file_changes
from app_builder.parsing.explanation import extract_explanation
from app_builder.security.secret_scanner import scan_for_security_issues

WARNING_PREFIX = "\n\nWarning: "


def format_explanation(explanation: str, security_issues: list[str]) -> str:
    """Append security findings to an explanation as a warning suffix."""
    if not security_issues:
        return explanation
    return f"{explanation}{WARNING_PREFIX}{', '.join(security_issues)}"


def process_response(
    response: str,
    existing_paths: Iterable[str] = (),
) -> ExtractionResult:
    """Turn a complete AI response into classified file changes.

    Args:
        response: Full completion text, already assembled from any stream.
        existing_paths: Paths currently stored for the project.

    Returns:
        ExtractionResult with classified files, the explanation (including any
        security warning) and the raw security findings.
    """
    files = classify_file_actions(extract_file_changes(response), existing_paths)
    all_code = "\n".join(change.content or "" for change in files)
    security_issues = scan_for_security_issues(all_code)
    explanation = format_explanation(extract_explanation(response), security_issues)
    return ExtractionResult(
        files=files,
        explanation=explanation,
        security_issues=security_issues,
    )

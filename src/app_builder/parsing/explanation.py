"""Recover the prose explanation from an AI response."""

import re

DEFAULT_EXPLANATION = "Changes applied successfully."

_CODE_BLOCK_RE = re.compile(r"```.*?```", re.DOTALL)


def extract_explanation(response: str) -> str:
    """Strip fenced code blocks and blank lines from ``response``.

    Returns DEFAULT_EXPLANATION when nothing but code (or whitespace) remains.
    An unclosed fence does not match and is left in the text.
    """
    text = _CODE_BLOCK_RE.sub("", response or "")
    lines = [line for line in text.split("\n") if line.strip()]
    explanation = "\n".join(lines).strip()
    return explanation or DEFAULT_EXPLANATION

"""Heuristic scan of generated code for embedded credentials.

Advisory only: findings are surfaced to the user, never used to block.
"""

import re

# Ordered (category, pattern) pairs. Textual categories ignore case; fixed
# token prefixes are case-sensitive.
SECRET_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("API key", re.compile(r"api[_-]?key\s*[:=]\s*['\"][^'\"]{10,}['\"]", re.IGNORECASE)),
    ("Secret", re.compile(r"secret\s*[:=]\s*['\"][^'\"]{10,}['\"]", re.IGNORECASE)),
    ("Password", re.compile(r"password\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE)),
    ("Stripe key", re.compile(r"sk[-_](?:live|test)[-_][a-zA-Z0-9]+")),
    ("AWS access key", re.compile(r"AKIA[0-9A-Z]{16}")),
    ("GitHub token", re.compile(r"ghp_[a-zA-Z0-9]{36}")),
    ("Bearer token", re.compile(r"Bearer\s+[a-zA-Z0-9\-._~+/]+={0,2}")),
]


def scan_for_security_issues(code: str) -> list[str]:
    """Return one finding per credential category detected in ``code``."""
    if not isinstance(code, str) or not code:
        return []
    return [
        f"Potential {name} detected in generated code"
        for name, pattern in SECRET_PATTERNS
        if pattern.search(code)
    ]

"""Validation of file paths proposed by AI responses."""

import re

MAX_PATH_LENGTH = 200

_EXTENSION_RE = re.compile(r"\.[a-z0-9]+\Z", re.IGNORECASE)
_CONFIG_FILE_RE = re.compile(
    r"(?:\.gitignore|\.env|\.env\.local|Dockerfile|Makefile|README)",
    re.IGNORECASE,
)
_DRIVE_PREFIX_RE = re.compile(r"[a-z]:", re.IGNORECASE)
_ALLOWED_CHARS_RE = re.compile(r"[A-Za-z0-9_\-./]+")


def is_valid_path(candidate: str) -> bool:
    """Return True if ``candidate`` is an acceptable relative project path.

    A valid path ends in a file extension (or is one of a few well-known
    extensionless config files), stays inside the project (no ``..``, not
    absolute on POSIX or Windows), is at most 200 characters and uses only
    ASCII word characters, hyphens, dots and forward slashes.
    """
    if not isinstance(candidate, str) or not candidate:
        return False

    has_extension = _EXTENSION_RE.search(candidate) is not None
    is_config_file = _CONFIG_FILE_RE.fullmatch(candidate) is not None
    if not has_extension and not is_config_file:
        return False

    if ".." in candidate:
        return False

    if candidate.startswith("/") or _DRIVE_PREFIX_RE.match(candidate):
        return False

    if len(candidate) > MAX_PATH_LENGTH:
        return False

    return _ALLOWED_CHARS_RE.fullmatch(candidate) is not None

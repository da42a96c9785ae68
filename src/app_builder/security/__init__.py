"""Security checks for generated code."""

from app_builder.security.secret_scanner import SECRET_PATTERNS, scan_for_security_issues

__all__ = ["SECRET_PATTERNS", "scan_for_security_issues"]

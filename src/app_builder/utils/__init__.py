"""Utilities for the app builder."""

from app_builder.utils.diff_generator import generate_unified_diff

__all__ = ["generate_unified_diff"]

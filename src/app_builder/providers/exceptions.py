"""Exceptions for AI provider operations."""


class ProviderError(Exception):
    """Base exception for all provider operations."""


class ProviderNotConfiguredError(ProviderError):
    """Raised when a provider is requested but its API key is not configured."""


class UnknownProviderError(ProviderError):
    """Raised when a provider type is not recognized."""

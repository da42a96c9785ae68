"""Command-line interface for the app builder."""

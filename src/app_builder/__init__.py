"""AI app builder: turn natural-language prompts into project source files."""

__version__ = "0.1.0"

"""
Post-processing formatters for generated code.
"""

from __future__ import annotations

from ..config import FormatterBackend, FormatterConfig
from .base import Formatter
from .go_formatter import GoFormatter, format_go
from .gofmt_formatter import GofmtFormatter


def get_formatter(config: FormatterConfig) -> Formatter:
    """Create the formatter selected by the configuration."""
    if config.backend == FormatterBackend.GOFMT:
        return GofmtFormatter(config.gofmt_path)
    return GoFormatter()


__all__ = [
    "Formatter",
    "GoFormatter",
    "GofmtFormatter",
    "format_go",
    "get_formatter",
]

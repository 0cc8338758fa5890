"""
Base class for code generation backends.

Defines the interface that all language-specific backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ..analyzer.model import TypeModel
from ..config import CodeGeneratorConfig


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            undefined=jinja2.StrictUndefined,
        )
        self.register_filters(self.jinja_env)
        self.file_template = self.jinja_env.get_template(f"file.{self.FILE_EXTENSION}.jinja2")

    def register_filters(self, env: jinja2.Environment) -> None:
        """Hook for subclasses to add template filters."""

    @abstractmethod
    def generate(self, model: TypeModel) -> str:
        """
        Generate code from the type model.

        Args:
            model: The type model

        Returns:
            Generated code as a string, before formatting
        """

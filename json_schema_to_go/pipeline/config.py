"""
Configuration for the code generator pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_GENERATION_COMMENT = "// Code generated by schema-generate. DO NOT EDIT."


class FormatterBackend(str, Enum):
    """Formatter used to canonicalize the emitted Go source."""

    BUILTIN = "builtin"  # Default: pure Python gofmt-style formatter
    GOFMT = "gofmt"  # External gofmt binary, falls back to builtin if missing


@dataclass
class FormatterConfig:
    """Configuration for the post-emission formatter."""

    backend: FormatterBackend = FormatterBackend.BUILTIN

    # Path or name of the gofmt executable
    gofmt_path: str = "gofmt"

    # Seconds to wait for gofmt
    timeout: int = 30


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        atomic_write: Whether to write through a temporary file and rename it
    """

    atomic_write: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Go package the types are declared in
    package_name: str = "main"

    # Add generation comment at top of file
    add_generation_comment: bool = True
    generation_comment: str = DEFAULT_GENERATION_COMMENT

    # Name of the root type when the schema has no title (empty = input file stem)
    root_name: str = ""

    # Go types used for JSON Schema numbers
    integer_type: str = "int"
    number_type: str = "float64"

    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(
                    backend=FormatterBackend(v.get("backend", FormatterBackend.BUILTIN)),
                    gofmt_path=v.get("gofmt_path", "gofmt"),
                    timeout=v.get("timeout", 30),
                )
            elif k == "output" and isinstance(v, dict):
                config.output = OutputConfig(atomic_write=v.get("atomic_write", True))
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "package_name": self.package_name,
            "add_generation_comment": self.add_generation_comment,
            "generation_comment": self.generation_comment,
            "root_name": self.root_name,
            "integer_type": self.integer_type,
            "number_type": self.number_type,
            "formatter": {
                "backend": self.formatter.backend.value,
                "gofmt_path": self.formatter.gofmt_path,
                "timeout": self.formatter.timeout,
            },
            "output": {
                "atomic_write": self.output.atomic_write,
            },
        }

"""JSON Schema to Go Generator

A Python package for generating Go type declarations from JSON Schema
definitions, with deterministic output and gofmt-style formatting.
"""

__version__ = "1.0.1"

from .errors import (
    EmissionFormatError,
    GenerationError,
    ModelBuildError,
    OffsetOutOfRange,
    SchemaError,
    SchemaSyntaxError,
    SchemaTypeMismatchError,
)
from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    FormatterBackend,
    FormatterConfig,
    OutputConfig,
    PipelineGenerator,
    SchemaSource,
)
from .utils import line_and_character, ordered_keys

__all__ = [
    "PipelineGenerator",
    "SchemaSource",
    "CodeGeneratorConfig",
    "FormatterBackend",
    "FormatterConfig",
    "OutputConfig",
    "AtomicWriter",
    "GenerationError",
    "SchemaError",
    "SchemaSyntaxError",
    "SchemaTypeMismatchError",
    "ModelBuildError",
    "OffsetOutOfRange",
    "EmissionFormatError",
    "line_and_character",
    "ordered_keys",
]

"""
Pipeline - JSON Schema to Go type generator.

This module provides a multi-phase architecture for generating
Go type declarations from JSON schemas:

1. Phase 1 (Loader/Parser): Parse JSON Schema into Schema AST
2. Phase 2 (Analyzer): Resolve references and build the type model
3. Phase 3 (Backend): Emit Go source from the ordered type model
4. Phase 4 (Formatter): Canonicalize and validate the emitted source
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter
from .config import CodeGeneratorConfig, FormatterBackend, FormatterConfig, OutputConfig
from .generator import PipelineGenerator, SchemaSource

__all__ = [
    "PipelineGenerator",
    "SchemaSource",
    "CodeGeneratorConfig",
    "FormatterBackend",
    "FormatterConfig",
    "OutputConfig",
    "AtomicWriter",
]

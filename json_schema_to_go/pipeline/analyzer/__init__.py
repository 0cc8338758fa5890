"""
Analyzer module.

Contains reference resolution and the type model builder.
"""

from __future__ import annotations

from .model import Alias, Field, Struct, TypeModel
from .model_builder import ModelBuilder
from .reference_resolver import ReferenceResolver

__all__ = [
    "Alias",
    "Field",
    "Struct",
    "TypeModel",
    "ModelBuilder",
    "ReferenceResolver",
]

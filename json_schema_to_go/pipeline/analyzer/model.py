"""
Type model definitions.

These nodes are the resolved output of the analyzer: every schema definition
has become either a Go struct or a Go type alias, and every type expression
is already spelled in Go. The emitter renders them without further lookups.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Field:
    """A field of a struct."""

    name: str = ""  # Go field identifier
    json_name: str = ""  # Original JSON property key
    type: str = ""  # Go type expression
    required: bool = False
    description: str = ""


@dataclass
class Struct:
    """An object definition, rendered as a Go struct."""

    name: str = ""
    description: str = ""  # May contain newlines

    # Field key -> field. Iteration order is not significant.
    fields: dict[str, Field] = field(default_factory=dict)


@dataclass
class Alias:
    """A definition that is a synonym of another type."""

    name: str = ""
    type: str = ""


@dataclass
class TypeModel:
    """All structs and aliases produced by one generation run."""

    structs: dict[str, Struct] = field(default_factory=dict)
    aliases: dict[str, Alias] = field(default_factory=dict)

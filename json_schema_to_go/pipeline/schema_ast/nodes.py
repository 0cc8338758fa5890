"""
AST (Abstract Syntax Tree) node definitions for JSON Schema.

These nodes represent the parsed structure of a JSON Schema before
any reference resolution or Go-specific processing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SchemaNode:
    """Base class for all AST nodes."""

    # JSON pointer of the node in its document (for error messages)
    source_path: str = ""

    title: str = ""
    description: str = ""


@dataclass
class PrimitiveNode(SchemaNode):
    """Represents a primitive type (string, integer, number, boolean, null) or an untyped schema."""

    type_name: str = ""  # "" means any type


@dataclass
class ConstNode(SchemaNode):
    """Represents a const value."""

    value: Any = None
    inferred_type: str = ""  # "string", "integer", etc.


@dataclass
class EnumNode(SchemaNode):
    """Represents an enum type."""

    values: list[Any] = field(default_factory=list)
    inferred_type: str = ""


@dataclass
class RefNode(SchemaNode):
    """Represents a $ref (unresolved reference)."""

    ref_path: str = ""  # e.g., "#/definitions/MyClass" or "other.json#/definitions/MyClass"


@dataclass
class ArrayNode(SchemaNode):
    """Represents an array type."""

    items: SchemaNode | list[SchemaNode] | None = None  # Single type or tuple types


@dataclass
class PropertyDef(SchemaNode):
    """Represents a property in an object."""

    name: str = ""
    type_node: SchemaNode | None = None
    is_required: bool = False


@dataclass
class ObjectNode(SchemaNode):
    """Represents an object type."""

    properties: list[PropertyDef] = field(default_factory=list)
    required: list[str] = field(default_factory=list)

    # Schema of additionalProperties, None when absent or a boolean
    additional_properties: SchemaNode | None = None

    @property
    def has_properties(self) -> bool:
        return bool(self.properties)


@dataclass
class UnionNode(SchemaNode):
    """Represents a oneOf/anyOf union or a list of types."""

    variants: list[SchemaNode] = field(default_factory=list)
    union_type: str = "oneOf"  # "oneOf", "anyOf" or "typeArray"


@dataclass
class AllOfNode(SchemaNode):
    """Represents composition via allOf."""

    parts: list[SchemaNode] = field(default_factory=list)


@dataclass
class DefinitionNode(SchemaNode):
    """Represents a definition ($defs or definitions entry)."""

    name: str = ""  # Key in the definitions object
    body: SchemaNode | None = None


@dataclass
class SchemaAST:
    """Root of the parsed schema AST."""

    root_name: str = ""
    root_node: SchemaNode | None = None
    definitions: list[DefinitionNode] = field(default_factory=list)

    # Name of the document (file path) and its $id
    path: str = ""
    schema_id: str = ""

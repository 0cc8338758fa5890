"""
Schema AST (Abstract Syntax Tree) module.

Contains the JSON loader, the AST node definitions and the parser for JSON Schema.
"""

from __future__ import annotations

from .loader import JSONObject, load_schema
from .nodes import (
    AllOfNode,
    ArrayNode,
    ConstNode,
    DefinitionNode,
    EnumNode,
    ObjectNode,
    PrimitiveNode,
    PropertyDef,
    RefNode,
    SchemaAST,
    SchemaNode,
    UnionNode,
)
from .parser import SchemaParser

__all__ = [
    "JSONObject",
    "load_schema",
    "SchemaNode",
    "ObjectNode",
    "ArrayNode",
    "RefNode",
    "PrimitiveNode",
    "PropertyDef",
    "EnumNode",
    "UnionNode",
    "AllOfNode",
    "ConstNode",
    "DefinitionNode",
    "SchemaAST",
    "SchemaParser",
]

"""
JSON Schema parser that builds an AST.

Phase 1 of the pipeline: Parse JSON Schema into an AST without
resolving references or doing Go-specific processing.
"""

from __future__ import annotations

import logging
from typing import Any

from ...errors import SchemaTypeMismatchError
from .loader import JSONObject, json_type_name
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

logger = logging.getLogger(__name__)

# JSON kinds accepted by each keyword the generator reads
KEYWORD_KINDS: dict[str, tuple[str, ...]] = {
    "$id": ("string",),
    "$schema": ("string",),
    "$ref": ("string",),
    "title": ("string",),
    "description": ("string",),
    "format": ("string",),
    "type": ("string", "array"),
    "properties": ("object",),
    "definitions": ("object",),
    "$defs": ("object",),
    "required": ("array",),
    "items": ("object", "array"),
    "additionalProperties": ("bool", "object"),
    "enum": ("array",),
    "allOf": ("array",),
    "anyOf": ("array",),
    "oneOf": ("array",),
}

# JSON kind of the elements of container keywords
ELEMENT_KINDS: dict[str, str] = {
    "type": "string",
    "required": "string",
    "properties": "object",
    "definitions": "object",
    "$defs": "object",
    "items": "object",
    "allOf": "object",
    "anyOf": "object",
    "oneOf": "object",
}

# Keywords that make the root schema a type of its own
TYPE_KEYWORDS = ("type", "properties", "$ref", "allOf", "anyOf", "oneOf", "enum", "const", "items")

DEFINITION_KEYS = ("definitions", "$defs")


def _offset(container: Any, key: str) -> int:
    if isinstance(container, JSONObject):
        return container.offset_of(key)
    return 0


def _escape_pointer(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


class SchemaParser:
    """Parses JSON Schema into an AST."""

    def __init__(self):
        self._path = ""
        self._source = b""

    def parse(self, schema: dict[str, Any], root_name: str, path: str = "", source: bytes = b"") -> SchemaAST:
        """
        Parse a JSON Schema into an AST.

        Args:
            schema: The decoded JSON Schema document
            root_name: Name for the root type when the schema has no title
            path: Name of the document, used in error messages
            source: Raw bytes of the document, used in error messages

        Returns:
            SchemaAST with parsed definitions and optional root node

        Raises:
            SchemaTypeMismatchError: If a keyword holds a value of the wrong JSON kind
        """
        self._path = path
        self._source = source
        self._check(schema, "#")

        ast = SchemaAST(
            root_name=root_name,
            path=path,
            schema_id=schema.get("$id", ""),
        )

        for key in DEFINITION_KEYS:
            for name, def_schema in schema.get(key, {}).items():
                def_path = f"#/{key}/{_escape_pointer(name)}"
                ast.definitions.append(
                    DefinitionNode(
                        name=name,
                        body=self._parse_schema_node(def_schema, def_path),
                        source_path=def_path,
                    )
                )

        if any(keyword in schema for keyword in TYPE_KEYWORDS):
            ast.root_node = self._parse_schema_node(schema, "#")

        logger.debug("Parsed %s: %d definitions, root=%s", path or "<schema>", len(ast.definitions), ast.root_node is not None)
        return ast

    def _mismatch(self, value: Any, allowed: tuple[str, ...], struct: str, field: str, offset: int) -> SchemaTypeMismatchError:
        return SchemaTypeMismatchError(
            json_type_name(value),
            " or ".join(allowed),
            struct,
            field,
            offset,
            self._path,
            self._source,
        )

    def _check(self, schema: dict[str, Any], path: str) -> None:
        """Check the JSON kind of every keyword the generator reads."""
        for key, allowed in KEYWORD_KINDS.items():
            if key not in schema:
                continue
            value = schema[key]
            if json_type_name(value) not in allowed:
                raise self._mismatch(value, allowed, path, key, _offset(schema, key))

            element_kind = ELEMENT_KINDS.get(key)
            if element_kind is None:
                continue
            if isinstance(value, dict):
                for name, element in value.items():
                    if json_type_name(element) != element_kind:
                        raise self._mismatch(element, (element_kind,), f"{path}/{key}", name, _offset(value, name))
            elif isinstance(value, list):
                for element in value:
                    if json_type_name(element) != element_kind:
                        raise self._mismatch(element, (element_kind,), path, key, _offset(schema, key))

    def _parse_schema_node(self, schema: dict[str, Any], path: str) -> SchemaNode:
        """
        Parse a schema node recursively.

        Args:
            schema: The schema dictionary
            path: Current path in schema (for error messages)

        Returns:
            Appropriate SchemaNode subclass
        """
        self._check(schema, path)
        common = {
            "source_path": path,
            "title": schema.get("title", ""),
            "description": schema.get("description", ""),
        }

        if "$ref" in schema:
            return RefNode(ref_path=schema["$ref"], **common)

        if "const" in schema:
            return ConstNode(value=schema["const"], inferred_type=self._infer_type(schema["const"]), **common)

        if "oneOf" in schema or "anyOf" in schema:
            union_type = "oneOf" if "oneOf" in schema else "anyOf"
            variants = [self._parse_schema_node(variant, f"{path}/{union_type}/{i}") for i, variant in enumerate(schema[union_type])]
            return UnionNode(variants=variants, union_type=union_type, **common)

        if "allOf" in schema:
            parts = [self._parse_schema_node(part, f"{path}/allOf/{i}") for i, part in enumerate(schema["allOf"])]
            # Properties and required next to allOf extend the composition
            if "properties" in schema or "required" in schema:
                parts.append(self._parse_object_node(schema, path, {"source_path": path}))
            return AllOfNode(parts=parts, **common)

        if "type" in schema:
            return self._parse_type_node(schema, path, common)

        if "enum" in schema:
            values = schema["enum"]
            inferred_type = self._infer_type(values[0]) if values else "string"
            return EnumNode(values=values, inferred_type=inferred_type, **common)

        if "properties" in schema or "required" in schema:
            return self._parse_object_node(schema, path, common)

        # Fallback: no constraint on the type
        return PrimitiveNode(type_name="", **common)

    def _parse_type_node(self, schema: dict[str, Any], path: str, common: dict[str, Any]) -> SchemaNode:
        """Parse a type-based node."""
        type_value = schema["type"]

        # Handle array of types (union)
        if isinstance(type_value, list):
            # Single-element type array is not a union
            if len(type_value) == 1:
                type_value = type_value[0]
            else:
                variants = [self._parse_type_node({**schema, "type": t}, f"{path}/type/{t}", {"source_path": f"{path}/type/{t}"}) for t in type_value]
                return UnionNode(variants=variants, union_type="typeArray", **common)

        if type_value == "array":
            return self._parse_array_node(schema, path, common)

        if type_value == "object":
            return self._parse_object_node(schema, path, common)

        return PrimitiveNode(type_name=type_value, **common)

    def _parse_array_node(self, schema: dict[str, Any], path: str, common: dict[str, Any]) -> ArrayNode:
        """Parse an array type node."""
        items_schema = schema.get("items")
        items: SchemaNode | list[SchemaNode] | None = None

        if isinstance(items_schema, list):
            # Tuple type
            items = [self._parse_schema_node(item, f"{path}/items/{i}") for i, item in enumerate(items_schema)]
        elif items_schema is not None:
            items = self._parse_schema_node(items_schema, f"{path}/items")

        return ArrayNode(items=items, **common)

    def _parse_object_node(self, schema: dict[str, Any], path: str, common: dict[str, Any]) -> ObjectNode:
        """Parse an object type node."""
        required_fields = schema.get("required", [])
        properties = []

        for prop_name, prop_schema in schema.get("properties", {}).items():
            prop_path = f"{path}/properties/{_escape_pointer(prop_name)}"
            properties.append(
                PropertyDef(
                    name=prop_name,
                    type_node=self._parse_schema_node(prop_schema, prop_path),
                    is_required=prop_name in required_fields,
                    source_path=prop_path,
                    description=prop_schema.get("description", ""),
                )
            )

        additional = schema.get("additionalProperties")
        additional_node = None
        if isinstance(additional, dict):
            additional_node = self._parse_schema_node(additional, f"{path}/additionalProperties")

        return ObjectNode(
            properties=properties,
            required=required_fields,
            additional_properties=additional_node,
            **common,
        )

    def _infer_type(self, value: Any) -> str:
        """Infer the JSON Schema type from a Python value."""
        if isinstance(value, bool):
            return "boolean"
        if isinstance(value, int):
            return "integer"
        if isinstance(value, float):
            return "number"
        if isinstance(value, str):
            return "string"
        if value is None:
            return "null"
        return "object"

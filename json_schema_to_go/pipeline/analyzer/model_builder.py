"""
Model builder.

Phase 2 of the pipeline: turns the parsed schema documents into the
struct/alias type model. Definitions become named types, inline objects
become structs named after their parent and field, and every schema type is
mapped to a Go type expression.
"""

from __future__ import annotations

import logging

from ...errors import ModelBuildError
from ...utils import go_identifier
from ..config import CodeGeneratorConfig
from ..schema_ast.nodes import (
    AllOfNode,
    ArrayNode,
    ConstNode,
    EnumNode,
    ObjectNode,
    PrimitiveNode,
    PropertyDef,
    RefNode,
    SchemaAST,
    SchemaNode,
    UnionNode,
)
from .model import Alias, Field, Struct, TypeModel
from .reference_resolver import ReferenceResolver, TargetKey

logger = logging.getLogger(__name__)

ANY_TYPE = "interface{}"


class ModelBuilder:
    """Builds a TypeModel from parsed schema documents."""

    def __init__(self, config: CodeGeneratorConfig | None = None):
        self.config = config or CodeGeneratorConfig()
        self.primitive_types = {
            "string": "string",
            "integer": self.config.integer_type,
            "number": self.config.number_type,
            "boolean": "bool",
            "null": ANY_TYPE,
            "array": f"[]{ANY_TYPE}",
            "object": f"map[string]{ANY_TYPE}",
        }

    def build(self, asts: list[SchemaAST]) -> TypeModel:
        """
        Build the type model of all documents of a run.

        Args:
            asts: Parsed documents, in input order

        Returns:
            TypeModel with one entry per named or inline type

        Raises:
            ModelBuildError: On unresolvable references or circular allOf
        """
        self._asts = asts
        self._resolver = ReferenceResolver(asts)
        self._model = TypeModel()
        self._taken: set[str] = set()
        self._names: dict[TargetKey, str] = {}
        self._nodes: dict[TargetKey, SchemaNode] = {}

        # Name every top-level type before building, so references resolve
        # regardless of declaration order and inline types never steal a name.
        for index, ast in enumerate(asts):
            if ast.root_node is not None:
                name = go_identifier(ast.root_node.title or ast.root_name, fallback="Root")
                self._register((index, "#"), name, ast.root_node)
            for definition in ast.definitions:
                self._register((index, definition.source_path), go_identifier(definition.name, fallback="Type"), definition.body)

        for key, node in self._nodes.items():
            self._build_named_type(self._names[key], node, key[0])

        logger.debug("Built %d structs and %d aliases", len(self._model.structs), len(self._model.aliases))
        return self._model

    def _register(self, key: TargetKey, name: str, node: SchemaNode | None) -> None:
        self._names[key] = self._unique_name(name)
        self._nodes[key] = node or PrimitiveNode()

    def _unique_name(self, name: str) -> str:
        """Reserve a type name, adding a numeric suffix on collision."""
        candidate = name
        counter = 1
        while candidate in self._taken:
            candidate = f"{name}{counter}"
            counter += 1
        self._taken.add(candidate)
        return candidate

    def _is_struct(self, node: SchemaNode) -> bool:
        if isinstance(node, AllOfNode):
            return True
        return isinstance(node, ObjectNode) and (node.has_properties or node.additional_properties is None)

    def _build_named_type(self, name: str, node: SchemaNode, document: int) -> None:
        if self._is_struct(node):
            self._build_struct(name, node, document)
        else:
            self._model.aliases[name] = Alias(name=name, type=self._type_for(node, document, name, "", required=True))

    def _build_struct(self, name: str, node: SchemaNode, document: int) -> None:
        struct = Struct(name=name, description=node.description or node.title)
        self._model.structs[name] = struct

        properties, required = self._collect_properties(node, document, frozenset())
        field_names: set[str] = set()
        for prop, prop_document in properties:
            field_name = go_identifier(prop.name)
            candidate, counter = field_name, 1
            while candidate in field_names:
                candidate = f"{field_name}{counter}"
                counter += 1
            field_names.add(candidate)

            is_required = prop.is_required or prop.name in required
            struct.fields[candidate] = Field(
                name=candidate,
                json_name=prop.name,
                type=self._type_for(prop.type_node or PrimitiveNode(), prop_document, name, prop.name, is_required),
                required=is_required,
                description=prop.description,
            )

    def _collect_properties(self, node: SchemaNode, document: int, visiting: frozenset[TargetKey]) -> tuple[list[tuple[PropertyDef, int]], set[str]]:
        """
        Gather the properties of an object, flattening allOf composition.

        Returns:
            ([(property, document index)], names of required properties)
        """
        if isinstance(node, ObjectNode):
            return [(prop, document) for prop in node.properties], set(node.required)

        if isinstance(node, RefNode):
            key = self._resolve(node, document)
            if key in visiting:
                raise ModelBuildError(f"circular allOf through {node.ref_path!r}", node.source_path, self._asts[document].path)
            return self._collect_properties(self._nodes[key], key[0], visiting | {key})

        if isinstance(node, AllOfNode):
            merged: dict[str, tuple[PropertyDef, int]] = {}
            required: set[str] = set()
            for part in node.parts:
                part_properties, part_required = self._collect_properties(part, document, visiting)
                for prop, prop_document in part_properties:
                    # Later parts override earlier ones
                    merged.pop(prop.name, None)
                    merged[prop.name] = (prop, prop_document)
                required |= part_required
            return list(merged.values()), required

        return [], set()

    def _resolve(self, node: RefNode, document: int) -> TargetKey:
        key = self._resolver.resolve(node, document)
        if key not in self._names:
            raise ModelBuildError(f"unresolved reference {node.ref_path!r}", node.source_path, self._asts[document].path)
        return key

    def _type_for(self, node: SchemaNode, document: int, parent: str, field_name: str, required: bool) -> str:
        """
        Map a schema node to a Go type expression.

        Args:
            node: Schema of the value
            document: Index of the document the node belongs to
            parent: Name of the enclosing type, used to name inline structs
            field_name: JSON name of the field holding the value
            required: Whether the value is always present (no pointer needed)

        Returns:
            Go type expression
        """
        if isinstance(node, RefNode):
            key = self._resolve(node, document)
            name = self._names[key]
            if not required and self._is_struct(self._nodes[key]):
                return f"*{name}"
            return name

        if isinstance(node, AllOfNode) or (isinstance(node, ObjectNode) and node.has_properties):
            name = self._unique_name(parent + go_identifier(field_name, fallback="Object"))
            self._build_struct(name, node, document)
            return name if required else f"*{name}"

        if isinstance(node, ObjectNode):
            if node.additional_properties is not None:
                value_type = self._type_for(node.additional_properties, document, parent, f"{field_name} value", True)
                return f"map[string]{value_type}"
            return self.primitive_types["object"]

        if isinstance(node, ArrayNode):
            if node.items is None or isinstance(node.items, list):
                return self.primitive_types["array"]
            return "[]" + self._type_for(node.items, document, parent, f"{field_name} item", True)

        if isinstance(node, UnionNode):
            variants = [variant for variant in node.variants if not (isinstance(variant, PrimitiveNode) and variant.type_name == "null")]
            if len(variants) == 1:
                return self._type_for(variants[0], document, parent, field_name, required)
            return ANY_TYPE

        if isinstance(node, (EnumNode, ConstNode)):
            return self.primitive_types.get(node.inferred_type, ANY_TYPE)

        if isinstance(node, PrimitiveNode):
            return self.primitive_types.get(node.type_name, ANY_TYPE)

        return ANY_TYPE

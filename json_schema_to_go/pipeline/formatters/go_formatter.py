"""
Builtin formatter for Go declarations.

Uses tree-sitter and tree-sitter-go to parse the emitted source, then prints
the declaration subset produced by the Go backend (comments, the package
clause, imports and type declarations) the way gofmt does: tab indentation,
canonical spacing inside type expressions and column-aligned struct fields.
Source that does not parse, or that leaves that subset, raises
EmissionFormatError located by line and character.
"""

from __future__ import annotations

from typing import Any

import tree_sitter_go as ts_go
from tree_sitter import Language, Node, Parser

from ...errors import EmissionFormatError, OffsetOutOfRange
from ...utils import line_and_character
from ..config import FormatterConfig
from .base import Formatter

INDENT = "\t"

GO_LANGUAGE = Language(ts_go.language())


def _error(source: bytes, offset: int, message: str) -> EmissionFormatError:
    """Build an EmissionFormatError located at a byte offset of the source."""
    try:
        line, character = line_and_character(source, offset)
    except OffsetOutOfRange:
        return EmissionFormatError(message, offset)
    return EmissionFormatError(message, offset, line, character)


def _find_error(node: Node) -> Node | None:
    """Find the first ERROR or missing node in document order."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        found = _find_error(child)
        if found is not None:
            return found
    return None


def _row(node: Node, end: bool = False) -> int:
    return node.end_point[0] if end else node.start_point[0]


def align_cells(rows: list[list[str]]) -> list[str]:
    """
    Align rows of cells into columns, the way gofmt's tabwriter does.

    A column is padded to the widest cell of the consecutive rows that have a
    cell after it, plus one space. The last cell of a row is never padded.
    """
    widths = [[0] * len(row) for row in rows]
    max_cells = max((len(row) for row in rows), default=0)

    for column in range(max_cells - 1):
        i = 0
        while i < len(rows):
            if len(rows[i]) <= column + 1:
                i += 1
                continue
            j = i
            while j < len(rows) and len(rows[j]) > column + 1:
                j += 1
            width = max(len(rows[k][column]) for k in range(i, j))
            for k in range(i, j):
                widths[k][column] = width
            i = j

    lines = []
    for row, row_widths in zip(rows, widths):
        cells = [cell.ljust(width) + " " for cell, width in zip(row[:-1], row_widths)]
        lines.append("".join(cells) + row[-1])
    return lines


class GoPrinter:
    """Prints a tree-sitter Go syntax tree in gofmt style."""

    def __init__(self, source: bytes):
        self.source = source

    def text(self, node: Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8")

    def error(self, node: Node, message: str) -> EmissionFormatError:
        return _error(self.source, node.start_byte, message)

    # Declarations

    def print_file(self, root: Node) -> str:
        lines: list[str] = []
        previous: Node | None = None
        seen_package = False
        seen_type = False

        for node in root.named_children:
            if node.type == "comment" and previous is not None and _row(node) == _row(previous, end=True):
                lines[-1] += " " + self.text(node).rstrip()
                previous = node
                continue
            if previous is not None and _row(node) - _row(previous, end=True) > 1:
                lines.append("")

            if node.type == "comment":
                text = self.text(node)
            elif not seen_package:
                if node.type != "package_clause":
                    raise self.error(node, f"expected 'package', found {node.type}")
                seen_package = True
                text = self.print_package(node)
            elif node.type == "import_declaration":
                if seen_type:
                    raise self.error(node, "imports must appear before other declarations")
                text = self.print_import(node)
            elif node.type == "type_declaration":
                seen_type = True
                text = self.print_type_declaration(node)
            else:
                raise self.error(node, f"unsupported declaration {node.type}")

            lines.extend(text.split("\n"))
            previous = node

        if not seen_package:
            raise _error(self.source, 0, "expected 'package', found EOF")
        return "\n".join(line.rstrip() for line in lines) + "\n"

    def print_package(self, node: Node) -> str:
        name = self.text(node.named_children[0])
        if name == "_":
            raise self.error(node.named_children[0], "invalid package name _")
        return f"package {name}"

    def print_import_spec(self, node: Node) -> str:
        path = self.text(node.child_by_field_name("path"))
        name = node.child_by_field_name("name")
        return path if name is None else f"{self.text(name)} {path}"

    def print_import(self, node: Node) -> str:
        spec = node.named_children[0]
        if spec.type == "import_spec":
            return f"import {self.print_import_spec(spec)}"

        lines = ["import ("]
        for child in spec.named_children:
            text = self.text(child) if child.type == "comment" else self.print_import_spec(child)
            lines.append(INDENT + text)
        lines.append(")")
        return "\n".join(lines)

    def print_type_declaration(self, node: Node) -> str:
        specs = [child for child in node.named_children if child.type != "comment"]
        if len(specs) != 1 or any(child.type == "(" for child in node.children):
            raise self.error(node, "grouped type declarations are not supported")

        spec = specs[0]
        if spec.child_by_field_name("type_parameters") is not None:
            raise self.error(spec, "type parameters are not supported")
        name = self.text(spec.child_by_field_name("name"))
        type_text = self.print_type(spec.child_by_field_name("type"))
        if spec.type == "type_alias":
            return f"type {name} = {type_text}"
        return f"type {name} {type_text}"

    # Type expressions

    def print_type(self, node: Node) -> str:
        """Print a type expression. Lines of a struct body are indented relative to the first line."""
        kind = node.type
        if kind == "type_identifier":
            return self.text(node)
        if kind == "qualified_type":
            return f"{self.text(node.child_by_field_name('package'))}.{self.text(node.child_by_field_name('name'))}"
        if kind == "pointer_type":
            return "*" + self.print_type(node.named_children[0])
        if kind == "slice_type":
            return "[]" + self.print_type(node.child_by_field_name("element"))
        if kind == "array_type":
            length = self.text(node.child_by_field_name("length")).strip()
            return f"[{length}]" + self.print_type(node.child_by_field_name("element"))
        if kind == "map_type":
            return f"map[{self.print_type(node.child_by_field_name('key'))}]{self.print_type(node.child_by_field_name('value'))}"
        if kind == "interface_type":
            if any(child.type != "comment" for child in node.named_children):
                raise self.error(node, "only the empty interface is supported")
            return "interface{}"
        if kind == "struct_type":
            return self.print_struct(node.named_children[0])
        raise self.error(node, f"unsupported type {kind}")

    def print_struct(self, body: Node) -> str:
        members = self.print_members(body)
        multiline = _row(body.children[-1]) > _row(body.children[0])
        if not members and not multiline:
            return "struct{}"
        lines = ["struct {"]
        lines.extend(INDENT + line if line else line for line in members)
        lines.append("}")
        return "\n".join(lines)

    def field_cells(self, node: Node) -> list[str]:
        names = [self.text(name) for name in node.children_by_field_name("name")]
        type_text = self.print_type(node.child_by_field_name("type"))
        if not names and any(child.type == "*" for child in node.children):
            type_text = "*" + type_text

        cells = [", ".join(names)] if names else []
        cells.append(type_text)
        tag = node.child_by_field_name("tag")
        if tag is not None:
            cells.append(self.text(tag))
        return cells

    def print_members(self, body: Node) -> list[str]:
        """Print struct members without indentation, aligning runs of fields."""
        lines: list[str] = []
        rows: list[list[str]] = []
        previous: Node | None = None
        row_node: Node | None = None  # Field printed as the last row

        def flush() -> None:
            lines.extend(align_cells(rows))
            rows.clear()

        for node in body.named_children:
            if node.type == "comment" and row_node is previous and previous is not None and _row(node) == _row(previous, end=True):
                rows[-1].append(self.text(node).rstrip())
                previous = node
                continue
            if previous is not None and _row(node) - _row(previous, end=True) > 1:
                flush()
                lines.append("")

            if node.type == "comment":
                flush()
                lines.extend(self.text(node).rstrip().split("\n"))
            elif node.type == "field_declaration":
                cells = self.field_cells(node)
                if any("\n" in cell for cell in cells):
                    flush()
                    lines.extend(" ".join(cells).split("\n"))
                else:
                    rows.append(cells)
                    row_node = node
            else:
                raise self.error(node, f"unsupported struct member {node.type}")
            previous = node

        flush()
        return lines


class GoFormatter(Formatter):
    """Formatter for generated Go declarations, backed by tree-sitter."""

    def __init__(self):
        self._parser = Parser(GO_LANGUAGE)

    def is_available(self) -> bool:
        return True

    def parse(self, code: str) -> Any:
        """
        Parse Go source into a tree-sitter tree.

        Raises:
            EmissionFormatError: At the first syntax error of the code
        """
        source = bytes(code, "utf8")
        tree = self._parser.parse(source)

        if tree.root_node.has_error:
            node = _find_error(tree.root_node)
            if node is not None:
                if node.is_missing:
                    message = f"syntax error: missing {node.type!r}"
                else:
                    near = source[node.start_byte : node.end_byte].decode("utf-8", "replace").split("\n")[0][:40]
                    message = f"syntax error near {near!r}"
                raise _error(source, node.start_byte, message)

        return tree

    def format(self, code: str, config: FormatterConfig | None = None) -> str:
        """
        Format Go source in gofmt style.

        Args:
            code: Go source produced by the Go backend
            config: Formatter configuration (unused)

        Returns:
            Formatted code

        Raises:
            EmissionFormatError: If the code is not valid Go
        """
        tree = self.parse(code)
        return GoPrinter(bytes(code, "utf8")).print_file(tree.root_node)


def format_go(code: str) -> str:
    """
    Convenience function to format Go code with the builtin formatter.

    Args:
        code: Go source code

    Returns:
        Formatted code
    """
    return GoFormatter().format(code)

"""
Go backend.

Renders the type model as Go type declarations: a generated-file marker, the
package clause, one `type X Y` per alias and one struct per object, each
with json struct tags. Aliases, structs and fields are emitted in sorted
order so that the output is identical from run to run.
"""

from __future__ import annotations

import logging

import jinja2

from ...utils import ordered_keys
from ..analyzer.model import Field, TypeModel
from .base import CodeBackend

logger = logging.getLogger(__name__)

OMIT_EMPTY = ",omitempty"

GO_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def doc_comment(name: str, description: str) -> str:
    """
    Build the doc comment of a type from its name and description.

    A description spanning several lines keeps its line breaks; every line
    after the first becomes its own comment line.

    Examples:
        ("Foo", "Widget") -> "// Foo Widget"
        ("Foo", "Line1\\nLine2") -> "// Foo Line1\\n// Line2"
    """
    if not description:
        return f"// {name}"
    if "\n" not in description:
        return f"// {name} {description}"
    return f"// {name} " + "\n// ".join(description.split("\n"))


def json_tag(field: Field) -> str:
    """Value of the json struct tag: the JSON name, plus omitempty unless required."""
    if field.required:
        return field.json_name
    return field.json_name + OMIT_EMPTY


def go_quote(text: str) -> str:
    """Quote text as a Go interpreted string literal."""
    out = []
    for ch in text:
        if ch in GO_ESCAPES:
            out.append(GO_ESCAPES[ch])
        elif ord(ch) < 0x20 or ch == "\x7f":
            out.append(f"\\x{ord(ch):02x}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def struct_tag(field: Field) -> str:
    """
    Build the struct tag literal of a field.

    The tag is a raw string unless the JSON name contains a backtick, in which
    case it is an interpreted string.

    Examples:
        id -> `json:"id"`
        a"b -> `json:"a\\"b,omitempty"`
        a`b -> "json:\\"a`b\\""
    """
    tag = "json:" + go_quote(json_tag(field))
    if "`" in tag:
        return go_quote(tag)
    return f"`{tag}`"


class GoBackend(CodeBackend):
    """Go code generator backend."""

    TEMPLATE_LANG = "go"
    FILE_EXTENSION = "go"

    def register_filters(self, env: jinja2.Environment) -> None:
        env.filters["doc_comment"] = doc_comment
        env.filters["struct_tag"] = struct_tag

    def generate(self, model: TypeModel) -> str:
        aliases = [model.aliases[name] for name in ordered_keys(model.aliases)]
        structs = []
        for name in ordered_keys(model.structs):
            struct = model.structs[name]
            structs.append((struct, [struct.fields[key] for key in ordered_keys(struct.fields)]))

        logger.debug("Emitting %d aliases and %d structs into package %s", len(aliases), len(structs), self.config.package_name)
        return self.file_template.render(
            generation_comment=self.config.generation_comment if self.config.add_generation_comment else "",
            package_name=self.config.package_name,
            aliases=aliases,
            structs=structs,
        )

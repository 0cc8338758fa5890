"""
Utility functions for the JSON Schema to Go generator.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from .errors import OffsetOutOfRange

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")

_LINE_FEED = 0x0A

GO_KEYWORDS = frozenset(
    {
        "break",
        "case",
        "chan",
        "const",
        "continue",
        "default",
        "defer",
        "else",
        "fallthrough",
        "for",
        "func",
        "go",
        "goto",
        "if",
        "import",
        "interface",
        "map",
        "package",
        "range",
        "return",
        "select",
        "struct",
        "switch",
        "type",
        "var",
    }
)


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens) to spaces."""
    return text.replace("_", " ").replace("-", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def _capitalize_and_join(words: list[str]) -> str:
    """Capitalize the first letter of each word and join them together."""
    return "".join(word[0].upper() + word[1:] for word in words if word)


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, or space-separated text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "actionTemplate" -> "ActionTemplate"
        "first 3 rows" -> "First3Rows"
        "id" -> "Id"
        "URL" -> "URL"

    Args:
        text: The text to convert

    Returns:
        PascalCase string (empty if the text has no ASCII letters or digits)
    """
    if not text:
        return ""
    normalized = _normalize_separators(text)
    words = _split_into_words(normalized)
    return _capitalize_and_join(words)


def go_identifier(text: str, fallback: str = "Field") -> str:
    """Turn a schema name into an exported Go identifier.

    Args:
        text: Property key, definition name or title
        fallback: Identifier used when nothing usable remains

    Returns:
        A PascalCase identifier that starts with a letter
    """
    name = snake_to_pascal_case(text)
    if not name:
        return fallback
    if name[0].isdigit():
        return f"N{name}"
    return name


def is_go_identifier(name: str) -> bool:
    """Check that a name is a Go identifier and not a keyword."""
    if not name or name in GO_KEYWORDS:
        return False
    if not (name[0].isalpha() or name[0] == "_"):
        return False
    return all(ch.isalnum() or ch == "_" for ch in name)


def line_and_character(data: bytes | str, offset: int) -> tuple[int, int]:
    """
    Find the line and character of a byte offset in a source.

    Lines count from 1. The character counter is reset at each line feed and
    then incremented for every byte consumed, the line feed included, so the
    first line counts from 0 and the following lines count from 1.

    Args:
        data: Source bytes (str is encoded as UTF-8)
        offset: Number of bytes consumed before the position to locate

    Returns:
        Tuple (line, character)

    Raises:
        OffsetOutOfRange: If no byte of the source sits at the offset (negative,
            at the end or past the end of the source)
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    # Humans tend to count from 1.
    line = 1
    character = 0

    for i, b in enumerate(data):
        if i == offset:
            return line, character
        if b == _LINE_FEED:
            line += 1
            character = 0
        character += 1

    raise OffsetOutOfRange(offset, len(data))


def ordered_keys(mapping: Mapping[str, object]) -> list[str]:
    """
    Return the keys of a mapping in a deterministic order.

    Keys are sorted by their UTF-8 bytes, so the result only depends on the
    key set and never on the insertion order of the mapping.

    Args:
        mapping: Any mapping with string keys

    Returns:
        Sorted list of keys
    """
    return sorted(mapping, key=lambda key: key.encode("utf-8"))

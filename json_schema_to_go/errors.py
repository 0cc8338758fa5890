"""
Error types raised while generating Go code from JSON Schema.

Schema errors carry the byte offset of the offending input so that it can be
reported as a line and character; formatting errors signal that the emitter
produced text that is not valid Go, which is a bug rather than a user error.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for all errors raised by the generator."""


class OffsetOutOfRange(GenerationError):
    """Raised when a byte offset cannot be located in a source."""

    def __init__(self, offset: int, length: int):
        super().__init__(f"couldn't find offset {offset} in {length} bytes")
        self.offset = offset
        self.length = length


class SchemaError(GenerationError):
    """A schema document could not be turned into a type model.

    Attributes:
        offset: Byte offset of the error in the source document
        path: Name of the source document (usually a file path)
        source: Raw bytes of the source document
    """

    def __init__(self, message: str, offset: int, path: str = "", source: bytes = b""):
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.path = path
        self.source = source

    def position(self) -> tuple[int, int]:
        """
        Resolve the error offset to a 1-based (line, character) pair.

        Raises:
            OffsetOutOfRange: If the offset is not inside the source
        """
        from .utils import line_and_character

        return line_and_character(self.source, self.offset)


class SchemaSyntaxError(SchemaError):
    """The schema text is not well-formed JSON."""


class SchemaTypeMismatchError(SchemaError):
    """A schema keyword holds a JSON value of the wrong kind.

    Attributes:
        value_type: JSON kind found in the document ("number", "array", ...)
        expected_type: JSON kind(s) the keyword accepts
        struct: JSON pointer of the schema owning the keyword
        field: The offending keyword
    """

    def __init__(
        self,
        value_type: str,
        expected_type: str,
        struct: str,
        field: str,
        offset: int,
        path: str = "",
        source: bytes = b"",
    ):
        message = f"The JSON type '{value_type}' cannot be converted into the '{expected_type}' type on struct '{struct}', field '{field}'"
        super().__init__(message, offset, path, source)
        self.value_type = value_type
        self.expected_type = expected_type
        self.struct = struct
        self.field = field


class ModelBuildError(GenerationError):
    """The parsed schema cannot be resolved into structs and aliases."""

    def __init__(self, message: str, pointer: str = "", path: str = ""):
        super().__init__(message)
        self.message = message
        self.pointer = pointer
        self.path = path

    def __str__(self) -> str:
        where = " ".join(part for part in (self.path, self.pointer) if part)
        return f"{self.message} ({where})" if where else self.message


class EmissionFormatError(GenerationError):
    """The emitted text is not valid Go source.

    Well-formed models always yield well-formed text, so this is an internal
    invariant violation and is never handled as a user error.
    """

    def __init__(self, message: str, offset: int = -1, line: int = 0, character: int = 0):
        if line:
            message = f"{message} at line {line}, character {character}"
        super().__init__(message)
        self.offset = offset
        self.line = line
        self.character = character

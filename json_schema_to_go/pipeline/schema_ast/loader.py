"""
JSON loader that keeps track of where values come from.

The standard decoder does not report positions, so objects are decoded with
the pure Python scanner and a wrapped object parser that records the byte
span of every value. Later phases use those spans to report type mismatches
at the right place in the input file.
"""

from __future__ import annotations

import itertools
import json
import json.decoder
import json.scanner
import logging
from typing import Any

from ...errors import SchemaSyntaxError, SchemaTypeMismatchError

logger = logging.getLogger(__name__)


class JSONObject(dict):
    """A decoded JSON object with the byte span of each of its values."""

    def __init__(self, pairs: Any = (), offsets: dict[str, tuple[int, int]] | None = None):
        super().__init__(pairs)
        self.offsets: dict[str, tuple[int, int]] = offsets or {}

    def offset_of(self, key: str, default: int = 0) -> int:
        """Byte offset where the value of `key` starts."""
        span = self.offsets.get(key)
        return span[0] if span else default


def json_type_name(value: Any) -> str:
    """Name of the JSON kind of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


class _ByteOffsets:
    """Converts character positions of decoded text into byte offsets."""

    def __init__(self, text: str):
        self._ascii = text.isascii()
        self._table: list[int] = []
        if not self._ascii:
            self._table = list(itertools.accumulate((len(ch.encode("utf-8")) for ch in text), initial=0))

    def __call__(self, pos: int) -> int:
        if self._ascii:
            return pos
        return self._table[min(pos, len(self._table) - 1)]


class _PositionTrackingDecoder(json.JSONDecoder):
    def __init__(self, to_bytes: _ByteOffsets):
        super().__init__()
        self._to_bytes = to_bytes
        self.parse_object = self._parse_object
        # The C scanner never calls back into parse_object
        self.scan_once = json.scanner.py_make_scanner(self)

    def _parse_object(self, s_and_end, strict, scan_once, object_hook, object_pairs_hook, memo=None):
        spans: list[tuple[int, int]] = []

        def scan_value(string: str, idx: int) -> tuple[Any, int]:
            value, end = scan_once(string, idx)
            spans.append((idx, end))
            return value, end

        pairs, end = json.decoder.JSONObject(s_and_end, strict, scan_value, None, list, memo)
        offsets = {key: (self._to_bytes(start), self._to_bytes(stop)) for (key, _), (start, stop) in zip(pairs, spans)}
        return JSONObject(pairs, offsets), end


def load_schema(data: bytes, path: str = "") -> JSONObject:
    """
    Decode a JSON Schema document.

    Args:
        data: Raw bytes of the document
        path: Name of the document, used in error messages

    Returns:
        The decoded top-level object

    Raises:
        SchemaSyntaxError: If the document is not valid UTF-8 JSON
        SchemaTypeMismatchError: If the top-level value is not an object
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SchemaSyntaxError(f"invalid UTF-8 data: {e.reason}", e.start, path, data) from e

    to_bytes = _ByteOffsets(text)
    try:
        document = _PositionTrackingDecoder(to_bytes).decode(text)
    except json.JSONDecodeError as e:
        raise SchemaSyntaxError(e.msg, to_bytes(e.pos), path, data) from e

    if not isinstance(document, JSONObject):
        start = len(text) - len(text.lstrip())
        raise SchemaTypeMismatchError(json_type_name(document), "object", "#", "", to_bytes(start), path, data)

    logger.debug("Loaded %s (%d bytes)", path or "<schema>", len(data))
    return document

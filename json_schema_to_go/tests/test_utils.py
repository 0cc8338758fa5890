#!/usr/bin/env python3

import pytest

from json_schema_to_go.errors import OffsetOutOfRange
from json_schema_to_go.utils import go_identifier, is_go_identifier, line_and_character, ordered_keys, snake_to_pascal_case


class TestLineAndCharacter:
    """Byte offset to line/character mapping used in diagnostics"""

    def test_offset_on_second_line(self):
        assert line_and_character(b"ab\ncd", 4) == (2, 2)

    def test_start_of_source(self):
        assert line_and_character(b"ab\ncd", 0) == (1, 0)

    def test_line_feed_is_counted_on_the_next_line(self):
        # The byte right after a line feed is character 1 of the new line
        assert line_and_character(b"ab\ncd", 3) == (2, 1)
        assert line_and_character(b"ab\ncd", 2) == (1, 2)

    def test_end_of_source_fails(self):
        with pytest.raises(OffsetOutOfRange) as excinfo:
            line_and_character(b"ab\ncd", 5)
        assert (excinfo.value.offset, excinfo.value.length) == (5, 5)

    def test_many_lines(self):
        source = b"{\n  \"a\": 1,\n  \"b\": x\n}"
        assert line_and_character(source, source.index(b"x")) == (3, 8)

    def test_str_is_mapped_by_utf8_bytes(self):
        # "é" takes two bytes
        assert line_and_character("é\nx", 3) == (2, 1)

    def test_offset_past_end_fails(self):
        with pytest.raises(OffsetOutOfRange) as excinfo:
            line_and_character(b"ab\ncd", 6)
        assert excinfo.value.offset == 6
        assert excinfo.value.length == 5
        assert "couldn't find offset 6 in 5 bytes" in str(excinfo.value)

    def test_negative_offset_fails(self):
        with pytest.raises(OffsetOutOfRange):
            line_and_character(b"abc", -1)

    def test_empty_source(self):
        for offset in (0, 1):
            with pytest.raises(OffsetOutOfRange):
                line_and_character(b"", offset)


class TestOrderedKeys:
    def test_sorted_by_bytes(self):
        assert ordered_keys({"b": 1, "a": 2, "B": 3}) == ["B", "a", "b"]

    def test_non_ascii_sorts_after_ascii(self):
        assert ordered_keys({"é": 1, "z": 2}) == ["z", "é"]

    def test_independent_of_insertion_order(self):
        items = [("delta", 1), ("alpha", 2), ("charlie", 3), ("bravo", 4)]
        forward = ordered_keys(dict(items))
        backward = ordered_keys(dict(reversed(items)))
        assert forward == backward == ["alpha", "bravo", "charlie", "delta"]

    def test_empty_mapping(self):
        assert ordered_keys({}) == []


class TestIdentifiers:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("first_name", "FirstName"),
            ("id", "Id"),
            ("actionTemplate", "ActionTemplate"),
            ("home-address", "HomeAddress"),
            ("first 3 rows", "First3Rows"),
            ("URL", "URL"),
        ],
    )
    def test_snake_to_pascal_case(self, text, expected):
        assert snake_to_pascal_case(text) == expected

    def test_leading_digit_gets_prefix(self):
        assert go_identifier("3d_model") == "N3DModel"

    def test_fallback_when_nothing_usable(self):
        assert go_identifier("$") == "Field"
        assert go_identifier("", fallback="Type") == "Type"

    @pytest.mark.parametrize("name", ["main", "models", "_x", "v2"])
    def test_valid_go_identifiers(self, name):
        assert is_go_identifier(name)

    @pytest.mark.parametrize("name", ["", "type", "struct", "9a", "a-b", "a b"])
    def test_invalid_go_identifiers(self, name):
        assert not is_go_identifier(name)


if __name__ == "__main__":
    pytest.main([__file__])

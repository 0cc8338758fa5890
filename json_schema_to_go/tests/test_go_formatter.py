#!/usr/bin/env python3

import pytest

from json_schema_to_go.errors import EmissionFormatError
from json_schema_to_go.pipeline.config import FormatterBackend, FormatterConfig
from json_schema_to_go.pipeline.formatters import GoFormatter, GofmtFormatter, format_go, get_formatter
from json_schema_to_go.pipeline.formatters.go_formatter import align_cells
from json_schema_to_go.utils import line_and_character


class TestAlignCells:
    def test_columns_padded_to_widest_cell(self):
        rows = [["Id", "int", "`a`"], ["LongName", "string", "`b`"]]
        assert align_cells(rows) == ["Id       int    `a`", "LongName string `b`"]

    def test_last_cell_is_not_padded(self):
        assert align_cells([["A", "int"], ["Bbb", "string"]]) == ["A   int", "Bbb string"]

    def test_shorter_row_breaks_the_column_block(self):
        rows = [["A", "string", "`a`"], ["Bbbbbb", "int"], ["C", "int", "`c`"]]
        assert align_cells(rows) == ["A      string `a`", "Bbbbbb int", "C      int `c`"]


class TestGoFormatter:
    def test_struct_fields_are_aligned(self):
        code = 'package main\ntype A struct {\n  Id int `json:"id"`\n  LongName string `json:"long_name,omitempty"`\n}\n'
        expected = 'package main\ntype A struct {\n\tId       int    `json:"id"`\n\tLongName string `json:"long_name,omitempty"`\n}\n'
        assert format_go(code) == expected

    def test_formatting_is_idempotent(self):
        code = "// Header\n\npackage main\n\n// A\ntype A struct {\n  Id int\n  Inner struct {\n  X *string `json:\"x\"`\n  }\n}\n"
        once = format_go(code)
        assert format_go(once) == once

    def test_nested_struct_indentation(self):
        code = "package main\ntype A struct {\nInner struct {\nX int\n}\n}\n"
        assert format_go(code) == "package main\ntype A struct {\n\tInner struct {\n\t\tX int\n\t}\n}\n"

    def test_empty_struct_keeps_its_lines(self):
        code = "package main\n\ntype Empty struct {\n}\n"
        assert format_go(code) == code

    def test_single_line_empty_struct(self):
        assert format_go("package main\ntype Empty struct {   }\n") == "package main\ntype Empty struct{}\n"

    def test_canonical_type_spacing(self):
        code = "package main\ntype M map[ string ] * Foo\ntype I interface { }\ntype S [ ] [ 4 ]byte\n"
        expected = "package main\ntype M map[string]*Foo\ntype I interface{}\ntype S [][4]byte\n"
        assert format_go(code) == expected

    def test_trailing_whitespace_is_trimmed(self):
        code = "// Foo   \npackage main   \n\n\n\n// Bar \ntype Bar string  \n"
        assert format_go(code) == "// Foo\npackage main\n\n// Bar\ntype Bar string\n"

    def test_imports(self):
        code = 'package main\n\nimport (\n"time"\n  j "encoding/json"\n)\n\ntype T time.Time\n'
        expected = 'package main\n\nimport (\n\t"time"\n\tj "encoding/json"\n)\n\ntype T time.Time\n'
        assert format_go(code) == expected

    def test_alias_declaration(self):
        assert format_go("package main\ntype A = string\n") == "package main\ntype A = string\n"

    def test_interpreted_string_tag(self):
        code = 'package main\n\ntype A struct {\n\tAB string "json:\\"a`b\\""\n\tC int `json:"c"`\n}\n'
        expected = 'package main\n\ntype A struct {\n\tAB string "json:\\"a`b\\""\n\tC  int    `json:"c"`\n}\n'
        assert format_go(code) == expected


class TestGoFormatterErrors:
    def assert_located(self, error, code):
        # The reported line and character are those of the error's byte offset
        assert (error.line, error.character) == line_and_character(code.encode("utf-8"), error.offset)

    def test_syntax_error_is_located(self):
        code = "package main\n\ntype A string\n\ntype B struct {\n\tId in t\n}\n"
        with pytest.raises(EmissionFormatError) as exc_info:
            format_go(code)
        error = exc_info.value
        assert "syntax error" in str(error)
        assert error.offset >= code.index("type B")
        self.assert_located(error, code)
        assert str(error).endswith(f" at line {error.line}, character {error.character}")

    def test_missing_package_clause(self):
        with pytest.raises(EmissionFormatError) as exc_info:
            format_go("type A string\n")
        assert str(exc_info.value) == "expected 'package', found type_declaration at line 1, character 0"

    def test_empty_source(self):
        with pytest.raises(EmissionFormatError, match="expected 'package', found EOF"):
            format_go("")

    def test_keyword_as_field_name(self):
        code = "package main\n\ntype A struct {\n\tfunc int\n}\n"
        with pytest.raises(EmissionFormatError) as exc_info:
            format_go(code)
        assert exc_info.value.offset >= code.index("type A")

    def test_keyword_as_type(self):
        with pytest.raises(EmissionFormatError):
            format_go("package main\n\ntype A range\n")

    def test_unterminated_tag(self):
        with pytest.raises(EmissionFormatError):
            format_go("package main\ntype A struct {\n\tId int `json:\"id\"\n}\n")

    def test_unclosed_struct(self):
        with pytest.raises(EmissionFormatError):
            format_go("package main\ntype A struct {\n\tId int\n")

    def test_illegal_character(self):
        code = "package main\n\ntype A! string\n"
        with pytest.raises(EmissionFormatError) as exc_info:
            format_go(code)
        assert exc_info.value.offset >= code.index("type A")

    def test_invalid_package_name(self):
        with pytest.raises(EmissionFormatError, match="invalid package name _ at line 1, character 8"):
            format_go("package _\n")

    def test_unsupported_declaration(self):
        code = "package main\n\nfunc F() {}\n"
        with pytest.raises(EmissionFormatError, match="unsupported declaration function_declaration") as exc_info:
            format_go(code)
        assert exc_info.value.offset == code.index("func")
        assert exc_info.value.line == 3

    def test_imports_after_types(self):
        with pytest.raises(EmissionFormatError, match="imports must appear before other declarations"):
            format_go('package main\n\ntype A string\n\nimport "time"\n')

    def test_non_empty_interface(self):
        with pytest.raises(EmissionFormatError, match="only the empty interface is supported"):
            format_go("package main\n\ntype A interface {\n\tM()\n}\n")

    def test_position_counts_utf8_bytes(self):
        code = "// é\npackage main\n\ntype A @\n"
        with pytest.raises(EmissionFormatError) as exc_info:
            format_go(code)
        assert exc_info.value.offset >= len(code[: code.index("type A")].encode("utf-8"))
        self.assert_located(exc_info.value, code)


class TestFormatterSelection:
    def test_builtin_by_default(self):
        assert isinstance(get_formatter(FormatterConfig()), GoFormatter)

    def test_gofmt_backend(self):
        formatter = get_formatter(FormatterConfig(backend=FormatterBackend.GOFMT, gofmt_path="gofmt"))
        assert isinstance(formatter, GofmtFormatter)

    def test_missing_gofmt_falls_back_to_builtin(self):
        config = FormatterConfig(backend=FormatterBackend.GOFMT, gofmt_path="no-such-gofmt-binary")
        formatter = get_formatter(config)
        assert not formatter.is_available()
        assert formatter.format("package main\ntype A  string\n", config) == "package main\ntype A string\n"


if __name__ == "__main__":
    pytest.main([__file__])

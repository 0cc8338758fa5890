#!/usr/bin/env python3

import pytest

from json_schema_to_go.pipeline import CodeGeneratorConfig, FormatterBackend


class TestCodeGeneratorConfig:
    def test_defaults(self):
        config = CodeGeneratorConfig()
        assert config.package_name == "main"
        assert config.generation_comment == "// Code generated by schema-generate. DO NOT EDIT."
        assert config.formatter.backend == FormatterBackend.BUILTIN
        assert config.output.atomic_write

    def test_from_dict(self):
        config = CodeGeneratorConfig.from_dict(
            {
                "package_name": "api",
                "integer_type": "int64",
                "formatter": {"backend": "gofmt", "timeout": 5},
                "output": {"atomic_write": False},
            }
        )
        assert config.package_name == "api"
        assert config.integer_type == "int64"
        assert config.formatter.backend == FormatterBackend.GOFMT
        assert config.formatter.gofmt_path == "gofmt"
        assert config.formatter.timeout == 5
        assert not config.output.atomic_write

    def test_unknown_keys_are_ignored(self):
        assert CodeGeneratorConfig.from_dict({"language": "cs"}) == CodeGeneratorConfig()

    def test_unknown_formatter_backend(self):
        with pytest.raises(ValueError):
            CodeGeneratorConfig.from_dict({"formatter": {"backend": "clang-format"}})

    def test_to_dict_round_trip(self):
        config = CodeGeneratorConfig(package_name="models", root_name="Doc", number_type="float32")
        assert CodeGeneratorConfig.from_dict(config.to_dict()) == config
        assert config.to_dict()["formatter"]["backend"] == "builtin"


if __name__ == "__main__":
    pytest.main([__file__])

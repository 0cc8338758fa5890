import json
from pathlib import Path

import pytest

from json_schema_to_go.pipeline import CodeGeneratorConfig, PipelineGenerator, SchemaSource


def discover_test_cases():
    """Automatically discover all test cases from test_cases directory"""
    test_cases_dir = Path(__file__).parent / "test_data" / "test_cases"
    test_cases = []

    for test_dir in sorted(test_cases_dir.iterdir()):
        if not test_dir.is_dir() or test_dir.name.startswith("."):
            continue

        schema_file = test_dir / "schema.json"
        reference_file = test_dir / "reference.go"
        if not schema_file.exists() or not reference_file.exists():
            continue

        test_cases.append(
            {
                "test_name": test_dir.name,
                "schema_file": schema_file,
                "config_file": test_dir / "config.json",
                "reference_file": reference_file,
            }
        )

    return test_cases


def generate(test_case) -> str:
    config = CodeGeneratorConfig()
    if test_case["config_file"].exists():
        with open(test_case["config_file"]) as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))

    source = SchemaSource(str(test_case["schema_file"]), test_case["schema_file"].read_bytes(), test_case["test_name"])
    return PipelineGenerator([source], config).generate()


@pytest.mark.parametrize("test_case", discover_test_cases(), ids=lambda tc: tc["test_name"])
def test_reference_file(test_case):
    """Generated code must match the reference file byte for byte"""
    generated = generate(test_case)
    reference = test_case["reference_file"].read_text(encoding="utf-8")
    assert generated == reference


@pytest.mark.parametrize("test_case", discover_test_cases(), ids=lambda tc: tc["test_name"])
def test_generation_is_repeatable(test_case):
    """Two runs over the same schema give identical output"""
    assert generate(test_case) == generate(test_case)


if __name__ == "__main__":
    pytest.main([__file__])

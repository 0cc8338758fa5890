import json
import logging
from pathlib import Path

import click

from .errors import ModelBuildError, OffsetOutOfRange, SchemaError, SchemaSyntaxError, SchemaTypeMismatchError
from .pipeline import AtomicWriter, CodeGeneratorConfig, FormatterBackend, PipelineGenerator
from .utils import is_go_identifier

logger = logging.getLogger(__name__)


def describe_schema_error(error: SchemaError) -> str:
    """Build the user-facing message of a schema error, with its line and character."""
    try:
        line, character = error.position()
    except OffsetOutOfRange as lc_err:
        logger.warning("Couldn't find the line and character position of the error due to error %s", lc_err)
        location = f"{error.path} (offset {error.offset})"
    else:
        location = f"{error.path} line {line}, character {character} (offset {error.offset})"

    if isinstance(error, SchemaSyntaxError):
        return f"Cannot parse JSON schema due to a syntax error at {location}: {error.message}"
    if isinstance(error, SchemaTypeMismatchError):
        return f"{error.message}. See input file {location}"
    return f"Failed to parse the input JSON schema file {location} with error {error.message}"


def _validate_package(ctx, param, value):
    if value is not None and (not is_go_identifier(value) or value == "_"):
        raise click.BadParameter(f"{value!r} is not a valid Go package name")
    return value


def _load_config(path: str | None) -> CodeGeneratorConfig:
    if path is None:
        return CodeGeneratorConfig()
    try:
        with open(path, encoding="utf-8") as f:
            return CodeGeneratorConfig.from_dict(json.load(f))
    except (ValueError, TypeError, AttributeError) as e:
        raise click.ClickException(f"Invalid config file {path}: {e}") from e


@click.command()
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False, resolve_path=True), help="The output file for the schema.")
@click.option("--package", "-p", "package_name", default=None, callback=_validate_package, help="The package that the structs are created in.  [default: main]")
@click.option("--input", "-i", "input_path", default=None, type=click.Path(exists=True, dir_okay=False), help="A single file path (used for backwards compatibility).")
@click.option("--name", "-n", default=None, type=str, help="Name of the root type (single input only).")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--formatter", "-f", default=None, type=click.Choice([backend.value for backend in FormatterBackend]))
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log the pipeline phases.")
@click.argument("paths", nargs=-1, type=click.Path(exists=True, dir_okay=False))
def json_schema_to_go(output, package_name, input_path, name, config, formatter, verbose, paths):
    """Generate Go structs from the JSON Schema files PATHS."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s: %(message)s")

    input_files = list(paths)
    if input_path:
        input_files.append(input_path)
    if not input_files:
        raise click.UsageError("No input JSON Schema files.")

    config = _load_config(config)

    # CLI flags override the config file
    if package_name is not None:
        config.package_name = package_name
    if formatter is not None:
        config.formatter.backend = FormatterBackend(formatter)

    try:
        generator = PipelineGenerator.from_files(input_files, config, name)
    except OSError as e:
        raise click.ClickException(f"Failed to read the input file with error {e}") from e

    try:
        out = generator.generate()
    except SchemaError as e:
        raise click.ClickException(describe_schema_error(e)) from e
    except ModelBuildError as e:
        raise click.ClickException(f"Failure generating structs: {e}") from e

    if output is None:
        click.echo(out, nl=False)
        return

    try:
        if config.output.atomic_write:
            AtomicWriter().write(Path(output), out)
        else:
            Path(output).write_text(out, encoding="utf-8")
    except OSError as e:
        raise click.ClickException(f"Error opening output file: {e}") from e

"""
Pipeline generator.

Runs the phases of a generation run over one or more schema documents:

1. Loader: decode each document, keeping value positions
2. Parser: build a Schema AST per document
3. Model builder: resolve references into structs and aliases
4. Backend: emit Go source from the ordered type model
5. Formatter: canonicalize and validate the emitted source

Nothing is written by the generator itself; it returns the complete text
or raises, so callers never see partial output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .analyzer.model import TypeModel
from .analyzer.model_builder import ModelBuilder
from .backends.go_backend import GoBackend
from .config import CodeGeneratorConfig
from .formatters import get_formatter
from .schema_ast.loader import load_schema
from .schema_ast.parser import SchemaParser

logger = logging.getLogger(__name__)


@dataclass
class SchemaSource:
    """One input document of a generation run."""

    name: str  # File path or other label used in messages and $ref lookups
    data: bytes
    root_name: str = ""  # Name of the root type when the schema has no title


class PipelineGenerator:
    """Generates Go type declarations from JSON Schema documents."""

    def __init__(self, sources: list[SchemaSource], config: CodeGeneratorConfig | None = None):
        self.sources = sources
        self.config = config or CodeGeneratorConfig()

    @classmethod
    def from_files(cls, paths: list[str | Path], config: CodeGeneratorConfig | None = None, name: str | None = None) -> PipelineGenerator:
        """
        Create a generator reading its documents from files.

        Args:
            paths: Schema files
            config: Generation configuration
            name: Root type name, used only when there is a single file

        Raises:
            OSError: If a file cannot be read
        """
        config = config or CodeGeneratorConfig()
        sources = []
        for path in paths:
            path = Path(path)
            root_name = config.root_name or path.name.split(".")[0]
            if name and len(paths) == 1:
                root_name = name
            sources.append(SchemaSource(str(path), path.read_bytes(), root_name))
        return cls(sources, config)

    def build_model(self) -> TypeModel:
        """
        Load, parse and resolve all documents.

        Raises:
            SchemaSyntaxError: If a document is not valid JSON
            SchemaTypeMismatchError: If a keyword holds the wrong kind of value
            ModelBuildError: If references cannot be resolved
        """
        parser = SchemaParser()
        asts = []
        for source in self.sources:
            document = load_schema(source.data, source.name)
            asts.append(parser.parse(document, source.root_name or self.config.root_name, source.name, source.data))
        return ModelBuilder(self.config).build(asts)

    def render(self, model: TypeModel) -> str:
        """
        Emit and format the Go source of a type model.

        Raises:
            EmissionFormatError: If the emitted text is not valid Go
        """
        code = GoBackend(self.config).generate(model)
        return get_formatter(self.config.formatter).format(code, self.config.formatter)

    def generate(self) -> str:
        """Run the whole pipeline and return the formatted Go source."""
        model = self.build_model()
        logger.debug("Generating package %s from %d schema(s)", self.config.package_name, len(self.sources))
        return self.render(model)

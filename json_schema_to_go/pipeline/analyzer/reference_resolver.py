"""
Reference resolver for $ref resolution.

Resolves $ref paths to the document and JSON pointer of their target.
References can point inside the same document or into any other document
of the same generation run, matched by $id or by file name.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from ...errors import ModelBuildError
from ..schema_ast.nodes import RefNode, SchemaAST
from ..schema_ast.parser import DEFINITION_KEYS

# (document index, JSON pointer)
TargetKey = tuple[int, str]


class ReferenceResolver:
    """Resolves $ref to definitions of the parsed documents."""

    def __init__(self, asts: list[SchemaAST]):
        """
        Initialize the resolver.

        Args:
            asts: All parsed documents of the run, in input order
        """
        self.asts = asts
        self._documents: dict[str, int] = {}
        self._build_cache()

    def _build_cache(self) -> None:
        """Index documents by $id and by file name. The first document wins."""
        for index, ast in enumerate(self.asts):
            for key in (ast.schema_id.rstrip("#"), ast.path, PurePosixPath(ast.path).name, PurePosixPath(ast.schema_id.rstrip("#")).name):
                if key:
                    self._documents.setdefault(key, index)

    def resolve(self, ref_node: RefNode, document: int) -> TargetKey:
        """
        Resolve a $ref node to its target.

        Args:
            ref_node: The RefNode to resolve
            document: Index of the document containing the reference

        Returns:
            (document index, pointer) of the target, with the pointer
            normalized to "#" or "#/<definitions key>/<name>"

        Raises:
            ModelBuildError: If the document is unknown or the pointer is unsupported
        """
        ref_path = ref_node.ref_path
        doc_part, _, fragment = ref_path.partition("#")

        if doc_part:
            document = self._find_document(doc_part, ref_node)

        parts = [part for part in fragment.split("/") if part]
        if not parts:
            return document, "#"
        if len(parts) == 2 and parts[0] in DEFINITION_KEYS:
            return document, f"#/{parts[0]}/{parts[1]}"

        raise ModelBuildError(f"unsupported reference {ref_path!r}", ref_node.source_path, self.asts[document].path)

    def _find_document(self, doc_part: str, ref_node: RefNode) -> int:
        for key in (doc_part, PurePosixPath(doc_part).name):
            if key in self._documents:
                return self._documents[key]
        raise ModelBuildError(f"unresolved reference {ref_node.ref_path!r}", ref_node.source_path)

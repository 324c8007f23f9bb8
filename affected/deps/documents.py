"""
Language documents: which grammar parses a file and how its
dependency statements are extracted.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Dict, List, Optional, Type

from tree_sitter import Language, Node

from .queries import JAVASCRIPT_QUERIES, PYTHON_QUERIES, TYPESCRIPT_QUERIES
from .tree_sitter_support import ImportRef, TreeSitterDocument


@lru_cache(maxsize=None)
def _language(name: str) -> Language:
    # Grammar handles are immutable and safe to share between calls
    if name == "javascript":
        import tree_sitter_javascript as tsjs
        return Language(tsjs.language())
    if name == "typescript":
        import tree_sitter_typescript as tsts
        return Language(tsts.language_typescript())
    if name == "tsx":
        import tree_sitter_typescript as tsts
        return Language(tsts.language_tsx())
    if name == "python":
        import tree_sitter_python as tspy
        return Language(tspy.language())
    raise ValueError(f"Unknown grammar: {name}")


def _string_value(literal: str) -> str:
    """'./a' / "./a" / `./a` → ./a"""
    if len(literal) >= 2 and literal[0] in "'\"`" and literal[-1] == literal[0]:
        return literal[1:-1]
    return literal


class ECMAScriptDocument(TreeSitterDocument):
    """Common import extraction for JavaScript and TypeScript."""

    def imports(self) -> List[ImportRef]:
        sources: List[Node] = []
        for _idx, captures in self.query_matches("imports"):
            fn = captures.get("require_fn")
            if fn and self.get_node_text(fn[0]) != "require":
                continue
            sources.extend(captures.get("source", []))
        sources.sort(key=lambda n: n.start_byte)

        refs: List[ImportRef] = []
        for node in sources:
            spec = _string_value(self.get_node_text(node))
            if spec:
                refs.append(ImportRef(spec))
        return refs


class JavaScriptDocument(ECMAScriptDocument):

    language_name = "javascript"

    def get_language(self) -> Language:
        return _language("javascript")

    def get_query_definitions(self) -> Dict[str, str]:
        return JAVASCRIPT_QUERIES


class TypeScriptDocument(ECMAScriptDocument):

    language_name = "typescript"

    def get_language(self) -> Language:
        # TS and TSX are two different grammars in one package
        return _language("tsx" if self.ext == "tsx" else "typescript")

    def get_query_definitions(self) -> Dict[str, str]:
        return TYPESCRIPT_QUERIES


class PythonDocument(TreeSitterDocument):

    language_name = "python"

    def get_language(self) -> Language:
        return _language("python")

    def get_query_definitions(self) -> Dict[str, str]:
        return PYTHON_QUERIES

    def _dotted(self, node: Node) -> str:
        if node.type == "aliased_import":
            node = node.child_by_field_name("name") or node
        return "".join(self.get_node_text(node).split())

    def imports(self) -> List[ImportRef]:
        refs: List[ImportRef] = []
        for node, capture in self.query("imports"):
            if capture == "import":
                for name in node.children_by_field_name("name"):
                    refs.append(ImportRef(self._dotted(name)))
            elif capture == "import_from":
                module = node.child_by_field_name("module_name")
                if module is None:
                    continue
                names = tuple(self._dotted(n) for n in node.children_by_field_name("name"))
                refs.append(ImportRef(self._dotted(module), names))
        return refs


DOCUMENTS: Dict[str, Type[TreeSitterDocument]] = {
    ".js": JavaScriptDocument,
    ".jsx": JavaScriptDocument,
    ".mjs": JavaScriptDocument,
    ".cjs": JavaScriptDocument,
    ".ts": TypeScriptDocument,
    ".tsx": TypeScriptDocument,
    ".mts": TypeScriptDocument,
    ".cts": TypeScriptDocument,
    ".py": PythonDocument,
    ".pyi": PythonDocument,
}


def document_class(path: str) -> Optional[Type[TreeSitterDocument]]:
    """Document class for a file, or None when its imports are not analysed."""
    return DOCUMENTS.get(os.path.splitext(path)[1].lower())


def create_document(path: str, text: str) -> Optional[TreeSitterDocument]:
    cls = document_class(path)
    if cls is None:
        return None
    return cls(text, os.path.splitext(path)[1].lower().lstrip("."))


__all__ = [
    "ImportRef",
    "TreeSitterDocument",
    "JavaScriptDocument",
    "TypeScriptDocument",
    "PythonDocument",
    "DOCUMENTS",
    "document_class",
    "create_document",
]

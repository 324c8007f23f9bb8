"""
Tree-sitter infrastructure for import extraction.
Provides grammar loading, query management, and node text helpers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from tree_sitter import Tree, Node, Parser, Query, Language, QueryCursor


@dataclass(frozen=True)
class ImportRef:
    """
    One dependency statement as written in the source.

    specifier: "./b", "lodash/fp", "..pkg.mod", "os.path"
    names: imported names of a Python `from X import a, b` (may be submodules)
    """
    specifier: str
    names: Tuple[str, ...] = ()


class TreeSitterDocument(ABC):
    """
    Wrapper for Tree-sitter parsed document with query system.
    """

    language_name: str = ""

    def __init__(self, text: str, ext: str):
        self.text = text
        self.ext = ext
        self.tree: Optional[Tree] = None
        self._text_bytes = text.encode('utf-8')
        self._query_cache: Dict[str, Query] = {}
        self._parse()

    @abstractmethod
    def get_language(self) -> Language:
        """
        Get Language instance for queries.

        Returns:
            Language instance
        """
        pass

    @abstractmethod
    def get_query_definitions(self) -> Dict[str, str]:
        """
        Get named query definitions for this language.

        Returns:
            Dict mapping query names to query strings
        """
        pass

    @abstractmethod
    def imports(self) -> List[ImportRef]:
        """Dependency statements of the document, in source order."""
        pass

    def get_parser(self) -> Parser:
        return Parser(self.get_language())

    def _parse(self):
        """Parse the document with Tree-sitter."""
        parser = self.get_parser()
        self.tree = parser.parse(self._text_bytes)

    @property
    def root_node(self) -> Node:
        """Get the root node of the parsed tree."""
        if not self.tree:
            raise RuntimeError("Document not parsed")
        return self.tree.root_node

    def _compiled(self, query_name: str) -> Query:
        query_definitions = self.get_query_definitions()
        if query_name not in query_definitions:
            raise ValueError(f"Unknown query: {query_name}")
        if query_name not in self._query_cache:
            self._query_cache[query_name] = Query(self.get_language(), query_definitions[query_name])
        return self._query_cache[query_name]

    def query(self, query_name: str) -> List[Tuple[Node, str]]:
        """
        Execute a named query on the document.

        Args:
            query_name: Name of the query to execute

        Returns:
            List of (node, capture_name) tuples

        Raises:
            ValueError: If query is not defined for this language
        """
        results = []
        for _pattern_index, captures in self.query_matches(query_name):
            for capture_name, nodes in captures.items():
                for node in nodes:
                    results.append((node, capture_name))
        results.sort(key=lambda item: item[0].start_byte)
        return results

    def query_matches(self, query_name: str) -> List[Tuple[int, Dict[str, List[Node]]]]:
        """
        Execute a named query and keep captures grouped per match,
        so that predicate-like checks can look at sibling captures.
        """
        cursor = QueryCursor(self._compiled(query_name))
        return list(cursor.matches(self.root_node))

    def get_node_text(self, node: Node) -> str:
        """Get text content for a node."""
        return self._text_bytes[node.start_byte:node.end_byte].decode('utf-8', errors='ignore')

    def has_error(self) -> bool:
        """Check if the tree has any syntax errors."""
        if not self.tree:
            return True
        return self.root_node.has_error

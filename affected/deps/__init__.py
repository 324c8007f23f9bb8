"""
Import-graph resolution for the affected-set computation.

Provides:
- filter_dependent: closure filter over the import graph
- MissingAllowlist / MissDecision: policy for unresolved references
- tree-sitter documents for JavaScript, TypeScript and Python
"""

from .graph import DependencyFilter, filter_dependent
from .policy import MissDecision, MissPolicy, MissingAllowlist, missing_key
from .documents import create_document, document_class
from .tree_sitter_support import ImportRef

__all__ = [
    "DependencyFilter",
    "filter_dependent",
    "MissDecision",
    "MissPolicy",
    "MissingAllowlist",
    "missing_key",
    "create_document",
    "document_class",
    "ImportRef",
]

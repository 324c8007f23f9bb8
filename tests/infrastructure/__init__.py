"""
Shared test infrastructure for affected-files.

Modules:
- file_utils: creating files and directory trees
- fake_vcs: in-memory VcsProvider
- git_utils: driving a real git repository
"""

from .file_utils import write, write_tree, abs_paths
from .fake_vcs import FakeVcs
from .git_utils import git, init_repo, commit_all, requires_git, is_git_available


def is_tree_sitter_available() -> bool:
    """Check if Tree-sitter and the bundled grammars are importable."""
    try:
        import tree_sitter  # noqa: F401
        import tree_sitter_javascript  # noqa: F401
        import tree_sitter_python  # noqa: F401
        import tree_sitter_typescript  # noqa: F401
        return True
    except ImportError:
        return False


__all__ = [
    "write", "write_tree", "abs_paths",
    "FakeVcs",
    "git", "init_repo", "commit_all", "requires_git", "is_git_available",
    "is_tree_sitter_available",
]

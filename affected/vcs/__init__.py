from __future__ import annotations

from pathlib import Path
from typing import List, Protocol


class VcsProvider(Protocol):
    """
    Read-only view of the version control system.

    All file lists are POSIX paths relative to `repo_root(root)`.
    Implementations raise `VcsError` on failure; nothing is retried.
    """

    def repo_root(self, root: Path) -> Path:
        """Top-level directory of the repository containing `root`."""
        ...

    def uncommitted_files(self, root: Path) -> List[str]:
        """Files with staged or unstaged changes relative to HEAD."""
        ...

    def merge_base(self, root: Path, ref: str) -> str:
        """Merge-base commit of `ref` and HEAD."""
        ...

    def committed_files(self, root: Path, base: str) -> List[str]:
        """Files touched by commits reachable from HEAD but not from `base`."""
        ...

    def tracked_files(self, root: Path) -> List[str]:
        """Every file under version control at HEAD."""
        ...


from .git import GitVcs  # noqa: E402

__all__ = ["VcsProvider", "GitVcs"]

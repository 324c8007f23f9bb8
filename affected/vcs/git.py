from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import List

from ..errors import VcsError

logger = logging.getLogger(__name__)


def _git(root: Path, args: List[str]) -> List[str]:
    """Run git in `root` and return non-empty output lines."""
    logger.debug("git %s", " ".join(args))
    try:
        proc = subprocess.run(
            ["git", "-c", "core.quotepath=off", "-C", str(root), *args],
            capture_output=True, text=True, encoding="utf-8", errors="ignore",
        )
    except OSError as e:
        # git binary missing or not executable
        raise VcsError(args, str(e)) from e
    if proc.returncode != 0:
        raise VcsError(args, proc.stderr, proc.returncode)
    return [ln.strip() for ln in proc.stdout.splitlines() if ln.strip()]


class GitVcs:
    """
    Git-backed provider:
      - git diff --name-only HEAD                         (uncommitted)
      - git merge-base <ref> HEAD                         (branch point)
      - git log --name-only --pretty=format: HEAD ^<base> (committed on branch)
      - git ls-tree --full-tree -r --name-only HEAD       (tracked)
    """

    def repo_root(self, root: Path) -> Path:
        # --show-cdup keeps the top level spelled the same way as `root`
        # (--show-toplevel would resolve symlinks and break set membership)
        out = _git(root, ["rev-parse", "--show-cdup"])
        if not out:
            return root
        return Path(os.path.normpath(os.path.join(str(root), out[0])))

    def uncommitted_files(self, root: Path) -> List[str]:
        return _git(root, ["diff", "--name-only", "--pretty=format:", "HEAD"])

    def merge_base(self, root: Path, ref: str) -> str:
        args = ["merge-base", ref, "HEAD"]
        out = _git(root, args)
        if not out:
            raise VcsError(args, f"no merge base between {ref} and HEAD")
        return out[0]

    def committed_files(self, root: Path, base: str) -> List[str]:
        return _git(root, ["log", "--name-only", "--pretty=format:", "HEAD", f"^{base}"])

    def tracked_files(self, root: Path) -> List[str]:
        return _git(root, ["ls-tree", "--full-tree", "-r", "--name-only", "HEAD"])

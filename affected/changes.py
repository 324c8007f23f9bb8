"""
Change detection and the tracked-file universe.

Both accept an explicit override list; otherwise they ask the VCS provider.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Sequence, Set

from .paths import AbsPath, to_abs
from .vcs import VcsProvider

logger = logging.getLogger(__name__)

DEFAULT_MERGE_BASE = "origin/master"


def detect_changed(
    vcs: VcsProvider,
    cwd: Path,
    merge_base: Optional[str] = None,
    explicit: Optional[Sequence[str]] = None,
) -> Set[AbsPath]:
    """
    Set of files considered changed.

    Args:
        vcs: VCS provider (not consulted when `explicit` is given)
        cwd: Baseline directory for explicit relative paths
        merge_base: Ref whose merge-base with HEAD bounds the commit range
        explicit: Caller-supplied list; returned as-is, no existence check

    Returns:
        Absolute paths. Auto-detected entries are guaranteed to exist on disk.
    """
    if explicit is not None:
        logger.debug("custom changed detected: %s", list(explicit))
        return {to_abs(f, cwd) for f in explicit}

    ref = merge_base or DEFAULT_MERGE_BASE
    top = vcs.repo_root(cwd)

    rel: Set[str] = set(vcs.uncommitted_files(cwd))
    base = vcs.merge_base(cwd, ref)
    logger.debug("base %s (%s)", base, ref)
    rel.update(vcs.committed_files(cwd, base))

    # Deduplicated before touching the filesystem
    changed = {to_abs(f, top) for f in rel}
    existing = {f for f in changed if os.path.exists(f)}
    logger.debug("changed %s (%d deleted)", sorted(existing), len(changed) - len(existing))
    return existing


def get_tracked(vcs: VcsProvider, cwd: Path, explicit: Optional[Sequence[str]] = None) -> Set[AbsPath]:
    """All version-controlled files as absolute paths."""
    if explicit is not None:
        tracked = {to_abs(f, cwd) for f in explicit}
    else:
        top = vcs.repo_root(cwd)
        tracked = {to_abs(f, top) for f in vcs.tracked_files(cwd)}
    logger.debug("tracked %d files", len(tracked))
    return tracked


__all__ = ["DEFAULT_MERGE_BASE", "detect_changed", "get_tracked"]

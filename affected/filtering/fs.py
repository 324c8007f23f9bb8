from __future__ import annotations

import os
from pathlib import Path
from typing import AbstractSet, List, Tuple

from ..paths import AbsPath, rel_posix
from .patterns import CompiledGlob


def read_text(path: str) -> str:
    with open(path, encoding="utf-8", errors="ignore") as f:
        return f.read()


def _segments_key(rel: str) -> Tuple[str, ...]:
    return tuple(rel.split("/"))


def expand_glob(glob: CompiledGlob, cwd: Path, tracked: AbstractSet[AbsPath]) -> List[AbsPath]:
    """
    Tracked files under `cwd` that match `glob` and exist on disk,
    sorted by their cwd-relative path segments.

    Only the tracked set is consulted, so ignored trees (node_modules,
    build output) are never walked.
    """
    hits: List[Tuple[Tuple[str, ...], AbsPath]] = []
    for f in tracked:
        rel = rel_posix(f, cwd)
        if rel.startswith("../") or not glob.matches(rel):
            continue
        if os.path.isfile(f):
            hits.append((_segments_key(rel), f))
    hits.sort()
    return [f for _key, f in hits]


__all__ = ["read_text", "expand_glob"]

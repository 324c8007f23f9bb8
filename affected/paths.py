"""
Path representation helpers.

Every set the engine works with holds absolute paths. Conversion to the
cwd-relative form happens only at the boundary: final output, allowlist keys,
superfile pattern checks and error messages.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, NewType, Union

AbsPath = NewType("AbsPath", str)  # absolute filesystem path
RelPath = NewType("RelPath", str)  # path relative to cwd

PathLike = Union[str, Path]


def to_abs(path: PathLike, cwd: PathLike) -> AbsPath:
    """Resolve `path` against `cwd`. Absolute input is only normalized."""
    return AbsPath(os.path.normpath(os.path.join(str(cwd), str(path))))


def to_rel(path: PathLike, cwd: PathLike) -> RelPath:
    """
    Strip the `cwd` prefix (plus separator) from an absolute path.

    Paths that do not live under `cwd` fall back to `os.path.relpath`
    so that they still round-trip through `to_abs`.
    """
    p = str(path)
    base = str(cwd).rstrip(os.sep) or os.sep
    prefix = base if base.endswith(os.sep) else base + os.sep
    if p.startswith(prefix):
        return RelPath(p[len(prefix):])
    return RelPath(os.path.relpath(p, base))


def to_posix(rel: RelPath) -> str:
    """Relative path in the `a/b/c` form used by patterns and allowlist keys."""
    return rel.replace(os.sep, "/") if os.sep != "/" else rel


def rel_posix(path: PathLike, cwd: PathLike) -> str:
    return to_posix(to_rel(path, cwd))


def convert_paths(paths: Iterable[str], absolute: bool, cwd: PathLike) -> List[str]:
    """
    Bring every path to the requested representation.
    Paths already in the target representation are returned untouched.
    """
    out: List[str] = []
    for p in paths:
        if os.path.isabs(p) and not absolute:
            out.append(to_rel(p, cwd))
        elif not os.path.isabs(p) and absolute:
            out.append(to_abs(p, cwd))
        else:
            out.append(p)
    return out


__all__ = ["AbsPath", "RelPath", "to_abs", "to_rel", "to_posix", "rel_posix", "convert_paths"]

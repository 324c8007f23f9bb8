"""
affected-files: which files of a source tree are affected by a change.

    from affected import get_affected_files

    get_affected_files("./src/**/*.ts", missing=["* >>> virtual:config"])
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from .config import AffectedOptions, DEFAULT_PATTERN, resolve_options
from .engine import compute_affected, run_affected
from .errors import (
    AffectedUserError,
    ConfigError,
    SuperfileMismatchError,
    UnresolvedDependencyError,
    VcsError,
)
from .types import AffectedResult


def get_affected_files(
    pattern: Optional[Union[str, Mapping[str, Any]]] = None,
    *,
    cwd: Optional[Union[str, Path]] = None,
    **options: Any,
) -> List[str]:
    """
    Files matching `pattern` that are changed or transitively import a change.

    Options: changed, tracked, absolute (abs), missing, merge_base (mergeBase),
    superleaves. Defaults come from affected-files.yaml in `cwd` when present.
    """
    return run_affected(resolve_options(pattern, cwd=cwd, **options))


__all__ = [
    "get_affected_files",
    "resolve_options",
    "compute_affected",
    "run_affected",
    "AffectedOptions",
    "AffectedResult",
    "DEFAULT_PATTERN",
    "AffectedUserError",
    "ConfigError",
    "SuperfileMismatchError",
    "UnresolvedDependencyError",
    "VcsError",
]

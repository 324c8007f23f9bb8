from __future__ import annotations

import logging
from pathlib import Path
from typing import AbstractSet, List

from .filtering import CompiledGlob, expand_glob
from .paths import AbsPath

logger = logging.getLogger(__name__)


def select_sources(pattern: str, cwd: Path, tracked: AbstractSet[AbsPath]) -> List[AbsPath]:
    """
    Candidate roots: files matching `pattern` (relative to `cwd`) that are
    also under version control. Untracked files are never candidates.
    """
    logger.debug("pattern %s", pattern)
    sources = expand_glob(CompiledGlob.compile(pattern, cwd), cwd, tracked)
    logger.debug("sources %s", sources)
    return sources


__all__ = ["select_sources"]

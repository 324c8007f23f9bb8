"""
Superleaf escalation.

A superleaf is a file the whole source scope implicitly depends on
(root config, shared declarations, global constants). When one of them is
affected, every source file is reported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet, Dict, List, Optional, Sequence

from .errors import SuperfileMismatchError
from .filtering import CompiledGlob, expand_glob
from .paths import AbsPath, rel_posix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Escalation:
    files: List[AbsPath]
    superfiles: List[AbsPath] = field(default_factory=list)
    triggered_by: Optional[AbsPath] = None

    @property
    def escalated(self) -> bool:
        return self.triggered_by is not None


def find_superfiles(
    superleaves: Sequence[str],
    pattern: str,
    tracked: AbstractSet[AbsPath],
    cwd: Path,
) -> List[AbsPath]:
    """
    Expand superleaf globs to tracked files, checking that each of them
    lies within the main `pattern`.

    Raises:
        SuperfileMismatchError: a superfile outside of `pattern`
    """
    found: Dict[AbsPath, None] = {}
    for leaf in superleaves:
        found.update(dict.fromkeys(expand_glob(CompiledGlob.compile(leaf, cwd), cwd, tracked)))
    superfiles = list(found)
    logger.debug("superfiles %s", superfiles)

    main = CompiledGlob.compile(pattern, cwd)
    for f in superfiles:
        rel = rel_posix(f, cwd)
        if not main.matches(rel):
            raise SuperfileMismatchError(rel, pattern)
    return superfiles


def escalate(
    sources: Sequence[AbsPath],
    affected: Sequence[AbsPath],
    superleaves: Optional[Sequence[str]],
    pattern: str,
    tracked: AbstractSet[AbsPath],
    cwd: Path,
) -> Escalation:
    """
    Widen `affected` to all of `sources` when any superfile is affected.
    Without superleaves configured `affected` is returned unchanged.
    """
    if not superleaves:
        return Escalation(files=list(affected))

    logger.debug("superleaves detected %s", list(superleaves))
    superfiles = find_superfiles(superleaves, pattern, tracked, cwd)

    affected_set = set(affected)
    for f in superfiles:
        if f in affected_set:
            logger.debug('Superleaf "%s" is affected, returning all sources files', f)
            return Escalation(files=list(sources), superfiles=superfiles, triggered_by=f)

    logger.debug("Superleaves not affected, returning only affected files")
    return Escalation(files=list(affected), superfiles=superfiles)


__all__ = ["Escalation", "find_superfiles", "escalate"]

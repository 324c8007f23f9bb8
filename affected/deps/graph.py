"""
Dependency closure filter.

Given candidate roots and a changed set, keep the roots that are changed
themselves or transitively import a changed file.
"""

from __future__ import annotations

import logging
import os
from collections import deque
from pathlib import Path
from typing import AbstractSet, Deque, Dict, List, Sequence, Set, Tuple

from ..errors import UnresolvedDependencyError
from ..filtering import read_text
from ..paths import AbsPath, rel_posix
from .documents import create_document
from .policy import MissDecision, MissPolicy
from .resolve import ImportResolver

logger = logging.getLogger(__name__)


class DependencyFilter:
    """
    Import graph explorer for a single computation.

    Each file is parsed at most once per instance; instances must not be
    reused across computations since the working tree may change in between.
    """

    def __init__(self, on_miss: MissPolicy, *, cwd: Path):
        self.on_miss = on_miss
        self.cwd = cwd
        self.resolver = ImportResolver(cwd)
        self._deps: Dict[AbsPath, Tuple[AbsPath, ...]] = {}

    def dependencies(self, file: AbsPath) -> Tuple[AbsPath, ...]:
        """
        Direct dependencies of `file` (memoized).

        Raises:
            UnresolvedDependencyError: an unresolved reference the policy rejects
        """
        cached = self._deps.get(file)
        if cached is not None:
            return cached

        deps: List[AbsPath] = []
        doc = create_document(file, read_text(file)) if os.path.isfile(file) else None
        if doc is not None:
            if doc.has_error():
                logger.debug("syntax errors in %s, imports are best-effort", file)
            missed: Set[str] = set()
            for ref in doc.imports():
                targets = self.resolver.resolve(doc.language_name, file, ref)
                if targets is None:
                    if ref.specifier in missed:
                        continue
                    missed.add(ref.specifier)
                    if self.on_miss(file, ref.specifier) is MissDecision.FAIL:
                        raise UnresolvedDependencyError(rel_posix(file, self.cwd), ref.specifier)
                    logger.debug("unresolved %r in %s is allowed", ref.specifier, file)
                    continue
                for target in targets:
                    if target != file and target not in deps:
                        deps.append(target)

        result = tuple(deps)
        self._deps[file] = result
        return result

    def filter(self, roots: Sequence[AbsPath], changed: AbstractSet[AbsPath]) -> List[AbsPath]:
        # Forward pass: discover every file reachable from the roots
        dependents: Dict[AbsPath, Set[AbsPath]] = {}
        seen: Set[AbsPath] = set(roots)
        queue: Deque[AbsPath] = deque(roots)
        while queue:
            file = queue.popleft()
            for dep in self.dependencies(file):
                dependents.setdefault(dep, set()).add(file)
                if dep not in seen:
                    seen.add(dep)
                    queue.append(dep)

        # Backward pass: everything that can reach a changed file
        reached: Set[AbsPath] = set(changed)
        queue = deque(reached)
        while queue:
            file = queue.popleft()
            for parent in dependents.get(file, ()):
                if parent not in reached:
                    reached.add(parent)
                    queue.append(parent)

        return [r for r in roots if r in reached]


def filter_dependent(
    roots: Sequence[AbsPath],
    changed: AbstractSet[AbsPath],
    on_miss: MissPolicy,
    *,
    cwd: Path,
) -> List[AbsPath]:
    """
    Roots that are changed or transitively depend on a changed file,
    in the order of `roots`.
    """
    affected = DependencyFilter(on_miss, cwd=cwd).filter(roots, changed)
    logger.debug("affectedFiles %s", affected)
    return affected


__all__ = ["DependencyFilter", "filter_dependent"]

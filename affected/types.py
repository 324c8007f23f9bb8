from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, List

from .paths import AbsPath
from .superleaf import Escalation


@dataclass(frozen=True)
class AffectedResult:
    """
    Every intermediate set of one computation.
    Owned by the caller; nothing here outlives the call that produced it.
    """
    cwd: Path
    pattern: str
    absolute: bool
    changed: FrozenSet[AbsPath]
    sources: List[AbsPath]
    affected: List[AbsPath]  # before superleaf escalation
    escalation: Escalation
    files: List[str]         # final answer, in the requested representation


__all__ = ["AffectedResult"]

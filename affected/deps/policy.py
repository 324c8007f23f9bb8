"""
Policy for unresolved dependency references.

The traversal asks the policy what to do with every reference it cannot
resolve; the policy only answers, raising is up to the caller.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Iterable, Protocol

from ..paths import AbsPath, rel_posix

logger = logging.getLogger(__name__)

SEPARATOR = " >>> "
ANY_FILE = "*"


class MissDecision(enum.Enum):
    SUPPRESS = "suppress"  # dead end, traversal continues
    FAIL = "fail"          # abort the computation


class MissPolicy(Protocol):
    def __call__(self, file: AbsPath, reference: str) -> MissDecision:
        ...


def missing_key(file: str, reference: str) -> str:
    """Allowlist entry for `reference` unresolved in `file` (cwd-relative, POSIX)."""
    return f"{file}{SEPARATOR}{reference}"


@dataclass(frozen=True)
class MissingAllowlist:
    """
    Allowlist of expected unresolved references:
      "<relative-file> >>> <reference>"  only in that file
      "* >>> <reference>"                in any file
    """
    entries: FrozenSet[str]
    cwd: Path

    @classmethod
    def from_entries(cls, entries: Iterable[str], cwd: Path) -> MissingAllowlist:
        return cls(entries=frozenset(entries), cwd=cwd)

    def __call__(self, file: AbsPath, reference: str) -> MissDecision:
        rel = rel_posix(file, self.cwd)
        logger.debug("Checking unresolved dependency in missing: %s %s", rel, reference)
        if missing_key(rel, reference) in self.entries or missing_key(ANY_FILE, reference) in self.entries:
            return MissDecision.SUPPRESS
        return MissDecision.FAIL


__all__ = ["SEPARATOR", "ANY_FILE", "MissDecision", "MissPolicy", "MissingAllowlist", "missing_key"]

"""
Affected-set orchestrator.

detect changed → tracked universe → sources → dependency closure →
superleaf escalation → output representation.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .changes import detect_changed, get_tracked
from .config import AffectedOptions
from .deps import MissingAllowlist, filter_dependent
from .paths import convert_paths
from .sources import select_sources
from .superleaf import escalate
from .types import AffectedResult
from .vcs import GitVcs, VcsProvider

logger = logging.getLogger(__name__)


def compute_affected(options: AffectedOptions, vcs: Optional[VcsProvider] = None) -> AffectedResult:
    """
    Run the whole pipeline and keep every intermediate set.

    Args:
        options: Fully merged options (see `resolve_options`)
        vcs: VCS provider; git by default. Not consulted for whatever
            `changed`/`tracked` supply explicitly.

    Raises:
        AffectedUserError: any expected failure; no partial result is produced
    """
    vcs = vcs or GitVcs()
    cwd = options.cwd

    changed = detect_changed(vcs, cwd, options.merge_base, options.changed)
    tracked = get_tracked(vcs, cwd, options.tracked)
    sources = select_sources(options.pattern, cwd, tracked)

    on_miss = MissingAllowlist.from_entries(options.missing, cwd)
    affected = filter_dependent(sources, changed, on_miss, cwd=cwd)

    escalation = escalate(sources, affected, options.superleaves, options.pattern, tracked, cwd)

    return AffectedResult(
        cwd=cwd,
        pattern=options.pattern,
        absolute=options.absolute,
        changed=frozenset(changed),
        sources=sources,
        affected=affected,
        escalation=escalation,
        files=convert_paths(escalation.files, options.absolute, cwd),
    )


def run_affected(options: AffectedOptions, vcs: Optional[VcsProvider] = None) -> List[str]:
    """Affected files only, in the representation selected by `options.absolute`."""
    return compute_affected(options, vcs).files


__all__ = ["compute_affected", "run_affected"]

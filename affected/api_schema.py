from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .paths import convert_paths
from .types import AffectedResult
from .version import tool_version


class AffectedReport(BaseModel):
    """JSON report of `affected report`. Paths follow the `absolute` option."""
    tool_version: str
    cwd: str
    pattern: str
    absolute: bool
    changed: List[str] = Field(default_factory=list)
    sources: List[str] = Field(default_factory=list)
    affected: List[str] = Field(default_factory=list)
    superfiles: List[str] = Field(default_factory=list)
    escalated_by: Optional[str] = None
    files: List[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: AffectedResult) -> AffectedReport:
        def conv(paths) -> List[str]:
            return convert_paths(paths, result.absolute, result.cwd)

        trigger = result.escalation.triggered_by
        return cls(
            tool_version=tool_version(),
            cwd=str(result.cwd),
            pattern=result.pattern,
            absolute=result.absolute,
            changed=conv(sorted(result.changed)),
            sources=conv(result.sources),
            affected=conv(result.affected),
            superfiles=conv(result.escalation.superfiles),
            escalated_by=conv([trigger])[0] if trigger else None,
            files=list(result.files),
        )


__all__ = ["AffectedReport"]

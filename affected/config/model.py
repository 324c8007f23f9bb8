"""
Options of the affected-set computation and their validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictBool, StrictStr, ValidationError, field_validator

from ..changes import DEFAULT_MERGE_BASE
from ..errors import ConfigError

DEFAULT_PATTERN = "./src/**/*"


@dataclass(frozen=True)
class AffectedOptions:
    """
    Fully merged options. `cwd` is always explicit: the process working
    directory is read once at the entry point and passed down.
    """
    cwd: Path
    pattern: str = DEFAULT_PATTERN
    changed: Optional[Tuple[str, ...]] = None     # None → detect via VCS
    tracked: Optional[Tuple[str, ...]] = None     # None → list via VCS
    absolute: bool = False
    missing: Tuple[str, ...] = ()
    merge_base: str = DEFAULT_MERGE_BASE
    superleaves: Optional[Tuple[str, ...]] = None


class OptionsInput(BaseModel):
    """
    One layer of options as written by the user (config file or call site).
    Every field is optional; `None` means "not provided".
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    pattern: Optional[StrictStr] = None
    changed: Optional[Tuple[StrictStr, ...]] = None
    tracked: Optional[Tuple[StrictStr, ...]] = None
    # `abs` and `mergeBase` are accepted for compatibility with JS-style configs
    absolute: Optional[StrictBool] = Field(None, validation_alias=AliasChoices("absolute", "abs"))
    missing: Optional[Tuple[StrictStr, ...]] = None
    merge_base: Optional[StrictStr] = Field(None, validation_alias=AliasChoices("merge_base", "mergeBase"))
    superleaves: Optional[Tuple[StrictStr, ...]] = None

    @field_validator("changed", "tracked", "missing", "superleaves", mode="before")
    @classmethod
    def _paths_as_str(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple, set, frozenset)):
            return [str(v) if isinstance(v, PurePath) else v for v in value]
        return value


def _loc(loc: Tuple[Any, ...]) -> str:
    out = ""
    for part in loc:
        out += f"[{part}]" if isinstance(part, int) else (f".{part}" if out else str(part))
    return out


def normalize_options(data: Mapping[str, Any], origin: str) -> Dict[str, Any]:
    """
    Validate a mapping of option values and bring keys to canonical names.
    `None` values count as "not provided" and are dropped.

    Raises:
        ConfigError: unknown key or a value of the wrong type
    """
    try:
        model = OptionsInput.model_validate(dict(data))
    except ValidationError as e:
        details = "; ".join(f"{_loc(err['loc'])}: {err['msg']}" for err in e.errors())
        raise ConfigError(f"{origin}: {details}") from e
    return model.model_dump(exclude_none=True)


__all__ = [
    "DEFAULT_PATTERN",
    "DEFAULT_MERGE_BASE",
    "AffectedOptions",
    "OptionsInput",
    "normalize_options",
]

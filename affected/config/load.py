from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import ConfigError
from .model import AffectedOptions, normalize_options
from .paths import config_path

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


def read_config_file(cwd: Path) -> Dict[str, Any]:
    """
    Options from affected-files.yaml in `cwd`.

    A missing or empty file means "no file-based defaults".

    Raises:
        ConfigError: malformed YAML, non-mapping document, unknown keys,
            wrong value types, or an attempt to set `cwd`
    """
    path = config_path(cwd)
    if not path.is_file():
        logger.debug("No config file detected")
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8"))
    except YAMLError as e:
        raise ConfigError(f"Failed to parse {path}: {e}") from e
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    if "cwd" in raw:
        raise ConfigError(f"{path}: 'cwd' can only be given by the caller")
    opts = normalize_options(raw, str(path))
    logger.debug("File config found %s %s", path, opts)
    return opts


def resolve_options(
    pattern: Optional[Union[str, Mapping[str, Any]]] = None,
    *,
    cwd: Optional[Union[str, Path]] = None,
    **options: Any,
) -> AffectedOptions:
    """
    Merge built-in defaults, the project config file and call-site options
    (later wins).

    `pattern` may also be a mapping of options, mirroring the
    `(pattern | options, options)` call form.
    """
    call: Dict[str, Any] = {}
    if isinstance(pattern, Mapping):
        call.update(pattern)
        pattern = None
    call.update(options)

    if cwd is None:
        cwd = call.pop("cwd", None)
    else:
        call.pop("cwd", None)
    # The only place ambient process state is consulted
    base = Path(os.path.abspath(cwd if cwd is not None else Path.cwd()))

    explicit = normalize_options(call, "options")
    if pattern is not None:
        explicit.update(normalize_options({"pattern": pattern}, "options"))

    merged = {**read_config_file(base), **explicit}
    return AffectedOptions(cwd=base, **merged)


__all__ = ["read_config_file", "resolve_options"]

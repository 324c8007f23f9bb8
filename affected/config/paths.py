from __future__ import annotations

from pathlib import Path

# Single source of truth for the project config location.
CONFIG_FILE = "affected-files.yaml"


def config_path(cwd: Path) -> Path:
    """Path to the optional project config file affected-files.yaml."""
    return cwd / CONFIG_FILE

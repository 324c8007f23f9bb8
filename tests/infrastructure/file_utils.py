"""
Utilities for creating files and directories in tests.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Dict, List


def write(p: Path, text: str = "") -> Path:
    """
    Write text to a file, creating parent directories as needed.

    Args:
        p: File path
        text: Content to write (dedented)

    Returns:
        Path to the created file
    """
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(textwrap.dedent(text), encoding="utf-8")
    return p


def write_tree(root: Path, files: Dict[str, str]) -> List[Path]:
    """Create several files at once: {"src/a.js": "import './b'", ...}."""
    return [write(root / rel, text) for rel, text in files.items()]


def abs_paths(root: Path, *rels: str) -> List[str]:
    """Absolute string paths the engine works with."""
    return [str(root / rel) for rel in rels]

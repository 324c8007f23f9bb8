from __future__ import annotations

import json
from typing import Any


def dumps(obj: Any) -> str:
    """
    Minimal JSON dumper for CLI answers.
    No prettify; ensure_ascii=False; the trailing newline is up to the CLI.
    """
    return json.dumps(obj, ensure_ascii=False)

import logging
from pathlib import Path
from typing import Callable, Tuple

import pytest

from affected.cli import main
from tests.infrastructure import write_tree


@pytest.fixture
def js_project(tmp_path: Path) -> Path:
    """
    src/a.js imports src/b.js; src/c.js stands alone.
    Plus an untracked build artefact and a file outside the pattern.
    """
    root = tmp_path / "proj"
    write_tree(root, {
        "src/a.js": "import { b } from './b';\nexport const a = () => b();\n",
        "src/b.js": "export function b() { return 1; }\n",
        "src/c.js": "export const c = 3;\n",
        "dist/a.js": "module.exports = require('../src/a');\n",
        "README.md": "# proj\n",
    })
    return root


@pytest.fixture
def js_tracked() -> list:
    """Files under version control in `js_project` (dist/ is ignored)."""
    return ["src/a.js", "src/b.js", "src/c.js", "README.md"]


CliRunner = Callable[..., Tuple[int, str, str]]


@pytest.fixture
def run_cli(capsys) -> CliRunner:
    """Run affected.cli.main in-process: (exit code, stdout, stderr)."""
    def _run(*args: str) -> Tuple[int, str, str]:
        rc = main(list(args))
        captured = capsys.readouterr()
        return rc, captured.out, captured.err
    return _run


@pytest.fixture(autouse=True)
def _reset_affected_logger():
    # The CLI's --verbose attaches a handler to the package logger
    yield
    logger = logging.getLogger("affected")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)


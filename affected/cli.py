from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .api_schema import AffectedReport
from .config import resolve_options
from .engine import compute_affected
from .errors import AffectedUserError
from .jsonic import dumps as jdumps
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="affected",
        description="List source files affected by the changes on the current branch",
        add_help=True,
    )
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("-v", "--verbose", action="store_true", help="debug log of every step to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Common arguments of list/report
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "pattern",
            nargs="?",
            help="glob of candidate source files (default: ./src/**/* or affected-files.yaml)",
        )
        sp.add_argument("--cwd", help="working directory (default: current directory)")
        sp.add_argument(
            "--changed",
            action="append",
            metavar="PATH|@FILE|-",
            help="changed file instead of git detection (repeatable; @file or - read a list, an empty @file means no changes)",
        )
        sp.add_argument(
            "--tracked",
            action="append",
            metavar="PATH|@FILE|-",
            help="tracked file instead of git ls-tree (repeatable; @file or - read a list)",
        )
        sp.add_argument(
            "--absolute",
            action="store_true",
            default=None,
            help="print absolute paths",
        )
        sp.add_argument(
            "--missing",
            action="append",
            metavar="ENTRY|@FILE|-",
            help="allowed unresolved reference: '<file> >>> <ref>' or '* >>> <ref>'",
        )
        sp.add_argument("--merge-base", metavar="REF", help="base ref of the branch (default: origin/master)")
        sp.add_argument(
            "--superleaf",
            action="append",
            metavar="GLOB|@FILE|-",
            help="file whose change affects every source (repeatable)",
        )

    sp_list = sub.add_parser("list", help="affected files, one per line")
    add_common(sp_list)

    sp_report = sub.add_parser("report", help="JSON report with every intermediate set")
    add_common(sp_report)

    return p


def _parse_entries(values: Optional[List[str]]) -> Optional[List[str]]:
    """
    Expand repeatable list arguments.

    Supports three forms per value:
    - a direct entry: src/a.ts
    - from a file, one entry per line: @path/to/list.txt
    - from stdin, one entry per line: -

    Returns:
        List of entries or None if the argument was not given
    """
    if values is None:
        return None

    out: List[str] = []
    for value in values:
        if value == "-":
            out.extend(ln.strip() for ln in sys.stdin.read().splitlines() if ln.strip())
        elif value.startswith("@"):
            file_path = Path(value[1:])
            if not file_path.is_file():
                raise ValueError(f"List file not found: {file_path}")
            text = file_path.read_text(encoding="utf-8")
            out.extend(ln.strip() for ln in text.splitlines() if ln.strip())
        else:
            out.append(value)
    return out


def _options(ns: argparse.Namespace) -> Dict[str, Any]:
    return {
        "changed": _parse_entries(ns.changed),
        "tracked": _parse_entries(ns.tracked),
        "absolute": ns.absolute,
        "missing": _parse_entries(ns.missing),
        "merge_base": ns.merge_base,
        "superleaves": _parse_entries(ns.superleaf),
    }


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    root = logging.getLogger("affected")
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(name)s %(message)s"))
        root.addHandler(handler)
    root.setLevel(logging.DEBUG)


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        options = resolve_options(ns.pattern, cwd=ns.cwd, **_options(ns))
        result = compute_affected(options)

        if ns.cmd == "list":
            for f in result.files:
                sys.stdout.write(f + "\n")
            return 0

        if ns.cmd == "report":
            report = AffectedReport.from_result(result)
            sys.stdout.write(jdumps(report.model_dump(mode="json")))
            return 0

    except AffectedUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())

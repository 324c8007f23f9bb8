"""
Resolution of import specifiers to files.

A resolver answers with:
  - a list of files the statement depends on (edges),
  - an empty list for known-external dependencies (dead ends: node built-ins,
    installed packages, the standard library),
  - None when the reference could not be resolved (handed to the miss policy).
"""

from __future__ import annotations

import importlib.util
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from ..paths import AbsPath, to_abs
from .tree_sitter_support import ImportRef

# ============================================================================
# JavaScript / TypeScript
# ============================================================================

JS_EXTENSIONS = (".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts", ".json")

# ESM-style TypeScript imports name the emitted file: "./a.js" → a.ts
_TS_SIBLINGS = {
    ".js": (".ts", ".tsx"),
    ".jsx": (".tsx",),
    ".mjs": (".mts",),
    ".cjs": (".cts",),
}

NODE_BUILTINS = frozenset({
    'assert', 'async_hooks', 'buffer', 'child_process', 'cluster', 'console',
    'constants', 'crypto', 'dgram', 'diagnostics_channel', 'dns', 'domain',
    'events', 'fs', 'http', 'http2', 'https', 'inspector', 'module', 'net',
    'os', 'path', 'perf_hooks', 'process', 'punycode', 'querystring',
    'readline', 'repl', 'stream', 'string_decoder', 'sys', 'timers', 'tls',
    'trace_events', 'tty', 'url', 'util', 'v8', 'vm', 'wasi',
    'worker_threads', 'zlib',
})


def _js_file(base: str) -> Optional[AbsPath]:
    if os.path.isfile(base):
        return AbsPath(base)
    for ext in JS_EXTENSIONS:
        if os.path.isfile(base + ext):
            return AbsPath(base + ext)
    stem, ext = os.path.splitext(base)
    for sibling in _TS_SIBLINGS.get(ext, ()):
        if os.path.isfile(stem + sibling):
            return AbsPath(stem + sibling)
    if os.path.isdir(base):
        for ext in JS_EXTENSIONS:
            index = os.path.join(base, "index" + ext)
            if os.path.isfile(index):
                return AbsPath(index)
    return None


def _package_name(specifier: str) -> str:
    """lodash/fp → lodash, @scope/pkg/sub → @scope/pkg"""
    parts = specifier.split("/")
    if specifier.startswith("@") and len(parts) > 1:
        return "/".join(parts[:2])
    return parts[0]


def _has_node_module(start_dir: str, package: str) -> bool:
    d = start_dir
    while True:
        if os.path.isdir(os.path.join(d, "node_modules", package)):
            return True
        parent = os.path.dirname(d)
        if parent == d:
            return False
        d = parent


def resolve_ecmascript(file: AbsPath, ref: ImportRef) -> Optional[List[AbsPath]]:
    spec = ref.specifier
    if spec.startswith("node:") or _package_name(spec) in NODE_BUILTINS:
        return []

    if spec.startswith((".", "/")):
        target = _js_file(to_abs(spec, os.path.dirname(file)))
        return [target] if target else None

    if _has_node_module(os.path.dirname(file), _package_name(spec)):
        return []
    return None


# ============================================================================
# Python
# ============================================================================

def _py_module(base: str) -> Optional[AbsPath]:
    for candidate in (base + ".py", os.path.join(base, "__init__.py"), base + ".pyi"):
        if os.path.isfile(candidate):
            return AbsPath(candidate)
    return None


def _py_exists(base: str) -> bool:
    # a directory without __init__.py is still a namespace package
    return _py_module(base) is not None or os.path.isdir(base)


def is_external_module(top: str) -> bool:
    """Standard library or an installed distribution."""
    if top in sys.stdlib_module_names or top in sys.builtin_module_names:
        return True
    try:
        return importlib.util.find_spec(top) is not None
    except (ImportError, ValueError):
        return False


def python_search_roots(cwd: Path) -> List[str]:
    """Directories absolute imports are looked up in: cwd and cwd/src."""
    roots = [str(cwd)]
    src = os.path.join(str(cwd), "src")
    if os.path.isdir(src):
        roots.append(src)
    return roots


def _walk_package(base: str, parts: Sequence[str], names: Sequence[str]) -> Optional[List[AbsPath]]:
    """
    Edges for `parts` under `base`: each existing package __init__ on the way,
    the module itself, and the `names` that turn out to be submodules.
    """
    hits: List[AbsPath] = []
    cur = base
    for i, part in enumerate(parts):
        cur = os.path.join(cur, part)
        if i < len(parts) - 1:
            init = os.path.join(cur, "__init__.py")
            if os.path.isfile(init):
                hits.append(AbsPath(init))

    # a namespace package directory resolves without contributing a file
    namespace = False
    if parts:
        module = _py_module(cur)
        if module is None and not os.path.isdir(cur):
            return None
        if module is not None:
            hits.append(module)
        else:
            namespace = True
    else:
        init = os.path.join(cur, "__init__.py")
        if os.path.isfile(init):
            hits.append(AbsPath(init))

    for name in names:
        if name == "*":
            continue
        sub = _py_module(os.path.join(cur, name))
        if sub is not None:
            hits.append(sub)

    if not hits:
        return [] if namespace else None
    return hits


def resolve_python(file: AbsPath, ref: ImportRef, roots: Sequence[str]) -> Optional[List[AbsPath]]:
    spec = ref.specifier
    level = len(spec) - len(spec.lstrip("."))
    module = spec[level:]
    parts = [p for p in module.split(".") if p]

    if level:
        base = os.path.dirname(file)
        for _ in range(level - 1):
            base = os.path.dirname(base)
        return _walk_package(base, parts, ref.names)

    if not parts:
        return None

    for root in roots:
        if _py_exists(os.path.join(root, parts[0])):
            return _walk_package(root, parts, ref.names)

    if is_external_module(parts[0]):
        return []
    return None


class ImportResolver:
    """Dispatches resolution by document language. One instance per call."""

    def __init__(self, cwd: Path):
        self.cwd = cwd
        self.python_roots = python_search_roots(cwd)

    def resolve(self, language: str, file: AbsPath, ref: ImportRef) -> Optional[List[AbsPath]]:
        if language == "python":
            return resolve_python(file, ref, self.python_roots)
        return resolve_ecmascript(file, ref)


__all__ = [
    "JS_EXTENSIONS",
    "NODE_BUILTINS",
    "ImportResolver",
    "is_external_module",
    "python_search_roots",
    "resolve_ecmascript",
    "resolve_python",
]

"""
Glob patterns anchored at a working directory.

Patterns follow shell glob semantics (the minimatch dialect):
`*` and `?` never cross a `/`, `**` as a whole segment spans any number of
directories, `[...]` classes, `{a,b}` braces (expanded before compilation,
nesting allowed), leading `./` and `!` negation. Wildcards do not match a
leading `.` of a name; dotfiles are only selected by an explicit dot.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

from ..errors import ConfigError
from ..paths import rel_posix


def expand_braces(pattern: str) -> List[str]:
    """
    Expand the first top-level `{a,b,...}` group and recurse.

        "src/{a,b}/*.{js,ts}" → ["src/a/*.js", "src/a/*.ts", "src/b/*.js", "src/b/*.ts"]

    A group without a comma, or an unbalanced brace, is kept literally.
    """
    span = _find_brace_group(pattern)
    if span is None:
        return [pattern]
    start, end = span
    head, body, tail = pattern[:start], pattern[start + 1:end], pattern[end + 1:]
    out: List[str] = []
    for alt in _split_alternatives(body):
        out.extend(expand_braces(head + alt + tail))
    return out


def _find_brace_group(pattern: str) -> Tuple[int, int] | None:
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "{":
            depth = 0
            has_comma = False
            j = i
            while j < len(pattern):
                cj = pattern[j]
                if cj == "\\":
                    j += 2
                    continue
                if cj == "{":
                    depth += 1
                elif cj == "}":
                    depth -= 1
                    if depth == 0:
                        if has_comma:
                            return i, j
                        break
                elif cj == "," and depth == 1:
                    has_comma = True
                j += 1
        i += 1
    return None


def _split_alternatives(body: str) -> List[str]:
    parts: List[str] = []
    depth = 0
    cur = []
    for ch in body:
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(cur))
            cur = []
        else:
            cur.append(ch)
    parts.append("".join(cur))
    return parts


def _normalize(pattern: str, cwd: Path) -> str:
    """Glob relative to `cwd` in POSIX form, without `./` prefixes."""
    body = pattern
    if os.path.isabs(body):
        base = str(cwd).rstrip(os.sep) + os.sep
        if not body.startswith(base):
            raise ConfigError(f'Pattern "{pattern}" points outside of "{cwd}"')
        body = rel_posix(body, cwd)

    while body.startswith("./"):
        body = body[2:]
    if body in (".", ""):
        body = "**"
    if ".." in body.split("/"):
        raise ConfigError(f'Pattern "{pattern}" must not contain ".." segments')
    return body


# A name that does not start with a dot
_NO_DOT = r"(?!\.)"
_NAME = _NO_DOT + r"[^/]+"


def _class(segment: str, i: int) -> Tuple[str, int] | None:
    """Translate the `[...]` class starting at segment[i]; None when unclosed."""
    start = i + 1
    negate = start < len(segment) and segment[start] in "!^"
    if negate:
        start += 1
    j = start
    # a `]` right after the opening bracket is a literal member
    if j < len(segment) and segment[j] == "]":
        j += 1
    while j < len(segment) and segment[j] != "]":
        j += 1
    if j >= len(segment):
        return None
    body = re.sub(r"([\\\[\]])", r"\\\1", segment[start:j])
    return ("[^/" + body + "]" if negate else "[" + body + "]"), j + 1


def _segment_regex(segment: str) -> str:
    out: List[str] = []
    i = 0
    while i < len(segment):
        ch = segment[i]
        if ch == "*":
            out.append("[^/]*")
        elif ch == "?":
            out.append("[^/]")
        elif ch == "[":
            translated = _class(segment, i)
            if translated is not None:
                cls, i = translated
                out.append(cls)
                continue
            out.append(re.escape(ch))
        elif ch == "\\" and i + 1 < len(segment):
            i += 1
            out.append(re.escape(segment[i]))
        else:
            out.append(re.escape(ch))
        i += 1
    regex = "".join(out)
    return regex if segment.startswith(".") else _NO_DOT + regex


def glob_to_regex(pattern: str) -> str:
    """
    Regex for a cwd-relative POSIX glob (braces already expanded).

        "src/**/*.js" → matches src/a.js and src/x/y/a.js, not src/.a.js
    """
    segments = pattern.split("/")
    parts: List[str] = []
    for n, seg in enumerate(segments):
        last = n == len(segments) - 1
        if seg == "**":
            # zero or more directories; as the last segment, at least one name
            parts.append(f"{_NAME}(?:/{_NAME})*" if last else f"(?:{_NAME}/)*")
        else:
            parts.append(_segment_regex(seg) + ("" if last else "/"))
    return "".join(parts)


@dataclass(frozen=True)
class CompiledGlob:
    """One or more glob patterns compiled for matching cwd-relative POSIX paths."""
    raw: Tuple[str, ...]
    lines: Tuple[str, ...]             # normalized, brace-expanded, `!` kept
    include: Tuple[re.Pattern, ...]
    exclude: Tuple[re.Pattern, ...]

    @classmethod
    def compile(cls, patterns: Sequence[str] | str, cwd: Path) -> CompiledGlob:
        raw = (patterns,) if isinstance(patterns, str) else tuple(patterns)
        lines: List[str] = []
        include: List[re.Pattern] = []
        exclude: List[re.Pattern] = []
        for pat in raw:
            negate = pat.startswith("!")
            for expanded in expand_braces(pat[1:] if negate else pat):
                line = _normalize(expanded, cwd)
                lines.append(("!" if negate else "") + line)
                (exclude if negate else include).append(re.compile(glob_to_regex(line)))
        return cls(raw=raw, lines=tuple(lines), include=tuple(include), exclude=tuple(exclude))

    def matches(self, rel_posix_path: str) -> bool:
        if not any(rx.fullmatch(rel_posix_path) for rx in self.include):
            return False
        return not any(rx.fullmatch(rel_posix_path) for rx in self.exclude)


__all__ = ["CompiledGlob", "expand_braces", "glob_to_regex"]

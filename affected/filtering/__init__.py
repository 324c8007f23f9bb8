"""
Glob expansion and matching over the tracked files.
"""

from .patterns import CompiledGlob, expand_braces, glob_to_regex
from .fs import expand_glob, read_text

__all__ = ["CompiledGlob", "expand_braces", "glob_to_regex", "expand_glob", "read_text"]

"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from AffectedUserError.

Programming errors and bugs should NOT inherit from AffectedUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Sequence


class AffectedUserError(Exception):
    """
    Base class for all user-facing errors of the affected-files engine.

    These errors indicate problems that the user can fix:
    a broken checkout, an unknown ref, an unresolved import, a bad config.
    """
    pass


class VcsError(AffectedUserError):
    """A git query failed. The message carries git's stderr as-is."""

    def __init__(self, args: Sequence[str], stderr: str, returncode: int | None = None):
        self.command = ["git", *args]
        self.stderr = stderr
        self.returncode = returncode
        msg = f"Command `{' '.join(self.command)}` failed"
        if returncode is not None:
            msg += f" with exit code {returncode}"
        detail = stderr.strip()
        if detail:
            msg += f":\n{detail}"
        super().__init__(msg)


class UnresolvedDependencyError(AffectedUserError):
    """
    A source file references something that could not be resolved
    and the reference is not listed in `missing`.
    """

    def __init__(self, file: str, reference: str):
        self.file = file
        self.reference = reference
        super().__init__(
            f'Failed to resolve "{reference}" in "{file}". '
            f"Fix it or add '{file} >>> {reference}' to 'missing'."
        )


class SuperfileMismatchError(AffectedUserError):
    """A superleaf resolved to a file outside of the main pattern."""

    def __init__(self, superfile: str, pattern: str):
        self.superfile = superfile
        self.pattern = pattern
        super().__init__(f'Superfile "{superfile}" does not match against pattern "{pattern}"')


class ConfigError(AffectedUserError):
    """Invalid option value, pattern or project config file."""
    pass


__all__ = [
    "AffectedUserError",
    "VcsError",
    "UnresolvedDependencyError",
    "SuperfileMismatchError",
    "ConfigError",
]

"""Platform policies for quoting, local paths, and subprocess locale settings."""

from __future__ import annotations

import ntpath
import os
import posixpath
import re
import shlex
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

_SAFE_TOKEN_PATTERN = re.compile(r"[\w\-./:=@%]*", re.ASCII)
_TRAILING_BACKSLASHES_PATTERN = re.compile(r"(\\*)$")
_BACKSLASHES_BEFORE_QUOTE_PATTERN = re.compile(r'(\\*)"')

LOCALE_VALUE = "C"
"""Locale forced on ``svn`` so diagnostics are English and parseable."""


def is_safe_token(token: str) -> bool:
    """Return ``True`` when *token* needs no quoting on any platform."""
    return _SAFE_TOKEN_PATTERN.fullmatch(token) is not None


@runtime_checkable
class PlatformPolicy(Protocol):
    """Environment-dependent behaviour used by the command pipeline."""

    name: str
    empty_token: str

    def escape(self, token: str) -> str:
        """Render *token* so it survives as a single command-line argument."""
        ...

    def normalize_local_path(self, path: str) -> str:
        """Normalize separators and dot segments without making *path* absolute."""
        ...

    def locale_environment(self) -> dict[str, str]:
        """Return the locale variables forced on ``svn`` subprocesses."""
        ...

    def to_argv(self, command_line: str) -> Sequence[str] | str:
        """Convert a rendered command line into what ``subprocess.Popen`` expects."""
        ...


class PosixPolicy:
    """Single-quote escaping and ``LANG``/``LC_ALL`` locale forcing."""

    name = "posix"
    empty_token = "''"

    def escape(self, token: str) -> str:
        """Wrap *token* in single quotes, closing and reopening around quotes."""
        if not token or is_safe_token(token):
            return token
        return "'" + token.replace("'", "'\\''") + "'"

    def normalize_local_path(self, path: str) -> str:
        """Collapse ``.``/``..`` and duplicate separators using POSIX rules."""
        if not path:
            return path
        return posixpath.normpath(path)

    def locale_environment(self) -> dict[str, str]:
        """Return ``LANG`` and ``LC_ALL`` set to the C locale."""
        return {"LANG": LOCALE_VALUE, "LC_ALL": LOCALE_VALUE}

    def to_argv(self, command_line: str) -> list[str]:
        """Split *command_line* back into arguments with shell rules."""
        return shlex.split(command_line)


class WindowsPolicy:
    """Double-quote escaping following the MSVC runtime argument rules.

    A run of backslashes is literal unless it precedes a double quote, so
    such runs are doubled both before an embedded quote and before the
    closing quote.
    """

    name = "windows"
    empty_token = '""'

    def escape(self, token: str) -> str:
        """Wrap *token* in double quotes and escape embedded quotes."""
        if not token or is_safe_token(token):
            return token
        escaped = _BACKSLASHES_BEFORE_QUOTE_PATTERN.sub(
            lambda match: match.group(1) * 2 + '\\"', token,
        )
        escaped = _TRAILING_BACKSLASHES_PATTERN.sub(
            lambda match: match.group(1) * 2, escaped, count=1,
        )
        return f'"{escaped}"'

    def normalize_local_path(self, path: str) -> str:
        """Normalize separators to backslashes and collapse dot segments."""
        if not path:
            return path
        return ntpath.normpath(path)

    def locale_environment(self) -> dict[str, str]:
        """Return ``LANG``/``LC_ALL`` plus ``LC_MESSAGES`` honoured by Windows builds."""
        return {
            "LANG": LOCALE_VALUE,
            "LC_ALL": LOCALE_VALUE,
            "LC_MESSAGES": LOCALE_VALUE,
        }

    def to_argv(self, command_line: str) -> str:
        """Return *command_line* unchanged; ``CreateProcess`` parses it."""
        return command_line


def detect_platform_policy(os_name: str | None = None) -> PlatformPolicy:
    """Return the policy matching *os_name* (defaults to :data:`os.name`)."""
    resolved = os.name if os_name is None else os_name
    if resolved == "nt":
        return WindowsPolicy()
    return PosixPolicy()


__all__ = [
    "LOCALE_VALUE",
    "PlatformPolicy",
    "PosixPolicy",
    "WindowsPolicy",
    "detect_platform_policy",
    "is_safe_token",
]

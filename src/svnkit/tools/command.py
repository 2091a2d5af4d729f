"""Composition of ``svn`` command lines from options and positional arguments."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from svnkit.core.models import DEFAULT_EXECUTABLE, SvnOptions
from svnkit.core.paths import PathResolver
from svnkit.core.platform import PlatformPolicy, detect_platform_policy
from svnkit.core.safety import redact_command

_NUMERIC_PATTERN = re.compile(r"^\d+$")


@dataclass(frozen=True)
class CommandInvocation:
    """A fully rendered ``svn`` invocation ready for the executor."""

    subcommand: str
    flags: tuple[str, ...]
    arguments: tuple[str, ...]
    command_line: str
    options: SvnOptions

    @property
    def redacted(self) -> str:
        """Return the command line with the password value masked."""
        return redact_command(self.command_line)


def common_flags(options: SvnOptions) -> list[str]:
    """Return the interaction and trust flags implied by *options*."""
    flags: list[str] = []
    if options.non_interactive is not False:
        flags.append("--non-interactive")
    if options.trust_server_cert:
        flags.append("--trust-server-cert")
    if options.no_auth_cache:
        flags.append("--no-auth-cache")
    return flags


def is_passthrough_argument(argument: str) -> bool:
    """Return ``True`` for flag-like or purely numeric positionals."""
    return argument.startswith("--") or _NUMERIC_PATTERN.match(argument) is not None


class CommandBuilder:
    """Render ``svn`` command lines with escaped flags and resolved paths.

    Building is pure: nothing is executed and no state is kept between
    calls. Flag tokens are escaped but never treated as paths; positional
    arguments are resolved against the base repository location first.
    """

    def __init__(
        self,
        *,
        policy: PlatformPolicy | None = None,
        resolver: PathResolver | None = None,
        executable: str = DEFAULT_EXECUTABLE,
    ) -> None:
        """Configure the platform policy, path resolver, and ``svn`` executable."""
        self._policy = policy or detect_platform_policy()
        self._resolver = resolver or PathResolver(self._policy)
        self._executable = executable

    @property
    def policy(self) -> PlatformPolicy:
        """Return the platform policy used for escaping."""
        return self._policy

    @property
    def resolver(self) -> PathResolver:
        """Return the resolver applied to positional arguments."""
        return self._resolver

    @property
    def executable(self) -> str:
        """Return the ``svn`` executable placed at the head of each command."""
        return self._executable

    def build(
        self,
        subcommand: str,
        args: Sequence[str | None],
        options: SvnOptions,
        *,
        flags: Iterable[str] = (),
        defaults: SvnOptions | None = None,
    ) -> CommandInvocation:
        """Return the invocation for ``svn <subcommand>`` with *args* and *flags*."""
        effective = options.merged_with(defaults)
        escape = self._policy.escape

        rendered_flags = common_flags(effective)
        if effective.username:
            rendered_flags.extend(["--username", escape(effective.username)])
        if effective.password:
            rendered_flags.extend(["--password", escape(effective.password)])
        rendered_flags.extend(
            escape(token) if token else self._policy.empty_token for token in flags
        )

        arguments = [
            self._render_argument(argument, effective)
            for argument in args
            if argument
        ]

        command_line = " ".join(
            [escape(self._executable), subcommand, *rendered_flags, *arguments],
        )
        return CommandInvocation(
            subcommand=subcommand,
            flags=tuple(rendered_flags),
            arguments=tuple(arguments),
            command_line=command_line,
            options=effective,
        )

    def _render_argument(self, argument: str, options: SvnOptions) -> str:
        if is_passthrough_argument(argument):
            return argument
        resolved = self._resolver.resolve(argument, options) or argument
        return self._policy.escape(resolved)


__all__ = [
    "CommandBuilder",
    "CommandInvocation",
    "common_flags",
    "is_passthrough_argument",
]

"""Shared plumbing for the read and write ``svn`` services."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

from svnkit.core.models import CommandResult, Depth, Revision, SvnOptions
from svnkit.tools.command import CommandBuilder, CommandInvocation
from svnkit.tools.executor import ProcessExecutor


def revision_flags(revision: Revision | None) -> list[str]:
    """Return ``--revision`` tokens when *revision* is set, including revision ``0``."""
    if revision is None or revision == "":
        return []
    return ["--revision", str(revision)]


def depth_flags(depth: Depth | str | None) -> list[str]:
    """Return ``--depth`` tokens when *depth* is set."""
    if not depth:
        return []
    return ["--depth", str(depth)]


def switch_flags(**switches: bool) -> list[str]:
    """Return ``--name`` for every keyword argument that is true.

    Underscores in keyword names become dashes, so ``keep_local=True``
    yields ``--keep-local``. Keyword order is preserved.
    """
    return [f"--{name.replace('_', '-')}" for name, enabled in switches.items() if enabled]


class SvnBaseService:
    """Build, log, and execute ``svn`` invocations with process-wide defaults.

    Default options are replaced atomically under a lock, so
    :meth:`set_default_options` may run while other threads issue commands.
    """

    def __init__(
        self,
        *,
        builder: CommandBuilder | None = None,
        executor: ProcessExecutor | None = None,
        defaults: SvnOptions | None = None,
        debug: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        """Wire the command builder, executor, defaults, and logger."""
        self._builder = builder or CommandBuilder()
        self._executor = executor or ProcessExecutor(policy=self._builder.policy)
        self._defaults = defaults or SvnOptions()
        self._defaults_lock = threading.Lock()
        self._debug = debug
        self._logger = logger or logging.getLogger(type(self).__module__)

    @property
    def logger(self) -> logging.Logger:
        """Return the logger used for command and failure diagnostics."""
        return self._logger

    @property
    def default_options(self) -> SvnOptions:
        """Return the current process-wide default options."""
        with self._defaults_lock:
            return self._defaults

    @property
    def debug(self) -> bool:
        """Return ``True`` when executed command lines are logged."""
        return self._debug

    def set_default_options(self, options: SvnOptions) -> None:
        """Layer the explicitly set fields of *options* over the current defaults."""
        with self._defaults_lock:
            self._defaults = options.merged_with(self._defaults)

    def set_debug(self, debug: bool) -> None:
        """Enable or disable logging of executed command lines."""
        self._debug = debug

    def build(
        self,
        subcommand: str,
        args: Sequence[str | None],
        options: SvnOptions,
        *,
        flags: Sequence[str] = (),
    ) -> CommandInvocation:
        """Render an invocation with *options* merged over the defaults."""
        return self._builder.build(
            subcommand,
            args,
            options,
            flags=flags,
            defaults=self.default_options,
        )

    def resolve(self, path: str | None, options: SvnOptions) -> str | None:
        """Resolve *path* the way positional arguments are resolved."""
        effective = options.merged_with(self.default_options)
        return self._builder.resolver.resolve(path, effective)

    def execute(self, invocation: CommandInvocation) -> CommandResult:
        """Run *invocation* and return its result."""
        if self._debug:
            self._logger.debug(
                "Executing: %s",
                invocation.redacted,
                extra={"subcommand": invocation.subcommand},
            )
        return self._executor.execute(invocation.command_line, invocation.options)

    def run(
        self,
        subcommand: str,
        args: Sequence[str | None],
        options: SvnOptions,
        *,
        flags: Sequence[str] = (),
    ) -> CommandResult:
        """Build and execute ``svn <subcommand>`` in one step."""
        return self.execute(self.build(subcommand, args, options, flags=flags))


__all__ = ["SvnBaseService", "depth_flags", "revision_flags", "switch_flags"]

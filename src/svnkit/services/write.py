"""Mutating ``svn`` operations returning raw command results."""

from __future__ import annotations

from collections.abc import Sequence

from svnkit.core.models import (
    AddOptions,
    CheckoutOptions,
    CommandResult,
    CommitOptions,
    CopyOptions,
    MkdirOptions,
    MoveOptions,
    RemoveOptions,
    UpdateOptions,
)

from .base import SvnBaseService, depth_flags, revision_flags, switch_flags


def message_flags(message: str | None) -> list[str]:
    """Return ``--message`` tokens when a log message is supplied."""
    if message is None:
        return []
    return ["--message", message]


class SvnWriteService(SvnBaseService):
    """Modify working copies and repositories.

    Every operation returns the :class:`CommandResult` of its single ``svn``
    invocation, failures included; nothing is raised for a failed command.
    """

    def checkout(
        self,
        url: str,
        local_path: str,
        options: CheckoutOptions | None = None,
    ) -> CommandResult:
        """Check out *url* into *local_path* without applying the base location."""
        checkout_options = options or CheckoutOptions()
        flags = [
            *revision_flags(checkout_options.revision),
            *depth_flags(checkout_options.depth),
        ]
        return self.run(
            "checkout",
            [url, local_path],
            checkout_options.without_repository_url(),
            flags=flags,
        )

    def update(self, path: str | None = None, options: UpdateOptions | None = None) -> CommandResult:
        """Bring *path* (or the current directory) up to date."""
        update_options = options or UpdateOptions()
        flags = revision_flags(update_options.revision)
        if update_options.accept:
            flags.extend(["--accept", str(update_options.accept)])
        return self.run("update", [path], update_options, flags=flags)

    def commit(self, message: str, options: CommitOptions | None = None) -> CommandResult:
        """Commit ``options.files`` (or the current directory) with *message*."""
        commit_options = options or CommitOptions()
        flags = [*message_flags(message), *depth_flags(commit_options.depth)]
        return self.run("commit", commit_options.files, commit_options, flags=flags)

    def add(self, paths: Sequence[str], options: AddOptions | None = None) -> CommandResult:
        """Schedule *paths* for addition."""
        add_options = options or AddOptions()
        flags = switch_flags(force=add_options.force, no_ignore=add_options.no_ignore)
        return self.run("add", paths, add_options, flags=flags)

    def remove(self, paths: Sequence[str], options: RemoveOptions | None = None) -> CommandResult:
        """Schedule *paths* for removal, or delete them directly when they are URLs."""
        remove_options = options or RemoveOptions()
        flags = switch_flags(force=remove_options.force, keep_local=remove_options.keep_local)
        return self.run("remove", paths, remove_options, flags=flags)

    def copy(
        self,
        source: str,
        destination: str,
        options: CopyOptions | None = None,
    ) -> CommandResult:
        """Copy *source* to *destination*, keeping history."""
        copy_options = options or CopyOptions()
        flags = [
            *revision_flags(copy_options.revision),
            *message_flags(copy_options.message),
            *switch_flags(parents=copy_options.parents),
        ]
        return self.run("copy", [source, destination], copy_options, flags=flags)

    def move(
        self,
        source: str,
        destination: str,
        options: MoveOptions | None = None,
    ) -> CommandResult:
        """Move or rename *source* to *destination*."""
        move_options = options or MoveOptions()
        flags = [
            *message_flags(move_options.message),
            *switch_flags(force=move_options.force, parents=move_options.parents),
        ]
        return self.run("move", [source, destination], move_options, flags=flags)

    def mkdir(self, paths: Sequence[str], options: MkdirOptions | None = None) -> CommandResult:
        """Create directories under version control."""
        mkdir_options = options or MkdirOptions()
        flags = [
            *message_flags(mkdir_options.message),
            *switch_flags(parents=mkdir_options.parents),
        ]
        return self.run("mkdir", paths, mkdir_options, flags=flags)


__all__ = ["SvnWriteService", "message_flags"]

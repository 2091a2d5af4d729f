"""Read-only ``svn`` operations returning parsed results."""

from __future__ import annotations

from svnkit.core.models import (
    CatOptions,
    CommandResult,
    DiffOptions,
    ExportOptions,
    InfoResult,
    ListOptions,
    LogEntry,
    LogOptions,
    StatusItem,
    SvnOptions,
)
from svnkit.tools.parsers import parse_info, parse_list, parse_log, parse_status

from .base import SvnBaseService, depth_flags, revision_flags, switch_flags

_NOT_A_WORKING_COPY_MARKERS = ("is not a working copy", "E155007")


class SvnReadService(SvnBaseService):
    """Query working copies and repositories without modifying them.

    Failures never raise. They are logged as warnings and reported as
    ``None``, an empty list, or an empty string depending on the operation.
    """

    def info(self, path: str | None = None, options: SvnOptions | None = None) -> InfoResult | None:
        """Return ``svn info`` data for *path* or ``None`` when it is unavailable."""
        result = self.run("info", [path], options or SvnOptions())
        if not result.success:
            self.logger.warning("Info command failed: %s", result.stderr)
            return None
        return parse_info(result.stdout)

    def status(
        self, path: str | None = None, options: SvnOptions | None = None,
    ) -> list[StatusItem]:
        """Return working copy and out-of-date status entries for *path*."""
        result = self.run(
            "status", [path], options or SvnOptions(), flags=["--xml", "--show-updates"],
        )
        if not result.success:
            self.logger.warning("Status command failed: %s", result.stderr)
            return []
        return parse_status(result.stdout)

    def log(self, path: str | None = None, options: LogOptions | None = None) -> list[LogEntry]:
        """Return log entries for *path*, newest first as reported by ``svn``."""
        log_options = options or LogOptions()
        flags = ["--xml"]
        if log_options.limit is not None:
            flags.extend(["--limit", str(log_options.limit)])
        flags.extend(revision_flags(log_options.revision))
        flags.extend(switch_flags(stop_on_copy=log_options.stop_on_copy))

        result = self.run("log", [path], log_options, flags=flags)
        if not result.success:
            self.logger.warning("Log command failed: %s", result.stderr)
            return []
        return parse_log(result.stdout)

    def cat(self, path: str, options: CatOptions | None = None) -> str:
        """Return the contents of *path*, or an empty string on failure."""
        cat_options = options or CatOptions()
        result = self.run("cat", [path], cat_options, flags=revision_flags(cat_options.revision))
        if not result.success:
            self.logger.warning("Cat command failed: %s", result.stderr)
            return ""
        return result.stdout

    def diff(
        self,
        path1: str | None = None,
        path2: str | None = None,
        options: DiffOptions | None = None,
    ) -> str:
        """Return the unified diff between revisions or between *path1* and *path2*."""
        diff_options = options or DiffOptions()
        if diff_options.revision:
            flags = revision_flags(diff_options.revision)
        elif diff_options.old_revision and diff_options.new_revision:
            flags = revision_flags(f"{diff_options.old_revision}:{diff_options.new_revision}")
        else:
            flags = []
        if diff_options.diff_cmd:
            flags.extend(["--diff-cmd", diff_options.diff_cmd])

        result = self.run("diff", [path1, path2], diff_options, flags=flags)
        if not result.success:
            self.logger.warning("Diff command failed: %s", result.stderr)
            return ""
        return result.stdout

    def export(
        self,
        source: str,
        destination: str,
        options: ExportOptions | None = None,
    ) -> CommandResult:
        """Export *source* into the local *destination* without a working copy.

        *source* is resolved against the base repository location. The
        destination is always a local path and is never joined with it.
        """
        export_options = options or ExportOptions()
        flags = [
            *revision_flags(export_options.revision),
            *depth_flags(export_options.depth),
            *switch_flags(force=export_options.force),
        ]
        if export_options.native_eol:
            flags.extend(["--native-eol", export_options.native_eol])
        flags.extend(switch_flags(ignore_externals=export_options.ignore_externals))

        resolved_source = self.resolve(source, export_options) or source
        return self.run(
            "export",
            [resolved_source, destination],
            export_options.without_repository_url(),
            flags=flags,
        )

    def list(self, path: str | None = None, options: ListOptions | None = None) -> list[str]:
        """Return the entry names under *path* in the order ``svn`` lists them."""
        list_options = options or ListOptions()
        flags = [
            "--xml",
            *revision_flags(list_options.revision),
            *switch_flags(recursive=list_options.recursive),
            *depth_flags(list_options.depth),
        ]
        result = self.run("list", [path], list_options, flags=flags)
        if not result.success:
            self._warn_list_failure(result.stderr, path, list_options)
            return []
        return parse_list(result.stdout)

    def _warn_list_failure(self, stderr: str, path: str | None, options: SvnOptions) -> None:
        if any(marker in stderr for marker in _NOT_A_WORKING_COPY_MARKERS):
            target = self.resolve(path, options) or "current directory"
            self.logger.warning(
                "List command failed: Path '%s' is not a working copy. Use a repository "
                "URL (e.g., file://, http://) or a working copy path.",
                target,
            )
            return
        self.logger.warning("List command failed: %s", stderr)


__all__ = ["SvnReadService"]

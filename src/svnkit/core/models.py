"""Pydantic domain models for svnkit options and parsed ``svn`` output."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field

type Revision = str | int

DEFAULT_EXECUTABLE = "svn"
DEFAULT_MAX_BUFFER = 10 * 1024 * 1024
DEFAULT_TIMEOUT_SECONDS = 600.0


class Depth(StrEnum):
    """Operation depth accepted by ``--depth``."""

    EMPTY = "empty"
    FILES = "files"
    IMMEDIATES = "immediates"
    INFINITY = "infinity"


class AcceptMode(StrEnum):
    """Conflict resolution strategies accepted by ``svn update --accept``."""

    POSTPONE = "postpone"
    BASE = "base"
    MINE_FULL = "mine-full"
    THEIRS_FULL = "theirs-full"
    EDIT = "edit"
    LAUNCH = "launch"


class SvnOptions(BaseModel):
    """Options shared by every ``svn`` invocation.

    Instances are immutable. A per-call record is layered over the
    process-wide defaults with :meth:`merged_with`; only fields that were
    explicitly supplied on the per-call record take precedence.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    username: str | None = None
    password: str | None = None
    repository_url: str | None = None
    non_interactive: bool = True
    trust_server_cert: bool = False
    no_auth_cache: bool = False

    def merged_with(self, defaults: SvnOptions | None) -> Self:
        """Return a copy with unset fields inherited from *defaults*."""
        if defaults is None:
            return self
        own_fields = type(self).model_fields
        inherited = {
            name: getattr(defaults, name)
            for name in defaults.model_fields_set
            if name in own_fields and name not in self.model_fields_set
        }
        if not inherited:
            return self
        return self.model_copy(update=inherited)

    def without_repository_url(self) -> Self:
        """Return a copy whose base repository location is explicitly cleared."""
        return self.model_copy(update={"repository_url": None})

    @property
    def has_credentials(self) -> bool:
        """Return ``True`` when a username or password is configured."""
        return bool(self.username or self.password)


class CheckoutOptions(SvnOptions):
    """Options for ``svn checkout``."""

    revision: Revision | None = None
    depth: Depth | None = None


class UpdateOptions(SvnOptions):
    """Options for ``svn update``."""

    revision: Revision | None = None
    accept: AcceptMode | None = None


def _empty_file_list() -> list[str]:
    """Return a new list for storing commit targets."""
    return []


class CommitOptions(SvnOptions):
    """Options for ``svn commit``; the message is passed separately."""

    files: list[str] = Field(default_factory=_empty_file_list)
    depth: Depth | None = None


class ExportOptions(SvnOptions):
    """Options for ``svn export``."""

    revision: Revision | None = None
    depth: Depth | None = None
    force: bool = False
    native_eol: str | None = None
    ignore_externals: bool = False


class LogOptions(SvnOptions):
    """Options for ``svn log``."""

    limit: int | None = Field(default=None, ge=1)
    revision: str | None = None
    stop_on_copy: bool = False


class ListOptions(SvnOptions):
    """Options for ``svn list``."""

    revision: str | None = None
    recursive: bool = False
    depth: Depth | None = None


class CatOptions(SvnOptions):
    """Options for ``svn cat``."""

    revision: str | None = None


class DiffOptions(SvnOptions):
    """Options for ``svn diff``.

    ``revision`` wins over the ``old_revision``/``new_revision`` pair, which
    is only used when both halves are present.
    """

    revision: str | None = None
    old_revision: str | None = None
    new_revision: str | None = None
    diff_cmd: str | None = None


class AddOptions(SvnOptions):
    """Options for ``svn add``."""

    force: bool = False
    no_ignore: bool = False


class RemoveOptions(SvnOptions):
    """Options for ``svn remove``."""

    force: bool = False
    keep_local: bool = False


class CopyOptions(SvnOptions):
    """Options for ``svn copy``."""

    revision: str | None = None
    message: str | None = None
    parents: bool = False


class MoveOptions(SvnOptions):
    """Options for ``svn move``."""

    message: str | None = None
    force: bool = False
    parents: bool = False


class MkdirOptions(SvnOptions):
    """Options for ``svn mkdir``."""

    message: str | None = None
    parents: bool = False


@dataclass(frozen=True)
class CommandResult:
    """Uniform outcome of a single ``svn`` subprocess.

    ``code`` is ``None`` when no exit status exists: the process could not be
    launched, its output exceeded the buffer ceiling, or it timed out.
    """

    success: bool
    stdout: str = ""
    stderr: str = ""
    code: int | None = None


class InfoResult(BaseModel):
    """Key/value data reported by ``svn info``."""

    path: str = ""
    url: str = ""
    relative_url: str = ""
    repository_root: str = ""
    repository_uuid: str = ""
    revision: str = ""
    node_kind: str = ""
    schedule: str | None = None
    last_changed_author: str | None = None
    last_changed_rev: str | None = None
    last_changed_date: str | None = None


class StatusItem(BaseModel):
    """A single entry reported by ``svn status --xml``."""

    path: str
    status: str = Field(min_length=1, max_length=1)
    working_revision: str | None = None
    last_changed_revision: str | None = None
    last_changed_author: str | None = None
    last_changed_date: str | None = None


class LogPath(BaseModel):
    """A changed path recorded on a log entry."""

    action: str
    path: str
    kind: str | None = None


class LogEntry(BaseModel):
    """A revision reported by ``svn log --xml``."""

    revision: str
    author: str = ""
    date: str = ""
    message: str = ""
    paths: list[LogPath] | None = None


class SvnKitSettings(BaseModel):
    """Process-wide configuration loaded from disk and the environment."""

    model_config = ConfigDict(extra="forbid")

    defaults: SvnOptions = Field(default_factory=SvnOptions)
    executable: str = Field(default=DEFAULT_EXECUTABLE, min_length=1)
    timeout: float | None = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    max_buffer: int = Field(default=DEFAULT_MAX_BUFFER, ge=1)
    debug: bool = False


__all__ = [
    "DEFAULT_EXECUTABLE",
    "DEFAULT_MAX_BUFFER",
    "DEFAULT_TIMEOUT_SECONDS",
    "AcceptMode",
    "AddOptions",
    "CatOptions",
    "CheckoutOptions",
    "CommandResult",
    "CommitOptions",
    "CopyOptions",
    "Depth",
    "DiffOptions",
    "ExportOptions",
    "InfoResult",
    "ListOptions",
    "LogEntry",
    "LogOptions",
    "LogPath",
    "MkdirOptions",
    "MoveOptions",
    "RemoveOptions",
    "Revision",
    "StatusItem",
    "SvnKitSettings",
    "SvnOptions",
    "UpdateOptions",
]

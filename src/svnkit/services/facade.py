"""Single entry point combining the read and write services."""

from __future__ import annotations

from collections.abc import Sequence

from svnkit.core.models import (
    AddOptions,
    CatOptions,
    CheckoutOptions,
    CommandResult,
    CommitOptions,
    CopyOptions,
    DiffOptions,
    ExportOptions,
    InfoResult,
    ListOptions,
    LogEntry,
    LogOptions,
    MkdirOptions,
    MoveOptions,
    RemoveOptions,
    StatusItem,
    SvnKitSettings,
    SvnOptions,
    UpdateOptions,
)
from svnkit.core.platform import PlatformPolicy, detect_platform_policy
from svnkit.tools.command import CommandBuilder
from svnkit.tools.executor import ProcessExecutor

from .read import SvnReadService
from .write import SvnWriteService


class SvnService:
    """Expose every supported ``svn`` operation through one object.

    Default options and the debug flag are forwarded to both underlying
    services so reads and writes always agree on credentials and the base
    repository location.
    """

    def __init__(
        self,
        read_service: SvnReadService | None = None,
        write_service: SvnWriteService | None = None,
        *,
        builder: CommandBuilder | None = None,
        executor: ProcessExecutor | None = None,
    ) -> None:
        """Use the given services or create both around a shared builder and executor."""
        shared_builder = builder or CommandBuilder()
        shared_executor = executor or ProcessExecutor(policy=shared_builder.policy)
        self._read = read_service or SvnReadService(builder=shared_builder, executor=shared_executor)
        self._write = write_service or SvnWriteService(
            builder=shared_builder, executor=shared_executor,
        )

    @classmethod
    def from_settings(
        cls,
        settings: SvnKitSettings,
        *,
        policy: PlatformPolicy | None = None,
    ) -> SvnService:
        """Create a service configured from loaded :class:`SvnKitSettings`."""
        resolved_policy = policy or detect_platform_policy()
        builder = CommandBuilder(policy=resolved_policy, executable=settings.executable)
        executor = ProcessExecutor(
            policy=resolved_policy,
            timeout=settings.timeout,
            max_buffer=settings.max_buffer,
        )
        service = cls(builder=builder, executor=executor)
        service.set_default_options(settings.defaults)
        service.set_debug(settings.debug)
        return service

    @property
    def read_service(self) -> SvnReadService:
        """Return the service handling read operations."""
        return self._read

    @property
    def write_service(self) -> SvnWriteService:
        """Return the service handling mutating operations."""
        return self._write

    def set_default_options(self, options: SvnOptions) -> None:
        """Layer *options* over the defaults of both services."""
        self._read.set_default_options(options)
        self._write.set_default_options(options)

    def set_debug(self, debug: bool) -> None:
        """Toggle command logging on both services."""
        self._read.set_debug(debug)
        self._write.set_debug(debug)

    # Read operations

    def info(self, path: str | None = None, options: SvnOptions | None = None) -> InfoResult | None:
        """See :meth:`SvnReadService.info`."""
        return self._read.info(path, options)

    def status(
        self, path: str | None = None, options: SvnOptions | None = None,
    ) -> list[StatusItem]:
        """See :meth:`SvnReadService.status`."""
        return self._read.status(path, options)

    def log(self, path: str | None = None, options: LogOptions | None = None) -> list[LogEntry]:
        """See :meth:`SvnReadService.log`."""
        return self._read.log(path, options)

    def cat(self, path: str, options: CatOptions | None = None) -> str:
        """See :meth:`SvnReadService.cat`."""
        return self._read.cat(path, options)

    def diff(
        self,
        path1: str | None = None,
        path2: str | None = None,
        options: DiffOptions | None = None,
    ) -> str:
        """See :meth:`SvnReadService.diff`."""
        return self._read.diff(path1, path2, options)

    def export(
        self, source: str, destination: str, options: ExportOptions | None = None,
    ) -> CommandResult:
        """See :meth:`SvnReadService.export`."""
        return self._read.export(source, destination, options)

    # Write operations

    def checkout(
        self, url: str, local_path: str, options: CheckoutOptions | None = None,
    ) -> CommandResult:
        """See :meth:`SvnWriteService.checkout`."""
        return self._write.checkout(url, local_path, options)

    def update(self, path: str | None = None, options: UpdateOptions | None = None) -> CommandResult:
        """See :meth:`SvnWriteService.update`."""
        return self._write.update(path, options)

    def commit(self, message: str, options: CommitOptions | None = None) -> CommandResult:
        """See :meth:`SvnWriteService.commit`."""
        return self._write.commit(message, options)

    def add(self, paths: Sequence[str], options: AddOptions | None = None) -> CommandResult:
        """See :meth:`SvnWriteService.add`."""
        return self._write.add(paths, options)

    def remove(self, paths: Sequence[str], options: RemoveOptions | None = None) -> CommandResult:
        """See :meth:`SvnWriteService.remove`."""
        return self._write.remove(paths, options)

    def copy(
        self, source: str, destination: str, options: CopyOptions | None = None,
    ) -> CommandResult:
        """See :meth:`SvnWriteService.copy`."""
        return self._write.copy(source, destination, options)

    def move(
        self, source: str, destination: str, options: MoveOptions | None = None,
    ) -> CommandResult:
        """See :meth:`SvnWriteService.move`."""
        return self._write.move(source, destination, options)

    def mkdir(self, paths: Sequence[str], options: MkdirOptions | None = None) -> CommandResult:
        """See :meth:`SvnWriteService.mkdir`."""
        return self._write.mkdir(paths, options)

    def list(self, path: str | None = None, options: ListOptions | None = None) -> list[str]:
        """See :meth:`SvnReadService.list`."""
        return self._read.list(path, options)


__all__ = ["SvnService"]

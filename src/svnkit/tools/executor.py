"""Subprocess execution of ``svn`` command lines with bounded output."""

from __future__ import annotations

import logging
import os
import subprocess
import threading
from collections.abc import Callable, Mapping
from typing import IO

from svnkit.core.models import (
    DEFAULT_MAX_BUFFER,
    DEFAULT_TIMEOUT_SECONDS,
    CommandResult,
    SvnOptions,
)
from svnkit.core.platform import PlatformPolicy, detect_platform_policy
from svnkit.core.safety import redact_command

type PopenFactory = Callable[..., subprocess.Popen[bytes]]

_CHUNK_SIZE = 64 * 1024


class _BoundedCollector(threading.Thread):
    """Drain a pipe into memory, stopping once *limit* bytes would be exceeded."""

    def __init__(
        self,
        stream: IO[bytes],
        *,
        limit: int,
        on_overflow: Callable[[], None],
    ) -> None:
        super().__init__(daemon=True)
        self._stream = stream
        self._limit = limit
        self._on_overflow = on_overflow
        self._chunks: list[bytes] = []
        self._size = 0
        self.overflowed = False

    def run(self) -> None:
        read = getattr(self._stream, "read1", self._stream.read)
        with self._stream:
            while chunk := read(_CHUNK_SIZE):
                if self._size + len(chunk) > self._limit:
                    self.overflowed = True
                    self._on_overflow()
                    return
                self._chunks.append(chunk)
                self._size += len(chunk)

    def text(self) -> str:
        return b"".join(self._chunks).decode("utf-8", errors="replace").strip()


class ProcessExecutor:
    """Run rendered ``svn`` command lines and normalize their outcome.

    Every call spawns exactly one subprocess in the caller's working
    directory with a copy of the current environment, the C locale forced,
    and ``SVN_USERNAME``/``SVN_PASSWORD`` set when credentials are present.
    Failures never raise: launch errors, non-zero exits, oversized output,
    and timeouts are all reported through :class:`CommandResult`.
    """

    def __init__(
        self,
        *,
        policy: PlatformPolicy | None = None,
        timeout: float | None = DEFAULT_TIMEOUT_SECONDS,
        max_buffer: int = DEFAULT_MAX_BUFFER,
        popen: PopenFactory = subprocess.Popen,
        environ: Mapping[str, str] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Configure limits, the process factory, and the base environment."""
        if max_buffer <= 0:
            error_message = "max_buffer must be a positive number of bytes"
            raise ValueError(error_message)
        if timeout is not None and timeout <= 0:
            error_message = "timeout must be positive or None"
            raise ValueError(error_message)

        self._policy = policy or detect_platform_policy()
        self._timeout = timeout
        self._max_buffer = max_buffer
        self._popen = popen
        self._environ = environ
        self._logger = logger or logging.getLogger(__name__)

    @property
    def timeout(self) -> float | None:
        """Return the wall-clock limit in seconds, or ``None`` when disabled."""
        return self._timeout

    @property
    def max_buffer(self) -> int:
        """Return the per-stream output ceiling in bytes."""
        return self._max_buffer

    def build_environment(self, options: SvnOptions) -> dict[str, str]:
        """Return the environment passed to the ``svn`` subprocess."""
        base = os.environ if self._environ is None else self._environ
        environment = dict(base)
        environment.update(self._policy.locale_environment())
        if options.username:
            environment["SVN_USERNAME"] = options.username
        if options.password:
            environment["SVN_PASSWORD"] = options.password
        return environment

    def execute(self, command_line: str, options: SvnOptions) -> CommandResult:
        """Run *command_line* and return its trimmed output and exit status."""
        try:
            argv = self._policy.to_argv(command_line)
            process = self._popen(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=os.getcwd(),
                env=self.build_environment(options),
                shell=False,
            )
        except (OSError, ValueError) as error:
            self._logger.debug(
                "Failed to launch svn",
                extra={"command": redact_command(command_line), "error": str(error)},
            )
            return CommandResult(success=False, stderr=str(error) or type(error).__name__)

        if process.stdout is None or process.stderr is None:  # pragma: no cover - Popen contract
            error_message = "svn subprocess was started without output pipes"
            raise RuntimeError(error_message)

        kill_process = _process_killer(process)
        stdout = _BoundedCollector(process.stdout, limit=self._max_buffer, on_overflow=kill_process)
        stderr = _BoundedCollector(process.stderr, limit=self._max_buffer, on_overflow=kill_process)
        stdout.start()
        stderr.start()

        try:
            return_code = process.wait(timeout=self._timeout)
        except subprocess.TimeoutExpired:
            kill_process()
            process.wait()
            stdout.join()
            stderr.join()
            self._logger.debug(
                "svn timed out",
                extra={"command": redact_command(command_line), "timeout": self._timeout},
            )
            return CommandResult(
                success=False,
                stdout=stdout.text(),
                stderr=f"Command timed out after {self._timeout:g} seconds",
            )

        stdout.join()
        stderr.join()

        if stdout.overflowed or stderr.overflowed:
            self._logger.debug(
                "svn output exceeded buffer",
                extra={"command": redact_command(command_line), "max_buffer": self._max_buffer},
            )
            return CommandResult(
                success=False,
                stderr=f"maxBuffer exceeded: output larger than {self._max_buffer} bytes",
            )

        stdout_text = stdout.text()
        stderr_text = stderr.text()
        if return_code == 0:
            return CommandResult(success=True, stdout=stdout_text, stderr=stderr_text, code=0)

        self._logger.debug(
            "svn exited with non-zero status",
            extra={"command": redact_command(command_line), "code": return_code},
        )
        return CommandResult(
            success=False,
            stdout=stdout_text,
            stderr=stderr_text or f"Command failed with exit code {return_code}",
            code=return_code,
        )


def _process_killer(process: subprocess.Popen[bytes]) -> Callable[[], None]:
    lock = threading.Lock()

    def kill() -> None:
        with lock:
            if process.poll() is not None:
                return
            try:
                process.kill()
            except ProcessLookupError:  # pragma: no cover - exited between poll and kill
                return

    return kill


__all__ = ["PopenFactory", "ProcessExecutor"]

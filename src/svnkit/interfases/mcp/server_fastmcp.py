"""FastMCP(stdio) exposure implementation for svnkit."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, cast
from collections.abc import Callable, Mapping

from fastmcp import FastMCP
from pydantic import ValidationError

from svnkit.core.config import load_settings
from svnkit.core.errors import ConfigurationError, ExposureConfigurationError, ExposureStateError
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
from svnkit.services import SvnService

LOGGER = logging.getLogger(__name__)


@dataclass
class MCPRuntime:
    """Stateful helpers shared between FastMCP tool invocations."""

    service: SvnService

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None) -> MCPRuntime:
        """Create the runtime from ``config['settings']`` or the settings file."""
        raw_settings = None if config is None else config.get("settings")
        try:
            if raw_settings is None:
                settings = load_settings()
            elif isinstance(raw_settings, SvnKitSettings):
                settings = raw_settings
            elif isinstance(raw_settings, Mapping):
                settings = SvnKitSettings.model_validate(
                    dict(cast("Mapping[str, Any]", raw_settings)),
                )
            else:
                message = "settings must be a mapping or SvnKitSettings instance"
                raise ExposureConfigurationError(message)
        except (ConfigurationError, ValidationError) as error:
            message = f"Invalid svnkit settings for the MCP exposure: {error}"
            raise ExposureConfigurationError(message) from error
        return cls(service=SvnService.from_settings(settings))


class MCPExposure:
    """FastMCP(stdio) exposure that publishes one tool per ``svn`` operation."""

    def __init__(self) -> None:
        """Initialise the FastMCP server and register all tools."""
        self._mcp = FastMCP("svnkit")
        self._runtime: MCPRuntime | None = None

        def svn_info(path: str | None = None, options: SvnOptions | None = None) -> InfoResult | None:
            """Show information about a working copy path or repository URL."""
            return self._require_runtime().service.info(path, options)

        def svn_status(
            path: str | None = None, options: SvnOptions | None = None,
        ) -> list[StatusItem]:
            """Show working copy status, including out-of-date information."""
            return self._require_runtime().service.status(path, options)

        def svn_log(path: str | None = None, options: LogOptions | None = None) -> list[LogEntry]:
            """Show log messages for a path or URL."""
            return self._require_runtime().service.log(path, options)

        def svn_list(path: str | None = None, options: ListOptions | None = None) -> list[str]:
            """List directory entries in the repository."""
            return self._require_runtime().service.list(path, options)

        def svn_cat(path: str, options: CatOptions | None = None) -> str:
            """Return the contents of a versioned file."""
            return self._require_runtime().service.cat(path, options)

        def svn_diff(
            path1: str | None = None,
            path2: str | None = None,
            options: DiffOptions | None = None,
        ) -> str:
            """Return differences between revisions or paths."""
            return self._require_runtime().service.diff(path1, path2, options)

        def svn_export(
            source: str, destination: str, options: ExportOptions | None = None,
        ) -> CommandResult:
            """Export a clean directory tree without creating a working copy."""
            return self._require_runtime().service.export(source, destination, options)

        def svn_checkout(
            url: str, local_path: str, options: CheckoutOptions | None = None,
        ) -> CommandResult:
            """Check out a working copy from a repository URL."""
            return self._require_runtime().service.checkout(url, local_path, options)

        def svn_update(path: str | None = None, options: UpdateOptions | None = None) -> CommandResult:
            """Update a working copy."""
            return self._require_runtime().service.update(path, options)

        def svn_commit(message: str, options: CommitOptions | None = None) -> CommandResult:
            """Commit local changes with a log message."""
            return self._require_runtime().service.commit(message, options)

        def svn_add(paths: list[str], options: AddOptions | None = None) -> CommandResult:
            """Schedule files and directories for addition."""
            return self._require_runtime().service.add(paths, options)

        def svn_remove(paths: list[str], options: RemoveOptions | None = None) -> CommandResult:
            """Schedule files and directories for removal."""
            return self._require_runtime().service.remove(paths, options)

        def svn_copy(
            source: str, destination: str, options: CopyOptions | None = None,
        ) -> CommandResult:
            """Copy a path in the working copy or repository."""
            return self._require_runtime().service.copy(source, destination, options)

        def svn_move(
            source: str, destination: str, options: MoveOptions | None = None,
        ) -> CommandResult:
            """Move or rename a path in the working copy or repository."""
            return self._require_runtime().service.move(source, destination, options)

        def svn_mkdir(paths: list[str], options: MkdirOptions | None = None) -> CommandResult:
            """Create versioned directories."""
            return self._require_runtime().service.mkdir(paths, options)

        self._tools: dict[str, Callable[..., Any]] = {
            "svn_info": svn_info,
            "svn_status": svn_status,
            "svn_log": svn_log,
            "svn_list": svn_list,
            "svn_cat": svn_cat,
            "svn_diff": svn_diff,
            "svn_export": svn_export,
            "svn_checkout": svn_checkout,
            "svn_update": svn_update,
            "svn_commit": svn_commit,
            "svn_add": svn_add,
            "svn_remove": svn_remove,
            "svn_copy": svn_copy,
            "svn_move": svn_move,
            "svn_mkdir": svn_mkdir,
        }
        for tool in self._tools.values():
            self._mcp.tool()(tool)

    @property
    def tool_names(self) -> tuple[str, ...]:
        """Return the names of the published tools."""
        return tuple(self._tools)

    def get_tool(self, name: str) -> Callable[..., Any]:
        """Return the plain function behind the tool called *name*."""
        try:
            return self._tools[name]
        except KeyError:
            message = f"unknown svnkit tool: {name}"
            raise ExposureConfigurationError(message) from None

    def attach_runtime(self, runtime: MCPRuntime | None) -> None:
        """Install *runtime* for tool calls made outside :meth:`serve`."""
        self._runtime = runtime

    def serve(self, *, config: Mapping[str, Any] | None = None) -> None:
        """Start the FastMCP server and publish the svnkit tools."""
        self._runtime = MCPRuntime.from_config(config)
        try:
            strict_validation = True
            show_banner = True
            transport: Any | None = None
            transport_kwargs: dict[str, Any] = {}

            if config is not None:
                strict_validation = bool(config.get("strict_input_validation", True))
                show_banner = bool(config.get("show_banner", True))
                if "transport" in config:
                    transport = config.get("transport")
                raw_transport_kwargs = config.get("transport_kwargs")
                if isinstance(raw_transport_kwargs, Mapping):
                    transport_kwargs = dict(cast("Mapping[str, Any]", raw_transport_kwargs))

            LOGGER.debug("Starting FastMCP server", extra={"tools": list(self._tools)})
            self._mcp.strict_input_validation = strict_validation
            self._mcp.run(transport=transport, show_banner=show_banner, **transport_kwargs)
        finally:
            self._runtime = None

    def _require_runtime(self) -> MCPRuntime:
        runtime = self._runtime
        if runtime is None:
            message = "FastMCP runtime has not been initialised"
            raise ExposureStateError(message)
        return runtime


__all__ = ["MCPExposure", "MCPRuntime"]

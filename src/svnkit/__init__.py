"""Typed Python access to the Subversion command-line client."""

from .core.errors import ConfigurationError, SvnKitError, SvnKitValidationError
from .core.models import (
    AcceptMode,
    AddOptions,
    CatOptions,
    CheckoutOptions,
    CommandResult,
    CommitOptions,
    CopyOptions,
    Depth,
    DiffOptions,
    ExportOptions,
    InfoResult,
    ListOptions,
    LogEntry,
    LogOptions,
    LogPath,
    MkdirOptions,
    MoveOptions,
    RemoveOptions,
    StatusItem,
    SvnKitSettings,
    SvnOptions,
    UpdateOptions,
)
from .services import SvnReadService, SvnService, SvnWriteService

__all__ = [
    "AcceptMode",
    "AddOptions",
    "CatOptions",
    "CheckoutOptions",
    "CommandResult",
    "CommitOptions",
    "ConfigurationError",
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
    "StatusItem",
    "SvnKitError",
    "SvnKitSettings",
    "SvnKitValidationError",
    "SvnOptions",
    "SvnReadService",
    "SvnService",
    "SvnWriteService",
    "UpdateOptions",
]

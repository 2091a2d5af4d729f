"""Core domain modules for svnkit."""

from .config import load_settings
from .errors import (
    ConfigurationError,
    ExposureConfigurationError,
    ExposureError,
    ExposureStateError,
    SvnKitError,
    SvnKitValidationError,
)
from .models import (
    DEFAULT_MAX_BUFFER,
    DEFAULT_TIMEOUT_SECONDS,
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
from .paths import PathResolver, is_url
from .platform import PlatformPolicy, PosixPolicy, WindowsPolicy, detect_platform_policy
from .schema import build_result_json_schema, build_settings_json_schema, export_result_schema

__all__ = [
    "DEFAULT_MAX_BUFFER",
    "DEFAULT_TIMEOUT_SECONDS",
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
    "ExposureConfigurationError",
    "ExposureError",
    "ExposureStateError",
    "InfoResult",
    "ListOptions",
    "LogEntry",
    "LogOptions",
    "LogPath",
    "MkdirOptions",
    "MoveOptions",
    "PathResolver",
    "PlatformPolicy",
    "PosixPolicy",
    "RemoveOptions",
    "StatusItem",
    "SvnKitError",
    "SvnKitSettings",
    "SvnKitValidationError",
    "SvnOptions",
    "UpdateOptions",
    "WindowsPolicy",
    "build_result_json_schema",
    "build_settings_json_schema",
    "detect_platform_policy",
    "export_result_schema",
    "is_url",
    "load_settings",
]

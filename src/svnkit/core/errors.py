"""Domain-specific exception hierarchy for svnkit.

Expected ``svn`` failures such as non-zero exits or missing working copies
are reported through :class:`~svnkit.core.models.CommandResult`
values instead. The exceptions below cover invalid configuration and misuse.
"""

from __future__ import annotations


class SvnKitError(Exception):
    """Base class for all domain-specific errors raised by svnkit."""


class SvnKitValidationError(SvnKitError):
    """Raised when inputs, configuration, or payloads fail validation rules."""


class ConfigurationError(SvnKitValidationError):
    """Raised when settings files or environment overrides cannot be applied."""


class ExposureError(SvnKitError):
    """Base class for errors surfaced through CLI or MCP exposures."""


class ExposureConfigurationError(ExposureError, SvnKitValidationError):
    """Raised when an exposure receives invalid configuration or options."""


class ExposureStateError(ExposureError):
    """Raised when an exposure is invoked while it is in an invalid state."""


__all__ = [
    "ConfigurationError",
    "ExposureConfigurationError",
    "ExposureError",
    "ExposureStateError",
    "SvnKitError",
    "SvnKitValidationError",
]

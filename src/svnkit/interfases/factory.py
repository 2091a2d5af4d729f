"""Factories for creating exposure entry points."""

from __future__ import annotations

import os
import typing
from typing import TYPE_CHECKING

from svnkit.core.errors import ExposureConfigurationError
from svnkit.interfases.cli.app import CLIExposure
from svnkit.interfases.mcp.server_fastmcp import MCPExposure

if TYPE_CHECKING:
    from svnkit.interfases.types import Exposure

EXPOSE_ENV = "SVNKIT_EXPOSE"

_EXPOSURE_FACTORIES = {
    "cli": CLIExposure,
    "mcp": MCPExposure,
}


def make_exposure(kind: str) -> Exposure:
    """Create an exposure implementation for *kind*."""
    try:
        factory = _EXPOSURE_FACTORIES[kind]
    except KeyError:
        message = f"unknown exposure kind: {kind}"
        raise ExposureConfigurationError(message) from None
    return factory()


def resolve_exposure_from_environment(
    env: typing.Mapping[str, str] | None = None,
    *,
    default: str = "cli",
) -> Exposure:
    """Resolve the exposure named by ``SVNKIT_EXPOSE`` in *env*."""
    environment = os.environ if env is None else env
    kind = environment.get(EXPOSE_ENV, default)
    return make_exposure(kind)


__all__ = ["EXPOSE_ENV", "make_exposure", "resolve_exposure_from_environment"]

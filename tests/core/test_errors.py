"""Tests for the svnkit error hierarchy and integration points."""

from __future__ import annotations

from pathlib import Path

import pytest

from svnkit.core.config import load_settings
from svnkit.core.errors import (
    ConfigurationError,
    ExposureConfigurationError,
    ExposureError,
    ExposureStateError,
    SvnKitError,
    SvnKitValidationError,
)
from svnkit.core.schema import build_result_json_schema
from svnkit.interfases.cli.app import CliError
from svnkit.interfases.factory import make_exposure
from svnkit.interfases.mcp.server_fastmcp import MCPExposure, MCPRuntime


def test_error_hierarchy() -> None:
    """Specialised errors should remain anchored to the SvnKitError base."""
    assert issubclass(SvnKitValidationError, SvnKitError)
    assert issubclass(ConfigurationError, SvnKitValidationError)
    assert issubclass(ExposureConfigurationError, ExposureError)
    assert issubclass(ExposureConfigurationError, SvnKitValidationError)
    assert issubclass(ExposureStateError, ExposureError)


def test_cli_error_inherits_exposure_error() -> None:
    """The CLI should surface anticipated failures via ExposureError subclasses."""
    error = CliError("boom", exit_code=2)
    assert isinstance(error, ExposureError)
    assert error.exit_code == 2


def test_invalid_settings_file_raises_configuration_error(tmp_path: Path) -> None:
    """Malformed settings files are reported as ConfigurationError."""
    config_path = tmp_path / "config.json"
    config_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_settings({"SVNKIT_CONFIG": str(config_path)})


def test_unknown_result_kind_raises_validation_error() -> None:
    """Schema lookups for unknown result kinds fail validation."""
    with pytest.raises(SvnKitValidationError, match="Unknown result kind"):
        build_result_json_schema("blame")


def test_make_exposure_unknown_kind() -> None:
    """Unknown exposure kinds should surface a configuration error."""
    with pytest.raises(ExposureConfigurationError):
        make_exposure("unknown-kind")


def test_mcp_runtime_rejects_invalid_settings() -> None:
    """Invalid MCP settings payloads are reported as configuration errors."""
    with pytest.raises(ExposureConfigurationError):
        MCPRuntime.from_config({"settings": {"timeout": -1}})


def test_mcp_exposure_requires_runtime_before_serving() -> None:
    """Accessing the MCP runtime before serve() should raise ExposureStateError."""
    exposure = MCPExposure()
    require_runtime = object.__getattribute__(exposure, "_require_runtime")

    with pytest.raises(ExposureStateError):
        require_runtime()

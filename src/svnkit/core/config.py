"""Loading of svnkit settings from a JSON file and environment overrides."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match
from pydantic import ValidationError

from .errors import ConfigurationError
from .models import SvnKitSettings
from .schema import build_settings_json_schema

CONFIG_PATH_ENV = "SVNKIT_CONFIG"
CONFIG_RELATIVE_PATH = Path(".config") / "svnkit" / "config.json"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})
_DISABLED_TIMEOUT_VALUES = frozenset({"", "0", "none", "off"})

_STRING_OPTION_OVERRIDES = {
    "SVNKIT_USERNAME": "username",
    "SVNKIT_PASSWORD": "password",
    "SVNKIT_REPOSITORY_URL": "repository_url",
}
_BOOLEAN_OPTION_OVERRIDES = {
    "SVNKIT_TRUST_SERVER_CERT": "trust_server_cert",
    "SVNKIT_NO_AUTH_CACHE": "no_auth_cache",
    "SVNKIT_NON_INTERACTIVE": "non_interactive",
}

LOGGER = logging.getLogger(__name__)


def resolve_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Return the settings file location, honouring ``SVNKIT_CONFIG``."""
    environment = os.environ if env is None else env
    configured = environment.get(CONFIG_PATH_ENV)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / CONFIG_RELATIVE_PATH


def load_settings(env: Mapping[str, str] | None = None) -> SvnKitSettings:
    """Return settings from the config file with environment overrides applied.

    A missing file yields the built-in defaults. A file that cannot be read,
    is not JSON, or does not match the settings schema raises
    :class:`ConfigurationError`, as does an environment value of the wrong
    type.
    """
    environment = os.environ if env is None else env
    config_path = resolve_config_path(environment)
    payload = _read_settings_file(config_path)
    settings = _validate_settings(payload, source=str(config_path))
    return apply_environment_overrides(settings, environment)


def apply_environment_overrides(
    settings: SvnKitSettings, env: Mapping[str, str],
) -> SvnKitSettings:
    """Return *settings* updated with the ``SVNKIT_*`` variables found in *env*."""
    option_updates: dict[str, Any] = {}
    for variable, field_name in _STRING_OPTION_OVERRIDES.items():
        value = env.get(variable)
        if value:
            option_updates[field_name] = value
    for variable, field_name in _BOOLEAN_OPTION_OVERRIDES.items():
        value = env.get(variable)
        if value is not None:
            option_updates[field_name] = _parse_bool(variable, value)

    settings_updates: dict[str, Any] = {}
    if option_updates:
        settings_updates["defaults"] = settings.defaults.model_copy(update=option_updates)

    executable = env.get("SVNKIT_EXECUTABLE")
    if executable:
        settings_updates["executable"] = executable

    timeout = env.get("SVNKIT_TIMEOUT")
    if timeout is not None:
        settings_updates["timeout"] = _parse_timeout(timeout)

    debug = env.get("SVNKIT_DEBUG")
    if debug is not None:
        settings_updates["debug"] = _parse_bool("SVNKIT_DEBUG", debug)

    if not settings_updates:
        return settings
    LOGGER.debug(
        "Applied environment overrides",
        extra={"fields": sorted({*settings_updates, *option_updates} - {"defaults"})},
    )
    return settings.model_copy(update=settings_updates)


def _read_settings_file(config_path: Path) -> Mapping[str, Any]:
    if not config_path.exists():
        return {}

    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as error:
        message = f"Failed to read svnkit configuration from {config_path}: {error}"
        raise ConfigurationError(message) from error

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as error:
        message = f"Failed to parse svnkit configuration from {config_path}: {error}"
        raise ConfigurationError(message) from error

    if not isinstance(payload, Mapping):
        message = f"svnkit configuration at {config_path} must be a JSON object"
        raise ConfigurationError(message)

    return cast("Mapping[str, Any]", payload)


def _validate_settings(payload: Mapping[str, Any], *, source: str) -> SvnKitSettings:
    validator = Draft202012Validator(build_settings_json_schema())
    schema_error = best_match(validator.iter_errors(payload))
    if schema_error is not None:
        location = "/".join(str(part) for part in schema_error.absolute_path) or "<root>"
        message = (
            f"Invalid svnkit configuration in {source} at {location}: {schema_error.message}"
        )
        raise ConfigurationError(message)

    try:
        return SvnKitSettings.model_validate(payload)
    except ValidationError as error:
        message = f"Invalid svnkit configuration in {source}: {error}"
        raise ConfigurationError(message) from error


def _parse_bool(variable: str, raw_value: str) -> bool:
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    message = f"{variable} must be a boolean value, got {raw_value!r}"
    raise ConfigurationError(message)


def _parse_timeout(raw_value: str) -> float | None:
    normalized = raw_value.strip().lower()
    if normalized in _DISABLED_TIMEOUT_VALUES:
        return None
    try:
        timeout = float(normalized)
    except ValueError as error:
        message = f"SVNKIT_TIMEOUT must be a number of seconds, got {raw_value!r}"
        raise ConfigurationError(message) from error
    if timeout <= 0:
        message = f"SVNKIT_TIMEOUT must be positive, got {raw_value!r}"
        raise ConfigurationError(message)
    return timeout


__all__ = [
    "CONFIG_PATH_ENV",
    "CONFIG_RELATIVE_PATH",
    "apply_environment_overrides",
    "load_settings",
    "resolve_config_path",
]

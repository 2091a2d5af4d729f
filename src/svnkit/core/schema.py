"""Utilities for exporting svnkit JSON Schemas."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from jsonschema import Draft202012Validator
from pydantic import TypeAdapter

from .errors import SvnKitValidationError
from .models import CommandResult, InfoResult, LogEntry, StatusItem, SvnKitSettings

SCHEMA_DRAFT_URL = "https://json-schema.org/draft/2020-12/schema"
SCHEMA_BASE_URL = "https://schemas.svnkit.dev"

type ResultKind = Literal["info", "status", "log", "list", "command"]

_RESULT_ADAPTERS: dict[str, tuple[str, TypeAdapter[Any]]] = {
    "info": ("SvnInfoResult", TypeAdapter(InfoResult | None)),
    "status": ("SvnStatusResult", TypeAdapter(list[StatusItem])),
    "log": ("SvnLogResult", TypeAdapter(list[LogEntry])),
    "list": ("SvnListResult", TypeAdapter(list[str])),
    "command": ("SvnCommandResult", TypeAdapter(CommandResult)),
}

RESULT_KINDS: tuple[str, ...] = tuple(_RESULT_ADAPTERS)


def build_result_json_schema(kind: ResultKind | str) -> dict[str, Any]:
    """Return the JSON Schema describing the result of a *kind* operation."""
    try:
        title, adapter = _RESULT_ADAPTERS[kind]
    except KeyError:
        error_message = (
            f"Unknown result kind: {kind!r}. Expected one of: {', '.join(RESULT_KINDS)}"
        )
        raise SvnKitValidationError(error_message) from None

    schema = adapter.json_schema(mode="serialization")
    return _finalize(schema, title=title, identifier=f"{kind}.json")


def build_settings_json_schema() -> dict[str, Any]:
    """Return the JSON Schema for the settings file read by :func:`load_settings`."""
    schema = SvnKitSettings.model_json_schema()
    return _finalize(schema, title="SvnKitSettings", identifier="settings.json")


def export_result_schema(kind: ResultKind | str, path: Path | str) -> dict[str, Any]:
    """Write the JSON Schema for *kind* to *path* and return it."""
    schema = build_result_json_schema(kind)
    path_obj = Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)
    path_obj.write_text(
        json.dumps(schema, indent=2, sort_keys=True),
        encoding="utf-8",
    )
    return schema


def _finalize(schema: dict[str, Any], *, title: str, identifier: str) -> dict[str, Any]:
    schema.setdefault("$schema", SCHEMA_DRAFT_URL)
    schema["title"] = title
    schema.setdefault("$id", f"{SCHEMA_BASE_URL}/{identifier}")
    Draft202012Validator.check_schema(schema)
    return schema


__all__ = [
    "RESULT_KINDS",
    "SCHEMA_DRAFT_URL",
    "ResultKind",
    "build_result_json_schema",
    "build_settings_json_schema",
    "export_result_schema",
]

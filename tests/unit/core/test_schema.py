"""Tests for svnkit.core.schema utilities."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from jsonschema import Draft202012Validator

from svnkit.core.errors import SvnKitValidationError
from svnkit.core.schema import (
    RESULT_KINDS,
    SCHEMA_DRAFT_URL,
    build_result_json_schema,
    build_settings_json_schema,
    export_result_schema,
)

if TYPE_CHECKING:
    from pathlib import Path


@pytest.mark.parametrize("kind", RESULT_KINDS)
def test_result_schemas_are_valid(kind: str) -> None:
    """Every result schema declares its draft and passes meta-validation."""
    schema = build_result_json_schema(kind)

    Draft202012Validator.check_schema(schema)
    assert schema["$schema"] == SCHEMA_DRAFT_URL
    assert schema["$id"].endswith(f"{kind}.json")


def test_status_schema_accepts_parsed_items() -> None:
    """Serialized status items validate against the status schema."""
    validator = Draft202012Validator(build_result_json_schema("status"))
    payload = [{"path": "a.txt", "status": "M", "working_revision": "3"}]

    assert list(validator.iter_errors(payload)) == []
    assert list(validator.iter_errors([{"status": "M"}]))


def test_command_schema_describes_command_result() -> None:
    """The command schema lists the command result fields."""
    schema = build_result_json_schema("command")

    assert schema["title"] == "SvnCommandResult"
    assert set(schema["properties"]) == {"success", "stdout", "stderr", "code"}


def test_settings_schema_rejects_unknown_keys() -> None:
    """The settings schema forbids unknown top-level keys."""
    validator = Draft202012Validator(build_settings_json_schema())

    assert list(validator.iter_errors({"executable": "svn"})) == []
    assert list(validator.iter_errors({"retries": 3}))


def test_unknown_kind_is_rejected() -> None:
    """Unknown kinds raise a validation error naming the choices."""
    with pytest.raises(SvnKitValidationError, match="Expected one of"):
        build_result_json_schema("blame")


def test_export_result_schema_writes_pretty_json(tmp_path: Path) -> None:
    """Exported schema persists as formatted JSON on disk."""
    output_path = tmp_path / "nested" / "log.json"
    schema = export_result_schema("log", output_path)

    assert output_path.read_text(encoding="utf-8").strip().startswith("{")
    assert json.loads(output_path.read_text(encoding="utf-8")) == schema
    assert schema == build_result_json_schema("log")

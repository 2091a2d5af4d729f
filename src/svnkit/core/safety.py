"""Utilities for redacting credentials before they reach logs or error output."""

from __future__ import annotations

import re
import typing
from collections.abc import Mapping, Sequence, Set as AbstractSet
from typing import Any

_REDACTION_PLACEHOLDER = "[redacted]"
_ELLIPSIS = "…"

_PASSWORD_FLAG_PATTERN = re.compile(
    r"""(--password(?:=|\s+))('(?:[^']|'\\'')*'|"(?:[^"\\]|\\.)*"|\S+)""",
)
_PASSWORD_ASSIGNMENT_PATTERN = re.compile(r"(SVN_PASSWORD=)(\S+)")
_URL_CREDENTIALS_PATTERN = re.compile(r"([a-zA-Z][a-zA-Z\d+\-.]*://[^/\s:@]+):[^/\s@]+@")


def redact_command(command_line: str) -> str:
    """Mask the value following ``--password`` in *command_line*."""
    return _PASSWORD_FLAG_PATTERN.sub(
        lambda match: match.group(1) + _REDACTION_PLACEHOLDER, command_line,
    )


def mask_secrets(text: str, *, max_length: int = 512) -> str:
    """Redact passwords from *text* and enforce a length ceiling."""
    masked = redact_command(text)
    masked = _PASSWORD_ASSIGNMENT_PATTERN.sub(
        lambda match: match.group(1) + _REDACTION_PLACEHOLDER, masked,
    )
    masked = _URL_CREDENTIALS_PATTERN.sub(
        lambda match: f"{match.group(1)}:{_REDACTION_PLACEHOLDER}@", masked,
    )

    if max_length > 0 and len(masked) > max_length:
        return masked[:max_length] + _ELLIPSIS
    return masked


def scrub_for_logging(value: Any, *, max_length: int = 512) -> Any:
    """Return a structure safe for logging by masking nested string values."""
    if isinstance(value, str):
        processed: Any = mask_secrets(value, max_length=max_length)
    elif isinstance(value, bytes):
        processed = mask_secrets(value.decode("utf-8", errors="ignore"), max_length=max_length)
    elif isinstance(value, Mapping):
        processed_mapping: dict[Any, Any] = {}
        mapping_items = typing.cast("Mapping[Any, Any]", value)
        for key, item in mapping_items.items():
            if isinstance(key, str) and key.lower() == "password" and item:
                processed_mapping[key] = _REDACTION_PLACEHOLDER
                continue
            processed_mapping[key] = scrub_for_logging(item, max_length=max_length)
        processed = processed_mapping
    elif isinstance(value, list):
        list_items = typing.cast("list[Any]", value)
        processed = [scrub_for_logging(item, max_length=max_length) for item in list_items]
    elif isinstance(value, tuple):
        tuple_items = typing.cast("tuple[Any, ...]", value)
        processed = tuple(
            scrub_for_logging(item, max_length=max_length) for item in tuple_items
        )
    elif isinstance(value, AbstractSet):
        set_items = typing.cast("AbstractSet[Any]", value)
        processed = {scrub_for_logging(item, max_length=max_length) for item in set_items}
    elif isinstance(value, Sequence):
        sequence_items = typing.cast("Sequence[Any]", value)
        processed = [
            scrub_for_logging(item, max_length=max_length) for item in sequence_items
        ]
    else:
        processed = value
    return processed


__all__ = ["mask_secrets", "redact_command", "scrub_for_logging"]

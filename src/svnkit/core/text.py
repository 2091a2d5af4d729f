"""Percent-encoding and entity helpers shared by path resolution and parsing."""

from __future__ import annotations

import html
import re
from urllib.parse import quote, unquote

# Punctuation left literal in path segments. ``:`` keeps ``file:///C:/`` drive letters intact.
SEGMENT_SAFE_CHARACTERS = "!*'():"

_CHARACTER_REFERENCE_PATTERN = re.compile(
    r"&(?:#\d+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);",
)


def decode_percent(text: str) -> str:
    """Percent-decode *text*, returning it unchanged if it is not valid UTF-8."""
    if "%" not in text:
        return text
    try:
        return unquote(text, encoding="utf-8", errors="strict")
    except UnicodeDecodeError:
        return text


def decode_html_entities(text: str) -> str:
    """Resolve named, decimal, and hexadecimal character references in *text*.

    Only references terminated by ``;`` are decoded, so ``R&D&notes`` keeps
    its ampersands.
    """
    if "&" not in text:
        return text
    return _CHARACTER_REFERENCE_PATTERN.sub(lambda match: html.unescape(match.group(0)), text)


def encode_path_segment(segment: str) -> str:
    """Percent-encode a single URL path segment without double-encoding it.

    HTML entities are resolved first and existing percent escapes second, so
    feeding an already encoded segment back in returns it unchanged.
    """
    if not segment:
        return segment
    decoded = decode_percent(decode_html_entities(segment))
    return quote(decoded, safe=SEGMENT_SAFE_CHARACTERS, encoding="utf-8")


__all__ = [
    "SEGMENT_SAFE_CHARACTERS",
    "decode_html_entities",
    "decode_percent",
    "encode_path_segment",
]

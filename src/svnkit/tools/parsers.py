"""Parsers turning ``svn`` output into svnkit result models.

``status``, ``log``, and ``list`` are read with ``--xml`` and parsed with
:mod:`defusedxml`. ``info`` is read in its plain ``Key: value`` form. The
parsers never raise for unexpected input: text without the expected root
element, or text that is not well-formed XML, yields an empty result.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from svnkit.core.models import InfoResult, LogEntry, LogPath, StatusItem
from svnkit.core.text import decode_percent

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element

STATUS_CODES: dict[str, str] = {
    "added": "A",
    "modified": "M",
    "deleted": "D",
    "replaced": "R",
    "conflicted": "C",
    "obstructed": "~",
    "ignored": "I",
    "not-tracked": "?",
    "missing": "!",
    "incomplete": "!",
    "external": "X",
    "unversioned": "?",
}
UNKNOWN_STATUS_CODE = " "
INVALID_REVISION = "-1"

_INFO_FIELDS: dict[str, str] = {
    "Path": "path",
    "URL": "url",
    "Relative URL": "relative_url",
    "Repository Root": "repository_root",
    "Repository UUID": "repository_uuid",
    "Revision": "revision",
    "Node Kind": "node_kind",
    "Schedule": "schedule",
    "Last Changed Author": "last_changed_author",
    "Last Changed Rev": "last_changed_rev",
    "Last Changed Date": "last_changed_date",
}

_REVISION_PATTERN = re.compile(r"^\d+$")


def is_valid_revision(revision: str | None) -> bool:
    """Return ``True`` for a non-negative numeric revision string."""
    return bool(
        revision
        and revision != INVALID_REVISION
        and _REVISION_PATTERN.match(revision),
    )


def parse_info(output: str) -> InfoResult | None:
    """Parse ``svn info`` text output, returning ``None`` when nothing is recognized."""
    values: dict[str, str] = {}
    for line in output.splitlines():
        key, separator, value = line.partition(":")
        if not separator:
            continue
        field_name = _INFO_FIELDS.get(key.strip())
        value = value.strip()
        if field_name is None or not value:
            continue
        values[field_name] = value

    if not values:
        return None
    return InfoResult(**values)


def parse_status(output: str) -> list[StatusItem]:
    """Parse ``svn status --xml`` output into one item per ``<entry>``."""
    root = _parse_document(output, "status")
    if root is None:
        return []

    items: list[StatusItem] = []
    for entry in root.iter("entry"):
        raw_path = entry.get("path")
        if raw_path is None:
            continue

        status = UNKNOWN_STATUS_CODE
        working_revision: str | None = None
        last_changed: dict[str, str | None] = {
            "last_changed_revision": None,
            "last_changed_author": None,
            "last_changed_date": None,
        }

        wc_status = entry.find("wc-status")
        if wc_status is not None:
            status = STATUS_CODES.get(wc_status.get("item", ""), UNKNOWN_STATUS_CODE)
            revision = wc_status.get("revision")
            if is_valid_revision(revision):
                working_revision = revision
            _fill_commit_fields(last_changed, wc_status.find("commit"))

        repos_status = entry.find("repos-status")
        if repos_status is not None:
            _fill_commit_fields(last_changed, repos_status.find("commit"))

        items.append(
            StatusItem(
                path=decode_percent(raw_path),
                status=status,
                working_revision=working_revision,
                **last_changed,
            ),
        )
    return items


def parse_log(output: str) -> list[LogEntry]:
    """Parse ``svn log --xml`` output in document order."""
    root = _parse_document(output, "log")
    if root is None:
        return []

    entries: list[LogEntry] = []
    for logentry in root.iter("logentry"):
        revision = logentry.get("revision")
        if not is_valid_revision(revision):
            continue

        paths: list[LogPath] | None = None
        paths_element = logentry.find("paths")
        if paths_element is not None:
            paths = [
                LogPath(
                    action=path_element.get("action", ""),
                    kind=path_element.get("kind"),
                    path=decode_percent(_text(path_element)),
                )
                for path_element in paths_element.findall("path")
            ]

        entries.append(
            LogEntry(
                revision=revision,
                author=decode_percent(_child_text(logentry, "author")),
                date=_child_text(logentry, "date"),
                message=decode_percent(_child_text(logentry, "msg")),
                paths=paths,
            ),
        )
    return entries


def parse_list(output: str) -> list[str]:
    """Parse ``svn list --xml`` output into entry names in document order."""
    root = _parse_document(output, "lists")
    if root is None:
        return []

    names: list[str] = []
    for entry in root.iter("entry"):
        name = entry.find("name")
        if name is None:
            continue
        names.append(decode_percent(_text(name)))
    return names


def _parse_document(output: str, root_tag: str) -> Element | None:
    document = _slice_document(output, root_tag)
    if document is None:
        return None
    try:
        root = ET.fromstring(document)
    except (ET.ParseError, DefusedXmlException, ValueError):
        return None
    if root.tag != root_tag:
        return None
    return root


def _slice_document(output: str, root_tag: str) -> str | None:
    start = output.find("<?xml")
    if start == -1:
        start = _find_open_tag(output, root_tag)
    if start == -1:
        return None

    closing_tag = f"</{root_tag}>"
    end = output.rfind(closing_tag)
    if end == -1:
        return output[start:]
    return output[start : end + len(closing_tag)]


def _find_open_tag(output: str, root_tag: str) -> int:
    match = re.search(rf"<{re.escape(root_tag)}[\s/>]", output)
    return -1 if match is None else match.start()


def _fill_commit_fields(fields: dict[str, str | None], commit: Element | None) -> None:
    if commit is None:
        return
    revision = commit.get("revision")
    if fields["last_changed_revision"] is None and is_valid_revision(revision):
        fields["last_changed_revision"] = revision
    author = commit.find("author")
    if fields["last_changed_author"] is None and author is not None:
        fields["last_changed_author"] = decode_percent(_text(author))
    date = commit.find("date")
    if fields["last_changed_date"] is None and date is not None:
        fields["last_changed_date"] = _text(date)


def _child_text(element: Element, tag: str) -> str:
    child = element.find(tag)
    return "" if child is None else _text(child)


def _text(element: Element) -> str:
    return element.text or ""


__all__ = [
    "INVALID_REVISION",
    "STATUS_CODES",
    "UNKNOWN_STATUS_CODE",
    "is_valid_revision",
    "parse_info",
    "parse_list",
    "parse_log",
    "parse_status",
]

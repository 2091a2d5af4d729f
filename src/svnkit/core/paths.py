"""Resolution of user supplied paths into arguments for ``svn``."""

from __future__ import annotations

import posixpath
import re
from typing import TYPE_CHECKING
from urllib.parse import urlsplit, urlunsplit

from .platform import PlatformPolicy, detect_platform_policy
from .text import encode_path_segment

if TYPE_CHECKING:
    from .models import SvnOptions

_URL_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z\d+\-.]*:")
_DRIVE_PATTERN = re.compile(r"^[a-zA-Z]:(?:[\\/]|$)")
_AUTHORITY_PATTERN = re.compile(r"^([^/]+://[^/]+)(/.*)?$")
_MULTIPLE_SLASHES_PATTERN = re.compile(r"/{2,}")
_ROOT_PATHS = frozenset({"", ".", "./", "/"})


def is_url(path: str) -> bool:
    """Return ``True`` when *path* starts with a URL scheme.

    Single-letter schemes followed by a separator are Windows drive letters
    (``C:\\work``) and are treated as local paths.
    """
    return bool(_URL_PATTERN.match(path)) and not _DRIVE_PATTERN.match(path)


def encode_url_path(url: str) -> str:
    """Percent-encode each path segment of *url*, keeping scheme and host intact."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return _encode_unparsed_url(url)
    encoded_path = _encode_segments(parts.path)
    return urlunsplit(parts._replace(path=encoded_path))


def _encode_unparsed_url(url: str) -> str:
    match = _AUTHORITY_PATTERN.match(url)
    if match is None:
        return url
    authority, path = match.groups()
    if not path:
        return url
    return authority + _encode_segments(path)


def _encode_segments(path: str) -> str:
    return "/".join(encode_path_segment(segment) for segment in path.split("/"))


def _strip_trailing_slash(url: str) -> str:
    return url[:-1] if url.endswith("/") else url


class PathResolver:
    """Turn raw paths into URLs or normalized local paths for ``svn``."""

    def __init__(self, policy: PlatformPolicy | None = None) -> None:
        """Attach the platform policy used for local path normalization."""
        self._policy = policy or detect_platform_policy()

    @property
    def policy(self) -> PlatformPolicy:
        """Return the platform policy in use."""
        return self._policy

    def resolve(self, raw_path: str | None, options: SvnOptions) -> str | None:
        """Resolve *raw_path* against ``options.repository_url`` when configured.

        Without a base location, URLs only get their path segments encoded and
        local paths are normalized for the host platform but stay relative.
        """
        if raw_path is None:
            return None

        base_url = options.repository_url
        if base_url:
            return self._resolve_against_base(raw_path, _strip_trailing_slash(base_url))

        if is_url(raw_path):
            return encode_url_path(raw_path)
        return self._policy.normalize_local_path(raw_path)

    def _resolve_against_base(self, raw_path: str, base_url: str) -> str:
        if raw_path in _ROOT_PATHS:
            return base_url
        if is_url(raw_path):
            return encode_url_path(raw_path)

        relative = raw_path.removeprefix("./").removeprefix("/")
        normalized = posixpath.normpath(relative) if relative else relative
        normalized = _MULTIPLE_SLASHES_PATTERN.sub("/", normalized).strip("/")
        if normalized in {"", "."}:
            return base_url

        return f"{encode_url_path(base_url)}/{_encode_segments(normalized)}"


__all__ = ["PathResolver", "encode_url_path", "is_url"]

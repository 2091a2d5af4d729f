"""Exposure protocol shared by the ``svnkit`` argparse CLI and the FastMCP server."""

from __future__ import annotations

from typing import Any, Protocol

import typing


class Exposure(Protocol):
    """Entry point that publishes the svn facade through one transport."""

    def serve(self, *, config: typing.Mapping[str, Any] | None = None) -> None:
        """Run the CLI or MCP surface; *config* carries transport and svn settings."""
        raise NotImplementedError


__all__ = ["Exposure"]

"""Example that exercises the svnkit Python API against a working copy or URL."""

from __future__ import annotations

import json
import sys

from rich.console import Console
from rich.table import Table

from svnkit import LogOptions, SvnOptions, SvnService
from svnkit.core.config import load_settings


def main(target: str = ".") -> None:
    """Print info, status, and recent log entries for *target*."""
    console = Console()
    service = SvnService.from_settings(load_settings())

    info = service.info(target, SvnOptions())
    if info is None:
        console.print(f"[red]{target} is not a working copy or reachable URL[/red]")
        return
    console.print_json(info.model_dump_json(indent=2))

    status_table = Table(title="Status")
    status_table.add_column("Code")
    status_table.add_column("Path")
    status_table.add_column("Revision")
    for item in service.status(target):
        status_table.add_row(item.status, item.path, item.working_revision or "-")
    console.print(status_table)

    entries = service.log(target, LogOptions(limit=5))
    console.print_json(json.dumps([entry.model_dump(mode="json") for entry in entries]))


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else ".")

"""Command construction, execution, and output parsing for ``svn``."""

from .command import CommandBuilder, CommandInvocation
from .executor import ProcessExecutor
from .parsers import (
    STATUS_CODES,
    is_valid_revision,
    parse_info,
    parse_list,
    parse_log,
    parse_status,
)

__all__ = [
    "STATUS_CODES",
    "CommandBuilder",
    "CommandInvocation",
    "ProcessExecutor",
    "is_valid_revision",
    "parse_info",
    "parse_list",
    "parse_log",
    "parse_status",
]

"""Tests for svn command line composition."""

from __future__ import annotations

import pytest

from svnkit.core.models import SvnOptions
from svnkit.core.platform import PosixPolicy, WindowsPolicy
from svnkit.tools.command import CommandBuilder, common_flags, is_passthrough_argument

BASE = "svn://example.com/repo"


@pytest.fixture
def builder() -> CommandBuilder:
    """Return a builder that renders POSIX command lines."""
    return CommandBuilder(policy=PosixPolicy())


def test_common_flags_follow_options() -> None:
    """Interaction and trust switches mirror the option record."""
    assert common_flags(SvnOptions()) == ["--non-interactive"]
    assert common_flags(
        SvnOptions(non_interactive=False, trust_server_cert=True, no_auth_cache=True),
    ) == ["--trust-server-cert", "--no-auth-cache"]


@pytest.mark.parametrize(
    ("argument", "expected"), [("--force", True), ("42", True), ("-r", False), ("trunk", False)],
)
def test_is_passthrough_argument(argument: str, expected: bool) -> None:
    """Flag-like and numeric positionals are passed through untouched."""
    assert is_passthrough_argument(argument) is expected


def test_build_orders_tokens(builder: CommandBuilder) -> None:
    """Executable, subcommand, flags, and arguments appear in that order."""
    invocation = builder.build(
        "log",
        ["trunk"],
        SvnOptions(repository_url=BASE),
        flags=["--xml", "--limit", "5"],
    )

    assert invocation.command_line == (
        f"svn log --non-interactive --xml --limit 5 {BASE}/trunk"
    )
    assert invocation.flags == ("--non-interactive", "--xml", "--limit", "5")
    assert invocation.arguments == (f"{BASE}/trunk",)


def test_build_skips_empty_positionals(builder: CommandBuilder) -> None:
    """Absent and empty positional arguments are dropped."""
    invocation = builder.build("update", [None, ""], SvnOptions())

    assert invocation.command_line == "svn update --non-interactive"


def test_build_escapes_credentials_and_masks_them(builder: CommandBuilder) -> None:
    """Credentials are escaped on the command line and hidden when redacted."""
    invocation = builder.build(
        "info", ["."], SvnOptions(username="alice smith", password="p@ss word"),
    )

    assert "--username 'alice smith'" in invocation.command_line
    assert "--password 'p@ss word'" in invocation.command_line
    assert "p@ss word" not in invocation.redacted
    assert "--password [redacted]" in invocation.redacted


def test_build_escapes_flag_values_without_resolving(builder: CommandBuilder) -> None:
    """Flag values are quoted but never joined with the base location."""
    invocation = builder.build(
        "commit", [], SvnOptions(repository_url=BASE), flags=["--message", "fix it"],
    )

    assert invocation.command_line == "svn commit --non-interactive --message 'fix it'"


def test_build_renders_empty_flag_values(builder: CommandBuilder) -> None:
    """Empty flag values survive as an explicit empty argument."""
    invocation = builder.build("commit", [], SvnOptions(), flags=["--message", ""])

    assert PosixPolicy().to_argv(invocation.command_line)[-2:] == ["--message", ""]


def test_build_merges_defaults(builder: CommandBuilder) -> None:
    """Defaults fill fields the per-call options leave unset."""
    defaults = SvnOptions(repository_url=BASE, trust_server_cert=True)

    invocation = builder.build("list", ["branches"], SvnOptions(), defaults=defaults)

    assert invocation.options.repository_url == BASE
    assert invocation.command_line == (
        f"svn list --non-interactive --trust-server-cert {BASE}/branches"
    )


def test_build_passes_numeric_and_flag_arguments_through(builder: CommandBuilder) -> None:
    """Numeric and ``--`` positionals are not resolved as paths."""
    invocation = builder.build("cat", ["--force", "12"], SvnOptions(repository_url=BASE))

    assert invocation.arguments == ("--force", "12")


def test_build_uses_windows_quoting() -> None:
    """The Windows policy quotes with double quotes and keeps local paths native."""
    builder = CommandBuilder(policy=WindowsPolicy(), executable="C:\\Program Files\\svn.exe")

    invocation = builder.build("add", ["new dir/file.txt"], SvnOptions())

    assert invocation.command_line == (
        '"C:\\Program Files\\svn.exe" add --non-interactive "new dir\\file.txt"'
    )

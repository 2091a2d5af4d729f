"""Tests for the svnkit command-line interface."""

from __future__ import annotations

import json
from pathlib import Path
from typing import cast

import pytest

from svnkit.core.models import CommandResult, SvnOptions
from svnkit.core.platform import PosixPolicy
from svnkit.interfases.cli import app
from svnkit.services import SvnService
from svnkit.tools.command import CommandBuilder
from svnkit.tools.executor import ProcessExecutor

cli_main = app.main
CliError = app.CliError


class ScriptedExecutor:
    """Executor stub returning queued results and recording command lines."""

    def __init__(self, *results: CommandResult) -> None:
        self.results = list(results)
        self.command_lines: list[str] = []

    def execute(self, command_line: str, options: SvnOptions) -> CommandResult:
        del options
        self.command_lines.append(command_line)
        if self.results:
            return self.results.pop(0)
        return CommandResult(success=True, code=0)


def _service(executor: ScriptedExecutor) -> SvnService:
    return SvnService(
        builder=CommandBuilder(policy=PosixPolicy()),
        executor=cast("ProcessExecutor", executor),
    )


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point the settings loader at an empty temporary location."""
    config_path = tmp_path / "config.json"
    monkeypatch.setenv("SVNKIT_CONFIG", str(config_path))
    for variable in ("SVNKIT_USERNAME", "SVNKIT_PASSWORD", "SVNKIT_TIMEOUT", "SVNKIT_DEBUG"):
        monkeypatch.delenv(variable, raising=False)
    return config_path


def test_schema_export_writes_file(tmp_path: Path) -> None:
    """The schema export command should create a schema file."""
    output = tmp_path / "schema.json"
    exit_code = cli_main(["schema", "export", "--out", str(output)])
    assert exit_code == 0

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["$schema"].endswith("2020-12/schema")
    assert payload["title"] == "SvnCommandResult"
    assert payload["$id"].endswith("command.json")


def test_schema_export_settings_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    """Settings schemas can be printed to stdout."""
    exit_code = cli_main(["schema", "export", "--kind", "settings"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["title"] == "SvnKitSettings"


def test_info_outputs_json(capsys: pytest.CaptureFixture[str]) -> None:
    """Info results are printed as JSON objects."""
    executor = ScriptedExecutor(
        CommandResult(success=True, stdout="URL: svn://host/repo\nRevision: 9", code=0),
    )

    exit_code = cli_main(
        ["info", "trunk", "--repository-url", "svn://host/repo"], service=_service(executor),
    )

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["url"] == "svn://host/repo"
    assert payload["revision"] == "9"
    assert executor.command_lines == ["svn info --non-interactive svn://host/repo/trunk"]


def test_log_outputs_entries(capsys: pytest.CaptureFixture[str]) -> None:
    """Log entries are printed as a JSON array."""
    executor = ScriptedExecutor(
        CommandResult(
            success=True,
            stdout='<log><logentry revision="4"><author>a</author><msg>m</msg></logentry></log>',
            code=0,
        ),
    )

    exit_code = cli_main(["log", "--limit", "1", "--stop-on-copy"], service=_service(executor))

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == [
        {"author": "a", "date": "", "message": "m", "paths": None, "revision": "4"},
    ]
    assert executor.command_lines == [
        "svn log --non-interactive --xml --limit 1 --stop-on-copy",
    ]


def test_cat_prints_raw_content(capsys: pytest.CaptureFixture[str]) -> None:
    """Cat prints file contents rather than JSON."""
    executor = ScriptedExecutor(CommandResult(success=True, stdout="hello", code=0))

    exit_code = cli_main(["cat", "README", "-r", "3"], service=_service(executor))

    assert exit_code == 0
    assert capsys.readouterr().out == "hello\n"
    assert executor.command_lines == ["svn cat --non-interactive --revision 3 README"]


def test_failed_commit_exits_with_one(capsys: pytest.CaptureFixture[str]) -> None:
    """A failed mutating command prints its result and exits with status one."""
    executor = ScriptedExecutor(
        CommandResult(success=False, stderr="svn: E155011: out of date", code=1),
    )

    exit_code = cli_main(
        ["commit", "-m", "msg", "a.txt", "--username", "alice"], service=_service(executor),
    )

    assert exit_code == 1
    payload = json.loads(capsys.readouterr().out)
    assert payload == {
        "code": 1,
        "stderr": "svn: E155011: out of date",
        "stdout": "",
        "success": False,
    }
    assert executor.command_lines == [
        "svn commit --non-interactive --username alice --message msg a.txt",
    ]


def test_connection_switches_override_defaults() -> None:
    """Interactive and trust switches change the rendered command."""
    executor = ScriptedExecutor()

    exit_code = cli_main(
        ["mkdir", "docs", "--interactive", "--trust-server-cert", "--parents"],
        service=_service(executor),
    )

    assert exit_code == 0
    assert executor.command_lines == ["svn mkdir --trust-server-cert --parents docs"]


def test_invalid_option_values_exit_with_two(capsys: pytest.CaptureFixture[str]) -> None:
    """Option validation failures are reported as JSON errors."""
    exit_code = cli_main(["log", "--limit", "0"], service=_service(ScriptedExecutor()))

    assert exit_code == 2
    error_payload = json.loads(capsys.readouterr().err)
    assert error_payload["status"] == "error"
    assert error_payload["message"] == "Invalid options"


def test_invalid_configuration_exits_with_two(
    isolated_config: Path, capsys: pytest.CaptureFixture[str],
) -> None:
    """Unreadable settings stop the CLI before svn runs."""
    isolated_config.write_text("[]", encoding="utf-8")

    exit_code = cli_main(["status"])

    assert exit_code == 2
    error_payload = json.loads(capsys.readouterr().err)
    assert "must be a JSON object" in error_payload["message"]


def test_negative_timeout_is_rejected(capsys: pytest.CaptureFixture[str]) -> None:
    """The timeout override must not be negative."""
    exit_code = cli_main(["status", "--timeout", "-1"])

    assert exit_code == 2
    assert "--timeout" in json.loads(capsys.readouterr().err)["message"]


def test_missing_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    """Running without a command prints usage and fails."""
    exit_code = cli_main([])

    assert exit_code == 1
    assert "usage: svnkit" in capsys.readouterr().out


def test_emit_error_masks_secrets(capsys: pytest.CaptureFixture[str]) -> None:
    """Error output never contains passwords."""
    error = CliError(
        "svn info --password hunter2 failed", details={"password": "hunter2", "code": 1},
    )

    app._emit_error(error)  # noqa: SLF001

    payload = json.loads(capsys.readouterr().err)
    assert "hunter2" not in json.dumps(payload)
    assert payload["details"]["code"] == 1


def test_cli_exposure_validates_argv() -> None:
    """The CLI exposure only accepts sequences of strings."""
    exposure = app.CLIExposure()

    with pytest.raises(TypeError, match="sequence of strings"):
        exposure.serve(config={"argv": "schema export"})
    with pytest.raises(TypeError, match="only strings"):
        exposure.serve(config={"argv": ["schema", 1]})


def test_cli_exposure_exits_with_command_status(tmp_path: Path) -> None:
    """Serving the CLI raises SystemExit with the command exit code."""
    output = tmp_path / "schema.json"
    exposure = app.CLIExposure()

    with pytest.raises(SystemExit) as excinfo:
        exposure.serve(config={"argv": ["schema", "export", "--kind", "log", "--out", str(output)]})

    assert excinfo.value.code == 0
    assert json.loads(output.read_text(encoding="utf-8"))["title"] == "SvnLogResult"

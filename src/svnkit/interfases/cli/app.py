"""Command-line interface for svnkit."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any, cast
from collections.abc import Callable, Mapping, Sequence

from pydantic import BaseModel, ValidationError

from svnkit.core.config import load_settings
from svnkit.core.errors import ConfigurationError, ExposureError, SvnKitValidationError
from svnkit.core.models import (
    AcceptMode,
    AddOptions,
    CatOptions,
    CheckoutOptions,
    CommandResult,
    CommitOptions,
    CopyOptions,
    Depth,
    DiffOptions,
    ExportOptions,
    ListOptions,
    LogOptions,
    MkdirOptions,
    MoveOptions,
    RemoveOptions,
    SvnOptions,
    UpdateOptions,
)
from svnkit.core.safety import mask_secrets, scrub_for_logging
from svnkit.core.schema import RESULT_KINDS, build_result_json_schema, build_settings_json_schema
from svnkit.services import SvnService

EXIT_OK = 0
EXIT_COMMAND_FAILED = 1
EXIT_USAGE = 2

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

type CommandHandler = Callable[[argparse.Namespace, SvnService], int]


class CliError(ExposureError):
    """Exception raised for anticipated CLI failures."""

    def __init__(
        self, message: str, *, exit_code: int = EXIT_USAGE, details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.details = details


def main(argv: Sequence[str] | None = None, *, service: SvnService | None = None) -> int:
    """Parse *argv*, execute the requested command and return the exit code.

    *service* replaces the service built from the loaded settings, which
    lets callers supply pre-configured executors.
    """
    parser = _build_parser()
    args_namespace = parser.parse_args(argv)
    _configure_logging(verbose=args_namespace.verbose)

    command = getattr(args_namespace, "command", None)
    if command is None:
        parser.print_help()
        return EXIT_COMMAND_FAILED
    try:
        if getattr(args_namespace, "needs_service", True):
            active_service = service or _build_service(args_namespace)
        else:
            active_service = cast("SvnService", service)
        exit_code = command(args_namespace, active_service)
    except CliError as error:
        _emit_error(error)
        exit_code = error.exit_code
    except KeyboardInterrupt as error:  # pragma: no cover - manual interruption
        cli_error = CliError("Aborted by user", exit_code=130, details=str(error))
        _emit_error(cli_error)
        exit_code = cli_error.exit_code
    except ValidationError as error:
        cli_error = CliError("Invalid options", details=error.errors(include_url=False))
        _emit_error(cli_error)
        exit_code = cli_error.exit_code
    except SvnKitValidationError as error:
        cli_error = CliError(str(error))
        _emit_error(cli_error)
        exit_code = cli_error.exit_code
    return exit_code


def _configure_logging(*, verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=_LOG_FORMAT, stream=sys.stderr)


def _build_service(args: argparse.Namespace) -> SvnService:
    try:
        settings = load_settings()
    except ConfigurationError as error:
        raise CliError(str(error)) from error

    updates: dict[str, Any] = {}
    if args.timeout is not None:
        if args.timeout < 0:
            message = "--timeout must not be negative"
            raise CliError(message)
        updates["timeout"] = args.timeout or None
    if args.verbose:
        updates["debug"] = True
    if updates:
        settings = settings.model_copy(update=updates)
    return SvnService.from_settings(settings)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svnkit",
        description="Run Subversion commands and print their results as JSON.",
    )
    parser.add_argument("--version", action="version", version="svnkit 0.1.0")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log executed commands and diagnostics to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command_name")
    connection = _connection_parser()

    _configure_read_commands(subparsers, connection)
    _configure_write_commands(subparsers, connection)
    _configure_schema(subparsers)

    return parser


def _connection_parser() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    group = parent.add_argument_group("connection options")
    group.add_argument("--username", help="Username passed to svn.")
    group.add_argument("--password", help="Password passed to svn.")
    group.add_argument(
        "--repository-url",
        dest="repository_url",
        help="Base repository URL that relative paths are resolved against.",
    )
    group.add_argument(
        "--trust-server-cert",
        dest="trust_server_cert",
        action="store_true",
        default=None,
        help="Accept unknown server certificates.",
    )
    group.add_argument(
        "--no-auth-cache",
        dest="no_auth_cache",
        action="store_true",
        default=None,
        help="Do not cache authentication tokens.",
    )
    group.add_argument(
        "--interactive",
        dest="interactive",
        action="store_true",
        default=None,
        help="Allow svn to prompt (omits --non-interactive).",
    )
    group.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds before svn is killed (0 disables the limit).",
    )
    return parent


def _add_command(
    subparsers: Any,
    name: str,
    handler: CommandHandler,
    help_text: str,
    connection: argparse.ArgumentParser,
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(name, help=help_text, parents=[connection])
    parser.set_defaults(command=handler)
    return parser


def _add_revision(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--revision", "-r", help="Revision number, keyword, or range.")


def _add_depth(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--depth", choices=[depth.value for depth in Depth], help="Limit operation depth.",
    )


def _add_message(parser: argparse.ArgumentParser, *, required: bool = False) -> None:
    parser.add_argument("--message", "-m", required=required, help="Log message.")


def _configure_read_commands(subparsers: Any, connection: argparse.ArgumentParser) -> None:
    info = _add_command(subparsers, "info", _command_info, "Show path information.", connection)
    info.add_argument("path", nargs="?")

    status = _add_command(
        subparsers, "status", _command_status, "Show working copy status.", connection,
    )
    status.add_argument("path", nargs="?")

    log = _add_command(subparsers, "log", _command_log, "Show log messages.", connection)
    log.add_argument("path", nargs="?")
    log.add_argument("--limit", "-l", type=int, help="Maximum number of entries.")
    _add_revision(log)
    log.add_argument("--stop-on-copy", action="store_true", help="Stop at copy history.")

    list_parser = _add_command(
        subparsers, "list", _command_list, "List repository entries.", connection,
    )
    list_parser.add_argument("path", nargs="?")
    _add_revision(list_parser)
    list_parser.add_argument("--recursive", "-R", action="store_true", help="Recurse.")
    _add_depth(list_parser)

    cat = _add_command(subparsers, "cat", _command_cat, "Print file contents.", connection)
    cat.add_argument("path")
    _add_revision(cat)

    diff = _add_command(subparsers, "diff", _command_diff, "Show differences.", connection)
    diff.add_argument("path1", nargs="?")
    diff.add_argument("path2", nargs="?")
    _add_revision(diff)
    diff.add_argument("--old-revision", help="Older side of a revision range.")
    diff.add_argument("--new-revision", help="Newer side of a revision range.")
    diff.add_argument("--diff-cmd", help="External diff program.")

    export = _add_command(
        subparsers, "export", _command_export, "Export a clean tree.", connection,
    )
    export.add_argument("source")
    export.add_argument("destination")
    _add_revision(export)
    _add_depth(export)
    export.add_argument("--force", action="store_true", help="Overwrite existing files.")
    export.add_argument("--native-eol", help="Line ending style (LF, CR, CRLF).")
    export.add_argument(
        "--ignore-externals", action="store_true", help="Skip externals definitions.",
    )


def _configure_write_commands(subparsers: Any, connection: argparse.ArgumentParser) -> None:
    checkout = _add_command(
        subparsers, "checkout", _command_checkout, "Check out a working copy.", connection,
    )
    checkout.add_argument("url")
    checkout.add_argument("local_path")
    _add_revision(checkout)
    _add_depth(checkout)

    update = _add_command(
        subparsers, "update", _command_update, "Update a working copy.", connection,
    )
    update.add_argument("path", nargs="?")
    _add_revision(update)
    update.add_argument(
        "--accept", choices=[mode.value for mode in AcceptMode], help="Conflict resolution.",
    )

    commit = _add_command(
        subparsers, "commit", _command_commit, "Commit local changes.", connection,
    )
    commit.add_argument("files", nargs="*")
    _add_message(commit, required=True)
    _add_depth(commit)

    add = _add_command(subparsers, "add", _command_add, "Schedule additions.", connection)
    add.add_argument("paths", nargs="+")
    add.add_argument("--force", action="store_true", help="Add already versioned paths.")
    add.add_argument("--no-ignore", action="store_true", help="Disregard ignore rules.")

    remove = _add_command(
        subparsers, "remove", _command_remove, "Schedule removals.", connection,
    )
    remove.add_argument("paths", nargs="+")
    remove.add_argument("--force", action="store_true", help="Remove modified paths.")
    remove.add_argument("--keep-local", action="store_true", help="Keep local copies.")

    copy = _add_command(subparsers, "copy", _command_copy, "Copy with history.", connection)
    copy.add_argument("source")
    copy.add_argument("destination")
    _add_revision(copy)
    _add_message(copy)
    copy.add_argument("--parents", action="store_true", help="Create parent directories.")

    move = _add_command(subparsers, "move", _command_move, "Move or rename.", connection)
    move.add_argument("source")
    move.add_argument("destination")
    _add_message(move)
    move.add_argument("--force", action="store_true", help="Force the move.")
    move.add_argument("--parents", action="store_true", help="Create parent directories.")

    mkdir = _add_command(subparsers, "mkdir", _command_mkdir, "Create directories.", connection)
    mkdir.add_argument("paths", nargs="+")
    _add_message(mkdir)
    mkdir.add_argument("--parents", action="store_true", help="Create parent directories.")


def _configure_schema(subparsers: Any) -> None:
    schema_parser = subparsers.add_parser(
        "schema",
        help="Interact with the result JSON Schema utilities.",
    )
    schema_subparsers = schema_parser.add_subparsers(dest="schema_command")

    export_parser = schema_subparsers.add_parser(
        "export",
        help="Export a result or settings JSON Schema (default: stdout).",
    )
    export_parser.set_defaults(command=_command_schema_export, needs_service=False)
    export_parser.add_argument(
        "--kind",
        choices=[*RESULT_KINDS, "settings"],
        default="command",
        help="Which schema to export.",
    )
    export_parser.add_argument(
        "--output",
        "--out",
        dest="output_path",
        default="-",
        help="Destination file for the JSON Schema or '-' for stdout.",
    )


def _connection_fields(args: argparse.Namespace) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for name in ("username", "password", "repository_url", "trust_server_cert", "no_auth_cache"):
        value = getattr(args, name, None)
        if value is not None:
            fields[name] = value
    if getattr(args, "interactive", None):
        fields["non_interactive"] = False
    return fields


def _options[T: SvnOptions](
    args: argparse.Namespace, model: type[T], **fields: Any,
) -> T:
    present = {name: value for name, value in fields.items() if value is not None}
    return model(**_connection_fields(args), **present)


def _command_info(args: argparse.Namespace, service: SvnService) -> int:
    result = service.info(args.path, _options(args, SvnOptions))
    _write_json_output(None if result is None else result.model_dump(mode="json"), None)
    return EXIT_OK


def _command_status(args: argparse.Namespace, service: SvnService) -> int:
    items = service.status(args.path, _options(args, SvnOptions))
    _write_json_output([item.model_dump(mode="json") for item in items], None)
    return EXIT_OK


def _command_log(args: argparse.Namespace, service: SvnService) -> int:
    options = _options(
        args, LogOptions, limit=args.limit, revision=args.revision, stop_on_copy=args.stop_on_copy,
    )
    entries = service.log(args.path, options)
    _write_json_output([entry.model_dump(mode="json") for entry in entries], None)
    return EXIT_OK


def _command_list(args: argparse.Namespace, service: SvnService) -> int:
    options = _options(
        args, ListOptions, revision=args.revision, recursive=args.recursive, depth=args.depth,
    )
    _write_json_output(service.list(args.path, options), None)
    return EXIT_OK


def _command_cat(args: argparse.Namespace, service: SvnService) -> int:
    content = service.cat(args.path, _options(args, CatOptions, revision=args.revision))
    _write_text_output(content)
    return EXIT_OK


def _command_diff(args: argparse.Namespace, service: SvnService) -> int:
    options = _options(
        args,
        DiffOptions,
        revision=args.revision,
        old_revision=args.old_revision,
        new_revision=args.new_revision,
        diff_cmd=args.diff_cmd,
    )
    _write_text_output(service.diff(args.path1, args.path2, options))
    return EXIT_OK


def _command_export(args: argparse.Namespace, service: SvnService) -> int:
    options = _options(
        args,
        ExportOptions,
        revision=args.revision,
        depth=args.depth,
        force=args.force,
        native_eol=args.native_eol,
        ignore_externals=args.ignore_externals,
    )
    return _emit_command_result(service.export(args.source, args.destination, options))


def _command_checkout(args: argparse.Namespace, service: SvnService) -> int:
    options = _options(args, CheckoutOptions, revision=args.revision, depth=args.depth)
    return _emit_command_result(service.checkout(args.url, args.local_path, options))


def _command_update(args: argparse.Namespace, service: SvnService) -> int:
    options = _options(args, UpdateOptions, revision=args.revision, accept=args.accept)
    return _emit_command_result(service.update(args.path, options))


def _command_commit(args: argparse.Namespace, service: SvnService) -> int:
    options = _options(args, CommitOptions, files=list(args.files), depth=args.depth)
    return _emit_command_result(service.commit(args.message, options))


def _command_add(args: argparse.Namespace, service: SvnService) -> int:
    options = _options(args, AddOptions, force=args.force, no_ignore=args.no_ignore)
    return _emit_command_result(service.add(args.paths, options))


def _command_remove(args: argparse.Namespace, service: SvnService) -> int:
    options = _options(args, RemoveOptions, force=args.force, keep_local=args.keep_local)
    return _emit_command_result(service.remove(args.paths, options))


def _command_copy(args: argparse.Namespace, service: SvnService) -> int:
    options = _options(
        args, CopyOptions, revision=args.revision, message=args.message, parents=args.parents,
    )
    return _emit_command_result(service.copy(args.source, args.destination, options))


def _command_move(args: argparse.Namespace, service: SvnService) -> int:
    options = _options(
        args, MoveOptions, message=args.message, force=args.force, parents=args.parents,
    )
    return _emit_command_result(service.move(args.source, args.destination, options))


def _command_mkdir(args: argparse.Namespace, service: SvnService) -> int:
    options = _options(args, MkdirOptions, message=args.message, parents=args.parents)
    return _emit_command_result(service.mkdir(args.paths, options))


def _command_schema_export(args: argparse.Namespace, service: SvnService | None) -> int:
    del service
    if args.kind == "settings":
        schema = build_settings_json_schema()
    else:
        schema = build_result_json_schema(args.kind)
    _write_json_output(schema, args.output_path)
    return EXIT_OK


def _emit_command_result(result: CommandResult) -> int:
    _write_json_output(dataclasses.asdict(result), None)
    return EXIT_OK if result.success else EXIT_COMMAND_FAILED


def _write_text_output(content: str) -> None:
    sys.stdout.write(content)
    if content and not content.endswith("\n"):
        sys.stdout.write("\n")
    sys.stdout.flush()


def _write_json_output(payload: Any, output_path: str | None) -> None:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json")
    serialized = json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)
    if output_path in {None, "", "-"}:
        sys.stdout.write(serialized + "\n")
        sys.stdout.flush()
        return
    path = Path(cast("str", output_path))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialized + "\n", encoding="utf-8")


def _emit_error(error: CliError) -> None:
    payload = {
        "status": "error",
        "message": mask_secrets(str(error)),
        "type": type(error).__name__,
    }
    if error.details is not None:
        payload["details"] = scrub_for_logging(error.details)
    safe_payload = scrub_for_logging(payload)
    serialized = json.dumps(safe_payload, ensure_ascii=False, sort_keys=True, default=str)
    sys.stderr.write(serialized + "\n")
    sys.stderr.flush()


class CLIExposure:
    """Exposure adapter that delegates to the CLI entry point."""

    def serve(self, *, config: Mapping[str, Any] | None = None) -> None:
        """Execute the CLI using the provided configuration."""
        argv: Sequence[str] | None = None
        if config is not None and "argv" in config:
            raw_argv = config["argv"]
            if raw_argv is not None:
                if not isinstance(raw_argv, Sequence) or isinstance(raw_argv, (str, bytes)):
                    message = "config['argv'] must be a sequence of strings"
                    raise TypeError(message)
                sequence_candidate = cast("Sequence[Any]", raw_argv)
                validated_arguments: list[str] = []
                for argument in sequence_candidate:
                    if not isinstance(argument, str):
                        message = "config['argv'] must contain only strings"
                        raise TypeError(message)
                    validated_arguments.append(argument)
                argv = list(validated_arguments)
        exit_code = main(argv)
        raise SystemExit(exit_code)


def run() -> None:
    """Console script entry point."""
    raise SystemExit(main())


__all__ = ["CLIExposure", "CliError", "main", "run"]

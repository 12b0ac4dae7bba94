"""Cyclopts CLI entry point for mixfmt."""

from __future__ import annotations

import sys
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated

from cyclopts import App, Parameter

from mixfmt import __version__
from mixfmt.cli.config_cmd import register_config_commands
from mixfmt.cli.doctor_cmd import register_doctor_command
from mixfmt.cli.format_cmd import register_format_command
from mixfmt.cli.output import OutputConfig, normalize_output_format
from mixfmt.cli.output import emit as emit_output
from mixfmt.cli.save_cmd import register_save_command

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Top-level options that apply to all commands."""

    output: OutputConfig
    verbosity: int = 0


_GLOBAL_OPTIONS: ContextVar[GlobalOptions | None] = ContextVar("_GLOBAL_OPTIONS", default=None)


def get_global_options() -> GlobalOptions:
    """Return parsed global options for current command."""

    default = GlobalOptions(output=OutputConfig(format="text"))
    return _GLOBAL_OPTIONS.get() or default


def emit(payload: object) -> None:
    """Write command output using current output format settings."""

    emit_output(payload, get_global_options().output)


def _extract_global_options(argv: Sequence[str]) -> tuple[list[str], GlobalOptions]:
    json_mode = False
    output_format: str | None = None
    verbosity = 0
    cleaned: list[str] = []

    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--":
            cleaned.extend(argv[i:])
            break
        if arg == "--json":
            json_mode = True
            i += 1
            continue
        if arg == "--no-json":
            i += 1
            continue
        if arg == "--format":
            if i + 1 >= len(argv):
                raise SystemExit("--format requires a value")
            output_format = argv[i + 1]
            i += 2
            continue
        if arg.startswith("--format="):
            output_format = arg.partition("=")[2]
            i += 1
            continue
        if arg in {"--verbose", "-v"}:
            verbosity += 1
            i += 1
            continue

        cleaned.append(arg)
        i += 1

    resolved = normalize_output_format(requested=output_format, json_mode=json_mode)
    return cleaned, GlobalOptions(output=OutputConfig(format=resolved), verbosity=verbosity)


app = App(
    name="mixfmt",
    help="Format Elixir source through `mix format`",
    version=__version__,
    help_formatter="plain",
)
config_app = App(name="config", help="Formatter config commands", help_formatter="plain")
app.command(config_app, name="config")


@app.default
def root(
    json_mode: Annotated[
        bool,
        Parameter(name="--json", help="Emit command output as JSON."),
    ] = False,
    output_format: Annotated[
        str | None,
        Parameter(name="--format", help="Set output format: text or json."),
    ] = None,
    verbose: Annotated[
        bool,
        Parameter(name=["--verbose", "-v"], help="Log more detail to stderr (repeatable)."),
    ] = False,
) -> None:
    """mixfmt root command with global options."""

    _ = (json_mode, output_format, verbose)
    app.help_print()


_REGISTERED_CLI_COMMANDS: set[str] = set()


def _register_group_commands() -> None:
    modules = (
        register_format_command(app, emit),
        register_save_command(app, emit),
        register_doctor_command(app, emit),
        register_config_commands(config_app, emit),
    )
    for commands in modules:
        _REGISTERED_CLI_COMMANDS.update(commands)


def get_registered_cli_commands() -> set[str]:
    """Expose CLI command names for tests."""

    return set(_REGISTERED_CLI_COMMANDS)


def _operation_error_message(exc: Exception) -> str:
    if isinstance(exc, KeyError) and exc.args:
        return str(exc.args[0])
    message = str(exc).strip()
    if message:
        return message
    return exc.__class__.__name__


def _first_positional_token(argv: Sequence[str]) -> str | None:
    for token in argv:
        if token == "--":
            return None
        if token.startswith("-"):
            continue
        return token
    return None


def _validate_top_level_command(argv: Sequence[str]) -> None:
    candidate = _first_positional_token(argv)
    if candidate is None:
        return
    names = {name for name in app.resolved_commands() if not name.startswith("-")}
    if candidate in names:
        return
    print(f"error: Unknown command: {candidate}", file=sys.stderr)
    raise SystemExit(1)


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point used by `mixfmt` and `python -m mixfmt`."""

    from mixfmt.lib.logging import configure_logging

    args = list(sys.argv[1:] if argv is None else argv)
    cleaned_args, options = _extract_global_options(args)

    # Configure logging early so structlog output goes to stderr, not stdout.
    configure_logging(json_mode=options.output.format == "json", verbosity=options.verbosity)

    _validate_top_level_command(cleaned_args)

    token = _GLOBAL_OPTIONS.set(options)
    try:
        try:
            app(cleaned_args)
        except (KeyError, ValueError, FileNotFoundError, OSError) as exc:
            print(f"error: {_operation_error_message(exc)}", file=sys.stderr)
            raise SystemExit(1) from None
    finally:
        _GLOBAL_OPTIONS.reset(token)


_register_group_commands()

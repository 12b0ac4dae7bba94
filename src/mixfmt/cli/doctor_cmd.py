"""CLI command handler for the doctor check."""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Annotated, Any

from cyclopts import Parameter

from mixfmt.cli._runtime import build_runtime
from mixfmt.cli.output import kv_block
from mixfmt.lib.config import load_config
from mixfmt.lib.config.settings import config_path
from mixfmt.lib.formatter import build_command

if TYPE_CHECKING:
    from cyclopts import App

Emitter = Callable[[Any], None]


@dataclass(frozen=True, slots=True)
class DoctorOutput:
    ok: bool
    command: str
    args: tuple[str, ...]
    resolved_executable: str | None
    project_path: str | None
    config_file: str | None
    shell: bool
    warnings: tuple[str, ...] = ()

    def format_text(self) -> str:
        pairs: list[tuple[str, str | None]] = [
            ("ok", "ok" if self.ok else "WARNINGS"),
            ("command", " ".join((self.command, *self.args))),
            ("resolved_executable", self.resolved_executable),
            ("project_path", self.project_path),
            ("config_file", self.config_file),
            ("shell", str(self.shell).lower()),
        ]
        result = kv_block(pairs)
        for warning in self.warnings:
            result += f"\nwarning: {warning}"
        return result


def _doctor(
    emit: Any,
    project: Annotated[
        str | None,
        Parameter(name="--project", help="Mix project root to inspect."),
    ] = None,
) -> None:
    runtime = build_runtime(project=project)
    config = load_config(runtime.project_root)
    command, args = build_command(config)
    resolved = shutil.which(command)

    warnings: list[str] = []
    if resolved is None:
        warnings.append(f"'{command}' was not found on PATH.")
    project_path = runtime.project.project_path()
    if project_path is None:
        warnings.append("No Mix project found; the formatter runs in the current directory.")

    config_file = None
    if runtime.project_root is not None and config_path(runtime.project_root).is_file():
        config_file = config_path(runtime.project_root).as_posix()

    emit(
        DoctorOutput(
            ok=not warnings,
            command=command,
            args=tuple(args),
            resolved_executable=resolved,
            project_path=project_path,
            config_file=config_file,
            shell=runtime.project.is_platform_requiring_shell(),
            warnings=tuple(warnings),
        )
    )


def register_doctor_command(app: App, emit: Emitter) -> set[str]:
    description = "Check how the formatter would be launched."
    handler = partial(_doctor, emit)
    handler.__name__ = "cmd_doctor"
    app.command(handler, name="doctor", help=description)
    return {"doctor"}

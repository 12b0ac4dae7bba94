"""CLI command handler for formatting files."""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

from cyclopts import Parameter

from mixfmt.cli._runtime import build_runtime
from mixfmt.cli.output import kv_block
from mixfmt.lib.domain import Range

if TYPE_CHECKING:
    from cyclopts import App

Emitter = Callable[[Any], None]


@dataclass(frozen=True, slots=True)
class FormatOutput:
    path: str
    changed: bool
    errors: int
    project_root: str | None = None

    def format_text(self) -> str:
        status = "formatted" if self.changed else "unchanged"
        if self.errors:
            status = "failed"
        return kv_block(
            [
                ("path", self.path),
                ("status", status),
                ("project_root", self.project_root),
            ]
        )


def _format(
    emit: Any,
    path: str,
    *,
    text_range: Annotated[
        str | None,
        Parameter(name="--range", help="Only format ROW:COL-ROW:COL (zero-based, end exclusive)."),
    ] = None,
    to_stdout: Annotated[
        bool,
        Parameter(name="--stdout", help="Print the formatted buffer instead of writing the file."),
    ] = False,
    project: Annotated[
        str | None,
        Parameter(name="--project", help="Mix project root used as the formatter cwd."),
    ] = None,
) -> None:
    file_path = Path(path).expanduser().resolve()
    if not file_path.is_file():
        raise FileNotFoundError(f"No such file: {file_path}")

    runtime = build_runtime(start=file_path, project=project)
    document = runtime.workspace.open(file_path)
    original = document.get_text()

    if text_range is not None:
        document.set_selected_range(Range.parse(text_range))
        runtime.formatter.format_active_selection()
    else:
        runtime.formatter.format_active_document()

    if to_stdout:
        sys.stdout.write(document.get_text())
        sys.stdout.flush()
    else:
        if document.modified:
            runtime.workspace.write(document)
        emit(
            FormatOutput(
                path=file_path.as_posix(),
                changed=document.get_text() != original,
                errors=runtime.notifier.error_count,
                project_root=(
                    runtime.project_root.as_posix() if runtime.project_root is not None else None
                ),
            )
        )

    if runtime.notifier.error_count:
        raise SystemExit(1)


def register_format_command(app: App, emit: Emitter) -> set[str]:
    description = "Format an Elixir file in place through `mix format`."
    handler = partial(_format, emit)
    handler.__name__ = "cmd_format"
    app.command(handler, name="format", help=description)
    return {"format"}

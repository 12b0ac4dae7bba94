"""CLI command handler for saving a buffer through the will-save hooks."""

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

if TYPE_CHECKING:
    from cyclopts import App

Emitter = Callable[[Any], None]


@dataclass(frozen=True, slots=True)
class SaveOutput:
    path: str
    formatted: bool
    errors: int

    def format_text(self) -> str:
        return kv_block(
            [
                ("path", self.path),
                ("formatted", str(self.formatted).lower()),
                ("errors", str(self.errors) if self.errors else None),
            ]
        )


def _save(
    emit: Any,
    path: str,
    *,
    from_stdin: Annotated[
        bool,
        Parameter(name="--stdin", help="Take the unsaved buffer text from stdin."),
    ] = False,
    project: Annotated[
        str | None,
        Parameter(name="--project", help="Mix project root used as the formatter cwd."),
    ] = None,
) -> None:
    file_path = Path(path).expanduser().resolve()
    if not from_stdin and not file_path.is_file():
        raise FileNotFoundError(f"No such file: {file_path}")

    runtime = build_runtime(start=file_path, project=project)
    if from_stdin:
        # Raw bytes so CRLF from the editor buffer is kept.
        text = sys.stdin.buffer.read().decode("utf-8")
        document = runtime.workspace.open_text(file_path, text)
    else:
        document = runtime.workspace.open(file_path)
    before = document.get_text()

    runtime.workspace.save(document)

    emit(
        SaveOutput(
            path=file_path.as_posix(),
            formatted=document.get_text() != before,
            errors=runtime.notifier.error_count,
        )
    )
    if runtime.notifier.error_count:
        raise SystemExit(1)


def register_save_command(app: App, emit: Emitter) -> set[str]:
    description = "Write a file, formatting it first when format_on_save is set."
    handler = partial(_save, emit)
    handler.__name__ = "cmd_save"
    app.command(handler, name="save", help=description)
    return {"save"}

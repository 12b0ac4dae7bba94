"""CLI command handlers for config.* operations."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

from cyclopts import Parameter

from mixfmt.cli.output import kv_block
from mixfmt.lib.config import FormatterConfig, load_config, resolve_project_root

if TYPE_CHECKING:
    from cyclopts import App

Emitter = Callable[[Any], None]


@dataclass(frozen=True, slots=True)
class ConfigShowOutput:
    project_root: str | None
    config: FormatterConfig

    def format_text(self) -> str:
        return kv_block(
            [
                ("project_root", self.project_root),
                ("elixir_executable", self.config.elixir_executable or "(none)"),
                ("mix_executable", self.config.mix_executable),
                ("format_on_save", str(self.config.format_on_save).lower()),
                ("elixir_scopes", ", ".join(self.config.elixir_scopes)),
            ]
        )


def _config_show(
    emit: Any,
    project: Annotated[
        str | None,
        Parameter(name="--project", help="Mix project root whose config is shown."),
    ] = None,
) -> None:
    project_root = resolve_project_root(explicit=Path(project) if project else None)
    emit(
        ConfigShowOutput(
            project_root=project_root.as_posix() if project_root is not None else None,
            config=load_config(project_root),
        )
    )


def register_config_commands(app: App, emit: Emitter) -> set[str]:
    description = "Show the resolved formatter configuration."
    handler = partial(_config_show, emit)
    handler.__name__ = "cmd_config_show"
    app.command(handler, name="show", help=description)
    return {"config.show"}

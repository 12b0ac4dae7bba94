"""Run `mix format` over document text and splice the result back."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import structlog

from mixfmt.lib.config.settings import DEFAULT_MIX_EXECUTABLE
from mixfmt.lib.domain import FormatRequest, Notification, NotificationType

if TYPE_CHECKING:
    from collections.abc import Callable

    from mixfmt.lib.config.settings import FormatterConfig
    from mixfmt.lib.domain import FormatResult, Range
    from mixfmt.lib.ports import (
        NotificationSink,
        ProcessRunner,
        SpawnOptions,
        TextDocument,
        Workspace,
    )
    from mixfmt.lib.project import ProjectContext

logger = structlog.get_logger(__name__)

FORMAT_ARGS: tuple[str, ...] = ("format", "-")
EXCEPTION_TITLE = "Elixir Formatter Exception"
ERROR_TITLE = "Elixir Formatter Error"
WRONG_LANGUAGE_TITLE = "Elixir Formatter only formats Elixir source code"


def resolve_mix_path(config: FormatterConfig) -> str:
    """Return the mix script to hand to an explicit Elixir binary."""

    if config.mix_executable != DEFAULT_MIX_EXECUTABLE or config.elixir_executable is None:
        return config.mix_executable
    # mix ships next to elixir in the same bin directory.
    return os.path.join(os.path.dirname(config.elixir_executable), DEFAULT_MIX_EXECUTABLE)


def build_command(config: FormatterConfig) -> tuple[str, list[str]]:
    """Return the command and argument list for one `mix format -` call."""

    if config.elixir_executable:
        return config.elixir_executable, [resolve_mix_path(config), *FORMAT_ARGS]
    return config.mix_executable, list(FORMAT_ARGS)


class ElixirFormatter:
    """Format Elixir documents through an external `mix format` process."""

    def __init__(
        self,
        *,
        runner: ProcessRunner,
        notifier: NotificationSink,
        workspace: Workspace,
        project: ProjectContext,
        load_config: Callable[[], FormatterConfig],
    ) -> None:
        self._runner = runner
        self._notifier = notifier
        self._workspace = workspace
        self._project = project
        self._load_config = load_config

    def run_format(self, input_text: str) -> FormatResult:
        """Pipe `input_text` through the formatter; launch errors propagate."""

        config = self._load_config()
        command, args = build_command(config)
        options: SpawnOptions = {"input": input_text}
        if self._project.is_platform_requiring_shell():
            options["shell"] = True
        cwd = self._project.project_path()
        if cwd is not None:
            options["cwd"] = cwd
        return self._runner.run(command, args, options)

    def format_document(self, document: TextDocument, text_range: Range | None = None) -> None:
        """Format the range (or the whole document) in place, or notify on failure."""

        if text_range is None:
            request = FormatRequest(input_text=document.get_text())
        else:
            request = FormatRequest(
                input_text=document.get_text_in_range(text_range),
                selected_range=text_range,
            )

        try:
            result = self.run_format(request.input_text)
        except Exception as exc:
            logger.warning("formatter raised", error=str(exc))
            self._notify(NotificationType.ERROR, EXCEPTION_TITLE, _exception_detail(exc))
            return

        if not result.ok:
            logger.info("formatter failed", exit_status=result.exit_status)
            self._notify(NotificationType.ERROR, ERROR_TITLE, result.stderr)
            return

        target = request.selected_range or document.buffer_range()
        document.set_text_in_range(target, result.stdout or "")
        logger.debug(
            "applied formatted text",
            scoped=request.selected_range is not None,
            chars=len(result.stdout or ""),
        )

    def format_active_document(self) -> None:
        """Format the whole active document when it is Elixir source."""

        document = self._active_elixir_document()
        if document is None:
            return
        self.format_document(document)

    def format_active_selection(self) -> None:
        """Format the active selection, or the whole document when nothing is selected."""

        document = self._active_elixir_document()
        if document is None:
            return
        self.format_document(document, self.get_selected_range(document))

    def handle_will_save(self, document: TextDocument) -> None:
        """Format an Elixir document before it is written, when enabled."""

        config = self._load_config()
        if not config.format_on_save:
            return
        if document.scope_name not in config.elixir_scopes:
            return
        self.format_document(document)

    @staticmethod
    def get_selected_range(document: TextDocument) -> Range | None:
        selected = document.get_selected_range()
        if selected.is_empty:
            return None
        return selected

    def _active_elixir_document(self) -> TextDocument | None:
        document = self._workspace.active_document()
        if document is None:
            logger.debug("no active document")
            return None
        if document.scope_name not in self._load_config().elixir_scopes:
            self._notify(NotificationType.INFO, WRONG_LANGUAGE_TITLE)
            return None
        return document

    def _notify(self, kind: NotificationType, title: str, detail: str | None = None) -> None:
        self._notifier.notify(Notification(title=title, type=kind, detail=detail))


def _exception_detail(exc: Exception) -> str:
    message = str(exc).strip()
    if message:
        return message
    return exc.__class__.__name__

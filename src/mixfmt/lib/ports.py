"""Host protocol interfaces for dependency inversion."""

from __future__ import annotations

from typing import TYPE_CHECKING, NotRequired, Protocol, TypedDict

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mixfmt.lib.domain import FormatResult, Notification, Range


class SpawnOptions(TypedDict):
    """Options for one formatter process; optional keys are omitted, never None."""

    input: str
    cwd: NotRequired[str]
    shell: NotRequired[bool]


class ProcessRunner(Protocol):
    """Synchronous process execution capability."""

    def run(self, command: str, args: Sequence[str], options: SpawnOptions) -> FormatResult: ...


class NotificationSink(Protocol):
    """Receiver for user-facing notifications."""

    def notify(self, notification: Notification) -> None: ...


class TextDocument(Protocol):
    """Editable text buffer addressed by (row, column) points."""

    @property
    def scope_name(self) -> str: ...

    def get_text(self) -> str: ...

    def set_text(self, text: str) -> None: ...

    def get_text_in_range(self, text_range: Range) -> str: ...

    def set_text_in_range(self, text_range: Range, text: str) -> Range: ...

    def buffer_range(self) -> Range: ...

    def get_selected_range(self) -> Range: ...

    def set_selected_range(self, text_range: Range) -> None: ...


class Workspace(Protocol):
    """Open projects and the document that currently has focus."""

    def active_document(self) -> TextDocument | None: ...

    def project_paths(self) -> Sequence[str]: ...

"""File-backed workspace and stderr notifications for the CLI host."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

import structlog

from mixfmt.lib.buffer import BufferDocument, scope_for_path
from mixfmt.lib.domain import NotificationType

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from mixfmt.lib.domain import Notification

    WillSaveHook = Callable[[BufferDocument], None]

logger = structlog.get_logger(__name__)


class FileWorkspace:
    """Workspace over files on disk with at most one active document.

    `save` runs the registered will-save hooks before writing, the way an
    editor lets packages rewrite a buffer right before it hits disk. `write`
    skips the hooks.
    """

    def __init__(
        self,
        project_paths: Sequence[str] = (),
        active: BufferDocument | None = None,
    ) -> None:
        self._project_paths = tuple(project_paths)
        self._active = active
        self._will_save_hooks: list[WillSaveHook] = []

    def project_paths(self) -> Sequence[str]:
        return self._project_paths

    def active_document(self) -> BufferDocument | None:
        return self._active

    def on_will_save(self, hook: WillSaveHook) -> None:
        self._will_save_hooks.append(hook)

    def open(self, path: Path) -> BufferDocument:
        """Read a file into a buffer and make it the active document."""

        document = BufferDocument.from_file(path)
        self._active = document
        logger.debug("opened document", path=str(path), scope=document.scope_name)
        return document

    def open_text(self, path: Path, text: str) -> BufferDocument:
        """Make an unsaved buffer for `path` the active document."""

        document = BufferDocument(text, scope_name=scope_for_path(path), path=path)
        self._active = document
        return document

    def save(self, document: BufferDocument) -> None:
        """Run will-save hooks, then write the buffer to its file."""

        for hook in self._will_save_hooks:
            hook(document)
        self.write(document)

    def write(self, document: BufferDocument) -> None:
        if document.path is None:
            raise ValueError("Cannot save a document that has no path.")
        document.path.write_text(document.get_text(), encoding="utf-8", newline="")
        document.mark_saved()
        logger.info("saved document", path=str(document.path))


class StderrNotificationSink:
    """Render notifications on a text stream and remember what was sent."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stderr
        self.notifications: list[Notification] = []

    @property
    def error_count(self) -> int:
        return sum(1 for item in self.notifications if item.type is NotificationType.ERROR)

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)
        self._stream.write(f"{notification.format_text()}\n")
        self._stream.flush()

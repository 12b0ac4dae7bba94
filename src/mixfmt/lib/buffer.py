"""In-memory text buffer addressed by (row, column) points."""

from __future__ import annotations

from pathlib import Path

from mixfmt.lib.config.settings import ELIXIR_SCOPE
from mixfmt.lib.domain import Point, Range

PLAIN_TEXT_SCOPE = "text.plain"

_SCOPES_BY_SUFFIX: dict[str, str] = {
    ".ex": ELIXIR_SCOPE,
    ".exs": ELIXIR_SCOPE,
}


def scope_for_path(path: Path | str) -> str:
    """Return the grammar scope name for a file path."""

    return _SCOPES_BY_SUFFIX.get(Path(path).suffix.lower(), PLAIN_TEXT_SCOPE)


class BufferDocument:
    """Editable buffer holding the text of one document.

    Rows are split on `\\n` only. Points outside the buffer are clipped to the
    nearest valid position, so `(row, huge)` means end of row and a row past
    the last one means end of buffer.
    """

    def __init__(
        self,
        text: str = "",
        *,
        scope_name: str = PLAIN_TEXT_SCOPE,
        path: Path | None = None,
    ) -> None:
        self._text = text
        self._scope_name = scope_name
        self._path = path
        self._selection = Range(Point(0, 0), Point(0, 0))
        self._modified = False

    @classmethod
    def from_file(cls, path: Path) -> BufferDocument:
        # newline="" keeps CRLF and lone CR as they are on disk.
        with path.open(encoding="utf-8", newline="") as handle:
            text = handle.read()
        return cls(text, scope_name=scope_for_path(path), path=path)

    @property
    def scope_name(self) -> str:
        return self._scope_name

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def modified(self) -> bool:
        return self._modified

    def mark_saved(self) -> None:
        self._modified = False

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self.set_text_in_range(self.buffer_range(), text)

    def buffer_range(self) -> Range:
        lines = self._text.split("\n")
        return Range(Point(0, 0), Point(len(lines) - 1, len(lines[-1])))

    def clip_point(self, point: Point) -> Point:
        lines = self._text.split("\n")
        if point.row < 0:
            return Point(0, 0)
        if point.row >= len(lines):
            return Point(len(lines) - 1, len(lines[-1]))
        return Point(point.row, max(0, min(point.column, len(lines[point.row]))))

    def _offset(self, point: Point) -> int:
        clipped = self.clip_point(point)
        lines = self._text.split("\n")
        return sum(len(line) + 1 for line in lines[: clipped.row]) + clipped.column

    def _point_at(self, offset: int) -> Point:
        before = self._text[:offset]
        row = before.count("\n")
        return Point(row, offset - (before.rfind("\n") + 1))

    def get_text_in_range(self, text_range: Range) -> str:
        return self._text[self._offset(text_range.start) : self._offset(text_range.end)]

    def set_text_in_range(self, text_range: Range, text: str) -> Range:
        """Replace the range with `text` and return the range the new text occupies."""

        start = self._offset(text_range.start)
        end = self._offset(text_range.end)
        self._text = self._text[:start] + text + self._text[end:]
        self._modified = True
        inserted = Range(self._point_at(start), self._point_at(start + len(text)))
        self._selection = Range(inserted.end, inserted.end)
        return inserted

    def get_selected_range(self) -> Range:
        return self._selection

    def set_selected_range(self, text_range: Range) -> None:
        start = self.clip_point(text_range.start)
        end = self.clip_point(text_range.end)
        self._selection = Range(min(start, end), max(start, end))

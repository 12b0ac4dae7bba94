"""Domain models shared by the formatter, buffer host and CLI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True, slots=True, order=True)
class Point:
    """Zero-based (row, column) position in a text buffer."""

    row: int
    column: int

    @classmethod
    def parse(cls, raw: str) -> Point:
        """Parse `ROW:COL` into a point."""

        row_text, sep, column_text = raw.strip().partition(":")
        if not sep:
            raise ValueError(f"Invalid point {raw!r}: expected ROW:COL.")
        try:
            row = int(row_text)
            column = int(column_text)
        except ValueError as error:
            raise ValueError(f"Invalid point {raw!r}: expected integers.") from error
        if row < 0 or column < 0:
            raise ValueError(f"Invalid point {raw!r}: expected non-negative values.")
        return cls(row=row, column=column)


@dataclass(frozen=True, slots=True)
class Range:
    """Span between two points; `end` is exclusive."""

    start: Point
    end: Point

    @classmethod
    def from_tuples(cls, start: tuple[int, int], end: tuple[int, int]) -> Range:
        return cls(start=Point(*start), end=Point(*end))

    @classmethod
    def parse(cls, raw: str) -> Range:
        """Parse `ROW:COL-ROW:COL` into a range."""

        start_text, sep, end_text = raw.strip().partition("-")
        if not sep:
            raise ValueError(f"Invalid range {raw!r}: expected ROW:COL-ROW:COL.")
        start = Point.parse(start_text)
        end = Point.parse(end_text)
        if end < start:
            raise ValueError(f"Invalid range {raw!r}: end precedes start.")
        return cls(start=start, end=end)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


class NotificationType(StrEnum):
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class Notification:
    """User-facing message produced by one format attempt."""

    title: str
    type: NotificationType
    detail: str | None = None

    def format_text(self) -> str:
        if self.detail:
            return f"{self.type}: {self.title}\n{self.detail.rstrip()}"
        return f"{self.type}: {self.title}"


@dataclass(frozen=True, slots=True)
class FormatRequest:
    """One formatting attempt over a whole buffer or a selected range."""

    input_text: str
    selected_range: Range | None = None


@dataclass(frozen=True, slots=True)
class FormatResult:
    """Exit status and captured streams of one formatter process."""

    exit_status: int
    stdout: str | None = None
    stderr: str | None = None

    def __post_init__(self) -> None:
        if self.exit_status == 0 and self.stdout is None:
            raise ValueError("Formatter exited successfully without producing output.")

    @property
    def ok(self) -> bool:
        return self.exit_status == 0

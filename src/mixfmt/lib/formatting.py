"""Text rendering protocol for notifications and CLI result payloads.

`Notification` in `lib/` and the command outputs in `cli/` both render
through it, so it sits in `lib/`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TextFormattable(Protocol):
    def format_text(self) -> str: ...

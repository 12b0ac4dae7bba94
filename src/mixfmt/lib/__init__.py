"""Core mixfmt library exports."""

from mixfmt.lib.domain import (
    FormatRequest,
    FormatResult,
    Notification,
    NotificationType,
    Point,
    Range,
)
from mixfmt.lib.formatter import ElixirFormatter
from mixfmt.lib.project import ProjectContext

__all__ = [
    "ElixirFormatter",
    "FormatRequest",
    "FormatResult",
    "Notification",
    "NotificationType",
    "Point",
    "ProjectContext",
    "Range",
]

"""Turn command results into plain data for `--json` output."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, cast


def to_jsonable(value: Any) -> Any:
    """Flatten result dataclasses for `json.dumps`.

    `NotificationType` becomes its string value, paths become strings and
    tuples such as `FormatterConfig.elixir_scopes` or `DoctorOutput.args`
    become lists.
    """

    if is_dataclass(value) and not isinstance(value, type):
        return to_jsonable(asdict(value))
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Path):
        return value.as_posix()
    if isinstance(value, dict):
        mapping = cast("dict[object, object]", value)
        return {str(key): to_jsonable(item) for key, item in mapping.items()}
    if isinstance(value, (list, tuple)):
        items = cast("list[object] | tuple[object, ...]", value)
        return [to_jsonable(item) for item in items]
    return value

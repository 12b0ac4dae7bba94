"""Project-level formatter config loader."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import cast

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".mixfmt.toml"
DEFAULT_MIX_EXECUTABLE = "mix"
ELIXIR_SCOPE = "source.elixir"


@dataclass(frozen=True, slots=True)
class FormatterConfig:
    """Resolved formatter configuration for one invocation."""

    elixir_executable: str | None = None
    mix_executable: str = DEFAULT_MIX_EXECUTABLE
    format_on_save: bool = False
    elixir_scopes: tuple[str, ...] = (ELIXIR_SCOPE,)


_KEY_MAP: dict[str, str] = {
    "elixir_executable": "elixir_executable",
    "elixir": "elixir_executable",
    "mix_executable": "mix_executable",
    "mix": "mix_executable",
    "format_on_save": "format_on_save",
    "elixir_scopes": "elixir_scopes",
}

_ENV_OVERRIDE_MAP: dict[str, str] = {
    "MIXFMT_ELIXIR_EXECUTABLE": "elixir_executable",
    "MIXFMT_MIX_EXECUTABLE": "mix_executable",
    "MIXFMT_FORMAT_ON_SAVE": "format_on_save",
}

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})


def _coerce_file_value(*, field_name: str, raw_value: object, source: str) -> object:
    if field_name == "format_on_save":
        if not isinstance(raw_value, bool):
            raise ValueError(
                f"Invalid value for '{source}': expected bool, got "
                f"{type(raw_value).__name__} ({raw_value!r})."
            )
        return raw_value

    if field_name == "elixir_scopes":
        if not isinstance(raw_value, list):
            raise ValueError(
                f"Invalid value for '{source}': expected array[str], got "
                f"{type(raw_value).__name__} ({raw_value!r})."
            )
        parsed: list[str] = []
        for item in cast("list[object]", raw_value):
            if not isinstance(item, str) or not item.strip():
                raise ValueError(
                    f"Invalid value for '{source}': expected non-empty scope names, "
                    f"got {item!r}."
                )
            parsed.append(item.strip())
        return tuple(parsed)

    if not isinstance(raw_value, str):
        raise ValueError(
            f"Invalid value for '{source}': expected str, got "
            f"{type(raw_value).__name__} ({raw_value!r})."
        )
    normalized = raw_value.strip()
    if field_name == "elixir_executable":
        # Empty means "run mix directly".
        return normalized or None
    if not normalized:
        raise ValueError(f"Invalid value for '{source}': expected non-empty string.")
    return normalized


def _coerce_env_value(*, field_name: str, raw_value: str, env_name: str) -> object:
    normalized = raw_value.strip()
    if field_name == "format_on_save":
        lowered = normalized.lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        raise ValueError(
            f"Invalid environment override '{env_name}': expected bool, got {raw_value!r}."
        )
    if field_name == "elixir_executable":
        return normalized or None
    if not normalized:
        raise ValueError(
            f"Invalid environment override '{env_name}': expected non-empty string."
        )
    return normalized


def _default_values() -> dict[str, object]:
    defaults = FormatterConfig()
    return {field.name: getattr(defaults, field.name) for field in fields(FormatterConfig)}


def _apply_section(*, values: dict[str, object], section: dict[str, object], prefix: str) -> None:
    for key, raw_value in section.items():
        source = f"{prefix}{key}"
        field_name = _KEY_MAP.get(key)
        if field_name is None:
            logger.warning("Ignoring unknown mixfmt config key '%s'.", source)
            continue
        values[field_name] = _coerce_file_value(
            field_name=field_name,
            raw_value=raw_value,
            source=source,
        )


def _apply_toml_payload(
    *,
    values: dict[str, object],
    payload: dict[str, object],
    path: Path,
) -> None:
    top_level: dict[str, object] = {}
    for key, raw_value in payload.items():
        if key == "formatter":
            if not isinstance(raw_value, dict):
                raise ValueError(f"Invalid value for 'formatter' in '{path}': expected table.")
            _apply_section(
                values=values,
                section=cast("dict[str, object]", raw_value),
                prefix="formatter.",
            )
            continue
        top_level[key] = raw_value
    _apply_section(values=values, section=top_level, prefix="")


def _apply_env_overrides(values: dict[str, object]) -> None:
    for env_name, field_name in _ENV_OVERRIDE_MAP.items():
        raw_value = os.getenv(env_name)
        if raw_value is None:
            continue
        values[field_name] = _coerce_env_value(
            field_name=field_name,
            raw_value=raw_value,
            env_name=env_name,
        )


def _build_config(values: dict[str, object]) -> FormatterConfig:
    return FormatterConfig(
        elixir_executable=cast("str | None", values["elixir_executable"]),
        mix_executable=cast("str", values["mix_executable"]),
        format_on_save=cast("bool", values["format_on_save"]),
        elixir_scopes=cast("tuple[str, ...]", values["elixir_scopes"]),
    )


def config_path(project_root: Path) -> Path:
    return project_root / CONFIG_FILENAME


def load_config(project_root: Path | None) -> FormatterConfig:
    """Load `.mixfmt.toml` from the project root and apply environment overrides."""

    values = _default_values()
    if project_root is not None:
        path = config_path(project_root)
        if path.is_file():
            payload_obj = tomllib.loads(path.read_text(encoding="utf-8"))
            payload = cast("dict[str, object]", payload_obj)
            _apply_toml_payload(values=values, payload=payload, path=path)

    _apply_env_overrides(values)
    return _build_config(values)

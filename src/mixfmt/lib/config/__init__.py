"""Configuration discovery and parsing helpers."""

from mixfmt.lib.config._paths import resolve_project_root
from mixfmt.lib.config.settings import (
    DEFAULT_MIX_EXECUTABLE,
    ELIXIR_SCOPE,
    FormatterConfig,
    load_config,
)

__all__ = [
    "DEFAULT_MIX_EXECUTABLE",
    "ELIXIR_SCOPE",
    "FormatterConfig",
    "load_config",
    "resolve_project_root",
]

"""Formatter process execution primitives."""

from mixfmt.lib.exec.errors import FormatterExecutionError, describe_os_error
from mixfmt.lib.exec.runner import SubprocessRunner

__all__ = [
    "FormatterExecutionError",
    "SubprocessRunner",
    "describe_os_error",
]

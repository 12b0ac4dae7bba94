"""Errors raised while launching the formatter process."""

from __future__ import annotations


class FormatterExecutionError(RuntimeError):
    """Raised when the formatter process cannot be started."""

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        self.reason = reason
        super().__init__(f"Could not run '{command}': {reason}")


def describe_os_error(error: OSError) -> str:
    """Return a readable reason for a failed process launch."""

    if error.strerror:
        return error.strerror
    message = str(error).strip()
    return message or error.__class__.__name__

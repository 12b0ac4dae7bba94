"""Synchronous subprocess execution for the formatter."""

from __future__ import annotations

import os
import shlex
import subprocess
from typing import TYPE_CHECKING

import structlog

from mixfmt.lib.domain import FormatResult
from mixfmt.lib.exec.errors import FormatterExecutionError, describe_os_error

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mixfmt.lib.ports import SpawnOptions

logger = structlog.get_logger(__name__)


def shell_command(argv: Sequence[str]) -> str | list[str]:
    """Return what to hand `subprocess.run` when a shell resolves the command.

    A POSIX shell only runs `argv[0]` from a list, so the whole line is quoted
    into one string there. Windows joins the list itself.
    """

    if os.name == "nt":
        return list(argv)
    return shlex.join(argv)


class SubprocessRunner:
    """Run one process to completion with text on stdin, capturing both streams.

    Streams are exchanged as bytes and decoded here, so `\\r\\n` and lone `\\r`
    in the formatter output reach the buffer unchanged.
    """

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def run(self, command: str, args: Sequence[str], options: SpawnOptions) -> FormatResult:
        argv = [command, *args]
        shell = options.get("shell", False)
        logger.debug("spawning formatter", argv=argv, cwd=options.get("cwd"), shell=shell)
        try:
            completed = subprocess.run(
                shell_command(argv) if shell else argv,
                input=options["input"].encode(self._encoding),
                cwd=options.get("cwd"),
                shell=shell,
                capture_output=True,
                check=False,
            )
        except OSError as error:
            raise FormatterExecutionError(command, describe_os_error(error)) from error

        logger.debug("formatter exited", argv=argv, returncode=completed.returncode)
        return FormatResult(
            exit_status=completed.returncode,
            stdout=completed.stdout.decode(self._encoding),
            stderr=completed.stderr.decode(self._encoding, errors="replace"),
        )

"""Shared pytest fixtures for formatter and CLI checks."""

from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from mixfmt.lib.config import FormatterConfig
from mixfmt.lib.domain import FormatResult, Notification
from mixfmt.lib.formatter import ElixirFormatter
from mixfmt.lib.project import ProjectContext

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from mixfmt.lib.buffer import BufferDocument
    from mixfmt.lib.ports import SpawnOptions

PACKAGE_ROOT = Path(__file__).resolve().parents[1]


@dataclass(frozen=True, slots=True)
class CliResult:
    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str


@dataclass(frozen=True, slots=True)
class SpawnCall:
    command: str
    args: tuple[str, ...]
    options: dict[str, object]


@dataclass
class FakeRunner:
    """ProcessRunner double that records calls and replays a canned outcome."""

    result: FormatResult | None = None
    error: Exception | None = None
    calls: list[SpawnCall] = field(default_factory=list)

    def run(self, command: str, args: Sequence[str], options: SpawnOptions) -> FormatResult:
        self.calls.append(SpawnCall(command=command, args=tuple(args), options=dict(options)))
        if self.error is not None:
            raise self.error
        if self.result is None:
            return FormatResult(exit_status=0, stdout="", stderr="")
        return self.result


@dataclass
class RecordingNotifier:
    notifications: list[Notification] = field(default_factory=list)

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)


@dataclass
class StaticWorkspace:
    paths: tuple[str, ...] = ()
    active: BufferDocument | None = None

    def active_document(self) -> BufferDocument | None:
        return self.active

    def project_paths(self) -> Sequence[str]:
        return self.paths


@dataclass
class FormatterHarness:
    formatter: ElixirFormatter
    runner: FakeRunner
    notifier: RecordingNotifier
    workspace: StaticWorkspace
    config_reads: list[FormatterConfig]


@pytest.fixture(autouse=True)
def _clear_mixfmt_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("MIXFMT_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def package_root() -> Path:
    return PACKAGE_ROOT


@pytest.fixture
def make_formatter() -> Callable[..., FormatterHarness]:
    def _make(
        *,
        config: FormatterConfig | None = None,
        project_paths: tuple[str, ...] = ("/work/app",),
        platform: str = "linux",
        active: BufferDocument | None = None,
        runner: FakeRunner | None = None,
    ) -> FormatterHarness:
        runner = runner or FakeRunner()
        notifier = RecordingNotifier()
        workspace = StaticWorkspace(paths=project_paths, active=active)
        resolved = config or FormatterConfig()
        reads: list[FormatterConfig] = []

        def _load() -> FormatterConfig:
            reads.append(resolved)
            return resolved

        formatter = ElixirFormatter(
            runner=runner,
            notifier=notifier,
            workspace=workspace,
            project=ProjectContext(workspace, platform=platform),
            load_config=_load,
        )
        return FormatterHarness(
            formatter=formatter,
            runner=runner,
            notifier=notifier,
            workspace=workspace,
            config_reads=reads,
        )

    return _make


@pytest.fixture
def cli_env(package_root: Path) -> dict[str, str]:
    env = {key: value for key, value in os.environ.items() if not key.startswith("MIXFMT_")}
    existing = env.get("PYTHONPATH", "")
    root = str(package_root / "src")
    env["PYTHONPATH"] = root if not existing else f"{root}{os.pathsep}{existing}"
    # python <mock_mix.py> format - stands in for elixir <mix> format -.
    env["MIXFMT_ELIXIR_EXECUTABLE"] = sys.executable
    env["MIXFMT_MIX_EXECUTABLE"] = str(package_root / "tests" / "mock_mix.py")
    return env


@pytest.fixture
def run_mixfmt(cli_env: dict[str, str]) -> Callable[..., CliResult]:
    def _run(
        args: list[str],
        *,
        cwd: Path | None = None,
        env: dict[str, str] | None = None,
        stdin: str | None = None,
        timeout: float = 15.0,
    ) -> CliResult:
        completed = subprocess.run(
            [sys.executable, "-m", "mixfmt", *args],
            cwd=cwd,
            input=stdin,
            env={**cli_env, **(env or {})},
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
        return CliResult(
            args=tuple(args),
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )

    return _run

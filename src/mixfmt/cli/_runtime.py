"""Wire the file-backed host into an ElixirFormatter."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from pathlib import Path

from mixfmt.lib.config import load_config, resolve_project_root
from mixfmt.lib.exec import SubprocessRunner
from mixfmt.lib.formatter import ElixirFormatter
from mixfmt.lib.project import ProjectContext
from mixfmt.lib.workspace import FileWorkspace, StderrNotificationSink


@dataclass(frozen=True, slots=True)
class Runtime:
    project_root: Path | None
    workspace: FileWorkspace
    notifier: StderrNotificationSink
    project: ProjectContext
    formatter: ElixirFormatter


def build_runtime(*, start: Path | None = None, project: str | None = None) -> Runtime:
    explicit = Path(project) if project else None
    project_root = resolve_project_root(start, explicit=explicit)
    workspace = FileWorkspace(project_paths=(str(project_root),) if project_root else ())
    notifier = StderrNotificationSink()
    context = ProjectContext(workspace)
    formatter = ElixirFormatter(
        runner=SubprocessRunner(),
        notifier=notifier,
        workspace=workspace,
        project=context,
        load_config=partial(load_config, project_root),
    )
    workspace.on_will_save(formatter.handle_will_save)
    return Runtime(
        project_root=project_root,
        workspace=workspace,
        notifier=notifier,
        project=context,
        formatter=formatter,
    )

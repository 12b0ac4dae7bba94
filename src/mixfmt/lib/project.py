"""Project working directory and platform queries."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mixfmt.lib.ports import Workspace

_SHELL_PLATFORMS = frozenset({"win32"})


class ProjectContext:
    """Answer where and how the formatter process should be started."""

    def __init__(self, workspace: Workspace, *, platform: str | None = None) -> None:
        self._workspace = workspace
        self._platform = sys.platform if platform is None else platform

    def project_path(self) -> str | None:
        """Return the first open project root, if any."""

        paths = self._workspace.project_paths()
        if not paths:
            return None
        return paths[0]

    def is_platform_requiring_shell(self) -> bool:
        """Return True where executables on PATH are only found through a shell."""

        return self._platform in _SHELL_PLATFORMS

"""Path resolution helpers for Elixir project roots."""

from __future__ import annotations

import os
from pathlib import Path

MIX_PROJECT_MARKER = "mix.exs"


def resolve_project_root(start: Path | None = None, explicit: Path | None = None) -> Path | None:
    """Resolve the Mix project that owns `start`.

    Precedence:
    1. Explicit function argument.
    2. `MIXFMT_PROJECT_ROOT` environment variable.
    3. `start` (or the current directory) / ancestors containing `mix.exs`.
    4. The nearest ancestor holding a `.git` entry.

    Returns None when nothing marks a project.
    """

    if explicit is not None:
        return explicit.expanduser().resolve()

    env_root = os.getenv("MIXFMT_PROJECT_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()

    origin = (start or Path.cwd()).expanduser().resolve()
    if origin.is_file():
        origin = origin.parent

    git_root: Path | None = None
    candidate = origin
    while True:
        if (candidate / MIX_PROJECT_MARKER).is_file():
            return candidate

        # A .git entry (file for worktree/submodule, directory for standalone
        # repo) is the fallback boundary when no mix.exs is found.
        if git_root is None and (candidate / ".git").exists():
            git_root = candidate

        parent = candidate.parent
        if parent == candidate:
            break
        candidate = parent

    return git_root

from __future__ import annotations

from pathlib import Path
from typing import Optional


ARTIFACT_FILENAME = "ai-attribution-results.json"


def artifact_path(output_dir: Optional[Path] = None) -> Path:
    """
    Location of the JSON results artifact.

    Relative to the current working directory unless an output directory is
    given; overwritten on every run.
    """
    return (output_dir if output_dir is not None else Path.cwd()) / ARTIFACT_FILENAME


def find_vcs_root(path: Path) -> Optional[Path]:
    """
    Walk up from `path` looking for a git work tree.

    `.git` may be a directory (regular clone) or a file (worktrees,
    submodules). Returns None when no marker is found.
    """
    current = path.resolve()
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate
    return None

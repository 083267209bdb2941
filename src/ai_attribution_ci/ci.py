from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


def _escape_annotation(message: str) -> str:
    # Workflow-command data escaping: '%' first so the others stay intact.
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def format_annotation(level: str, message: str) -> str:
    """Render a workflow command such as `::error::message`."""
    return f"::{level}::{_escape_annotation(message)}"


@dataclass(frozen=True)
class CIContext:
    """
    The CI host's reporting channels, read once from the environment.

    Both file paths are owned by the CI host; this tool only appends to them.
    Either may be None when the host does not expose that channel.
    """

    output_path: Optional[Path] = None
    summary_path: Optional[Path] = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Optional["CIContext"]:
        """Return a context when running under GitHub Actions, else None."""
        env = os.environ if environ is None else environ
        if env.get("GITHUB_ACTIONS", "").strip().lower() != "true":
            return None

        output = env.get("GITHUB_OUTPUT", "").strip()
        summary = env.get("GITHUB_STEP_SUMMARY", "").strip()
        return cls(
            output_path=Path(output) if output else None,
            summary_path=Path(summary) if summary else None,
        )

    def error_annotation(self, message: str) -> str:
        return format_annotation("error", message)

    def warning_annotation(self, message: str) -> str:
        return format_annotation("warning", message)

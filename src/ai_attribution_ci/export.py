from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .ci import CIContext
from .errors import ExportError
from .models import AnalysisResult, RunConfig, RunOutcome, RunStatus
from .paths import artifact_path
from .utils import append_text, format_number, write_json

logger = logging.getLogger(__name__)

SUMMARY_HEADING = "## AI Attribution Analysis"
PASSED_MARKER = "✅ **Passed**"
WARNING_MARKER = "⚠️ **Warning**"


def result_payload(result: AnalysisResult) -> dict[str, Any]:
    """Artifact body with stable key order. Per-commit details only when present."""
    payload: dict[str, Any] = {
        "TotalCommits": result.total_commits,
        "AILikelyCommits": result.ai_likely_commits,
        "AIPercentage": format_number(result.ai_percentage),
        "AverageScore": format_number(result.average_score),
    }
    if result.per_commit_details is not None:
        payload["PerCommitDetails"] = [dict(d) for d in result.per_commit_details]
    return payload


def step_outputs(result: AnalysisResult, outcome: RunOutcome) -> list[tuple[str, str]]:
    return [
        ("ai-percentage", str(format_number(result.ai_percentage))),
        ("total-commits", str(result.total_commits)),
        ("ai-commits", str(result.ai_likely_commits)),
        ("average-score", str(format_number(result.average_score))),
        ("status", outcome.status.value),
    ]


def render_summary(result: AnalysisResult, outcome: RunOutcome, config: RunConfig) -> str:
    """Markdown job summary: metric table plus a pass/warning status line."""
    marker = PASSED_MARKER if outcome.status == RunStatus.PASSED else WARNING_MARKER
    lines = [
        SUMMARY_HEADING,
        "",
        f"Commits since: `{config.since}`",
        "",
        "| Metric | Value |",
        "|--------|-------|",
        f"| Total Commits | {result.total_commits} |",
        f"| AI-Likely Commits | {result.ai_likely_commits} |",
        f"| AI Percentage | {format_number(result.ai_percentage)}% |",
        f"| Average Score | {format_number(result.average_score)} |",
        f"| Minimum Threshold | {config.minimum_threshold}% |",
        "",
        f"{marker}: {outcome.message}",
        "",
    ]
    return "\n".join(lines) + "\n"


@dataclass
class ResultExporter:
    """
    Publishes an analysis result to the JSON artifact and, inside CI, to the
    step-output and job-summary channels.

    Each channel is best-effort and independent: a failure is logged and the
    remaining channels are still attempted. Nothing is raised to the caller.
    """

    output_dir: Optional[Path] = None
    ci: Optional[CIContext] = None
    failures: list[str] = field(default_factory=list)

    @property
    def artifact_path(self) -> Path:
        return artifact_path(self.output_dir)

    def export(self, result: AnalysisResult, outcome: RunOutcome, config: RunConfig) -> None:
        self.failures = []
        channels = [("artifact", lambda: self._write_artifact(result))]
        if self.ci is not None:
            channels.append(("step-output", lambda: self._append_outputs(result, outcome)))
            channels.append(("job-summary", lambda: self._append_summary(result, outcome, config)))

        for name, write in channels:
            try:
                write()
            except ExportError as e:
                self.failures.append(name)
                logger.warning("Export to %s failed: %s", name, e)
            except Exception:
                self.failures.append(name)
                logger.exception("Unexpected error exporting to %s", name)

    def _write_artifact(self, result: AnalysisResult) -> None:
        path = self.artifact_path
        try:
            write_json(path, result_payload(result))
        except (OSError, TypeError, ValueError) as e:
            raise ExportError(f"could not write {path}: {e}") from e
        logger.info("Results exported to %s", path)

    def _append_outputs(self, result: AnalysisResult, outcome: RunOutcome) -> None:
        path = self.ci.output_path if self.ci else None
        if path is None:
            logger.debug("No step-output file configured; skipping step outputs")
            return
        text = "".join(f"{k}={v}\n" for k, v in step_outputs(result, outcome))
        try:
            append_text(path, text)
        except OSError as e:
            raise ExportError(f"could not append step outputs to {path}: {e}") from e

    def _append_summary(self, result: AnalysisResult, outcome: RunOutcome, config: RunConfig) -> None:
        path = self.ci.summary_path if self.ci else None
        if path is None:
            logger.debug("No job-summary file configured; skipping job summary")
            return
        try:
            append_text(path, render_summary(result, outcome, config))
        except OSError as e:
            raise ExportError(f"could not append job summary to {path}: {e}") from e

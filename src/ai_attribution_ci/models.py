from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_SINCE = "1 day ago"
DEFAULT_REPOSITORY = "."
DEFAULT_MINIMUM_THRESHOLD = 25


@dataclass(frozen=True)
class RunConfig:
    """
    Immutable input to a single run, built once from CLI parameters.

    repository: path of the work tree to analyze
    since: time boundary handed to the analyzer verbatim ("7 days ago", "2024-01-01")
    show_details: request per-commit records from the analyzer
    minimum_threshold: advisory AI-usage percentage; never gates the build
    analyzer_timeout: seconds before the analyzer call is abandoned; None waits forever
    """
    repository: str = DEFAULT_REPOSITORY
    since: str = DEFAULT_SINCE
    show_details: bool = False
    minimum_threshold: int = DEFAULT_MINIMUM_THRESHOLD
    analyzer_timeout: Optional[float] = None


class RunStatus(str, Enum):
    PASSED = "passed"
    WARNING = "warning"
    FAILED = "failed"


# Per-commit records are analyzer-defined; keys are passed through untouched.
CommitDetail = dict[str, Any]


class AnalysisResult(BaseModel):
    """
    Normalized analyzer output for one run.

    Field aliases are the analyzer's own key names and double as the
    artifact key names, so the JSON written by the exporter reads the same
    as the analyzer's output.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore", allow_inf_nan=False)

    # Strict: "40" from the analyzer is a contract violation, not a count.
    total_commits: int = Field(alias="TotalCommits", ge=0, strict=True)
    ai_likely_commits: int = Field(alias="AILikelyCommits", ge=0, strict=True)
    ai_percentage: float = Field(alias="AIPercentage", ge=0, le=100)
    average_score: float = Field(alias="AverageScore")
    per_commit_details: Optional[list[CommitDetail]] = Field(default=None, alias="PerCommitDetails")


@dataclass(frozen=True)
class RunOutcome:
    status: RunStatus
    exit_code: int
    message: str

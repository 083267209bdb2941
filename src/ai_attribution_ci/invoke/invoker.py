from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import ValidationError

from ..errors import AnalyzerExecutionError, AnalyzerUnavailable, AttributionError
from ..models import AnalysisResult, RunConfig
from .base import Analyzer, AnalyzerRequest

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("TotalCommits", "AILikelyCommits", "AIPercentage", "AverageScore")


def build_request(config: RunConfig) -> AnalyzerRequest:
    return AnalyzerRequest(
        repository=config.repository,
        since=config.since.strip(),
        show_details=config.show_details,
        timeout=config.analyzer_timeout,
    )


def _describe_validation_error(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def normalize_result(raw: Any, *, show_details: bool) -> AnalysisResult:
    """
    Map raw analyzer output onto AnalysisResult.

    Any deviation from the analyzer contract raises AnalyzerExecutionError.
    Per-commit details are kept only when they were requested; a missing
    detail list for a detail request becomes an empty list.
    """
    if not isinstance(raw, Mapping):
        raise AnalyzerExecutionError(
            f"Analyzer returned {type(raw).__name__}, expected an object with {list(_REQUIRED_FIELDS)}."
        )

    missing = [k for k in _REQUIRED_FIELDS if raw.get(k) is None]
    if missing:
        raise AnalyzerExecutionError(f"Analyzer output missing required fields: {missing}")

    data = {k: raw[k] for k in _REQUIRED_FIELDS}
    # Booleans would silently coerce to 0/1 counts.
    bad = [k for k, v in data.items() if isinstance(v, bool)]
    if bad:
        raise AnalyzerExecutionError(f"Analyzer output has non-numeric fields: {bad}")

    if show_details:
        details = raw.get("PerCommitDetails")
        if details is not None and not isinstance(details, (list, tuple)):
            raise AnalyzerExecutionError("Analyzer output PerCommitDetails must be a list.")
        data["PerCommitDetails"] = list(details) if details is not None else []

    try:
        result = AnalysisResult.model_validate(data)
    except ValidationError as e:
        raise AnalyzerExecutionError(f"Analyzer output is malformed: {_describe_validation_error(e)}") from e

    if result.ai_likely_commits > result.total_commits:
        raise AnalyzerExecutionError(
            f"Analyzer reported {result.ai_likely_commits} AI-likely commits out of {result.total_commits}."
        )
    if result.total_commits == 0 and result.ai_percentage != 0:
        result = result.model_copy(update={"ai_percentage": 0.0})
    return result


@dataclass
class AnalysisInvoker:
    """Calls the analyzer for a RunConfig and returns a normalized AnalysisResult."""

    analyzer: Analyzer

    def invoke(self, config: RunConfig) -> AnalysisResult:
        try:
            self.analyzer.ensure_available()
        except AttributionError:
            raise
        except Exception as e:
            raise AnalyzerUnavailable(f"Analyzer '{self.analyzer.name}' could not be loaded: {e}") from e

        request = build_request(config)
        logger.debug("Analyzer request: %s", request)
        try:
            raw = self.analyzer.analyze(request)
        except AttributionError:
            raise
        except Exception as e:
            raise AnalyzerExecutionError(f"Analyzer '{self.analyzer.name}' failed: {e}") from e

        return normalize_result(raw, show_details=config.show_details)

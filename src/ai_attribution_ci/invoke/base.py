from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class AnalyzerRequest:
    """Parameters handed to an analyzer for one commit range."""

    repository: str
    since: str
    show_details: bool = False
    timeout: Optional[float] = None


class Analyzer:
    """
    Attribution analyzer capability.

    Implementations return the analyzer's raw output mapping
    ({TotalCommits, AILikelyCommits, AIPercentage, AverageScore,
    [PerCommitDetails]}); normalization happens in AnalysisInvoker.
    """

    name = "analyzer"

    def ensure_available(self) -> None:
        """Raise AnalyzerUnavailable if the analyzer cannot be used."""

    def analyze(self, request: AnalyzerRequest) -> Mapping[str, Any]:  # pragma: no cover - interface
        raise NotImplementedError

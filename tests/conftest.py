from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

import pytest

from ai_attribution_ci.errors import AnalyzerUnavailable
from ai_attribution_ci.invoke import Analyzer, AnalyzerRequest


class FakeAnalyzer(Analyzer):
    """Analyzer test double returning a canned payload and counting calls."""

    name = "fake-analyzer"

    def __init__(
        self,
        payload: Optional[Mapping[str, Any]] = None,
        *,
        available: bool = True,
        error: Optional[Exception] = None,
    ) -> None:
        self.payload = payload
        self.available = available
        self.error = error
        self.calls: list[AnalyzerRequest] = []

    def ensure_available(self) -> None:
        if not self.available:
            raise AnalyzerUnavailable("fake analyzer is not installed")

    def analyze(self, request: AnalyzerRequest) -> Mapping[str, Any]:
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        return self.payload  # type: ignore[return-value]


def sample_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "TotalCommits": 40,
        "AILikelyCommits": 12,
        "AIPercentage": 30,
        "AverageScore": 0.62,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    repo = tmp_path / "repo"
    (repo / ".git").mkdir(parents=True)
    return repo

from __future__ import annotations

from .models import AnalysisResult, RunOutcome, RunStatus
from .utils import format_number


def evaluate_threshold(result: AnalysisResult, minimum_threshold: int) -> RunOutcome:
    """
    Advisory pass/warning decision.

    Passed only when the AI percentage is strictly above the threshold; a
    result exactly at the threshold is a Warning. Both outcomes exit 0: low
    AI usage is reported, never used to fail the build.
    """
    pct = format_number(result.ai_percentage)
    if result.ai_percentage > minimum_threshold:
        return RunOutcome(
            status=RunStatus.PASSED,
            exit_code=0,
            message=f"AI usage ({pct}%) exceeds minimum threshold ({minimum_threshold}%)",
        )
    return RunOutcome(
        status=RunStatus.WARNING,
        exit_code=0,
        message=f"AI usage ({pct}%) is at or below minimum threshold ({minimum_threshold}%)",
    )

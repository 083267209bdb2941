"""Analyzer invocation layer.

An Analyzer produces raw attribution statistics for a commit range; the
AnalysisInvoker validates that output into an AnalysisResult.
"""

from .base import Analyzer, AnalyzerRequest
from .command import DEFAULT_ANALYZER_COMMAND, CommandAnalyzer
from .invoker import AnalysisInvoker, build_request, normalize_result

__all__ = [
    "Analyzer",
    "AnalyzerRequest",
    "AnalysisInvoker",
    "CommandAnalyzer",
    "DEFAULT_ANALYZER_COMMAND",
    "build_request",
    "normalize_result",
]

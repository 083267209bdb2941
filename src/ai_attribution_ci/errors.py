from __future__ import annotations


class AttributionError(Exception):
    """Base class for failures raised by the attribution pipeline."""


class ConfigValidationError(AttributionError, ValueError):
    """Raised when run parameters are invalid; the analyzer is never called."""


class AnalyzerUnavailable(AttributionError):
    """Raised when the analyzer cannot be located, loaded or installed."""


class AnalyzerExecutionError(AttributionError):
    """Raised when the analyzer ran but failed or returned malformed output."""


class ExportError(AttributionError):
    """Raised by a single export channel. Caught at the export boundary."""

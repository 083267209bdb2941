"""Pipeline orchestration layer.

Drives validation, analyzer invocation, threshold evaluation and export in
sequence, and maps the result to a process exit code.
"""

from .run import EXIT_FAILURE, EXIT_OK, PipelineController, PipelineStage, run_pipeline

__all__ = ["EXIT_FAILURE", "EXIT_OK", "PipelineController", "PipelineStage", "run_pipeline"]

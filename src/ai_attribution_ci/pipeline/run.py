from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

import typer

from ..ci import CIContext
from ..config import validate_config
from ..errors import ConfigValidationError
from ..evaluate import evaluate_threshold
from ..export import ResultExporter
from ..invoke import AnalysisInvoker
from ..models import AnalysisResult, RunConfig, RunOutcome, RunStatus
from ..utils import format_number

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class PipelineStage(str, Enum):
    START = "start"
    VALIDATING = "validating"
    INVOKING = "invoking"
    EVALUATING = "evaluating"
    EXPORTING = "exporting"
    DONE = "done"
    ERROR_EXIT = "error_exit"


_TRANSITIONS: dict[PipelineStage, frozenset[PipelineStage]] = {
    PipelineStage.START: frozenset({PipelineStage.VALIDATING}),
    PipelineStage.VALIDATING: frozenset({PipelineStage.INVOKING, PipelineStage.ERROR_EXIT}),
    PipelineStage.INVOKING: frozenset({PipelineStage.EVALUATING, PipelineStage.ERROR_EXIT}),
    PipelineStage.EVALUATING: frozenset({PipelineStage.EXPORTING}),
    PipelineStage.EXPORTING: frozenset({PipelineStage.DONE}),
    PipelineStage.DONE: frozenset(),
    PipelineStage.ERROR_EXIT: frozenset(),
}


def _echo_results(result: AnalysisResult) -> None:
    typer.echo("AI Attribution Results")
    typer.echo(f"  Total commits:     {result.total_commits}")
    typer.echo(f"  AI-likely commits: {result.ai_likely_commits}")
    typer.echo(f"  AI percentage:     {format_number(result.ai_percentage)}%")
    typer.echo(f"  Average score:     {format_number(result.average_score)}")
    if result.per_commit_details:
        typer.echo(f"  Commit details:    {len(result.per_commit_details)} record(s)")


class PipelineController:
    """
    Runs one attribution check: validate, invoke, evaluate, export.

    Only validation and invocation can fail the run (exit 1). Threshold
    misses are warnings and export is best-effort, so once an analysis
    result exists the run always exits 0.
    """

    def __init__(
        self,
        invoker: AnalysisInvoker,
        *,
        exporter: Optional[ResultExporter] = None,
        ci: Optional[CIContext] = None,
    ) -> None:
        self.invoker = invoker
        self.ci = ci
        self.exporter = exporter if exporter is not None else ResultExporter(ci=ci)
        self.stage = PipelineStage.START
        self.result: Optional[AnalysisResult] = None

    def _advance(self, stage: PipelineStage) -> None:
        if stage not in _TRANSITIONS[self.stage]:
            raise RuntimeError(f"Illegal pipeline transition {self.stage.value} -> {stage.value}")
        self.stage = stage

    def _fail(self, message: str, exc: BaseException) -> RunOutcome:
        self._advance(PipelineStage.ERROR_EXIT)
        logger.error(message, exc_info=exc)
        if self.ci is not None:
            typer.echo(self.ci.error_annotation(message))
        return RunOutcome(status=RunStatus.FAILED, exit_code=EXIT_FAILURE, message=message)

    def execute(self, config: RunConfig) -> RunOutcome:
        if self.stage != PipelineStage.START:
            raise RuntimeError("PipelineController instances run once; create a new one per run.")

        self._advance(PipelineStage.VALIDATING)
        try:
            root = validate_config(config)
        except ConfigValidationError as e:
            return self._fail(f"Invalid configuration: {e}", e)

        self._advance(PipelineStage.INVOKING)
        typer.echo(f"Analyzing commits since '{config.since.strip()}' in {root}")
        try:
            result = self.invoker.invoke(config)
        except Exception as e:
            return self._fail(f"AI attribution analysis failed: {e}", e)
        self.result = result

        self._advance(PipelineStage.EVALUATING)
        outcome = evaluate_threshold(result, config.minimum_threshold)
        _echo_results(result)

        self._advance(PipelineStage.EXPORTING)
        self.exporter.export(result, outcome, config)
        if self.exporter.failures:
            logger.warning("Some exports failed: %s", ", ".join(self.exporter.failures))

        if outcome.status == RunStatus.PASSED:
            typer.echo(f"PASSED: {outcome.message}")
        else:
            typer.echo(f"WARNING: {outcome.message}")
            if self.ci is not None:
                typer.echo(self.ci.warning_annotation(outcome.message))

        self._advance(PipelineStage.DONE)
        return outcome

    def run(self, config: RunConfig) -> int:
        return self.execute(config).exit_code


def run_pipeline(
    config: RunConfig,
    invoker: AnalysisInvoker,
    *,
    exporter: Optional[ResultExporter] = None,
    ci: Optional[CIContext] = None,
) -> RunOutcome:
    """Pipeline entrypoint: one controller per run."""
    return PipelineController(invoker, exporter=exporter, ci=ci).execute(config)

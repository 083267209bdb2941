from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from .ci import CIContext
from .errors import AnalyzerUnavailable
from .export import ResultExporter
from .invoke import DEFAULT_ANALYZER_COMMAND, AnalysisInvoker, CommandAnalyzer
from .logging_config import setup_logging
from .models import DEFAULT_MINIMUM_THRESHOLD, DEFAULT_REPOSITORY, DEFAULT_SINCE, RunConfig
from .pipeline import PipelineController

app = typer.Typer(add_completion=False, help="AI commit attribution check for CI pipelines")


@app.command()
def run(
    since: str = typer.Option(DEFAULT_SINCE, "--since", help="Commit range start, e.g. '7 days ago' or '2024-01-01'"),
    show_details: bool = typer.Option(False, "--show-details", help="Include per-commit details in the results"),
    repository: str = typer.Option(DEFAULT_REPOSITORY, "--repository", help="Path to the git repository"),
    minimum_threshold: int = typer.Option(
        DEFAULT_MINIMUM_THRESHOLD,
        "--minimum-threshold",
        help="Advisory minimum AI percentage (0-100). Falling short warns; it never fails the build.",
    ),
    analyzer: str = typer.Option(
        DEFAULT_ANALYZER_COMMAND, "--analyzer", envvar="AI_ATTRIBUTION_ANALYZER", help="Analyzer executable"
    ),
    install_command: str = typer.Option(
        "",
        "--install-command",
        envvar="AI_ATTRIBUTION_INSTALL_COMMAND",
        help="Command that installs the analyzer when it is missing",
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", envvar="AI_ATTRIBUTION_TIMEOUT", help="Analyzer timeout in seconds (default: none)"
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", help="Directory for ai-attribution-results.json (default: current directory)"
    ),
    log_level: str = typer.Option("INFO", "--log-level", envvar="AI_ATTRIBUTION_LOG_LEVEL", help="Logging level"),
):
    """
    Analyze recent commits for AI attribution and publish the results.

    Exit code 0 whenever the analysis completes (passed or warning);
    1 for invalid parameters or analyzer failures.
    """
    setup_logging(log_level)

    config = RunConfig(
        repository=repository,
        since=since,
        show_details=show_details,
        minimum_threshold=minimum_threshold,
        analyzer_timeout=timeout,
    )
    ci = CIContext.from_env()
    controller = PipelineController(
        AnalysisInvoker(CommandAnalyzer(executable=analyzer, install_command=install_command)),
        exporter=ResultExporter(output_dir=output_dir, ci=ci),
        ci=ci,
    )
    raise typer.Exit(code=controller.run(config))


@app.command("check-analyzer")
def check_analyzer(
    analyzer: str = typer.Option(
        DEFAULT_ANALYZER_COMMAND, "--analyzer", envvar="AI_ATTRIBUTION_ANALYZER", help="Analyzer executable"
    ),
    install_command: str = typer.Option(
        "",
        "--install-command",
        envvar="AI_ATTRIBUTION_INSTALL_COMMAND",
        help="Command that installs the analyzer when it is missing",
    ),
):
    """
    Check that the analyzer executable can be found (installing it if configured).
    """
    cmd = CommandAnalyzer(executable=analyzer, install_command=install_command)
    try:
        cmd.ensure_available()
    except AnalyzerUnavailable as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Analyzer available: {cmd.resolved_path}")

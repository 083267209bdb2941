from __future__ import annotations

import json
import logging
import shlex
import shutil
import subprocess
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..errors import AnalyzerExecutionError, AnalyzerUnavailable
from ..utils import tail
from .base import Analyzer, AnalyzerRequest

logger = logging.getLogger(__name__)

DEFAULT_ANALYZER_COMMAND = "git-ai-attribution"
INSTALL_TIMEOUT_SECONDS = 600


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-finite number {token} in analyzer output")


@dataclass
class CommandAnalyzer(Analyzer):
    """
    Runs an external attribution analyzer executable and reads JSON from stdout.

    Invocation:
      <executable> --repository R --since S --format json [--show-details]

    If the executable is missing and `install_command` is set, the install
    command runs once and the lookup is retried.
    """

    executable: str = DEFAULT_ANALYZER_COMMAND
    install_command: str = ""
    resolved_path: Optional[str] = field(default=None, init=False, repr=False)

    @property
    def name(self) -> str:  # type: ignore[override]
        return self.executable

    def locate(self) -> Optional[str]:
        return shutil.which(self.executable)

    def ensure_available(self) -> None:
        resolved = self.locate()
        if resolved is None and self.install_command.strip():
            self._install()
            resolved = self.locate()
        if resolved is None:
            hint = "" if self.install_command.strip() else " (no install command configured)"
            raise AnalyzerUnavailable(f"Analyzer executable '{self.executable}' not found on PATH{hint}.")
        logger.debug("Using analyzer at %s", resolved)
        self.resolved_path = resolved

    def _install(self) -> None:
        try:
            cmd = shlex.split(self.install_command)
        except ValueError as e:
            raise AnalyzerUnavailable(f"Analyzer install command is malformed: {e}") from e
        logger.info("Analyzer '%s' not found; installing with: %s", self.executable, self.install_command)
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, timeout=INSTALL_TIMEOUT_SECONDS)
        except subprocess.TimeoutExpired as e:
            raise AnalyzerUnavailable(f"Analyzer install timed out after {INSTALL_TIMEOUT_SECONDS}s.") from e
        except OSError as e:
            raise AnalyzerUnavailable(f"Analyzer install could not start: {e}") from e
        if proc.returncode != 0:
            raise AnalyzerUnavailable(
                f"Analyzer install failed with exit code {proc.returncode}:\n{tail(proc.stderr)}"
            )

    def build_command(self, request: AnalyzerRequest) -> list[str]:
        cmd = [
            self.resolved_path or self.executable,
            "--repository",
            request.repository,
            "--since",
            request.since,
            "--format",
            "json",
        ]
        if request.show_details:
            cmd.append("--show-details")
        return cmd

    def analyze(self, request: AnalyzerRequest) -> Mapping[str, Any]:
        cmd = self.build_command(request)
        logger.debug("Running analyzer: %s", shlex.join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, timeout=request.timeout)
        except subprocess.TimeoutExpired as e:
            raise AnalyzerExecutionError(f"Analyzer timed out after {request.timeout}s.") from e
        except FileNotFoundError as e:
            raise AnalyzerUnavailable(f"Analyzer executable '{self.executable}' disappeared: {e}") from e
        except OSError as e:
            raise AnalyzerExecutionError(f"Failed to execute analyzer: {e}") from e

        if proc.returncode != 0:
            raise AnalyzerExecutionError(
                f"Analyzer exited with code {proc.returncode}:\n{tail(proc.stderr)}"
            )

        try:
            payload = json.loads(proc.stdout, parse_constant=_reject_constant)
        except ValueError as e:
            raise AnalyzerExecutionError(
                f"Analyzer output is not valid JSON: {e}\n{tail(proc.stdout)}"
            ) from e
        if not isinstance(payload, Mapping):
            raise AnalyzerExecutionError("Analyzer output must be a JSON object.")
        return payload

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from ai_attribution_ci import cli
from ai_attribution_ci.paths import ARTIFACT_FILENAME

from conftest import FakeAnalyzer, sample_payload

runner = CliRunner()


@pytest.fixture(autouse=True)
def _outside_ci(monkeypatch: pytest.MonkeyPatch):
    for var in (
        "GITHUB_ACTIONS",
        "GITHUB_OUTPUT",
        "GITHUB_STEP_SUMMARY",
        "AI_ATTRIBUTION_ANALYZER",
        "AI_ATTRIBUTION_INSTALL_COMMAND",
        "AI_ATTRIBUTION_TIMEOUT",
    ):
        monkeypatch.delenv(var, raising=False)
    root = logging.getLogger()
    level = root.level
    yield
    # The CLI attaches a handler to the runner's temporary stderr.
    for h in list(root.handlers):
        if h.get_name() == "ai_attribution_ci.console":
            root.removeHandler(h)
    root.setLevel(level)


@pytest.fixture
def fake(monkeypatch: pytest.MonkeyPatch) -> dict:
    """Replace the command analyzer; records how the CLI constructed it."""
    seen: dict = {}

    def factory(executable: str, install_command: str) -> FakeAnalyzer:
        seen["executable"] = executable
        seen["install_command"] = install_command
        seen["analyzer"] = FakeAnalyzer(sample_payload(AIPercentage=seen.get("pct", 30)))
        return seen["analyzer"]

    monkeypatch.setattr(cli, "CommandAnalyzer", factory)
    return seen


def test_run_writes_artifact_and_exits_zero(git_repo: Path, tmp_path: Path, fake: dict) -> None:
    res = runner.invoke(
        cli.app,
        ["run", "--repository", str(git_repo), "--since", "7 days ago", "--minimum-threshold", "20",
         "--output-dir", str(tmp_path)],
    )
    assert res.exit_code == 0, res.output
    assert "PASSED" in res.output
    assert json.loads((tmp_path / ARTIFACT_FILENAME).read_text(encoding="utf-8"))["TotalCommits"] == 40
    assert fake["executable"] == "git-ai-attribution"
    assert fake["analyzer"].calls[0].since == "7 days ago"


def test_run_below_threshold_is_still_exit_zero(git_repo: Path, tmp_path: Path, fake: dict) -> None:
    fake["pct"] = 15
    res = runner.invoke(
        cli.app,
        ["run", "--repository", str(git_repo), "--minimum-threshold", "20", "--output-dir", str(tmp_path)],
    )
    assert res.exit_code == 0, res.output
    assert "WARNING" in res.output


def test_negative_threshold_exits_one_without_analysis(git_repo: Path, tmp_path: Path, fake: dict) -> None:
    res = runner.invoke(
        cli.app,
        ["run", "--repository", str(git_repo), "--minimum-threshold", "-5", "--output-dir", str(tmp_path)],
    )
    assert res.exit_code == 1
    assert fake["analyzer"].calls == []
    assert not (tmp_path / ARTIFACT_FILENAME).exists()


def test_analyzer_options_come_from_environment(git_repo: Path, tmp_path: Path, fake: dict) -> None:
    res = runner.invoke(
        cli.app,
        ["run", "--repository", str(git_repo), "--output-dir", str(tmp_path)],
        env={"AI_ATTRIBUTION_ANALYZER": "my-analyzer", "AI_ATTRIBUTION_INSTALL_COMMAND": "pipx install my-analyzer"},
    )
    assert res.exit_code == 0, res.output
    assert fake["executable"] == "my-analyzer"
    assert fake["install_command"] == "pipx install my-analyzer"


def test_run_in_github_actions_appends_outputs(git_repo: Path, tmp_path: Path, fake: dict) -> None:
    out = tmp_path / "github_output"
    summary = tmp_path / "summary.md"
    out.touch()
    summary.touch()
    res = runner.invoke(
        cli.app,
        ["run", "--repository", str(git_repo), "--minimum-threshold", "20", "--output-dir", str(tmp_path)],
        env={"GITHUB_ACTIONS": "true", "GITHUB_OUTPUT": str(out), "GITHUB_STEP_SUMMARY": str(summary)},
    )
    assert res.exit_code == 0, res.output
    assert "ai-percentage=30" in out.read_text(encoding="utf-8")
    assert "| Total Commits | 40 |" in summary.read_text(encoding="utf-8")


def test_check_analyzer_reports_missing_executable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("shutil.which", lambda name: None)
    res = runner.invoke(cli.app, ["check-analyzer", "--analyzer", "definitely-not-installed"])
    assert res.exit_code == 1


def test_check_analyzer_reports_resolved_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("shutil.which", lambda name: f"/opt/bin/{name}")
    res = runner.invoke(cli.app, ["check-analyzer", "--analyzer", "git-ai-attribution"])
    assert res.exit_code == 0
    assert "/opt/bin/git-ai-attribution" in res.output


def test_check_analyzer_rejects_malformed_install_command(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("shutil.which", lambda name: None)
    res = runner.invoke(cli.app, ["check-analyzer", "--install-command", 'pipx install "oops'])
    assert res.exit_code == 1
    assert res.exception is None or isinstance(res.exception, SystemExit)
    assert "malformed" in res.output

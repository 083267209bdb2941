from __future__ import annotations

from pathlib import Path

from .errors import ConfigValidationError
from .models import RunConfig
from .paths import find_vcs_root


def validate_config(config: RunConfig) -> Path:
    """
    Check a RunConfig before anything touches the analyzer.

    Returns the resolved version-control root of `config.repository`.
    Raises ConfigValidationError on the first violation.
    """
    threshold = config.minimum_threshold
    # bool is an int subclass; reject it explicitly.
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        raise ConfigValidationError(
            f"minimum_threshold must be an integer percentage, got {threshold!r}."
        )
    if not 0 <= threshold <= 100:
        raise ConfigValidationError(
            f"minimum_threshold must be between 0 and 100, got {threshold}."
        )

    if not isinstance(config.since, str) or not config.since.strip():
        raise ConfigValidationError("since must be a non-empty time boundary (e.g. '7 days ago').")

    if config.analyzer_timeout is not None and config.analyzer_timeout <= 0:
        raise ConfigValidationError(
            f"analyzer_timeout must be positive when set, got {config.analyzer_timeout}."
        )

    repo = Path(config.repository or ".")
    try:
        if not repo.is_dir():
            raise ConfigValidationError(f"Repository path does not exist or is not a directory: {repo}")
        root = find_vcs_root(repo)
    except OSError as e:
        # Name too long, permission denied and the like.
        raise ConfigValidationError(f"Repository path is not accessible: {e}") from e
    if root is None:
        raise ConfigValidationError(f"Repository path is not inside a git work tree: {repo}")
    return root

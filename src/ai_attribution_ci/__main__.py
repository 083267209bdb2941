"""Package entry point.

Preferred invocation is via the installed console script:

    ai-attribution-ci run --since "7 days ago"

For convenience we also support:

    python -m ai_attribution_ci ...
"""

from __future__ import annotations

from .cli import app


def main() -> None:
    """Entry point used by `python -m ai_attribution_ci`."""

    app()


if __name__ == "__main__":
    main()

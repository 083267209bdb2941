"""
Logging setup for the CLI.

Library modules only create loggers (`logging.getLogger(__name__)`); the CLI
calls `setup_logging` once so diagnostics land on stderr and stdout stays
reserved for progress lines, results and CI annotations.
"""

from __future__ import annotations

import logging
import sys


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "ai_attribution_ci.console"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logging for a CLI run.

    Replaces a handler installed by a previous call but leaves handlers owned
    by others alone. Unknown level names fall back to INFO.
    """
    log_level = getattr(logging, (level or "INFO").upper(), None)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in list(root_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(handler)

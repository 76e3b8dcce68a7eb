"""Logging setup for benchmark programs.

Progress and result tables are written to stdout by the reporters;
log records (including errors) go to stderr.
"""

from __future__ import annotations

import logging
import sys

__all__ = ["LOG_FORMAT", "configure_logging"]

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Install a single stderr handler on the access_bench logger.

    Calling this more than once replaces the handler instead of stacking.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("access_bench")
    for handler in list(logger.handlers):
        if getattr(handler, "_access_bench", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._access_bench = True  # type: ignore[attr-defined]

    logger.addHandler(handler)
    logger.setLevel(level)

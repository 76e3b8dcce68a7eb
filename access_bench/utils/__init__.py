"""Utility modules for access-bench."""

from access_bench.utils.log import LOG_FORMAT, configure_logging

__all__ = [
    "LOG_FORMAT",
    "configure_logging",
]

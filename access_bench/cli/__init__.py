r"""
Command-line interface for access-bench.

    access-bench run sqlite -p quick -f json,markdown
    access-bench list
"""

from access_bench.cli.main import app, append_main, main, postgres_main, sqlite_main, sqlite_wal_main

__all__ = [
    "app",
    "append_main",
    "main",
    "postgres_main",
    "sqlite_main",
    "sqlite_wal_main",
]

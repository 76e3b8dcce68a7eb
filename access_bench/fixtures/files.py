r"""
Log-file fixture for append benchmarks.

Two files: one appended to by awaitable writes, one by blocking writes.

    from access_bench.fixtures.files import AppendLogFixture

    fixture = AppendLogFixture(Path("./bench-data"))
    await fixture.prepare()
    fixture.sync_log_path.open("ab")
"""

import logging
from pathlib import Path

from access_bench.fixtures.base import BaseFixture, FixtureRegistry

__all__ = ["AppendLogFixture", "ASYNC_LOG_NAME", "SYNC_LOG_NAME"]

logger = logging.getLogger("access_bench.fixtures.files")

ASYNC_LOG_NAME = "benchmark-log.txt"
SYNC_LOG_NAME = "benchmark-sync-log.txt"


@FixtureRegistry.register("append_log")
class AppendLogFixture(BaseFixture):
    """Empty log files recreated on prepare()."""

    def __init__(self, directory: Path | str, *, keep_files: bool = True) -> None:
        self._directory = Path(directory)
        self._keep_files = keep_files

    @property
    def name(self) -> str:
        return "append log files"

    @property
    def async_log_path(self) -> Path:
        return self._directory / ASYNC_LOG_NAME

    @property
    def sync_log_path(self) -> Path:
        return self._directory / SYNC_LOG_NAME

    async def _open(self) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        for path in (self.async_log_path, self.sync_log_path):
            path.unlink(missing_ok=True)
            path.write_bytes(b"")

    async def reset_between(self) -> None:
        for path in (self.async_log_path, self.sync_log_path):
            path.write_bytes(b"")

    def file_sizes(self) -> dict[str, int]:
        """Current size in bytes of each log file (0 if missing)."""
        sizes: dict[str, int] = {}
        for label, path in (("async", self.async_log_path), ("sync", self.sync_log_path)):
            sizes[label] = path.stat().st_size if path.exists() else 0
        return sizes

    async def _close(self) -> None:
        if self._keep_files:
            return
        for path in (self.async_log_path, self.sync_log_path):
            path.unlink(missing_ok=True)

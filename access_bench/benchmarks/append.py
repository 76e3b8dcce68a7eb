r"""
File append benchmark: awaitable vs blocking appends to a log file.

    access-bench run append --profile quick
"""

import asyncio
import logging
from pathlib import Path

import anyio

from access_bench.benchmarks.base import BaseBenchmark, BenchmarkRegistry
from access_bench.config import Settings
from access_bench.datasets import SyntheticUsers
from access_bench.fixtures.base import BaseFixture
from access_bench.fixtures.files import AppendLogFixture
from access_bench.runner import Suite, Trial

__all__ = ["FileAppendBenchmark", "append_async", "append_sync"]

logger = logging.getLogger("access_bench.benchmarks.append")

MULTIPLE_APPENDS = 5


async def append_async(path: Path, entry: str) -> None:
    """Append `entry` to `path` without blocking the event loop."""
    async with await anyio.open_file(path, "a", encoding="utf-8") as f:
        await f.write(entry)


def append_sync(path: Path, entry: str) -> None:
    with open(path, "a", encoding="utf-8") as f:
        f.write(entry)


@BenchmarkRegistry.register("append")
class FileAppendBenchmark(BaseBenchmark):
    """Async vs sync file appends, including fire-and-forget writes."""

    @property
    def name(self) -> str:
        return "append"

    def create_fixture(self, settings: Settings) -> AppendLogFixture:
        return AppendLogFixture(settings.data_dir)

    def build_suites(self, fixture: BaseFixture, settings: Settings) -> list[Suite]:
        fixture = self._require_fixture(fixture, AppendLogFixture)
        entries = SyntheticUsers()

        async def single_async() -> None:
            await append_async(fixture.async_log_path, entries.log_entry())

        def single_sync() -> None:
            append_sync(fixture.sync_log_path, entries.log_entry())

        async def multiple_async() -> None:
            await asyncio.gather(
                *(append_async(fixture.async_log_path, entries.log_entry()) for _ in range(MULTIPLE_APPENDS))
            )

        def multiple_sync() -> None:
            for _ in range(MULTIPLE_APPENDS):
                append_sync(fixture.sync_log_path, entries.log_entry())

        async def fire_and_forget() -> None:
            await append_async(fixture.async_log_path, entries.log_entry())

        suite = Suite("File Append Operations")
        suite.add(Trial.awaitable("anyio.open_file - Single Append", single_async))
        suite.add(Trial.sync("open(mode='a') - Single Append", single_sync))
        suite.add(Trial.awaitable("anyio.open_file - Multiple Appends", multiple_async))
        suite.add(Trial.sync("open(mode='a') - Multiple Appends", multiple_sync))
        suite.add(Trial.dispatch("anyio.open_file - Fire and Forget", fire_and_forget))
        return [suite]

    def summary(self, fixture: BaseFixture) -> list[str]:
        fixture = self._require_fixture(fixture, AppendLogFixture)
        sizes = fixture.file_sizes()
        return [
            "",
            f"Async log file size: {sizes['async'] / 1024:.2f} KB",
            f"Sync log file size: {sizes['sync'] / 1024:.2f} KB",
        ]

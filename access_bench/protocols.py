r"""
Protocol definitions for fixtures and reporters.

All fixtures must implement the Fixture protocol.
Anything displaying suite results implements SuiteReporter.

    from access_bench.protocols import Fixture

    class MyFixture(Fixture):
        ...
"""

from typing import Protocol, runtime_checkable

from access_bench.types import SuiteResult

__all__ = [
    "Fixture",
    "SuiteReporter",
]


@runtime_checkable
class Fixture(Protocol):
    """Protocol for external-state setup and teardown.

    A fixture owns the files, connections and seed rows a benchmark
    program's trials operate on.
    """

    @property
    def name(self) -> str:
        """Human-readable fixture name."""
        ...

    async def prepare(self) -> None:
        """Create files, open connections, seed rows. Raises on failure."""
        ...

    async def reset_between(self) -> None:
        """Return shared state to its baseline between suites."""
        ...

    async def teardown(self) -> None:
        """Release every held resource. Safe to call more than once."""
        ...


@runtime_checkable
class SuiteReporter(Protocol):
    """Protocol for displaying results as each suite completes."""

    def suite_finished(self, result: SuiteResult) -> None:
        """Display a completed suite's results."""
        ...

    def run_finished(self, results: list[SuiteResult]) -> None:
        """Display a trailer once every suite has completed."""
        ...

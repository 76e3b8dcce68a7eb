r"""
Base benchmark program implementation.

A program owns one fixture and an ordered list of suites built against
it, and runs them through the SuiteRunner.

    from access_bench.benchmarks.base import BaseBenchmark, BenchmarkRegistry

    @BenchmarkRegistry.register("my_program")
    class MyBenchmark(BaseBenchmark):
        ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import partial
from typing import Any, TypeVar

from access_bench.config import Settings
from access_bench.fixtures.base import BaseFixture
from access_bench.reporting.console import ConsoleReporter
from access_bench.runner import RunnerConfig, RunResult, Suite, SuiteRunner
from access_bench.runner.orchestrator import ProgressCallback

__all__ = ["BaseBenchmark", "BenchmarkRegistry"]

F = TypeVar("F", bound=BaseFixture)


class BenchmarkRegistry:
    """Registry for benchmark programs."""

    _benchmarks: dict[str, type[BaseBenchmark]] = {}

    @classmethod
    def register(cls, name: str) -> Any:
        """Decorator to register a benchmark class."""

        def decorator(benchmark_cls: type[BaseBenchmark]) -> type[BaseBenchmark]:
            cls._benchmarks[name] = benchmark_cls
            return benchmark_cls

        return decorator

    @classmethod
    def get(cls, name: str) -> type[BaseBenchmark] | None:
        """Get benchmark class by name."""
        return cls._benchmarks.get(name)

    @classmethod
    def list(cls) -> list[str]:
        """List registered benchmark names."""
        return list(cls._benchmarks.keys())

    @classmethod
    def create(cls, name: str) -> BaseBenchmark:
        """Create benchmark instance by name."""
        bench_cls = cls.get(name)
        if bench_cls is None:
            valid = ", ".join(cls.list()) or "none"
            msg = f"Unknown benchmark '{name}'. Registered: {valid}"
            raise ValueError(msg)
        return bench_cls()


class BaseBenchmark(ABC):
    """Base class for benchmark programs."""

    reset_between_suites: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Benchmark name."""
        ...

    @property
    def description(self) -> str:
        """Human-readable description."""
        doc = self.__class__.__doc__ or self.name
        return doc.strip().splitlines()[0]

    @abstractmethod
    def create_fixture(self, settings: Settings) -> BaseFixture:
        """Build (but do not prepare) the program's fixture."""
        ...

    @abstractmethod
    def build_suites(self, fixture: BaseFixture, settings: Settings) -> list[Suite]:
        """Build the ordered suites; trials resolve fixture handles lazily."""
        ...

    def summary(self, fixture: BaseFixture) -> list[str]:
        """Lines printed after the last suite, before teardown."""
        return []

    def _require_fixture(self, fixture: BaseFixture, fixture_cls: type[F]) -> F:
        if not isinstance(fixture, fixture_cls):
            msg = f"{self.name} needs a {fixture_cls.__name__}, got {type(fixture).__name__}"
            raise TypeError(msg)
        return fixture

    async def run(
        self,
        settings: Settings,
        *,
        display: bool = True,
        progress: ProgressCallback | None = None,
    ) -> RunResult:
        """Prepare the fixture, run every suite in order and tear down.

        Args:
            settings: Runtime settings (profile, data dir, connection URLs).
            display: Print each suite's results as it completes.
            progress: Optional (suite_name, status) callback.

        Returns:
            RunResult with every suite's results.
        """
        fixture = self.create_fixture(settings)
        suites = self.build_suites(fixture, settings)

        reporter = ConsoleReporter(summary=partial(self.summary, fixture)) if display else None
        runner = SuiteRunner(
            fixture,
            config=RunnerConfig(
                sampling=settings.sampling,
                reset_between_suites=self.reset_between_suites,
            ),
            reporter=reporter,
        )
        if progress is not None:
            runner.set_progress_callback(progress)

        return await runner.run(suites)

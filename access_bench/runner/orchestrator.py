r"""
Sequential suite runner.

Suites are consumed from an ordered queue by a single driver loop: a suite
starts only after the previous suite finished, its results were displayed
and (optionally) the fixture was reset. Fixture teardown runs exactly once,
whether the run succeeded or not.

    from access_bench.runner import SuiteRunner, RunnerConfig

    runner = SuiteRunner(fixture, config=RunnerConfig(sampling="quick"))
    result = await runner.run([insert_suite, select_suite])
"""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from access_bench.config import get_profile
from access_bench.protocols import Fixture, SuiteReporter
from access_bench.runner.suite import Suite
from access_bench.runner.timing import Timer
from access_bench.types import SamplingConfig, SuiteResult

__all__ = ["SuiteRunner", "RunnerConfig", "RunResult", "ProgressCallback"]

logger = logging.getLogger("access_bench.runner")

ProgressCallback = Callable[[str, str], None]


@dataclass
class RunnerConfig:
    """Configuration for a sequential run.

    Attributes:
        sampling: Sampling profile or profile name.
        reset_between_suites: Call fixture.reset_between() between suites.
        continue_on_setup_error: Run best-effort when fixture setup fails.
    """

    sampling: str | SamplingConfig = "default"
    reset_between_suites: bool = False
    continue_on_setup_error: bool = True


@dataclass
class RunResult:
    """Results from a runner pass.

    Attributes:
        results: Suite results in run order.
        started_at: Timestamp when run started.
        completed_at: Timestamp when run completed.
        sampling: Sampling profile used.
        fixture: Fixture name.
        errors: Setup, suite, display and reset errors, in order.
        torn_down: Whether final teardown ran.
    """

    results: list[SuiteResult] = field(default_factory=list)
    started_at: float = 0.0
    completed_at: float = 0.0
    sampling: SamplingConfig | None = None
    fixture: str = ""
    errors: list[str] = field(default_factory=list)
    torn_down: bool = False

    @property
    def duration_seconds(self) -> float:
        """Total duration in seconds."""
        return self.completed_at - self.started_at

    @property
    def success_count(self) -> int:
        """Number of successful trials."""
        return sum(1 for s in self.results for t in s.trials if t.ok)

    @property
    def failure_count(self) -> int:
        """Number of failed trials plus suites that failed to run."""
        failed_trials = sum(1 for s in self.results for t in s.trials if not t.ok)
        failed_suites = sum(1 for s in self.results if s.error is not None)
        return failed_trials + failed_suites


class SuiteRunner:
    """Drives suites to completion one at a time."""

    def __init__(
        self,
        fixture: Fixture,
        *,
        config: RunnerConfig | None = None,
        reporter: SuiteReporter | None = None,
    ) -> None:
        self._fixture = fixture
        self._config = config or RunnerConfig()
        self._reporter = reporter
        self._progress_callback: ProgressCallback | None = None

    def set_progress_callback(self, callback: ProgressCallback) -> None:
        """Set callback for progress updates."""
        self._progress_callback = callback

    def _progress(self, suite_name: str, status: str) -> None:
        if self._progress_callback:
            self._progress_callback(suite_name, status)

    def _resolve_sampling(self) -> SamplingConfig:
        sampling = self._config.sampling
        if isinstance(sampling, str):
            return get_profile(sampling)
        return sampling

    async def run(self, suites: Iterable[Suite]) -> RunResult:
        """Prepare the fixture, run every suite in order, tear down once.

        Args:
            suites: Suites to run, in order.

        Returns:
            RunResult with one SuiteResult per suite.
        """
        result = RunResult()
        result.started_at = time.time()
        result.sampling = self._resolve_sampling()
        result.fixture = self._fixture.name

        queue: deque[Suite] = deque(suites)

        try:
            await self._prepare(result)

            while queue:
                suite = queue.popleft()
                suite_result = await self._run_suite(suite, result.sampling, result)
                result.results.append(suite_result)
                self._display(suite_result, result)

                if queue and self._config.reset_between_suites:
                    await self._reset(result)

            if self._reporter is not None:
                self._reporter.run_finished(result.results)
        finally:
            await self._teardown(result)
            result.completed_at = time.time()

        return result

    async def _prepare(self, result: RunResult) -> None:
        try:
            await self._fixture.prepare()
        except Exception as e:
            logger.error("Fixture setup failed for %s: %s", self._fixture.name, e)
            result.errors.append(f"setup: {e}")
            if not self._config.continue_on_setup_error:
                raise
            logger.warning("Continuing with whatever state already exists")

    async def _run_suite(self, suite: Suite, sampling: SamplingConfig, result: RunResult) -> SuiteResult:
        self._progress(suite.name, "running")
        logger.info("Running suite '%s' (%d trials)", suite.name, len(suite.trials))

        try:
            with Timer() as timer:
                suite_result = await suite.run(sampling)
        except Exception as e:
            logger.error("Error in suite '%s': %s", suite.name, e)
            result.errors.append(f"{suite.name}: {e}")
            self._progress(suite.name, "failed")
            partial = suite.to_result()
            partial.error = str(e) or type(e).__name__
            return partial

        suite_result.metadata["elapsed_seconds"] = timer.elapsed_seconds
        self._progress(suite.name, "success" if suite_result.ok else "failed")
        return suite_result

    def _display(self, suite_result: SuiteResult, result: RunResult) -> None:
        if self._reporter is None:
            return
        try:
            self._reporter.suite_finished(suite_result)
        except Exception as e:
            logger.error("Error displaying results for '%s': %s", suite_result.suite_name, e)
            result.errors.append(f"display {suite_result.suite_name}: {e}")

    async def _reset(self, result: RunResult) -> None:
        try:
            await self._fixture.reset_between()
        except Exception as e:
            logger.error("Error resetting %s between suites: %s", self._fixture.name, e)
            result.errors.append(f"reset: {e}")

    async def _teardown(self, result: RunResult) -> None:
        try:
            await self._fixture.teardown()
        except Exception as e:
            logger.error("Error during cleanup: %s", e)
            result.errors.append(f"teardown: {e}")
        result.torn_down = True

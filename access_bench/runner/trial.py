r"""
Trials: named, timeable units of work.

A trial's work is either synchronous, awaitable, or fire-and-forget
(dispatched as a task and measured for dispatch latency only).

    from access_bench.runner.trial import Trial, run_trial

    trial = Trial.sync("Native sqlite3 - Select By Id", select_by_id, min_samples=5)
    result = await run_trial(trial, sampling, suite_name="Select Operations")
"""

from __future__ import annotations

import asyncio
import gc
import logging
import math
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from access_bench.runner.timing import compute_stats
from access_bench.types import SamplingConfig, Status, TimingStats, TrialKind, TrialResult

__all__ = ["Trial", "run_trial"]

logger = logging.getLogger("access_bench.runner.trial")

# Upper bound on operations per sample.
MAX_CYCLES = 1_000_000
# Dispatched tasks are drained after every sample, keep the batch small.
MAX_DISPATCH_CYCLES = 64


@dataclass(frozen=True, slots=True)
class Trial:
    """A single named timed operation within a suite.

    Attributes:
        name: Trial name, unique within its suite.
        work: Zero-argument callable performing one operation.
        min_samples: Minimum number of timed samples.
        kind: How the work signals completion.
    """

    name: str
    work: Callable[[], Any]
    min_samples: int = 5
    kind: TrialKind = TrialKind.SYNC

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Trial name must not be empty")
        if self.min_samples < 1:
            msg = f"min_samples must be a positive integer, got {self.min_samples}"
            raise ValueError(msg)

    @classmethod
    def sync(cls, name: str, work: Callable[[], Any], *, min_samples: int = 5) -> Trial:
        """Trial whose work returns when done."""
        return cls(name=name, work=work, min_samples=min_samples, kind=TrialKind.SYNC)

    @classmethod
    def awaitable(cls, name: str, work: Callable[[], Awaitable[Any]], *, min_samples: int = 5) -> Trial:
        """Trial whose work returns an awaitable that resolves when done."""
        return cls(name=name, work=work, min_samples=min_samples, kind=TrialKind.ASYNC)

    @classmethod
    def dispatch(cls, name: str, work: Callable[[], Awaitable[Any]], *, min_samples: int = 5) -> Trial:
        """Fire-and-forget trial measuring dispatch latency, not completion."""
        return cls(name=name, work=work, min_samples=min_samples, kind=TrialKind.DISPATCH)


async def _time_sync(work: Callable[[], Any], cycles: int) -> int:
    start = time.perf_counter_ns()
    for _ in range(cycles):
        work()
    return time.perf_counter_ns() - start


async def _time_async(work: Callable[[], Awaitable[Any]], cycles: int) -> int:
    start = time.perf_counter_ns()
    for _ in range(cycles):
        await work()
    return time.perf_counter_ns() - start


class _Dispatcher:
    """Times task dispatch and drains the dispatched tasks untimed."""

    def __init__(self, trial_name: str) -> None:
        self._trial_name = trial_name
        self.failures = 0

    async def __call__(self, work: Callable[[], Awaitable[Any]], cycles: int) -> int:
        tasks: list[asyncio.Future[Any]] = []
        start = time.perf_counter_ns()
        for _ in range(cycles):
            tasks.append(asyncio.ensure_future(work()))
        elapsed = time.perf_counter_ns() - start

        outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                self.failures += 1
                logger.error("Dispatched work for '%s' failed: %s", self._trial_name, outcome)
        return elapsed


async def _sample(
    timer: Callable[[Callable[[], Any], int], Awaitable[int]],
    trial: Trial,
    sampling: SamplingConfig,
    *,
    max_cycles: int,
) -> TimingStats:
    """Collect samples until the minimum is met and the time budget is spent."""
    for _ in range(sampling.warmup):
        await timer(trial.work, 1)

    # Calibrate so one sample lasts at least min_sample_time_seconds.
    probe_ns = await timer(trial.work, 1)
    min_sample_ns = sampling.min_sample_time_seconds * 1_000_000_000
    cycles = 1
    if 0 < probe_ns < min_sample_ns:
        cycles = min(max_cycles, math.ceil(min_sample_ns / probe_ns))
    elif probe_ns == 0:
        cycles = max_cycles

    max_samples = max(sampling.max_samples, trial.min_samples)
    budget_ns = sampling.max_time_seconds * 1_000_000_000
    samples: list[float] = []
    started = time.perf_counter_ns()

    while True:
        gc.disable()
        try:
            elapsed_ns = await timer(trial.work, cycles)
        finally:
            gc.enable()
        samples.append(elapsed_ns / cycles / 1_000_000_000)

        if len(samples) >= max_samples:
            break
        if len(samples) >= trial.min_samples and time.perf_counter_ns() - started >= budget_ns:
            break
        # Let other scheduled callbacks (dispatched writes, driver I/O) progress.
        await asyncio.sleep(0)

    return compute_stats(samples, cycles=cycles)


async def run_trial(trial: Trial, sampling: SamplingConfig, *, suite_name: str = "") -> TrialResult:
    """Run a trial's full sampling pass.

    Errors raised by the work are recorded on the result, never raised.

    Args:
        trial: Trial to run.
        sampling: Sampling budget.
        suite_name: Name of the containing suite (for the result).

    Returns:
        TrialResult with statistics, or FAILED status and the error message.
    """
    dispatcher: _Dispatcher | None = None
    try:
        if trial.kind == TrialKind.SYNC:
            stats = await _sample(_time_sync, trial, sampling, max_cycles=MAX_CYCLES)
        elif trial.kind == TrialKind.ASYNC:
            stats = await _sample(_time_async, trial, sampling, max_cycles=MAX_CYCLES)
        else:
            dispatcher = _Dispatcher(trial.name)
            stats = await _sample(dispatcher, trial, sampling, max_cycles=MAX_DISPATCH_CYCLES)
    except Exception as e:
        logger.error("Trial '%s' in '%s' failed: %s", trial.name, suite_name, e)
        return TrialResult(
            trial_name=trial.name,
            suite_name=suite_name,
            kind=trial.kind,
            status=Status.FAILED,
            error=str(e) or type(e).__name__,
            min_samples=trial.min_samples,
        )

    if dispatcher is not None and dispatcher.failures:
        logger.warning("Trial '%s': %d dispatched operations failed", trial.name, dispatcher.failures)

    return TrialResult(
        trial_name=trial.name,
        suite_name=suite_name,
        kind=trial.kind,
        stats=stats,
        min_samples=trial.min_samples,
    )

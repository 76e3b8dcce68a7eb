r"""
Timing and statistics utilities for benchmarks.

    from access_bench.runner.timing import Timer, compute_stats

    with Timer() as t:
        do_something()
    stats = compute_stats([t.elapsed_seconds], cycles=1)
"""

import math
import statistics
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, ParamSpec, TypeVar

from access_bench.types import TimingStats

__all__ = ["Timer", "TimerResult", "measure_time", "compute_stats", "t_critical"]

P = ParamSpec("P")
R = TypeVar("R")

# Two-tailed Student-t critical values at 95% confidence, by degrees of freedom.
T_TABLE: dict[int, float] = {
    1: 12.706, 2: 4.303, 3: 3.182, 4: 2.776, 5: 2.571, 6: 2.447,
    7: 2.365, 8: 2.306, 9: 2.262, 10: 2.228, 11: 2.201, 12: 2.179,
    13: 2.16, 14: 2.145, 15: 2.131, 16: 2.12, 17: 2.11, 18: 2.101,
    19: 2.093, 20: 2.086, 21: 2.08, 22: 2.074, 23: 2.069, 24: 2.064,
    25: 2.06, 26: 2.056, 27: 2.052, 28: 2.048, 29: 2.045, 30: 2.042,
}
T_INFINITY = 1.96


@dataclass
class TimerResult:
    """Result from a timing measurement.

    Attributes:
        elapsed_ns: Elapsed time in nanoseconds.
        result: Return value from the timed function.
    """

    elapsed_ns: int
    result: Any = None

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds."""
        return self.elapsed_ns / 1_000_000

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        return self.elapsed_ns / 1_000_000_000


class Timer:
    """Context manager for timing code blocks.

        with Timer() as t:
            do_something()
        print(f"Elapsed: {t.elapsed_ms}ms")
    """

    def __init__(self) -> None:
        self._start: int = 0
        self._end: int = 0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self._end = time.perf_counter_ns()

    @property
    def elapsed_ns(self) -> int:
        """Elapsed time in nanoseconds."""
        return self._end - self._start

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds."""
        return self.elapsed_ns / 1_000_000

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        return self.elapsed_ns / 1_000_000_000


def measure_time(func: Callable[P, R], *args: P.args, **kwargs: P.kwargs) -> TimerResult:
    """Measure execution time of a function call.

    Args:
        func: Function to call.
        *args: Positional arguments.
        **kwargs: Keyword arguments.

    Returns:
        TimerResult with elapsed time and function result.
    """
    start = time.perf_counter_ns()
    result = func(*args, **kwargs)
    end = time.perf_counter_ns()
    return TimerResult(elapsed_ns=end - start, result=result)


def t_critical(degrees_of_freedom: int) -> float:
    """Student-t critical value for a 95% two-tailed interval."""
    if degrees_of_freedom < 1:
        return 0.0
    return T_TABLE.get(degrees_of_freedom, T_INFINITY)


def compute_stats(samples: Sequence[float], *, cycles: int = 1) -> TimingStats:
    """Compute sampling statistics from per-operation times in seconds.

    Args:
        samples: Seconds per operation, one value per sample.
        cycles: Operations timed within each sample.

    Returns:
        TimingStats with mean, spread and relative margin of error.
    """
    n = len(samples)
    if n == 0:
        return TimingStats(
            mean=0.0,
            median=0.0,
            stddev=0.0,
            min=0.0,
            max=0.0,
            moe=0.0,
            rme=0.0,
            samples=0,
            cycles=cycles,
        )

    mean = statistics.fmean(samples)
    stddev = statistics.stdev(samples) if n > 1 else 0.0
    sem = stddev / math.sqrt(n)
    moe = sem * t_critical(n - 1)
    rme = (moe / mean) * 100 if mean else 0.0

    return TimingStats(
        mean=mean,
        median=statistics.median(samples),
        stddev=stddev,
        min=min(samples),
        max=max(samples),
        moe=moe,
        rme=rme,
        samples=n,
        cycles=cycles,
    )

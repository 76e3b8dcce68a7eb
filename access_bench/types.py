r"""
Core types for data-access benchmarks.

    from access_bench.types import TrialResult, Status

    result = suite.results["Native sqlite3 - Single Insert"]
    if result.ok:
        print(f"Throughput: {result.ops_per_second:,.0f} ops/sec")
"""

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum, auto
from typing import Any

__all__ = [
    "Status",
    "TrialKind",
    "TimingStats",
    "SamplingConfig",
    "TrialResult",
    "SuiteResult",
]


class Status(IntEnum):
    """Trial outcome status."""

    SUCCESS = auto()
    FAILED = auto()
    SKIPPED = auto()


class TrialKind(StrEnum):
    """How a trial's work signals completion."""

    SYNC = "sync"
    ASYNC = "async"
    DISPATCH = "dispatch"


@dataclass(frozen=True, slots=True)
class TimingStats:
    """Sampling statistics for a trial.

    All times are seconds per operation.

    Attributes:
        mean: Mean time per operation.
        median: Median time per operation.
        stddev: Sample standard deviation.
        min: Fastest sample.
        max: Slowest sample.
        moe: Margin of error (95% confidence).
        rme: Relative margin of error in percent.
        samples: Number of samples taken.
        cycles: Operations timed per sample.
    """

    mean: float
    median: float
    stddev: float
    min: float
    max: float
    moe: float
    rme: float
    samples: int
    cycles: int = 1

    @property
    def mean_ms(self) -> float:
        """Mean time per operation in milliseconds."""
        return self.mean * 1000

    @property
    def ops_per_second(self) -> float:
        """Operations per second based on mean time."""
        if self.mean == 0:
            return float("inf")
        return 1 / self.mean


@dataclass(frozen=True, slots=True)
class SamplingConfig:
    """Sampling budget for every trial in a run.

    Attributes:
        name: Profile name (quick, default, thorough).
        max_time_seconds: Time budget per trial once min samples are met.
        min_sample_time_seconds: Shortest acceptable duration of one sample.
        max_samples: Hard cap on samples per trial.
        warmup: Untimed invocations before sampling.
    """

    name: str
    max_time_seconds: float = 5.0
    min_sample_time_seconds: float = 0.005
    max_samples: int = 500
    warmup: int = 1


@dataclass(frozen=True, slots=True)
class TrialResult:
    """Result of running one trial.

    Attributes:
        trial_name: Name of the trial.
        suite_name: Name of the containing suite.
        kind: Trial variant that produced the result.
        status: Outcome status.
        stats: Sampling statistics (None if the trial failed).
        error: Error message if failed.
        min_samples: Configured minimum sample count.
    """

    trial_name: str
    suite_name: str
    kind: TrialKind
    status: Status = Status.SUCCESS
    stats: TimingStats | None = None
    error: str | None = None
    min_samples: int = 1

    @property
    def ok(self) -> bool:
        """True if the trial completed successfully."""
        return self.status == Status.SUCCESS

    @property
    def ops_per_second(self) -> float:
        return self.stats.ops_per_second if self.stats else 0.0

    @property
    def rme(self) -> float:
        return self.stats.rme if self.stats else 0.0

    @property
    def sample_count(self) -> int:
        return self.stats.samples if self.stats else 0


@dataclass
class SuiteResult:
    """Collected results of one suite.

    Attributes:
        suite_name: Suite display name.
        trials: Trial results in registration order.
        error: Error that stopped the suite from running, if any.
        metadata: Additional result metadata.
    """

    suite_name: str
    trials: list[TrialResult] = field(default_factory=list)
    error: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True if the suite ran and every trial succeeded."""
        return self.error is None and all(t.ok for t in self.trials)

    def fastest(self) -> TrialResult | None:
        """Successful trial with the highest throughput."""
        succeeded = [t for t in self.trials if t.ok]
        if not succeeded:
            return None
        return max(succeeded, key=lambda t: t.ops_per_second)

r"""
Result collection and aggregation.

    from access_bench.reporting.collector import ResultCollector

    collector = ResultCollector()
    collector.start_session(benchmark="sqlite", profile="default")
    collector.add_suite_results(run_result.results)
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from access_bench.types import SuiteResult, TrialResult

__all__ = ["ResultCollector", "SessionInfo", "EnvironmentInfo"]


@dataclass
class SessionInfo:
    """Information about a benchmark session.

    Attributes:
        session_id: Unique session identifier.
        started_at: Session start timestamp.
        completed_at: Session end timestamp (empty if ongoing).
        benchmark: Benchmark program name.
        profile: Sampling profile name.
    """

    session_id: str = ""
    started_at: str = ""
    completed_at: str = ""
    benchmark: str = ""
    profile: str = ""


@dataclass
class EnvironmentInfo:
    """Information about the benchmark environment.

    Attributes:
        platform: Operating system platform.
        python_version: Python version string.
        cpu: CPU description.
        sqlite_version: Version of the linked SQLite library.
    """

    platform: str = ""
    python_version: str = ""
    cpu: str = ""
    sqlite_version: str = ""


class ResultCollector:
    """Collects suite results for export."""

    def __init__(self) -> None:
        self._results: list[SuiteResult] = []
        self._session = SessionInfo()
        self._environment = EnvironmentInfo()

    def start_session(self, *, benchmark: str, profile: str) -> None:
        """Start a new benchmark session."""
        started_at = datetime.now(UTC)
        self._session = SessionInfo(
            session_id=f"bench_{benchmark}_{started_at.strftime('%Y%m%d_%H%M%S')}",
            started_at=started_at.isoformat(),
            benchmark=benchmark,
            profile=profile,
        )
        self._collect_environment()

    def _collect_environment(self) -> None:
        import platform
        import sqlite3
        import sys

        self._environment = EnvironmentInfo(
            platform=platform.system().lower(),
            python_version=f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
            cpu=platform.processor() or "unknown",
            sqlite_version=sqlite3.sqlite_version,
        )

    def end_session(self) -> None:
        """End the current benchmark session."""
        self._session.completed_at = datetime.now(UTC).isoformat()

    def add_suite_result(self, result: SuiteResult) -> None:
        """Add one suite's results."""
        self._results.append(result)

    def add_suite_results(self, results: list[SuiteResult]) -> None:
        """Add several suites' results."""
        self._results.extend(results)

    @property
    def results(self) -> list[SuiteResult]:
        """All collected suite results."""
        return self._results

    @property
    def trial_results(self) -> list[TrialResult]:
        """Every trial result across suites, in run order."""
        return [t for s in self._results for t in s.trials]

    @property
    def session(self) -> SessionInfo:
        return self._session

    @property
    def environment(self) -> EnvironmentInfo:
        return self._environment

    def get_suite(self, name: str) -> SuiteResult | None:
        """Get a suite's results by name."""
        return next((s for s in self._results if s.suite_name == name), None)

    def compute_comparisons(self) -> dict[str, dict[str, float]]:
        """Throughput of each trial relative to the fastest in its suite.

        Returns:
            Dict mapping suite name to dict of trial name -> ratio (1.0 = fastest).
        """
        comparisons: dict[str, dict[str, float]] = {}

        for suite in self._results:
            rates = {t.trial_name: t.ops_per_second for t in suite.trials if t.ok}
            if not rates:
                continue

            best = max(rates.values())
            comparisons[suite.suite_name] = {
                name: round(rate / best if best > 0 else 0.0, 2) for name, rate in rates.items()
            }

        return comparisons

    def to_dict(self) -> dict[str, Any]:
        """Convert collected data to dictionary."""
        return {
            "session": {
                "id": self._session.session_id,
                "started_at": self._session.started_at,
                "completed_at": self._session.completed_at,
                "benchmark": self._session.benchmark,
                "profile": self._session.profile,
            },
            "environment": {
                "platform": self._environment.platform,
                "python_version": self._environment.python_version,
                "cpu": self._environment.cpu,
                "sqlite_version": self._environment.sqlite_version,
            },
            "suites": [self._suite_to_dict(s) for s in self._results],
            "comparisons": self.compute_comparisons(),
        }

    def _suite_to_dict(self, suite: SuiteResult) -> dict[str, Any]:
        data: dict[str, Any] = {
            "suite": suite.suite_name,
            "trials": [self._trial_to_dict(t) for t in suite.trials],
        }
        if suite.error:
            data["error"] = suite.error
        if suite.metadata:
            data["metadata"] = suite.metadata
        return data

    def _trial_to_dict(self, result: TrialResult) -> dict[str, Any]:
        data: dict[str, Any] = {
            "trial": result.trial_name,
            "kind": str(result.kind),
            "status": result.status.name,
            "min_samples": result.min_samples,
        }

        if result.stats:
            data["stats"] = {
                "ops_per_second": result.stats.ops_per_second,
                "mean_s": result.stats.mean,
                "median_s": result.stats.median,
                "stddev_s": result.stats.stddev,
                "rme_percent": result.stats.rme,
                "samples": result.stats.samples,
                "cycles": result.stats.cycles,
            }

        if result.error:
            data["error"] = result.error

        return data

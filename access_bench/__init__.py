r"""
access-bench: micro-benchmarks for data access paths.

Compares file appends, native database drivers and the SQLAlchemy query
builder on SQLite and PostgreSQL, with statistically sampled trials
grouped into suites.

    import asyncio

    from access_bench import Settings
    from access_bench.benchmarks import BenchmarkRegistry

    result = asyncio.run(BenchmarkRegistry.create("sqlite").run(Settings.from_env()))
"""

from access_bench.config import DEFAULT_PROFILE, PROFILES, Settings, get_profile
from access_bench.errors import BenchError, ConfigError, FixtureError, SuiteError
from access_bench.types import SamplingConfig, Status, SuiteResult, TimingStats, TrialKind, TrialResult

__all__ = [
    "BenchError",
    "ConfigError",
    "DEFAULT_PROFILE",
    "FixtureError",
    "PROFILES",
    "SamplingConfig",
    "Settings",
    "Status",
    "SuiteError",
    "SuiteResult",
    "TimingStats",
    "TrialKind",
    "TrialResult",
    "get_profile",
]

__version__ = "0.1.0"

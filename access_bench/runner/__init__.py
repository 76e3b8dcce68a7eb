r"""
Benchmark runner and orchestration.

Trials are timed, grouped into suites, and suites are driven one at a
time by the SuiteRunner.

    from access_bench.runner import Suite, SuiteRunner, Trial

    suite = Suite("Insert Operations", [Trial.sync("insert", insert_one)])
    result = await SuiteRunner(fixture).run([suite])
"""

from access_bench.runner.orchestrator import ProgressCallback, RunnerConfig, RunResult, SuiteRunner
from access_bench.runner.suite import Suite
from access_bench.runner.timing import Timer, compute_stats, measure_time
from access_bench.runner.trial import Trial, run_trial

__all__ = [
    "ProgressCallback",
    "RunResult",
    "RunnerConfig",
    "Suite",
    "SuiteRunner",
    "Timer",
    "Trial",
    "compute_stats",
    "measure_time",
    "run_trial",
]

r"""
Human-readable result display.

    from access_bench.reporting.console import ConsoleReporter, format_trial

    reporter = ConsoleReporter()
    runner = SuiteRunner(fixture, reporter=reporter)
"""

from collections.abc import Callable

import typer

from access_bench.types import SuiteResult, TrialResult

__all__ = ["ConsoleReporter", "format_trial"]


def format_trial(result: TrialResult) -> str:
    """One result line: name, rate, relative margin of error, samples."""
    if not result.ok:
        return f"  {result.trial_name}: FAILED"
    return (
        f"  {result.trial_name}: {round(result.ops_per_second):,} ops/sec "
        f"±{result.rme:.2f}% ({result.sample_count} runs sampled)"
    )


class ConsoleReporter:
    """Prints each suite's results to stdout as soon as it completes.

    Errors are echoed to stderr under the trial they belong to.
    """

    def __init__(self, *, summary: Callable[[], list[str]] | None = None) -> None:
        self._summary = summary

    def suite_finished(self, result: SuiteResult) -> None:
        typer.echo(f"\n{result.suite_name}:")
        for trial in result.trials:
            typer.echo(format_trial(trial))
            if trial.error:
                typer.echo(f"  Error: {trial.error}", err=True)
        if result.error:
            typer.echo(f"  Error in {result.suite_name}: {result.error}", err=True)

    def run_finished(self, results: list[SuiteResult]) -> None:
        typer.echo("\nBenchmark complete!")
        if self._summary is None:
            return
        for line in self._summary():
            typer.echo(line)

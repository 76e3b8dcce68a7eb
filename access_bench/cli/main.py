r"""
Command-line interface for access-bench.

    access-bench run sqlite -p quick -o results -f json,markdown
    access-bench list

Each program also has a flag-less entry point (`sqlite-benchmark`, ...)
that runs it with settings taken from the environment.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

from access_bench.benchmarks import BenchmarkRegistry
from access_bench.config import PROFILES, Settings, get_profile
from access_bench.errors import BenchError
from access_bench.reporting import EXPORTERS, ResultCollector
from access_bench.runner import RunResult
from access_bench.utils import configure_logging

__all__ = ["app", "main", "run_program", "append_main", "sqlite_main", "sqlite_wal_main", "postgres_main"]

logger = logging.getLogger("access_bench.cli")

app = typer.Typer(
    name="access-bench",
    help="Micro-benchmarks for file and database access paths.",
    no_args_is_help=True,
)


def run_program(name: str, settings: Settings, *, verbose: bool = False) -> RunResult:
    """Run one registered program to completion and return its results.

    Raises:
        ValueError: If `name` is not a registered program.
        BenchError: If the program cannot be configured.
    """
    program = BenchmarkRegistry.create(name)

    def progress(suite: str, status: str) -> None:
        typer.echo(f"  [{suite}] {status}")

    typer.echo(f"Running {program.name}: {program.description}")
    typer.echo("This may take a while...")
    return asyncio.run(program.run(settings, progress=progress if verbose else None))


def _export(run_result: RunResult, name: str, settings: Settings, output: Path, formats: list[str]) -> None:
    collector = ResultCollector()
    collector.start_session(benchmark=name, profile=settings.profile)
    collector.add_suite_results(run_result.results)
    collector.end_session()

    output.mkdir(parents=True, exist_ok=True)
    session_id = collector.session.session_id
    for fmt in formats:
        exporter = EXPORTERS[fmt]()
        path = output / f"{session_id}{exporter.extension}"
        exporter.export(collector, path)
        typer.echo(f"Exported {fmt}: {path}")


@app.command()
def run(
    name: Annotated[str, typer.Argument(help="Benchmark program (see `access-bench list`)")],
    profile: Annotated[
        str | None, typer.Option("-p", "--profile", help="Sampling profile: quick, default, thorough")
    ] = None,
    output: Annotated[Path | None, typer.Option("-o", "--output", help="Export directory")] = None,
    format_: Annotated[
        str, typer.Option("-f", "--format", help="Export formats (comma-separated): json, csv, markdown, all")
    ] = "json",
    verbose: Annotated[bool, typer.Option("-v", "--verbose", help="Verbose output")] = False,
) -> None:
    """Run a benchmark program and print results after each suite."""
    try:
        settings = Settings.from_env()
    except BenchError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    if profile is not None:
        settings.profile = profile
    configure_logging("DEBUG" if verbose else settings.log_level)

    try:
        get_profile(settings.profile)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    formats = [f.strip() for f in format_.split(",") if f.strip()]
    if "all" in formats:
        formats = list(EXPORTERS)
    unknown = [f for f in formats if f not in EXPORTERS]
    if unknown:
        typer.echo(f"Error: Unknown format(s): {', '.join(unknown)}", err=True)
        raise typer.Exit(1)

    try:
        result = run_program(name, settings, verbose=verbose)
    except (ValueError, BenchError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    except Exception as e:
        logger.exception("Error running %s benchmarks", name)
        raise typer.Exit(1) from e

    if output is not None:
        _export(result, name, settings, output, formats)

    typer.echo(
        f"\nCompleted in {result.duration_seconds:.1f}s: "
        f"{result.success_count} trials passed, {result.failure_count} failed"
    )


@app.command("list")
def list_programs() -> None:
    """List benchmark programs and sampling profiles."""
    typer.echo("Benchmark programs:")
    for name in BenchmarkRegistry.list():
        program = BenchmarkRegistry.create(name)
        typer.echo(f"  - {name}: {program.description}")

    typer.echo("\nSampling profiles:")
    for profile in PROFILES.values():
        typer.echo(
            f"  - {profile.name}: {profile.max_time_seconds}s per trial, "
            f"up to {profile.max_samples} samples"
        )


def _standalone(name: str) -> None:
    """Run `name` with environment settings; exit 1 on an unhandled failure."""
    configure_logging()
    try:
        settings = Settings.from_env()
        configure_logging(settings.log_level)
        run_program(name, settings)
    except Exception:
        logger.exception("Error running %s benchmarks", name)
        raise SystemExit(1) from None


def append_main() -> None:
    _standalone("append")


def sqlite_main() -> None:
    _standalone("sqlite")


def sqlite_wal_main() -> None:
    _standalone("sqlite-wal")


def postgres_main() -> None:
    _standalone("postgres")


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()

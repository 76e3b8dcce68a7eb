r"""
Tests for access_bench.runner.orchestrator module.
"""

import asyncio

import pytest

from access_bench.fixtures import BaseFixture, CompositeFixture, NullFixture
from access_bench.runner import RunnerConfig, RunResult, Suite, SuiteRunner, Trial
from access_bench.types import SuiteResult


class RecordingFixture(BaseFixture):
    """Fixture that logs lifecycle calls into a shared event list."""

    def __init__(
        self,
        events: list[str],
        *,
        label: str = "recording",
        fail_prepare: bool = False,
        fail_reset: bool = False,
        fail_close: bool = False,
    ) -> None:
        self.events = events
        self.label = label
        self.fail_reset = fail_reset
        self.resets = 0
        self.fail_prepare = fail_prepare
        self.fail_close = fail_close

    @property
    def name(self) -> str:
        return self.label

    async def _open(self) -> None:
        self.events.append("prepare")
        if self.fail_prepare:
            raise ConnectionError("server unreachable")

    async def reset_between(self) -> None:
        self.events.append("reset")
        self.resets += 1
        if self.fail_reset:
            raise OSError("database is locked")

    async def _close(self) -> None:
        self.events.append("teardown")
        if self.fail_close:
            raise OSError("busy")


class RecordingReporter:
    def __init__(self, events: list[str]) -> None:
        self.events = events
        self.finished: list[SuiteResult] | None = None

    def suite_finished(self, result: SuiteResult) -> None:
        self.events.append(f"display:{result.suite_name}")

    def run_finished(self, results: list[SuiteResult]) -> None:
        self.events.append("complete")
        self.finished = results


def _suite(name: str, events: list[str]) -> Suite:
    def work():
        if not events or events[-1] != f"trial:{name}":
            events.append(f"trial:{name}")

    return Suite(name, [Trial.sync(f"{name}-trial", work, min_samples=2)])


class TestRunnerConfig:
    def test_default_config(self):
        config = RunnerConfig()
        assert config.sampling == "default"
        assert config.reset_between_suites is False
        assert config.continue_on_setup_error is True


class TestRunResult:
    def test_counts(self):
        result = RunResult(started_at=10.0, completed_at=12.5)
        assert result.duration_seconds == 2.5
        assert result.success_count == 0
        assert result.failure_count == 0


class TestSuiteRunner:
    def test_suites_run_in_order(self, tiny_sampling):
        events: list[str] = []
        reporter = RecordingReporter(events)
        runner = SuiteRunner(
            RecordingFixture(events),
            config=RunnerConfig(sampling=tiny_sampling),
            reporter=reporter,
        )

        result = asyncio.run(runner.run([_suite("one", events), _suite("two", events), _suite("three", events)]))

        assert events == [
            "prepare",
            "trial:one",
            "display:one",
            "trial:two",
            "display:two",
            "trial:three",
            "display:three",
            "complete",
            "teardown",
        ]
        assert [s.suite_name for s in result.results] == ["one", "two", "three"]
        assert reporter.finished == result.results
        assert result.torn_down
        assert result.errors == []

    def test_reset_between_suites(self, tiny_sampling):
        events: list[str] = []
        runner = SuiteRunner(
            RecordingFixture(events),
            config=RunnerConfig(sampling=tiny_sampling, reset_between_suites=True),
        )

        asyncio.run(runner.run([_suite("one", events), _suite("two", events), _suite("three", events)]))

        assert events == [
            "prepare",
            "trial:one",
            "reset",
            "trial:two",
            "reset",
            "trial:three",
            "teardown",
        ]

    def test_failing_suite_does_not_stop_run(self, tiny_sampling):
        events: list[str] = []
        middle = _suite("two", events)

        def explode(suite):
            raise RuntimeError("listener crashed")

        middle.on_complete(explode)
        runner = SuiteRunner(
            RecordingFixture(events),
            config=RunnerConfig(sampling=tiny_sampling),
            reporter=RecordingReporter(events),
        )

        result = asyncio.run(runner.run([_suite("one", events), middle, _suite("three", events)]))

        assert [s.suite_name for s in result.results] == ["one", "two", "three"]
        assert result.results[1].error == "listener crashed"
        assert result.results[1].trials[0].ok
        assert result.results[2].ok
        assert result.errors == ["two: listener crashed"]
        assert events.count("teardown") == 1
        assert events[-2:] == ["complete", "teardown"]

    def test_reset_reaches_every_child_fixture(self, tiny_sampling):
        events: list[str] = []
        default = RecordingFixture(events, label="default", fail_reset=True)
        wal = RecordingFixture(events, label="wal")
        fixture = CompositeFixture(default, wal)
        runner = SuiteRunner(fixture, config=RunnerConfig(sampling=tiny_sampling, reset_between_suites=True))

        result = asyncio.run(runner.run([_suite("one", events), _suite("two", events)]))

        assert default.resets == 1
        assert wal.resets == 1
        assert result.errors == ["reset: default: database is locked"]
        assert result.results[1].ok

    def test_always_failing_middle_suite(self, tiny_sampling):
        events: list[str] = []

        def always_fails():
            raise RuntimeError("write rejected")

        middle = Suite("two", [Trial.sync("two-trial", always_fails)])
        runner = SuiteRunner(
            RecordingFixture(events),
            config=RunnerConfig(sampling=tiny_sampling),
            reporter=RecordingReporter(events),
        )

        result = asyncio.run(runner.run([_suite("one", events), middle, _suite("three", events)]))

        first, second, third = result.results
        assert first.ok and third.ok
        assert first.trials[0].sample_count >= 2
        assert len(second.trials) == 1
        assert second.trials[0].error == "write rejected"
        assert second.trials[0].sample_count == 0
        assert "display:two" in events
        assert events[-1] == "teardown"

    def test_setup_failure_is_best_effort(self, tiny_sampling):
        events: list[str] = []
        runner = SuiteRunner(RecordingFixture(events, fail_prepare=True), config=RunnerConfig(sampling=tiny_sampling))

        result = asyncio.run(runner.run([_suite("one", events)]))

        assert result.errors == ["setup: server unreachable"]
        assert result.results[0].ok
        assert events[-1] == "teardown"

    def test_setup_failure_aborts_when_configured(self, tiny_sampling):
        events: list[str] = []
        runner = SuiteRunner(
            RecordingFixture(events, fail_prepare=True),
            config=RunnerConfig(sampling=tiny_sampling, continue_on_setup_error=False),
        )

        with pytest.raises(ConnectionError):
            asyncio.run(runner.run([_suite("one", events)]))

        assert events == ["prepare", "teardown"]

    def test_teardown_error_logged(self, tiny_sampling):
        events: list[str] = []
        runner = SuiteRunner(RecordingFixture(events, fail_close=True), config=RunnerConfig(sampling=tiny_sampling))

        result = asyncio.run(runner.run([]))

        assert events == ["prepare", "teardown"]
        assert result.torn_down

    def test_teardown_runs_once(self, tiny_sampling):
        events: list[str] = []
        fixture = RecordingFixture(events)
        runner = SuiteRunner(fixture, config=RunnerConfig(sampling=tiny_sampling))

        asyncio.run(runner.run([]))
        asyncio.run(fixture.teardown())

        assert events.count("teardown") == 1
        assert fixture.closed

    def test_second_run_tears_down_again(self, tiny_sampling):
        events: list[str] = []
        runner = SuiteRunner(RecordingFixture(events), config=RunnerConfig(sampling=tiny_sampling))

        first = asyncio.run(runner.run([]))
        second = asyncio.run(runner.run([]))

        assert first.torn_down and second.torn_down
        assert second.errors == ["setup: Fixture 'recording' was torn down and cannot be prepared again"]
        assert events == ["prepare", "teardown"]

    def test_progress_callback(self, tiny_sampling):
        updates: list[tuple[str, str]] = []

        def broken():
            raise ValueError("bad row")

        suites = [
            Suite("good", [Trial.sync("t", lambda: None, min_samples=1)]),
            Suite("bad", [Trial.sync("t", broken)]),
        ]
        runner = SuiteRunner(NullFixture(), config=RunnerConfig(sampling=tiny_sampling))
        runner.set_progress_callback(lambda suite, status: updates.append((suite, status)))

        result = asyncio.run(runner.run(suites))

        assert updates == [("good", "running"), ("good", "success"), ("bad", "running"), ("bad", "failed")]
        assert result.success_count == 1
        assert result.failure_count == 1

    def test_named_profile(self):
        runner = SuiteRunner(NullFixture(), config=RunnerConfig(sampling="quick"))
        result = asyncio.run(runner.run([]))
        assert result.sampling is not None
        assert result.sampling.name == "quick"

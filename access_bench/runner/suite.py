r"""
Suites: ordered groups of trials measured and reported together.

    from access_bench.runner.suite import Suite

    suite = Suite("Insert Operations")
    suite.add(Trial.sync("Native sqlite3 - Single Insert", insert_one))
    suite.on_complete(lambda s: print(s.name, "done"))
    await suite.run(sampling)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from access_bench.errors import SuiteError
from access_bench.runner.trial import Trial, run_trial
from access_bench.types import SamplingConfig, SuiteResult, TrialResult

__all__ = ["Suite", "CompletionCallback"]

logger = logging.getLogger("access_bench.runner.suite")

CompletionCallback = Callable[["Suite"], None]


class Suite:
    """An ordered collection of trials sharing a display name.

    Trials run strictly one after another in registration order. Once every
    trial has finished (successfully or with a recorded error) the suite
    fires its completion listeners exactly once.
    """

    def __init__(self, name: str, trials: Iterable[Trial] = ()) -> None:
        self._name = name
        self._trials: list[Trial] = []
        self._results: dict[str, TrialResult] = {}
        self._listeners: list[CompletionCallback] = []
        self._started = False
        self._completed = False
        for trial in trials:
            self.add(trial)

    @property
    def name(self) -> str:
        return self._name

    @property
    def trials(self) -> list[Trial]:
        """Registered trials in order."""
        return list(self._trials)

    @property
    def results(self) -> dict[str, TrialResult]:
        """Results keyed by trial name, in registration order."""
        return dict(self._results)

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def errors(self) -> dict[str, str]:
        """Trial name to error message for every failed trial."""
        return {name: r.error or "" for name, r in self._results.items() if not r.ok}

    def add(self, trial: Trial) -> Suite:
        """Register a trial. Returns the suite so calls can be chained."""
        if self._started:
            msg = f"Cannot add trials to suite '{self._name}' after it started"
            raise SuiteError(msg)
        if any(t.name == trial.name for t in self._trials):
            msg = f"Duplicate trial name '{trial.name}' in suite '{self._name}'"
            raise ValueError(msg)
        self._trials.append(trial)
        return self

    def on_complete(self, callback: CompletionCallback) -> Suite:
        """Register a listener called once with this suite when it completes."""
        self._listeners.append(callback)
        return self

    async def run(self, sampling: SamplingConfig) -> SuiteResult:
        """Run every trial in order and fire completion.

        Every completion listener is called even if an earlier one raises.

        Raises:
            SuiteError: If the suite has already been run, or if any
                completion listener raised.
        """
        if self._started:
            msg = f"Suite '{self._name}' has already been run"
            raise SuiteError(msg)
        self._started = True

        for trial in self._trials:
            logger.debug("Running trial '%s' in '%s'", trial.name, self._name)
            self._results[trial.name] = await run_trial(trial, sampling, suite_name=self._name)

        self._completed = True
        failures: list[str] = []
        for listener in self._listeners:
            try:
                listener(self)
            except Exception as e:
                logger.error("Completion listener for '%s' failed: %s", self._name, e)
                failures.append(str(e) or type(e).__name__)
        if failures:
            raise SuiteError("; ".join(failures))

        return self.to_result()

    def to_result(self) -> SuiteResult:
        """Snapshot of the recorded results."""
        return SuiteResult(suite_name=self._name, trials=list(self._results.values()))

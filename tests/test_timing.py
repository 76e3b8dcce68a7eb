r"""
Tests for access_bench.runner.timing module.
"""

import pytest

from access_bench.runner import Timer, compute_stats, measure_time
from access_bench.runner.timing import T_INFINITY, TimerResult, t_critical


class TestTimer:
    def test_timer_context_manager(self):
        with Timer() as t:
            sum(range(1000))

        assert t.elapsed_ns > 0
        assert t.elapsed_ms > 0
        assert t.elapsed_seconds > 0

    def test_timer_elapsed_values(self):
        with Timer() as t:
            pass

        assert t.elapsed_ms == t.elapsed_ns / 1_000_000
        assert t.elapsed_seconds == t.elapsed_ns / 1_000_000_000


class TestMeasureTime:
    def test_measure_time_returns_result(self):
        result = measure_time(lambda a, b: a + b, 1, 2)

        assert isinstance(result, TimerResult)
        assert result.result == 3
        assert result.elapsed_ns >= 0

    def test_timer_result_conversions(self):
        result = TimerResult(elapsed_ns=1_000_000_000)
        assert result.elapsed_ms == 1000.0
        assert result.elapsed_seconds == 1.0


class TestTCritical:
    def test_small_samples(self):
        assert t_critical(1) == pytest.approx(12.706)
        assert t_critical(30) == pytest.approx(2.042)

    def test_large_samples(self):
        assert t_critical(500) == T_INFINITY

    def test_no_degrees_of_freedom(self):
        assert t_critical(0) == 0.0


class TestComputeStats:
    def test_empty(self):
        stats = compute_stats([])
        assert stats.samples == 0
        assert stats.mean == 0.0
        assert stats.rme == 0.0

    def test_single_sample_has_no_spread(self):
        stats = compute_stats([0.002])
        assert stats.samples == 1
        assert stats.stddev == 0.0
        assert stats.rme == 0.0
        assert stats.ops_per_second == pytest.approx(500.0)

    def test_identical_samples(self):
        stats = compute_stats([0.001] * 10, cycles=100)
        assert stats.mean == pytest.approx(0.001)
        assert stats.rme == pytest.approx(0.0)
        assert stats.cycles == 100

    def test_margin_of_error(self):
        samples = [0.001, 0.002, 0.003, 0.004]
        stats = compute_stats(samples)

        # stdev 0.001290994, sem 0.000645497, t(3) 3.182
        assert stats.mean == pytest.approx(0.0025)
        assert stats.median == pytest.approx(0.0025)
        assert stats.min == 0.001
        assert stats.max == 0.004
        assert stats.moe == pytest.approx(0.000645497 * 3.182, rel=1e-4)
        assert stats.rme == pytest.approx(stats.moe / 0.0025 * 100)

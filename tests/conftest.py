r"""
Shared pytest fixtures for access-bench tests.
"""

import os

import pytest

from access_bench.config import PROFILES, Settings
from access_bench.types import SamplingConfig


@pytest.fixture
def tiny_sampling() -> SamplingConfig:
    """Sampling budget small enough for unit tests."""
    return SamplingConfig(
        name="tiny",
        max_time_seconds=0.02,
        min_sample_time_seconds=0.0005,
        max_samples=20,
        warmup=1,
    )


@pytest.fixture
def settings(tmp_path, monkeypatch, tiny_sampling) -> Settings:
    """Settings using the tiny profile and a per-test data directory."""
    monkeypatch.setitem(PROFILES, "tiny", tiny_sampling)
    return Settings(profile="tiny", data_dir=tmp_path / "data", seed_rows=20)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every ACCESS_BENCH_* variable for the duration of a test."""
    for key in list(os.environ):
        if key.startswith("ACCESS_BENCH_"):
            monkeypatch.delenv(key)
    return monkeypatch

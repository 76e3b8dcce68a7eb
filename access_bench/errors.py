"""Exception hierarchy for access-bench."""

__all__ = ["BenchError", "ConfigError", "FixtureError", "SuiteError"]


class BenchError(Exception):
    """Base class for access-bench errors."""


class ConfigError(BenchError):
    """Invalid or missing configuration."""


class FixtureError(BenchError):
    """Fixture setup could not complete."""


class SuiteError(BenchError):
    """A suite was misused (added to after running, run twice)."""

r"""
Fixtures for access-bench.

Each fixture implements the Fixture protocol: prepare(), reset_between()
and an idempotent teardown().

    from access_bench.fixtures import SqliteFixture

    fixture = SqliteFixture("native.db", seed_rows=100)
    await fixture.prepare()
    ...
    await fixture.teardown()
"""

from access_bench.fixtures.base import BaseFixture, CompositeFixture, FixtureRegistry, NullFixture
from access_bench.fixtures.files import AppendLogFixture
from access_bench.fixtures.postgres import PostgresFixture
from access_bench.fixtures.sqlite import (
    JournalComparisonFixture,
    QueryBuilderSqliteFixture,
    SqliteComparisonFixture,
    SqliteFixture,
)

__all__ = [
    "AppendLogFixture",
    "BaseFixture",
    "CompositeFixture",
    "FixtureRegistry",
    "JournalComparisonFixture",
    "NullFixture",
    "PostgresFixture",
    "QueryBuilderSqliteFixture",
    "SqliteComparisonFixture",
    "SqliteFixture",
]

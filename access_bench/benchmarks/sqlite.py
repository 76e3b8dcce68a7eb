r"""
SQLite benchmark: native sqlite3 vs the SQLAlchemy Core query builder.

Both databases are seeded with the same number of rows before the
CRUD suites run.

    access-bench run sqlite
"""

from access_bench.benchmarks.base import BaseBenchmark, BenchmarkRegistry
from access_bench.benchmarks.clients import SqlAlchemyClient, Sqlite3Client
from access_bench.benchmarks.crud import build_crud_suites
from access_bench.config import Settings
from access_bench.fixtures.base import BaseFixture
from access_bench.fixtures.sqlite import SqliteComparisonFixture
from access_bench.runner import Suite

__all__ = ["SqliteBenchmark"]


@BenchmarkRegistry.register("sqlite")
class SqliteBenchmark(BaseBenchmark):
    """Native sqlite3 vs SQLAlchemy (aiosqlite) CRUD throughput."""

    @property
    def name(self) -> str:
        return "sqlite"

    def create_fixture(self, settings: Settings) -> SqliteComparisonFixture:
        return SqliteComparisonFixture(settings.data_dir, seed_rows=settings.seed_rows)

    def build_suites(self, fixture: BaseFixture, settings: Settings) -> list[Suite]:
        fixture = self._require_fixture(fixture, SqliteComparisonFixture)
        clients = [
            Sqlite3Client(fixture.native, record_count=settings.seed_rows),
            SqlAlchemyClient(lambda: fixture.builder.engine, record_count=settings.seed_rows),
        ]
        return build_crud_suites(clients)

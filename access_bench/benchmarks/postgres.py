r"""
PostgreSQL benchmark: asyncpg pool vs SQLAlchemy on asyncpg.

Requires a reachable server; the connection URL comes from
ACCESS_BENCH_POSTGRES_URL or the ACCESS_BENCH_PG_* variables.

    ACCESS_BENCH_POSTGRES_URL=postgresql://... access-bench run postgres
"""

from access_bench.benchmarks.base import BaseBenchmark, BenchmarkRegistry
from access_bench.benchmarks.clients import AsyncpgClient, SqlAlchemyClient
from access_bench.benchmarks.crud import build_crud_suites
from access_bench.config import Settings
from access_bench.fixtures.base import BaseFixture
from access_bench.fixtures.postgres import PostgresFixture
from access_bench.runner import Suite

__all__ = ["PostgresBenchmark"]


@BenchmarkRegistry.register("postgres")
class PostgresBenchmark(BaseBenchmark):
    """Native asyncpg vs SQLAlchemy (asyncpg) CRUD against a remote server."""

    @property
    def name(self) -> str:
        return "postgres"

    def create_fixture(self, settings: Settings) -> PostgresFixture:
        return PostgresFixture(
            settings.require_postgres_url(),
            seed_rows=settings.seed_rows,
            pool_min=settings.pg_pool_min,
            pool_max=settings.pg_pool_max,
        )

    def build_suites(self, fixture: BaseFixture, settings: Settings) -> list[Suite]:
        fixture = self._require_fixture(fixture, PostgresFixture)
        clients = [
            AsyncpgClient(fixture, record_count=settings.seed_rows),
            SqlAlchemyClient(lambda: fixture.engine, label="SQLAlchemy (asyncpg)", record_count=settings.seed_rows),
        ]
        return build_crud_suites(clients)

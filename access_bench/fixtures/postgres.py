r"""
PostgreSQL fixture: an asyncpg pool and a SQLAlchemy engine on one server.

Both clients share the same `users` table. Setup is best-effort: each step
logs its failure and carries on, and prepare() only raises when neither
client could seed any rows.

Requires: pip install asyncpg sqlalchemy

Environment variables:
    ACCESS_BENCH_POSTGRES_URL: Full connection URL
    ACCESS_BENCH_PG_HOST / _PG_PORT / _PG_USER / _PG_PASSWORD / _PG_DATABASE

    from access_bench.fixtures.postgres import PostgresFixture

    fixture = PostgresFixture(settings.require_postgres_url())
    await fixture.prepare()
"""

from __future__ import annotations

import logging
from typing import Any

import asyncpg
from sqlalchemy import func, insert, select
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from access_bench.datasets import SyntheticUsers
from access_bench.errors import FixtureError
from access_bench.fixtures.base import BaseFixture, FixtureRegistry
from access_bench.fixtures.schema import POSTGRES_USERS_DDL, metadata, users

__all__ = ["PostgresFixture", "INSERT_USER_SQL"]

logger = logging.getLogger("access_bench.fixtures.postgres")

INSERT_USER_SQL = "INSERT INTO users (name, email, age) VALUES ($1, $2, $3)"


def _driver_urls(url: str) -> tuple[str, str]:
    """Return (asyncpg DSN, SQLAlchemy URL) for one connection URL."""
    parsed = make_url(url)
    dsn = parsed.set(drivername="postgresql").render_as_string(hide_password=False)
    engine_url = parsed.set(drivername="postgresql+asyncpg").render_as_string(hide_password=False)
    return dsn, engine_url


@FixtureRegistry.register("postgres")
class PostgresFixture(BaseFixture):
    """Remote PostgreSQL reached through a native pool and a query builder."""

    def __init__(
        self,
        url: str,
        *,
        seed_rows: int = 100,
        pool_min: int = 2,
        pool_max: int = 20,
        builder_pool_size: int = 10,
        builder_batch_size: int = 20,
        connect_timeout: float = 2.0,
        seed: int | None = None,
    ) -> None:
        self._dsn, self._engine_url = _driver_urls(url)
        self._seed_rows = seed_rows
        self._pool_min = pool_min
        self._pool_max = pool_max
        self._builder_pool_size = builder_pool_size
        self._builder_batch_size = builder_batch_size
        self._connect_timeout = connect_timeout
        self._users = SyntheticUsers(seed=seed)
        self._pool: asyncpg.Pool | None = None
        self._engine: AsyncEngine | None = None

    @property
    def name(self) -> str:
        return f"PostgreSQL ({make_url(self._engine_url).host})"

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            msg = f"{self.name} is not prepared"
            raise RuntimeError(msg)
        return self._pool

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            msg = f"{self.name} is not prepared"
            raise RuntimeError(msg)
        return self._engine

    async def _open(self) -> None:
        self._pool = await asyncpg.create_pool(
            self._dsn,
            min_size=self._pool_min,
            max_size=self._pool_max,
            timeout=self._connect_timeout,
        )
        self._engine = create_async_engine(
            self._engine_url,
            pool_size=self._builder_pool_size,
            max_overflow=0,
        )

        await self._setup_schema()
        await self._truncate()

        rows = self._users.generate(self._seed_rows)
        native_ok = await self._seed_native(rows)
        builder_ok = await self._seed_builder(rows)
        if not (native_ok or builder_ok):
            raise FixtureError("Failed to seed through both clients, benchmarks may not work correctly")
        logger.info("Seeding complete - at least one client seeded successfully")

    async def _setup_schema(self) -> None:
        try:
            await self.pool.execute("DROP TABLE IF EXISTS users")
            logger.info("Dropped users table")
        except Exception as e:
            logger.error("Error dropping users table: %s", e)

        try:
            await self.pool.execute(POSTGRES_USERS_DDL)
            logger.info("Created users table with asyncpg")
        except Exception as e:
            logger.error("Error creating users table with asyncpg: %s", e)

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(metadata.create_all, checkfirst=True)
        except Exception as e:
            logger.error("Error with SQLAlchemy table operations: %s", e)

    async def _truncate(self) -> None:
        try:
            await self.pool.execute("TRUNCATE TABLE users RESTART IDENTITY")
            logger.info("Cleared users table")
        except Exception as e:
            logger.error("Error clearing users table: %s", e)

    async def _seed_native(self, rows: list[dict[str, Any]]) -> bool:
        try:
            async with self.pool.acquire() as conn:
                async with conn.transaction():
                    for user in rows:
                        await conn.execute(INSERT_USER_SQL, user["name"], user["email"], user["age"])
        except Exception as e:
            logger.error("Error seeding users through asyncpg: %s", e)
            return False
        logger.info("Seeded %d rows through asyncpg", len(rows))
        return True

    async def _seed_builder(self, rows: list[dict[str, Any]]) -> bool:
        try:
            for start in range(0, len(rows), self._builder_batch_size):
                async with self.engine.begin() as conn:
                    await conn.execute(insert(users), rows[start : start + self._builder_batch_size])
        except Exception as e:
            logger.error("Error seeding users through SQLAlchemy: %s", e)
            return False
        logger.info("Seeded %d rows through SQLAlchemy", len(rows))
        return True

    async def row_count(self) -> int:
        async with self.engine.connect() as conn:
            result = await conn.execute(select(func.count()).select_from(users))
            return int(result.scalar_one())

    async def reset_between(self) -> None:
        await self.pool.execute("TRUNCATE TABLE users RESTART IDENTITY")
        logger.info("Cleaned %s for next suite", self.name)

    async def _close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None

r"""
CRUD clients compared by the database benchmarks.

Each client performs the same operations against the `users` table:
a native driver (sqlite3, asyncpg) or the SQLAlchemy Core query builder.
Handles are resolved from the fixture on every call, so clients can be
built before the fixture is prepared.

    from access_bench.benchmarks.clients import Sqlite3Client

    client = Sqlite3Client(fixture, record_count=100)
    client.select_by_id()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncEngine

from access_bench.datasets import SyntheticUsers
from access_bench.fixtures.postgres import INSERT_USER_SQL as PG_INSERT_USER_SQL
from access_bench.fixtures.postgres import PostgresFixture
from access_bench.fixtures.schema import users
from access_bench.fixtures.sqlite import SqliteFixture
from access_bench.types import TrialKind

__all__ = ["CrudClient", "Sqlite3Client", "AsyncpgClient", "SqlAlchemyClient", "AGE_THRESHOLD", "BATCH_SIZE"]

AGE_THRESHOLD = 30
SELECT_LIMIT = 20
BATCH_SIZE = 5

AGGREGATE_SQL = """
    SELECT
        COUNT(*) AS count,
        AVG(age) AS average_age,
        MIN(age) AS min_age,
        MAX(age) AS max_age
    FROM users
    WHERE age > {param}
"""


class CrudClient(ABC):
    """Common state for clients: label, trial kind, row generator."""

    label: str = ""
    kind: TrialKind = TrialKind.SYNC
    batch_label: str = "Batch Insert"

    def __init__(self, *, record_count: int = 100, seed: int | None = None) -> None:
        self._record_count = record_count
        self._users = SyntheticUsers(seed=seed)

    def _random_id(self) -> int:
        return self._users.random_id(self._record_count)

    def _batch(self) -> list[dict[str, Any]]:
        return [self._users.user(i) for i in range(BATCH_SIZE)]

    def operations(self) -> dict[str, Callable[[], Any]]:
        """Operation name to zero-argument callable."""
        return {
            "Single Insert": self.insert_one,
            "Batch Insert": self.insert_batch,
            "Select All": self.select_all,
            "Select By Id": self.select_by_id,
            "Select By Condition": self.select_by_condition,
            "Update Single Record": self.update_one,
            "Delete Single Record": self.delete_one,
            "Complex Query": self.aggregate,
        }

    @abstractmethod
    def insert_one(self) -> Any: ...

    @abstractmethod
    def insert_batch(self) -> Any: ...

    @abstractmethod
    def select_all(self) -> Any: ...

    @abstractmethod
    def select_by_id(self) -> Any: ...

    @abstractmethod
    def select_by_condition(self) -> Any: ...

    @abstractmethod
    def update_one(self) -> Any: ...

    @abstractmethod
    def delete_one(self) -> Any: ...

    @abstractmethod
    def aggregate(self) -> Any: ...


class Sqlite3Client(CrudClient):
    """Standard library sqlite3, synchronous."""

    label = "Native sqlite3"
    kind = TrialKind.SYNC
    batch_label = "Batch Insert (Transaction)"

    def __init__(self, fixture: SqliteFixture, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._fixture = fixture

    def insert_one(self) -> None:
        self._fixture.insert_user(self._users.random_user())

    def insert_batch(self) -> int:
        return self._fixture.insert_users(self._batch())

    def select_all(self) -> list[Any]:
        return self._fixture.connection.execute("SELECT * FROM users LIMIT ?", (SELECT_LIMIT,)).fetchall()

    def select_by_id(self) -> Any:
        return self._fixture.connection.execute("SELECT * FROM users WHERE id = ?", (self._random_id(),)).fetchone()

    def select_by_condition(self) -> list[Any]:
        return self._fixture.connection.execute(
            "SELECT * FROM users WHERE age > ? LIMIT ?", (AGE_THRESHOLD, SELECT_LIMIT)
        ).fetchall()

    def update_one(self) -> None:
        self._fixture.connection.execute(
            "UPDATE users SET age = ? WHERE id = ?", (self._users.random_age(), self._random_id())
        )

    def delete_one(self) -> None:
        self._fixture.connection.execute("DELETE FROM users WHERE id = ?", (self._random_id(),))

    def aggregate(self) -> Any:
        return self._fixture.connection.execute(AGGREGATE_SQL.format(param="?"), (AGE_THRESHOLD,)).fetchone()


class AsyncpgClient(CrudClient):
    """asyncpg connection pool against a remote PostgreSQL."""

    label = "Native asyncpg"
    kind = TrialKind.ASYNC
    batch_label = "Batch Insert (Transaction)"

    def __init__(self, fixture: PostgresFixture, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._fixture = fixture

    async def insert_one(self) -> None:
        user = self._users.random_user()
        await self._fixture.pool.execute(PG_INSERT_USER_SQL, user["name"], user["email"], user["age"])

    async def insert_batch(self) -> int:
        rows = [(u["name"], u["email"], u["age"]) for u in self._batch()]
        async with self._fixture.pool.acquire() as conn:
            async with conn.transaction():
                await conn.executemany(PG_INSERT_USER_SQL, rows)
        return len(rows)

    async def select_all(self) -> list[Any]:
        return await self._fixture.pool.fetch("SELECT * FROM users LIMIT $1", SELECT_LIMIT)

    async def select_by_id(self) -> Any:
        return await self._fixture.pool.fetchrow("SELECT * FROM users WHERE id = $1", self._random_id())

    async def select_by_condition(self) -> list[Any]:
        return await self._fixture.pool.fetch(
            "SELECT * FROM users WHERE age > $1 LIMIT $2", AGE_THRESHOLD, SELECT_LIMIT
        )

    async def update_one(self) -> None:
        await self._fixture.pool.execute(
            "UPDATE users SET age = $1 WHERE id = $2", self._users.random_age(), self._random_id()
        )

    async def delete_one(self) -> None:
        await self._fixture.pool.execute("DELETE FROM users WHERE id = $1", self._random_id())

    async def aggregate(self) -> Any:
        return await self._fixture.pool.fetchrow(AGGREGATE_SQL.format(param="$1"), AGE_THRESHOLD)


class SqlAlchemyClient(CrudClient):
    """SQLAlchemy Core statements on an async engine."""

    kind = TrialKind.ASYNC

    def __init__(self, engine: Callable[[], AsyncEngine], *, label: str = "SQLAlchemy", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._engine = engine
        self.label = label

    async def _fetch(self, statement: Any) -> list[Any]:
        async with self._engine().connect() as conn:
            result = await conn.execute(statement)
            return list(result.all())

    async def _write(self, statement: Any) -> None:
        async with self._engine().begin() as conn:
            await conn.execute(statement)

    async def insert_one(self) -> None:
        await self._write(insert(users).values(**self._users.random_user()))

    async def insert_batch(self) -> int:
        rows = self._batch()
        await self._write(insert(users).values(rows))
        return len(rows)

    async def select_all(self) -> list[Any]:
        return await self._fetch(select(users).limit(SELECT_LIMIT))

    async def select_by_id(self) -> Any:
        rows = await self._fetch(select(users).where(users.c.id == self._random_id()).limit(1))
        return rows[0] if rows else None

    async def select_by_condition(self) -> list[Any]:
        return await self._fetch(select(users).where(users.c.age > AGE_THRESHOLD).limit(SELECT_LIMIT))

    async def update_one(self) -> None:
        await self._write(update(users).where(users.c.id == self._random_id()).values(age=self._users.random_age()))

    async def delete_one(self) -> None:
        await self._write(delete(users).where(users.c.id == self._random_id()))

    async def aggregate(self) -> Any:
        statement = select(
            func.count().label("count"),
            func.avg(users.c.age).label("average_age"),
            func.min(users.c.age).label("min_age"),
            func.max(users.c.age).label("max_age"),
        ).where(users.c.age > AGE_THRESHOLD)
        rows = await self._fetch(statement)
        return rows[0]

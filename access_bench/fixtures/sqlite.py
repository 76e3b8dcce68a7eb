r"""
SQLite fixtures: a native sqlite3 connection and a SQLAlchemy engine.

Both create the same `users` table in their own database file, which is
deleted before opening so every run starts from an empty store.

    from access_bench.fixtures.sqlite import SqliteFixture

    fixture = SqliteFixture("wal-journal.db", journal_mode="WAL", seed_rows=100)
    await fixture.prepare()
    fixture.connection.execute("SELECT * FROM users WHERE id = ?", (1,))
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import delete, func, insert, select, text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from access_bench.datasets import SyntheticUsers
from access_bench.fixtures.base import BaseFixture, CompositeFixture, FixtureRegistry
from access_bench.fixtures.schema import SQLITE_USERS_DDL, metadata, users
from access_bench.runner.timing import measure_time

__all__ = [
    "SqliteFixture",
    "QueryBuilderSqliteFixture",
    "SqliteComparisonFixture",
    "JournalComparisonFixture",
    "INSERT_USER_SQL",
]

logger = logging.getLogger("access_bench.fixtures.sqlite")

INSERT_USER_SQL = "INSERT INTO users (name, email, age) VALUES (?, ?, ?)"


def _remove_database_files(path: Path) -> None:
    """Delete a database file and its journal side files."""
    for suffix in ("", "-journal", "-wal", "-shm"):
        Path(f"{path}{suffix}").unlink(missing_ok=True)


@FixtureRegistry.register("sqlite")
class SqliteFixture(BaseFixture):
    """Native sqlite3 connection in autocommit mode.

    Single statements commit on their own; transaction() groups statements
    into one explicit BEGIN/COMMIT.
    """

    def __init__(
        self,
        path: Path | str,
        *,
        journal_mode: str | None = None,
        seed_rows: int = 0,
        label: str | None = None,
        seed: int | None = None,
    ) -> None:
        self._path = Path(path)
        self._journal_mode = journal_mode
        self._seed_rows = seed_rows
        self._label = label
        self._users = SyntheticUsers(seed=seed)
        self._conn: sqlite3.Connection | None = None

    @property
    def name(self) -> str:
        return self._label or f"sqlite3 ({self._path.name})"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            msg = f"{self.name} is not prepared"
            raise RuntimeError(msg)
        return self._conn

    @property
    def journal_mode(self) -> str:
        """Journal mode reported by the open connection."""
        row = self.connection.execute("PRAGMA journal_mode").fetchone()
        return str(row[0])

    async def _open(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        _remove_database_files(self._path)

        self._conn = sqlite3.connect(self._path, isolation_level=None)
        if self._journal_mode:
            self._conn.execute(f"PRAGMA journal_mode = {self._journal_mode}")
        self._conn.execute(SQLITE_USERS_DDL)

        if self._seed_rows:
            self.seed(self._seed_rows)

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run the enclosed statements in one transaction."""
        conn = self.connection
        conn.execute("BEGIN")
        try:
            yield conn
        except BaseException:
            conn.execute("ROLLBACK")
            raise
        conn.execute("COMMIT")

    def insert_user(self, user: dict[str, Any]) -> None:
        self.connection.execute(INSERT_USER_SQL, (user["name"], user["email"], user["age"]))

    def insert_users(self, rows: Sequence[dict[str, Any]]) -> int:
        """Insert rows in a single transaction and return the count."""
        with self.transaction() as conn:
            for user in rows:
                conn.execute(INSERT_USER_SQL, (user["name"], user["email"], user["age"]))
        return len(rows)

    def seed(self, count: int) -> int:
        """Insert `count` generated users in one transaction."""
        timed = measure_time(self.insert_users, self._users.generate(count))
        logger.info("Seeded %s with %d rows in %.1f ms", self.name, timed.result, timed.elapsed_ms)
        return timed.result

    def row_count(self) -> int:
        return int(self.connection.execute("SELECT COUNT(*) FROM users").fetchone()[0])

    async def reset_between(self) -> None:
        """Delete every row and reclaim space."""
        conn = self.connection
        conn.execute("DELETE FROM users")
        conn.execute("VACUUM")
        logger.info("Cleaned %s for next suite", self.name)

    async def _close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None


@FixtureRegistry.register("sqlite_query_builder")
class QueryBuilderSqliteFixture(BaseFixture):
    """SQLAlchemy async engine over aiosqlite."""

    def __init__(
        self,
        path: Path | str,
        *,
        seed_rows: int = 0,
        batch_size: int = 100,
        seed: int | None = None,
    ) -> None:
        self._path = Path(path)
        self._seed_rows = seed_rows
        self._batch_size = batch_size
        self._users = SyntheticUsers(seed=seed)
        self._engine: AsyncEngine | None = None

    @property
    def name(self) -> str:
        return f"SQLAlchemy sqlite ({self._path.name})"

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            msg = f"{self.name} is not prepared"
            raise RuntimeError(msg)
        return self._engine

    async def _open(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        _remove_database_files(self._path)

        self._engine = create_async_engine(f"sqlite+aiosqlite:///{self._path}")
        async with self._engine.begin() as conn:
            await conn.run_sync(metadata.create_all)

        if self._seed_rows:
            await self.seed(self._seed_rows)

    async def seed(self, count: int) -> int:
        """Insert `count` generated users in batches."""
        rows = self._users.generate(count)
        async with self.engine.begin() as conn:
            for start in range(0, len(rows), self._batch_size):
                await conn.execute(insert(users), rows[start : start + self._batch_size])
        logger.info("Seeded %s with %d rows", self.name, len(rows))
        return len(rows)

    async def row_count(self) -> int:
        async with self.engine.connect() as conn:
            result = await conn.execute(select(func.count()).select_from(users))
            return int(result.scalar_one())

    async def reset_between(self) -> None:
        async with self.engine.begin() as conn:
            await conn.execute(delete(users))
        async with self.engine.connect() as conn:
            autocommit = await conn.execution_options(isolation_level="AUTOCOMMIT")
            await autocommit.execute(text("VACUUM"))
        logger.info("Cleaned %s for next suite", self.name)

    async def _close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None


class SqliteComparisonFixture(CompositeFixture):
    """A native sqlite3 database next to a SQLAlchemy-managed one."""

    def __init__(self, directory: Path | str, *, seed_rows: int = 100, seed: int | None = None) -> None:
        directory = Path(directory)
        self.native = SqliteFixture(directory / "native.db", seed_rows=seed_rows, label="native sqlite3", seed=seed)
        self.builder = QueryBuilderSqliteFixture(directory / "query-builder.db", seed_rows=seed_rows, seed=seed)
        super().__init__(self.native, self.builder)


class JournalComparisonFixture(CompositeFixture):
    """Two sqlite3 databases: default journal mode and write-ahead log."""

    def __init__(self, directory: Path | str, *, seed: int | None = None) -> None:
        directory = Path(directory)
        self.default = SqliteFixture(directory / "default-journal.db", label="default journal", seed=seed)
        self.wal = SqliteFixture(directory / "wal-journal.db", journal_mode="WAL", label="WAL journal", seed=seed)
        super().__init__(self.default, self.wal)

    async def _open(self) -> None:
        await super()._open()
        logger.info("Default DB journal mode: %s", self.default.journal_mode)
        logger.info("WAL DB journal mode: %s", self.wal.journal_mode)

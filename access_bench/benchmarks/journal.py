r"""
SQLite journal-mode benchmark: rollback journal vs write-ahead log.

Both databases are emptied between suites so every suite starts from
the same state.

    access-bench run sqlite-wal
"""

from access_bench.benchmarks.base import BaseBenchmark, BenchmarkRegistry
from access_bench.config import Settings
from access_bench.datasets import SyntheticUsers
from access_bench.fixtures.base import BaseFixture
from access_bench.fixtures.sqlite import JournalComparisonFixture, SqliteFixture
from access_bench.runner import Suite, Trial

__all__ = ["JournalModeBenchmark", "BATCH_SIZE", "TRANSACTION_SIZE", "CONCURRENT_OPS", "CONCURRENT_BATCH"]

BATCH_SIZE = 100
TRANSACTION_SIZE = 1000
CONCURRENT_OPS = 50
CONCURRENT_BATCH = 5

WAL_NOTES = [
    "",
    "=== WAL MODE BENCHMARK SUMMARY ===",
    "WAL mode is particularly beneficial for:",
    "1. Concurrent write operations",
    "2. Applications that need to read while writing",
    "3. Reducing write contention",
    "",
    "Note: WAL mode may use slightly more disk space due to the WAL file.",
]


def _single_insert(db: SqliteFixture, users: SyntheticUsers):
    def work() -> None:
        db.insert_user(users.random_user())

    return work


def _transaction_insert(db: SqliteFixture, users: SyntheticUsers, size: int):
    def work() -> int:
        return db.insert_users(users.generate(size))

    return work


def _sequential_transactions(db: SqliteFixture, users: SyntheticUsers):
    # Many small transactions back to back on one connection.
    def work() -> None:
        for i in range(CONCURRENT_OPS):
            db.insert_users([users.user(i * CONCURRENT_BATCH + j) for j in range(CONCURRENT_BATCH)])

    return work


@BenchmarkRegistry.register("sqlite-wal")
class JournalModeBenchmark(BaseBenchmark):
    """Default rollback journal vs WAL journal mode for SQLite writes."""

    reset_between_suites = True

    @property
    def name(self) -> str:
        return "sqlite-wal"

    def create_fixture(self, settings: Settings) -> JournalComparisonFixture:
        return JournalComparisonFixture(settings.data_dir)

    def build_suites(self, fixture: BaseFixture, settings: Settings) -> list[Suite]:
        fixture = self._require_fixture(fixture, JournalComparisonFixture)
        users = SyntheticUsers()
        modes = [("Default Journal Mode", fixture.default), ("WAL Journal Mode", fixture.wal)]

        single = Suite("Single Insert Operations")
        batch = Suite(f"Batch Insert Operations ({BATCH_SIZE} records)")
        large = Suite(f"Transaction Insert Operations ({TRANSACTION_SIZE} records)")
        concurrent = Suite("Concurrent Write Operations")

        for label, db in modes:
            single.add(Trial.sync(f"{label} - Single Insert", _single_insert(db, users), min_samples=5))
        for label, db in modes:
            batch.add(Trial.sync(f"{label} - Batch Insert", _transaction_insert(db, users, BATCH_SIZE), min_samples=5))
        for label, db in modes:
            large.add(
                Trial.sync(f"{label} - Large Transaction", _transaction_insert(db, users, TRANSACTION_SIZE), min_samples=3)
            )
        for label, db in modes:
            concurrent.add(
                Trial.sync(f"{label} - Simulated Concurrent Writes", _sequential_transactions(db, users), min_samples=3)
            )

        return [single, batch, large, concurrent]

    def summary(self, fixture: BaseFixture) -> list[str]:
        return list(WAL_NOTES)

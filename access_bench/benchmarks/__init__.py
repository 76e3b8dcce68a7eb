r"""
Benchmark programs for access-bench.

Programs are registered by name:
- append: awaitable vs blocking log-file appends
- sqlite: native sqlite3 vs SQLAlchemy Core CRUD
- sqlite-wal: default rollback journal vs WAL
- postgres: native asyncpg vs SQLAlchemy Core CRUD against a remote server

    from access_bench.benchmarks import BenchmarkRegistry

    program = BenchmarkRegistry.create("sqlite")
"""

from access_bench.benchmarks.append import FileAppendBenchmark
from access_bench.benchmarks.base import BaseBenchmark, BenchmarkRegistry
from access_bench.benchmarks.clients import AsyncpgClient, CrudClient, SqlAlchemyClient, Sqlite3Client
from access_bench.benchmarks.crud import CRUD_SUITES, build_crud_suites
from access_bench.benchmarks.journal import JournalModeBenchmark
from access_bench.benchmarks.postgres import PostgresBenchmark
from access_bench.benchmarks.sqlite import SqliteBenchmark

__all__ = [
    "AsyncpgClient",
    "BaseBenchmark",
    "BenchmarkRegistry",
    "CRUD_SUITES",
    "CrudClient",
    "FileAppendBenchmark",
    "JournalModeBenchmark",
    "PostgresBenchmark",
    "SqlAlchemyClient",
    "Sqlite3Client",
    "SqliteBenchmark",
    "build_crud_suites",
]

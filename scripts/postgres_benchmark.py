#!/usr/bin/env python
"""PostgreSQL benchmark: asyncpg vs SQLAlchemy Core. Needs ACCESS_BENCH_POSTGRES_URL."""

from access_bench.cli import postgres_main

if __name__ == "__main__":
    postgres_main()

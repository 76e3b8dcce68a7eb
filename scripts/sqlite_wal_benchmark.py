#!/usr/bin/env python
"""SQLite journal mode benchmark: default vs WAL."""

from access_bench.cli import sqlite_wal_main

if __name__ == "__main__":
    sqlite_wal_main()

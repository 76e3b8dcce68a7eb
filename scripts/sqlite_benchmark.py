#!/usr/bin/env python
"""SQLite benchmark: native sqlite3 vs SQLAlchemy Core."""

from access_bench.cli import sqlite_main

if __name__ == "__main__":
    sqlite_main()

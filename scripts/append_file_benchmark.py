#!/usr/bin/env python
"""File append benchmark: awaitable vs blocking appends."""

from access_bench.cli import append_main

if __name__ == "__main__":
    append_main()

r"""
Fixture data generators for access-bench.

    from access_bench.datasets import SyntheticUsers

    rows = SyntheticUsers(seed=1).generate(100)
"""

from access_bench.datasets.synthetic import MAX_AGE, MIN_AGE, SyntheticUsers

__all__ = [
    "MAX_AGE",
    "MIN_AGE",
    "SyntheticUsers",
]

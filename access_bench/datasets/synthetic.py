r"""
Synthetic fixture data: user rows and log lines.

    from access_bench.datasets.synthetic import SyntheticUsers

    users = SyntheticUsers(seed=42)
    rows = users.generate(100)
    line = users.log_entry()
"""

import random
from datetime import UTC, datetime
from typing import Any

__all__ = ["SyntheticUsers", "MIN_AGE", "MAX_AGE"]

MIN_AGE = 18
MAX_AGE = 67


class SyntheticUsers:
    """Generator for `users` table rows and access-log lines."""

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize generator.

        Args:
            seed: Random seed for reproducibility.
        """
        self._rng = random.Random(seed)

    @property
    def name(self) -> str:
        return "synthetic_users"

    def user(self, i: int | float) -> dict[str, Any]:
        """One user row; `i` only shapes the name and email."""
        return {
            "name": f"User {i}",
            "email": f"user{i}@example.com",
            "age": self._rng.randint(MIN_AGE, MAX_AGE),
        }

    def random_user(self) -> dict[str, Any]:
        """User row keyed by a random number, for single-insert trials."""
        return self.user(self._rng.random())

    def generate(self, count: int) -> list[dict[str, Any]]:
        """Generate `count` user rows numbered from 0."""
        return [self.user(i) for i in range(count)]

    def random_id(self, upper: int) -> int:
        """Random primary key in 1..upper."""
        return self._rng.randint(1, max(1, upper))

    def random_age(self) -> int:
        return self._rng.randint(MIN_AGE, MAX_AGE)

    def log_entry(self, *, now: datetime | None = None) -> str:
        """One access-log line, newline terminated."""
        timestamp = (now or datetime.now(UTC)).isoformat(timespec="milliseconds")
        user_id = self._rng.randrange(1_000_000)
        action = "login" if self._rng.random() < 0.5 else "logout"
        return f"[{timestamp}] User {user_id} performed action: {action}\n"

r"""
Benchmark configuration and sampling profiles.

Sampling profiles:
    - quick: 0.5s per trial (smoke runs)
    - default: 5s per trial
    - thorough: 10s per trial

    from access_bench.config import Settings, get_profile

    settings = Settings.from_env()
    sampling = get_profile(settings.profile)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import quote

from dotenv import load_dotenv

from access_bench.errors import ConfigError
from access_bench.types import SamplingConfig

# Load .env from the current dir, else the project root
_env_file = Path(".env")
if not _env_file.exists():
    _env_file = Path(__file__).parent.parent / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

__all__ = [
    "PROFILES",
    "DEFAULT_PROFILE",
    "ENV_PREFIX",
    "Settings",
    "get_profile",
    "get_env",
]

ENV_PREFIX = "ACCESS_BENCH_"

PROFILES: dict[str, SamplingConfig] = {
    "quick": SamplingConfig(
        name="quick",
        max_time_seconds=0.5,
        min_sample_time_seconds=0.002,
        max_samples=100,
        warmup=1,
    ),
    "default": SamplingConfig(
        name="default",
        max_time_seconds=5.0,
        min_sample_time_seconds=0.005,
        max_samples=500,
        warmup=1,
    ),
    "thorough": SamplingConfig(
        name="thorough",
        max_time_seconds=10.0,
        min_sample_time_seconds=0.01,
        max_samples=1000,
        warmup=3,
    ),
}

DEFAULT_PROFILE = "default"


def get_profile(name: str) -> SamplingConfig:
    """Get sampling profile by name.

    Args:
        name: Profile name (quick, default, thorough).

    Returns:
        SamplingConfig for the requested profile.

    Raises:
        ValueError: If profile name is not recognized.
    """
    if name not in PROFILES:
        valid = ", ".join(PROFILES.keys())
        msg = f"Unknown profile '{name}'. Valid profiles: {valid}"
        raise ValueError(msg)
    return PROFILES[name]


def get_env(key: str, *, default: str | None = None) -> str | None:
    """Get environment variable with ACCESS_BENCH_ prefix.

    Args:
        key: Variable name without prefix (e.g., "POSTGRES_URL").
        default: Default value if not set.

    Returns:
        Environment variable value or default.
    """
    return os.environ.get(f"{ENV_PREFIX}{key}", default)


def _get_int(key: str, default: int) -> int:
    raw = get_env(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        msg = f"{ENV_PREFIX}{key} must be an integer, got {raw!r}"
        raise ConfigError(msg) from e


def _postgres_url_from_env() -> str | None:
    """Build a PostgreSQL URL from ACCESS_BENCH_POSTGRES_URL or its parts."""
    url = get_env("POSTGRES_URL")
    if url:
        return url

    host = get_env("PG_HOST")
    if not host:
        return None

    user = quote(get_env("PG_USER", default="postgres") or "postgres", safe="")
    password = get_env("PG_PASSWORD")
    port = get_env("PG_PORT", default="5432")
    database = get_env("PG_DATABASE", default="postgres")
    auth = f"{user}:{quote(password, safe='')}" if password else user
    return f"postgresql://{auth}@{host}:{port}/{database}"


@dataclass
class Settings:
    """Runtime settings shared by all benchmark programs.

    Attributes:
        profile: Sampling profile name.
        data_dir: Directory for log files and SQLite databases.
        seed_rows: Rows seeded before select/update/delete suites.
        postgres_url: Remote database URL (never hard coded).
        pg_pool_min: Minimum pooled connections.
        pg_pool_max: Maximum pooled connections.
        log_level: Logging level name.
    """

    profile: str = DEFAULT_PROFILE
    data_dir: Path = field(default_factory=lambda: Path("./bench-data"))
    seed_rows: int = 100
    postgres_url: str | None = None
    pg_pool_min: int = 2
    pg_pool_max: int = 20
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from ACCESS_BENCH_* environment variables."""
        return cls(
            profile=get_env("PROFILE", default=DEFAULT_PROFILE) or DEFAULT_PROFILE,
            data_dir=Path(get_env("DATA_DIR", default="./bench-data") or "./bench-data"),
            seed_rows=_get_int("SEED_ROWS", 100),
            postgres_url=_postgres_url_from_env(),
            pg_pool_min=_get_int("PG_POOL_MIN", 2),
            pg_pool_max=_get_int("PG_POOL_MAX", 20),
            log_level=get_env("LOG_LEVEL", default="INFO") or "INFO",
        )

    @property
    def sampling(self) -> SamplingConfig:
        """Sampling profile selected by these settings."""
        return get_profile(self.profile)

    def require_postgres_url(self) -> str:
        """Return the PostgreSQL URL or raise ConfigError if unset."""
        if not self.postgres_url:
            msg = (
                f"No PostgreSQL connection configured. Set {ENV_PREFIX}POSTGRES_URL "
                f"or {ENV_PREFIX}PG_HOST/{ENV_PREFIX}PG_PASSWORD in the environment or .env"
            )
            raise ConfigError(msg)
        return self.postgres_url

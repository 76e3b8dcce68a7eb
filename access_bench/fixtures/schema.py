r"""
The `users` table shared by every database benchmark.

Native clients use the DDL strings; the query builder uses the
SQLAlchemy Table definition, which renders the equivalent DDL per dialect.
"""

from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, func

__all__ = [
    "metadata",
    "users",
    "SQLITE_USERS_DDL",
    "POSTGRES_USERS_DDL",
]

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("age", Integer),
    Column("created_at", DateTime, server_default=func.current_timestamp()),
    sqlite_autoincrement=True,
)

SQLITE_USERS_DDL = """
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        email TEXT NOT NULL,
        age INTEGER,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""

POSTGRES_USERS_DDL = """
    CREATE TABLE IF NOT EXISTS users (
        id SERIAL PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT NOT NULL,
        age INTEGER,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""

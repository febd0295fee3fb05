"""Database connection management."""

import os
from contextlib import contextmanager
from typing import Any, Dict, Generator

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool


class DatabaseConfig:
    """Database configuration."""

    def __init__(self, config: Dict[str, Any]) -> None:
        """Initialize database config from dict."""
        self.host = config.get("host", "localhost")
        self.port = config.get("port", 5432)
        self.database = config.get("database", "wikicache")
        self.user = config.get("user", "wikicache_user")

        # Handle password from environment variable if specified
        password_env = config.get("password_env")
        if password_env and os.environ.get(password_env):
            self.password = os.environ[password_env]
        else:
            self.password = config.get("password") or ""

    @property
    def connection_string(self) -> str:
        """Get psycopg connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


def create_connection_pool(config: Dict[str, Any], max_size: int = 10) -> ConnectionPool:
    """Create a connection pool; the caller owns and closes it."""
    db_config = DatabaseConfig(config)
    return ConnectionPool(
        db_config.connection_string,
        min_size=1,
        max_size=max_size,
        kwargs={"row_factory": dict_row},
        open=True,
    )


@contextmanager
def get_connection(config: Dict[str, Any]) -> Generator[psycopg.Connection, None, None]:
    """Open a single short-lived connection, for maintenance tasks."""
    db_config = DatabaseConfig(config)
    with psycopg.connect(db_config.connection_string, row_factory=dict_row) as conn:
        yield conn

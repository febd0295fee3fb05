"""Database initialization and schema management."""

from typing import Any, Dict

from psycopg.errors import DatabaseError
from rich.console import Console

from .connection import get_connection

console = Console(stderr=True)


SCHEMA_SQL = """
-- Cached articles, keyed by Wikipedia page ID
CREATE TABLE IF NOT EXISTS articles (
    pageid INTEGER PRIMARY KEY,
    title TEXT NOT NULL,
    extract TEXT NOT NULL DEFAULT '',
    thumbnail TEXT,
    full_url TEXT NOT NULL,
    last_accessed TIMESTAMPTZ NOT NULL,
    is_favorite BOOLEAN NOT NULL DEFAULT FALSE,
    ai_summary TEXT,
    related_keywords JSONB NOT NULL DEFAULT '[]'::jsonb,
    latitude DOUBLE PRECISION,
    longitude DOUBLE PRECISION,
    created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
);

-- Create indexes
CREATE INDEX IF NOT EXISTS idx_articles_last_accessed ON articles(last_accessed);
CREATE INDEX IF NOT EXISTS idx_articles_favorite_title ON articles(is_favorite, title);
CREATE INDEX IF NOT EXISTS idx_articles_location ON articles(latitude, longitude)
    WHERE latitude IS NOT NULL;

-- Update trigger function
CREATE OR REPLACE FUNCTION update_updated_at_column()
RETURNS TRIGGER AS $$
BEGIN
    NEW.updated_at = CURRENT_TIMESTAMP;
    RETURN NEW;
END;
$$ language 'plpgsql';

CREATE OR REPLACE TRIGGER update_articles_updated_at BEFORE UPDATE ON articles
    FOR EACH ROW EXECUTE FUNCTION update_updated_at_column();
"""


def validate_connection(config: Dict[str, Any]) -> bool:
    """Validate database connection."""
    try:
        with get_connection(config) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1 AS ok")
                result = cur.fetchone()
                return result is not None and result["ok"] == 1
    except Exception as e:
        console.print(f"[red]Database connection failed: {e}[/red]")
        return False


def init_database(config: Dict[str, Any]) -> None:
    """Initialize database schema."""
    try:
        with get_connection(config) as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
                conn.commit()
    except DatabaseError as e:
        console.print(f"[red]Failed to initialize database schema: {e}[/red]")
        raise

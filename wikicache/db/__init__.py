"""Article persistence for wikicache."""

from .articles import PostgresArticleStore
from .connection import create_connection_pool, get_connection
from .init import init_database, validate_connection
from .live import LiveQuery
from .memory import InMemoryArticleStore
from .store import ArticleStore

__all__ = [
    "ArticleStore",
    "InMemoryArticleStore",
    "LiveQuery",
    "PostgresArticleStore",
    "create_connection_pool",
    "get_connection",
    "init_database",
    "validate_connection",
]

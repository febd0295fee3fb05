"""Data models for wikicache."""

from .article import Article, Coordinates
from .base import utc_now
from .results import ArticleListResult, ArticleResult

__all__ = ["Article", "ArticleListResult", "ArticleResult", "Coordinates", "utc_now"]

"""Article repository."""

from .articles import ArticleRepository

__all__ = ["ArticleRepository"]

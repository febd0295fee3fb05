"""Outcome models returned by repository reads."""

from typing import List, Optional

from pydantic import BaseModel, Field

from .article import Article


class ArticleListResult(BaseModel):
    """Result of a search or nearby lookup."""

    success: bool = Field(..., description="Whether the lookup completed without errors")
    articles: List[Article] = Field(default_factory=list, description="Articles found")
    error: Optional[str] = Field(None, description="Error message if failed")
    from_cache: bool = Field(False, description="Whether articles came from the local store")


class ArticleResult(BaseModel):
    """Result of a single article lookup."""

    success: bool = Field(..., description="Whether the lookup completed without errors")
    article: Optional[Article] = Field(None, description="Article, absent when not found")
    error: Optional[str] = Field(None, description="Error message if failed")
    from_cache: bool = Field(False, description="Whether the article came from the local store")

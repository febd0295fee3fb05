"""In-memory article store."""

import threading
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ..models import Article
from .store import ArticleStore


class InMemoryArticleStore(ArticleStore):
    """Dictionary-backed store for tests and the ``memory`` cache backend."""

    def __init__(self) -> None:
        super().__init__()
        self._articles: Dict[int, Article] = {}
        self._lock = threading.Lock()

    def _snapshot(self) -> List[Article]:
        with self._lock:
            return [a.model_copy(deep=True) for a in self._articles.values()]

    def upsert_articles(self, articles: List[Article]) -> None:
        if not articles:
            return
        with self._lock:
            for article in articles:
                self._articles[article.pageid] = article.model_copy(deep=True)
        self._notify_changed()

    def get_article(self, pageid: int) -> Optional[Article]:
        with self._lock:
            article = self._articles.get(pageid)
            return article.model_copy(deep=True) if article else None

    def get_articles(self, pageids: Iterable[int]) -> List[Article]:
        wanted = set(pageids)
        return [a for a in self._snapshot() if a.pageid in wanted]

    def search_by_title(self, query: str) -> List[Article]:
        needle = query.lower()
        return [a for a in self._snapshot() if needle in a.title.lower()]

    def get_recent_articles(self, limit: int = 10) -> List[Article]:
        articles = sorted(self._snapshot(), key=lambda a: a.last_accessed, reverse=True)
        return articles[:limit]

    def get_favorite_articles(self) -> List[Article]:
        return sorted((a for a in self._snapshot() if a.is_favorite), key=lambda a: a.title)

    def get_articles_with_location(self) -> List[Article]:
        return [a for a in self._snapshot() if a.has_location]

    def update_favorite_status(self, pageid: int, is_favorite: bool) -> None:
        self._update(pageid, is_favorite=is_favorite)

    def update_ai_summary(self, pageid: int, summary: str) -> None:
        self._update(pageid, ai_summary=summary)

    def _update(self, pageid: int, **fields) -> None:
        with self._lock:
            article = self._articles.get(pageid)
            if article is None:
                return
            self._articles[pageid] = article.model_copy(update=fields)
        self._notify_changed()

    def delete_articles(self, pageids: List[int]) -> None:
        with self._lock:
            removed = [self._articles.pop(pageid, None) for pageid in pageids]
        if any(a is not None for a in removed):
            self._notify_changed()

    def get_old_articles(self, cutoff: datetime) -> List[Article]:
        return [
            a for a in self._snapshot()
            if not a.is_favorite and a.last_accessed < cutoff
        ]

    def count(self) -> int:
        with self._lock:
            return len(self._articles)

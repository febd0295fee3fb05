"""Local article store contract."""

import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from rich.console import Console

from ..models import Article
from .live import LiveQuery

console = Console(stderr=True)


class ArticleStore(ABC):
    """
    Keyed table of cached articles.

    Writes replace whole records by page ID. Implementations must be safe
    to call from several threads at once; every write re-evaluates the
    live queries created through ``observe_*``.
    """

    def __init__(self) -> None:
        self._live_queries: List[LiveQuery] = []
        self._live_lock = threading.Lock()

    @abstractmethod
    def upsert_articles(self, articles: List[Article]) -> None:
        """Insert or replace articles by page ID."""
        pass

    def upsert_article(self, article: Article) -> None:
        """Insert or replace a single article."""
        self.upsert_articles([article])

    @abstractmethod
    def get_article(self, pageid: int) -> Optional[Article]:
        """Get an article by page ID, or None."""
        pass

    @abstractmethod
    def get_articles(self, pageids: Iterable[int]) -> List[Article]:
        """Get every stored article among the given page IDs."""
        pass

    @abstractmethod
    def search_by_title(self, query: str) -> List[Article]:
        """Articles whose title contains the query, case-insensitive."""
        pass

    @abstractmethod
    def get_recent_articles(self, limit: int = 10) -> List[Article]:
        """Most recently accessed articles first."""
        pass

    @abstractmethod
    def get_favorite_articles(self) -> List[Article]:
        """Favorite articles ordered by title."""
        pass

    @abstractmethod
    def get_articles_with_location(self) -> List[Article]:
        """Articles that have coordinates."""
        pass

    @abstractmethod
    def update_favorite_status(self, pageid: int, is_favorite: bool) -> None:
        pass

    @abstractmethod
    def update_ai_summary(self, pageid: int, summary: str) -> None:
        pass

    @abstractmethod
    def delete_articles(self, pageids: List[int]) -> None:
        """Delete articles by page ID."""
        pass

    def delete_article(self, pageid: int) -> None:
        self.delete_articles([pageid])

    @abstractmethod
    def get_old_articles(self, cutoff: datetime) -> List[Article]:
        """Non-favorite articles last accessed strictly before the cutoff."""
        pass

    def close(self) -> None:
        """Release resources held by the store."""
        with self._live_lock:
            queries = list(self._live_queries)
        for query in queries:
            query.close()

    # Live queries

    def observe_search(self, query: str) -> LiveQuery:
        return self._attach(lambda: self.search_by_title(query))

    def observe_recent(self, limit: int = 10) -> LiveQuery:
        return self._attach(lambda: self.get_recent_articles(limit))

    def observe_favorites(self) -> LiveQuery:
        return self._attach(self.get_favorite_articles)

    def observe_with_location(self) -> LiveQuery:
        return self._attach(self.get_articles_with_location)

    def _attach(self, fetch: Callable[[], List[Article]]) -> LiveQuery:
        query = LiveQuery(fetch, on_close=self._detach)
        with self._live_lock:
            self._live_queries.append(query)
        return query

    def _detach(self, query: LiveQuery) -> None:
        with self._live_lock:
            if query in self._live_queries:
                self._live_queries.remove(query)

    def _notify_changed(self) -> None:
        """Re-evaluate live queries after a write."""
        with self._live_lock:
            queries = list(self._live_queries)
        for query in queries:
            try:
                query.refresh()
            except Exception as e:
                # The write itself has already been applied
                console.print(f"[red]Failed to refresh live query: {e}[/red]")

"""Article repository: read-through cache over the Wikipedia API."""

import asyncio
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

import pendulum
from rich.console import Console

from ..config import CacheConfig
from ..db import ArticleStore, LiveQuery
from ..generation import Summarizer
from ..models import Article, ArticleListResult, ArticleResult, utc_now
from ..wikipedia import WikipediaClient

console = Console(stderr=True)


class ArticleRepository:
    """
    Coordinate the local article store and the remote services.

    Reads consult the store first and fall back to Wikipedia; fetched
    articles are written back to the store. Operations are independent
    coroutines with no coordination between them, and none of them raises:
    failures are logged and reported through the returned result.
    """

    def __init__(
        self,
        store: ArticleStore,
        wikipedia: WikipediaClient,
        summarizer: Summarizer,
        cache_config: Optional[CacheConfig] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize article repository.

        Args:
            store: Local article store
            wikipedia: Wikipedia API client
            summarizer: Summarizer used to back-fill AI summaries
            cache_config: Cache policy, defaults if omitted
            clock: Source of the current UTC time
        """
        self.store = store
        self.wikipedia = wikipedia
        self.summarizer = summarizer
        self.cache_config = cache_config or CacheConfig()
        self.clock = clock

    def _is_fresh(self, cached: List[Article]) -> bool:
        """Whether local title hits are enough to skip the remote search."""
        if len(cached) < self.cache_config.min_cached_results:
            return False
        stale_before = self.clock() - pendulum.duration(days=self.cache_config.stale_after_days)
        return all(article.last_accessed >= stale_before for article in cached)

    @staticmethod
    def _merge(fetched: Article, previous: Optional[Article]) -> Article:
        """Keep user-owned fields of a cached record when refreshing it."""
        if previous is None:
            return fetched
        return fetched.model_copy(update={
            "is_favorite": previous.is_favorite,
            "ai_summary": previous.ai_summary,
            "related_keywords": previous.related_keywords or fetched.related_keywords,
        })

    async def _resolve_and_store(self, pageids: Iterable[int]) -> List[Article]:
        """Fetch details for page IDs, store them and return them in the given order."""
        ids = list(dict.fromkeys(pageids))
        if not ids:
            return []

        details = await self.wikipedia.fetch_details(ids)
        now = self.clock()
        existing: Dict[int, Article] = {
            article.pageid: article
            for article in await asyncio.to_thread(self.store.get_articles, list(details))
        }

        articles = [
            self._merge(details[pageid].to_article(now), existing.get(pageid))
            for pageid in ids
            if pageid in details
        ]

        await asyncio.to_thread(self.store.upsert_articles, articles)
        return articles

    async def search(self, query: str) -> ArticleListResult:
        """Search articles, serving fresh local title matches without a remote call."""
        query = query.strip()
        if not query:
            return ArticleListResult(success=True)

        cached: List[Article] = []
        try:
            cached = await asyncio.to_thread(self.store.search_by_title, query)
            if self._is_fresh(cached):
                return ArticleListResult(success=True, articles=cached, from_cache=True)

            results = await self.wikipedia.search(query)
            articles = await self._resolve_and_store(result.pageid for result in results)
            return ArticleListResult(success=True, articles=articles)

        except Exception as e:
            console.print(f"[red]Error searching articles for '{query}': {e}[/red]")
            # Offline fallback to whatever the store already has
            return ArticleListResult(
                success=False,
                articles=cached,
                error=str(e),
                from_cache=bool(cached),
            )

    async def search_articles(self, query: str) -> List[Article]:
        return (await self.search(query)).articles

    async def get(self, pageid: int) -> ArticleResult:
        """Get an article from the store, or fetch it from Wikipedia."""
        try:
            local = await asyncio.to_thread(self.store.get_article, pageid)

            if local is not None:
                now = max(self.clock(), local.last_accessed)
                updated = local.touched(now)
                await asyncio.to_thread(self.store.upsert_article, updated)
                return ArticleResult(success=True, article=updated, from_cache=True)

            details = await self.wikipedia.fetch_details([pageid])
            page = details.get(pageid)
            if page is None:
                return ArticleResult(success=True)

            article = page.to_article(self.clock())
            await asyncio.to_thread(self.store.upsert_article, article)
            return ArticleResult(success=True, article=article)

        except Exception as e:
            console.print(f"[red]Error getting article {pageid}: {e}[/red]")
            return ArticleResult(success=False, error=str(e))

    async def get_article(self, pageid: int) -> Optional[Article]:
        return (await self.get(pageid)).article

    async def toggle_favorite(self, pageid: int, is_favorite: bool) -> bool:
        """Set the favorite flag; returns False if the write failed."""
        try:
            await asyncio.to_thread(self.store.update_favorite_status, pageid, is_favorite)
            return True
        except Exception as e:
            console.print(f"[red]Error updating favorite status of {pageid}: {e}[/red]")
            return False

    async def generate_ai_summary(self, pageid: int) -> Optional[str]:
        """
        Back-fill the AI summary of a stored article.

        Does nothing when the article is not stored or already has a
        summary, so the summarizer runs at most once per article.

        Returns:
            The article's summary, or None if it is not stored
        """
        try:
            article = await asyncio.to_thread(self.store.get_article, pageid)
            if article is None:
                return None
            if article.ai_summary is not None:
                return article.ai_summary

            summary = await asyncio.to_thread(self.summarizer.summarize, article.extract)
            await asyncio.to_thread(self.store.update_ai_summary, pageid, summary)
            return summary

        except Exception as e:
            console.print(f"[red]Error generating AI summary for {pageid}: {e}[/red]")
            return None

    async def get_nearby(self, lat: float, lon: float) -> ArticleListResult:
        """Articles near a coordinate, nearest first."""
        try:
            results = await self.wikipedia.geosearch(lat, lon)
            if not results:
                console.print(f"[yellow]No nearby articles found for coordinates: {lat}|{lon}[/yellow]")
                return ArticleListResult(success=True)

            articles = await self._resolve_and_store(result.pageid for result in results)
            return ArticleListResult(success=True, articles=articles)

        except Exception as e:
            console.print(f"[red]Error getting nearby articles for {lat}|{lon}: {e}[/red]")
            return ArticleListResult(success=False, error=str(e))

    async def get_nearby_articles(self, lat: float, lon: float) -> List[Article]:
        return (await self.get_nearby(lat, lon)).articles

    def get_recent_articles(self, limit: Optional[int] = None) -> LiveQuery:
        """Recently viewed articles, kept current as the store changes."""
        return self.store.observe_recent(limit or self.cache_config.recent_limit)

    def get_favorite_articles(self) -> LiveQuery:
        return self.store.observe_favorites()

    def get_articles_with_location(self) -> LiveQuery:
        return self.store.observe_with_location()

    async def delete_article(self, pageid: int) -> bool:
        try:
            await asyncio.to_thread(self.store.delete_article, pageid)
            return True
        except Exception as e:
            console.print(f"[red]Error deleting article {pageid}: {e}[/red]")
            return False

    async def cleanup_old_articles(self) -> int:
        """
        Evict non-favorite articles not accessed within ``max_age_days``.

        Returns:
            Number of deleted articles
        """
        try:
            cutoff = self.clock() - pendulum.duration(days=self.cache_config.max_age_days)
            old_articles = await asyncio.to_thread(self.store.get_old_articles, cutoff)
            if old_articles:
                await asyncio.to_thread(
                    self.store.delete_articles,
                    [article.pageid for article in old_articles],
                )
            return len(old_articles)

        except Exception as e:
            console.print(f"[red]Error cleaning up old articles: {e}[/red]")
            return 0

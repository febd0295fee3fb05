"""Postgres-backed article storage."""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from psycopg.types.json import Jsonb
from psycopg_pool import ConnectionPool

from ..models import Article, Coordinates
from .store import ArticleStore

ARTICLE_COLUMNS = """
    pageid, title, extract, thumbnail, full_url, last_accessed,
    is_favorite, ai_summary, related_keywords, latitude, longitude
"""


def _escape_like(query: str) -> str:
    """Escape LIKE wildcards so the query matches literally."""
    return query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _row_to_article(row: Dict[str, Any]) -> Article:
    coordinates = None
    if row["latitude"] is not None and row["longitude"] is not None:
        coordinates = Coordinates(lat=row["latitude"], lon=row["longitude"])

    return Article(
        pageid=row["pageid"],
        title=row["title"],
        extract=row["extract"],
        thumbnail=row["thumbnail"],
        full_url=row["full_url"],
        last_accessed=row["last_accessed"],
        is_favorite=row["is_favorite"],
        ai_summary=row["ai_summary"],
        related_keywords=row["related_keywords"] or [],
        coordinates=coordinates,
    )


def _article_params(article: Article) -> tuple:
    return (
        article.pageid,
        article.title,
        article.extract,
        article.thumbnail,
        article.full_url,
        article.last_accessed,
        article.is_favorite,
        article.ai_summary,
        Jsonb(article.related_keywords),
        article.coordinates.lat if article.coordinates else None,
        article.coordinates.lon if article.coordinates else None,
    )


class PostgresArticleStore(ArticleStore):
    """Article table in Postgres, accessed through a connection pool."""

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize article storage.

        Args:
            pool: Open connection pool with dict rows; closed with the store
        """
        super().__init__()
        self.pool = pool

    def _fetch_all(self, query: str, params: tuple = ()) -> List[Article]:
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                return [_row_to_article(row) for row in cur.fetchall()]

    def _execute(self, query: str, params: tuple = ()) -> int:
        """Run a write statement; returns affected row count."""
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                rowcount = cur.rowcount
            conn.commit()
        return rowcount

    def upsert_articles(self, articles: List[Article]) -> None:
        if not articles:
            return

        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.executemany(
                    f"""
                    INSERT INTO articles ({ARTICLE_COLUMNS})
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    ON CONFLICT (pageid) DO UPDATE SET
                        title = EXCLUDED.title,
                        extract = EXCLUDED.extract,
                        thumbnail = EXCLUDED.thumbnail,
                        full_url = EXCLUDED.full_url,
                        last_accessed = EXCLUDED.last_accessed,
                        is_favorite = EXCLUDED.is_favorite,
                        ai_summary = EXCLUDED.ai_summary,
                        related_keywords = EXCLUDED.related_keywords,
                        latitude = EXCLUDED.latitude,
                        longitude = EXCLUDED.longitude
                    """,
                    [_article_params(article) for article in articles],
                )
            conn.commit()

        self._notify_changed()

    def get_article(self, pageid: int) -> Optional[Article]:
        articles = self._fetch_all(
            f"SELECT {ARTICLE_COLUMNS} FROM articles WHERE pageid = %s",
            (pageid,),
        )
        return articles[0] if articles else None

    def get_articles(self, pageids: Iterable[int]) -> List[Article]:
        ids = list(pageids)
        if not ids:
            return []
        return self._fetch_all(
            f"SELECT {ARTICLE_COLUMNS} FROM articles WHERE pageid = ANY(%s)",
            (ids,),
        )

    def search_by_title(self, query: str) -> List[Article]:
        return self._fetch_all(
            f"SELECT {ARTICLE_COLUMNS} FROM articles WHERE title ILIKE %s",
            (f"%{_escape_like(query)}%",),
        )

    def get_recent_articles(self, limit: int = 10) -> List[Article]:
        return self._fetch_all(
            f"""
            SELECT {ARTICLE_COLUMNS} FROM articles
            ORDER BY last_accessed DESC
            LIMIT %s
            """,
            (limit,),
        )

    def get_favorite_articles(self) -> List[Article]:
        return self._fetch_all(
            f"""
            SELECT {ARTICLE_COLUMNS} FROM articles
            WHERE is_favorite = TRUE
            ORDER BY title ASC
            """
        )

    def get_articles_with_location(self) -> List[Article]:
        return self._fetch_all(
            f"""
            SELECT {ARTICLE_COLUMNS} FROM articles
            WHERE latitude IS NOT NULL AND longitude IS NOT NULL
            """
        )

    def update_favorite_status(self, pageid: int, is_favorite: bool) -> None:
        if self._execute(
            "UPDATE articles SET is_favorite = %s WHERE pageid = %s",
            (is_favorite, pageid),
        ):
            self._notify_changed()

    def update_ai_summary(self, pageid: int, summary: str) -> None:
        if self._execute(
            "UPDATE articles SET ai_summary = %s WHERE pageid = %s",
            (summary, pageid),
        ):
            self._notify_changed()

    def delete_articles(self, pageids: List[int]) -> None:
        if not pageids:
            return
        if self._execute(
            "DELETE FROM articles WHERE pageid = ANY(%s)",
            (list(pageids),),
        ):
            self._notify_changed()

    def get_old_articles(self, cutoff: datetime) -> List[Article]:
        return self._fetch_all(
            f"""
            SELECT {ARTICLE_COLUMNS} FROM articles
            WHERE last_accessed < %s AND is_favorite = FALSE
            """,
            (cutoff,),
        )

    def close(self) -> None:
        super().close()
        self.pool.close()

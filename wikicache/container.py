"""Composition root wiring the stores, clients and repository together."""

from typing import Optional

import httpx
from rich.console import Console

from .config import Config
from .db import ArticleStore, InMemoryArticleStore, PostgresArticleStore, create_connection_pool
from .generation import MockSummarizer, OpenAISummarizer, Summarizer
from .location import LocationProvider, create_location_provider
from .repository import ArticleRepository
from .wikipedia import WikipediaClient

console = Console(stderr=True)


def create_article_store(config: Config) -> ArticleStore:
    """Get configured article store."""
    if config.config.cache.backend == "memory":
        return InMemoryArticleStore()

    pool = create_connection_pool(config.get_db_config())
    return PostgresArticleStore(pool)


def create_summarizer(config: Config) -> Summarizer:
    """Get configured summarizer."""
    llm_config = config.get_llm_config()

    if llm_config.get("provider") == "openai":
        api_key = llm_config.get("api_key")
        if not api_key:
            console.print("[yellow]Warning: No OpenAI API key found. Using mock summarizer.[/yellow]")
            return MockSummarizer()

        return OpenAISummarizer(
            api_key=api_key,
            model=llm_config.get("model", "gpt-3.5-turbo-instruct"),
            base_url=llm_config.get("base_url"),
            max_input_chars=llm_config.get("max_input_chars", 3000),
            max_tokens=llm_config.get("max_tokens", 150),
            temperature=llm_config.get("temperature", 0.5),
        )

    if llm_config.get("provider") != "mock":
        console.print("[yellow]Warning: Unknown LLM provider. Using mock summarizer.[/yellow]")
    return MockSummarizer()


class AppContainer:
    """Application-scoped objects, built once and closed together."""

    def __init__(
        self,
        config: Config,
        store: ArticleStore,
        wikipedia: WikipediaClient,
        summarizer: Summarizer,
        location: LocationProvider,
    ) -> None:
        self.config = config
        self.store = store
        self.wikipedia = wikipedia
        self.summarizer = summarizer
        self.location = location
        self.repository = ArticleRepository(
            store=store,
            wikipedia=wikipedia,
            summarizer=summarizer,
            cache_config=config.config.cache,
        )
        self._started = False

    @classmethod
    def from_config(
        cls,
        config: Config,
        store: Optional[ArticleStore] = None,
        summarizer: Optional[Summarizer] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "AppContainer":
        """
        Build every collaborator from configuration.

        Args:
            config: Loaded configuration
            store: Article store to use instead of the configured backend
            summarizer: Summarizer to use instead of the configured provider
            transport: httpx transport shared by the HTTP clients (for testing)
        """
        settings = config.config
        return cls(
            config=config,
            store=store if store is not None else create_article_store(config),
            wikipedia=WikipediaClient.from_config(settings.wikipedia, transport=transport),
            summarizer=summarizer if summarizer is not None else create_summarizer(config),
            location=create_location_provider(settings.location, transport=transport),
        )

    async def startup(self) -> int:
        """Cold-start maintenance; evicts old articles on the first call only."""
        if self._started:
            return 0
        self._started = True
        return await self.repository.cleanup_old_articles()

    def close(self) -> None:
        self.location.cleanup()
        self.store.close()

    def __enter__(self) -> "AppContainer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

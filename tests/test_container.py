from wikicache.config import Config, ConfigModel
from wikicache.container import AppContainer, create_article_store, create_summarizer
from wikicache.db import InMemoryArticleStore
from wikicache.generation import MockSummarizer, OpenAISummarizer
from wikicache.location import FixedLocationProvider

from helpers import make_article, run


def memory_config(**overrides):
    data = {"cache": {"backend": "memory"}, "llm": {"api_key_env": "WIKICACHE_TEST_KEY"}}
    data.update(overrides)
    return Config.from_model(ConfigModel(**data))


def test_summarizer_falls_back_to_mock_without_key(monkeypatch):
    monkeypatch.delenv("WIKICACHE_TEST_KEY", raising=False)

    assert isinstance(create_summarizer(memory_config()), MockSummarizer)


def test_openai_summarizer_with_key(monkeypatch):
    monkeypatch.setenv("WIKICACHE_TEST_KEY", "sk-test")

    summarizer = create_summarizer(memory_config())

    assert isinstance(summarizer, OpenAISummarizer)
    assert summarizer.model == "gpt-3.5-turbo-instruct"


def test_memory_backend_store():
    assert isinstance(create_article_store(memory_config()), InMemoryArticleStore)


def test_container_wires_repository(api):
    config = memory_config(location={"enabled": True, "latitude": 52.52, "longitude": 13.405})

    with AppContainer.from_config(config, transport=api.transport) as container:
        assert container.repository.store is container.store
        assert container.repository.cache_config.max_age_days == 30
        assert isinstance(container.location, FixedLocationProvider)
        assert container.wikipedia.transport is not None


def test_startup_cleanup_runs_once():
    store = InMemoryArticleStore()
    store.upsert_article(make_article(1, "Ancient", last_accessed="2001-01-01T00:00:00Z"))
    container = AppContainer.from_config(memory_config(), store=store, summarizer=MockSummarizer())

    assert run(container.startup()) == 1
    store.upsert_article(make_article(2, "Also ancient", last_accessed="2001-01-01T00:00:00Z"))
    assert run(container.startup()) == 0
    assert store.get_article(2) is not None

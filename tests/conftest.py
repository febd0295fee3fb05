import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wikicache.db import InMemoryArticleStore
from wikicache.generation import MockSummarizer
from wikicache.repository import ArticleRepository
from wikicache.wikipedia import WikipediaClient

from helpers import NOW, Clock, WikipediaAPIStub


@pytest.fixture
def api():
    return WikipediaAPIStub()


@pytest.fixture
def store():
    return InMemoryArticleStore()


@pytest.fixture
def summarizer():
    return MockSummarizer()


@pytest.fixture
def clock():
    return Clock(NOW)


@pytest.fixture
def wikipedia(api):
    return WikipediaClient(transport=api.transport)


@pytest.fixture
def repository(store, wikipedia, summarizer, clock):
    return ArticleRepository(store, wikipedia, summarizer, clock=clock)

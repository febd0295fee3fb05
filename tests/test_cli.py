import pytest
import yaml
from typer.testing import CliRunner

from wikicache.cli import app
from wikicache.cli import common
from wikicache.container import AppContainer
from wikicache.db import InMemoryArticleStore
from wikicache.generation import MockSummarizer

from wikicache.models import utc_now

from helpers import make_article

runner = CliRunner()


@pytest.fixture
def cli_store(tmp_path, monkeypatch, api):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({
        "cache": {"backend": "memory"},
        "llm": {"provider": "mock"},
        "location": {"provider": "fixed", "enabled": True, "latitude": 52.5163, "longitude": 13.3777},
    }))
    monkeypatch.setenv("WIKICACHE_CONFIG", str(config_path))

    store = InMemoryArticleStore()
    summarizer = MockSummarizer()

    def build_container(config):
        return AppContainer.from_config(
            config, store=store, summarizer=summarizer, transport=api.transport
        )

    monkeypatch.setattr(common, "build_container", build_container)
    return store


def test_search_prints_remote_results(cli_store, api):
    api.search_results = [{"pageid": 736, "title": "Albert Einstein", "snippet": ""}]
    api.add_page(736, "Albert Einstein")

    result = runner.invoke(app, ["search", "Einstein"])

    assert result.exit_code == 0, result.output
    assert "Albert Einstein" in result.output
    assert cli_store.get_article(736) is not None


def test_search_without_results(cli_store, api):
    result = runner.invoke(app, ["search", "qwxzy"])

    assert result.exit_code == 0
    assert "No articles found" in result.output


def test_search_failure_exits_nonzero(cli_store, api):
    api.fail = True

    result = runner.invoke(app, ["search", "Einstein"])

    assert result.exit_code == 1
    assert "Search failed" in result.output


def test_show_generates_summary(cli_store, api):
    api.add_page(736, "Albert Einstein", extract="Einstein was a physicist. He won a Nobel prize.")

    result = runner.invoke(app, ["show", "736"])

    assert result.exit_code == 0, result.output
    assert "AI summary" in result.output
    assert cli_store.get_article(736).ai_summary == "Einstein was a physicist. He won a Nobel prize."


def test_show_unknown_article(cli_store, api):
    result = runner.invoke(app, ["show", "999", "--no-summary"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_favorite_then_list(cli_store):
    cli_store.upsert_article(make_article(736, "Albert Einstein", last_accessed=utc_now()))

    added = runner.invoke(app, ["favorite", "736"])
    listed = runner.invoke(app, ["favorites"])

    assert added.exit_code == 0
    assert "Added to favorites" in added.output
    assert "Albert Einstein" in listed.output

    removed = runner.invoke(app, ["favorite", "736", "--remove"])
    assert removed.exit_code == 0
    assert cli_store.get_article(736).is_favorite is False


def test_recent_lists_cached_articles(cli_store):
    cli_store.upsert_article(make_article(1, "Entropy", last_accessed=utc_now()))

    result = runner.invoke(app, ["recent", "--limit", "5"])

    assert result.exit_code == 0
    assert "Entropy" in result.output


def test_nearby_uses_configured_location(cli_store, api):
    api.geosearch_results = [
        {"pageid": 2, "title": "Brandenburg Gate", "lat": 52.5163, "lon": 13.3777, "dist": 0.0},
    ]
    api.add_page(2, "Brandenburg Gate", coordinates=[{"lat": 52.5163, "lon": 13.3777}])

    result = runner.invoke(app, ["nearby"])

    assert result.exit_code == 0, result.output
    assert "Brandenburg Gate" in result.output
    assert api.requests[0].url.params["gscoord"] == "52.5163|13.3777"


def test_nearby_requires_both_coordinates(cli_store):
    result = runner.invoke(app, ["nearby", "--lat", "10"])

    assert result.exit_code == 1


def test_cleanup_reports_count(cli_store):
    cli_store.upsert_article(make_article(1, "Ancient", last_accessed="2001-01-01T00:00:00Z"))

    result = runner.invoke(app, ["cleanup"])

    assert result.exit_code == 0
    assert "Removed 1 old article" in result.output


def test_missing_config(tmp_path, monkeypatch):
    monkeypatch.setenv("WIKICACHE_CONFIG", str(tmp_path / "nope.yaml"))

    result = runner.invoke(app, ["recent"])

    assert result.exit_code == 1
    assert "wikicache init" in result.output


def test_init_with_memory_backend(tmp_path):
    config_path = tmp_path / "config.yaml"

    result = runner.invoke(app, [
        "init", "--config", str(config_path), "--backend", "memory", "--lat", "1.0", "--lon", "2.0",
    ])

    assert result.exit_code == 0, result.output
    saved = yaml.safe_load(config_path.read_text())
    assert saved["cache"]["backend"] == "memory"
    assert saved["location"]["enabled"] is True


def test_nearby_reports_failed_location_lookup(cli_store, api, tmp_path):
    (tmp_path / "config.yaml").write_text(yaml.safe_dump({
        "cache": {"backend": "memory"},
        "llm": {"provider": "mock"},
        "location": {"provider": "ip", "enabled": True},
    }))
    api.fail = True

    result = runner.invoke(app, ["nearby"])

    assert result.exit_code == 1
    assert "Could not determine the current location" in result.output
    assert "location.enabled" not in result.output
    assert api.calls["geosearch"] == 0


def test_nearby_reports_disabled_location(cli_store, api, tmp_path):
    (tmp_path / "config.yaml").write_text(yaml.safe_dump({
        "cache": {"backend": "memory"},
        "llm": {"provider": "mock"},
        "location": {"provider": "fixed", "enabled": False},
    }))

    result = runner.invoke(app, ["nearby"])

    assert result.exit_code == 1
    assert "Location access is disabled" in result.output
    assert api.requests == []

import pytest

from wikicache.config import Config, ConfigModel, load_config, save_config


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")

    config = load_config(path)

    assert config.cache.max_age_days == 30
    assert config.wikipedia.geosearch_radius == 10000
    assert config.wikipedia.geosearch_limit == 20
    assert config.llm.model == "gpt-3.5-turbo-instruct"
    assert config.llm.max_input_chars == 3000


def test_saved_config_loads_back(tmp_path):
    path = tmp_path / "nested" / "config.yaml"
    model = ConfigModel(cache={"backend": "memory", "stale_after_days": 3})

    save_config(model, path)

    assert load_config(path) == model


def test_invalid_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("cache: [unclosed")

    with pytest.raises(ValueError, match="Invalid YAML"):
        load_config(path)


def test_invalid_values(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("cache:\n  backend: sqlite\n")

    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(path)


def test_location_needs_both_coordinates(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("location:\n  latitude: 10.0\n")

    with pytest.raises(ValueError):
        load_config(path)


def test_secrets_come_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text(
        "postgres:\n  password_env: TEST_DB_PASSWORD\n"
        "llm:\n  api_key_env: TEST_OPENAI_KEY\n"
    )
    monkeypatch.setenv("TEST_DB_PASSWORD", "hunter2")
    monkeypatch.setenv("TEST_OPENAI_KEY", "sk-test")

    config = Config(path)

    assert config.get_db_config()["password"] == "hunter2"
    assert config.get_llm_config()["api_key"] == "sk-test"


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "custom.yaml"
    path.write_text("cache:\n  recent_limit: 5\n")
    monkeypatch.setenv("WIKICACHE_CONFIG", str(path))

    config = Config()

    assert config.config_path == path
    assert config.config.cache.recent_limit == 5


def test_result_limits_fit_one_extract_batch(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("wikipedia:\n  search_limit: 50\n")

    with pytest.raises(ValueError, match="search_limit"):
        load_config(path)

    path.write_text("wikipedia:\n  geosearch_limit: 21\n")

    with pytest.raises(ValueError, match="geosearch_limit"):
        load_config(path)

    path.write_text("wikipedia:\n  search_limit: 20\n  geosearch_limit: 20\n")

    assert load_config(path).wikipedia.search_limit == 20

"""Tests for aggregate_headlines.config module."""

from pathlib import Path

import pytest

from aggregate_headlines.config import (
    Config,
    CustomSourceConfig,
    get_config,
    load_config,
    parse_config,
    reset_config,
    set_config,
)


class TestParseConfig:
    def test_empty_dict_uses_defaults(self) -> None:
        config = parse_config({})
        assert config == Config()
        assert config.limits.max_articles == 50
        assert config.limits.max_articles_per_source == 2
        assert config.limits.max_items_per_feed == 10
        assert config.fetch.stagger_seconds == 0.2
        assert config.fetch.timeout_seconds == 10
        assert config.fetch.client == "httpx"

    def test_overrides_and_custom_sources(self) -> None:
        config = parse_config({
            "limits": {"max_articles": 20},
            "fetch": {"timeout_seconds": 3, "client": "requests"},
            "preferences": {
                "categories": ["sports"],
                "sources": {"sports": ["espn"]},
                "custom_sources": {"sports": [{"id": "x", "name": "X", "url": "https://x.example.com/rss"}]},
            },
        })
        assert config.limits.max_articles == 20
        assert config.limits.max_articles_per_source == 2
        assert config.fetch.timeout_seconds == 3
        assert config.fetch.client == "requests"
        assert config.preferences.categories == ["sports"]
        assert config.preferences.custom_sources == {
            "sports": [CustomSourceConfig(id="x", name="X", url="https://x.example.com/rss")]
        }


class TestLoadConfig:
    def test_loads_packaged_configs(self) -> None:
        prod = load_config("prod")
        test = load_config("test")
        assert prod.limits.max_articles == 50
        assert test.fetch.stagger_seconds == 0
        assert test.preferences.categories == ["world", "technology"]

    def test_env_var_selects_config(self, monkeypatch) -> None:
        monkeypatch.setenv("AGGREGATE_HEADLINES_CONFIG", "test")
        assert load_config().limits.max_articles == 10

    def test_loads_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "mine.yaml"
        path.write_text("limits:\n  max_articles: 7\n")
        assert load_config(str(path)).limits.max_articles == 7

    def test_unknown_config_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_config("does-not-exist")


class TestConfigSingleton:
    def test_set_get_reset(self) -> None:
        custom = parse_config({"limits": {"max_articles": 5}})
        set_config(custom)
        try:
            assert get_config() is custom
        finally:
            reset_config()

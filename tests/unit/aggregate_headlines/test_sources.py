"""Tests for aggregate_headlines.sources module."""

from aggregate_headlines.config import CustomSourceConfig, LimitsConfig, PreferencesConfig
from aggregate_headlines.models import Source
from aggregate_headlines.sources import (
    DEFAULT_SOURCES,
    category_display_name,
    normalize_category,
    resolve_active_sources,
)


def _catalog() -> dict[str, list[Source]]:
    return {
        "world": [
            Source(id="w1", name="W1", url="https://w1.example.com/rss", category="world", verified=True),
            Source(id="w2", name="W2", url="https://w2.example.com/rss", category="world", verified=True),
            Source(id="w3", name="W3", url="https://w3.example.com/rss", category="world", verified=True),
        ],
        "sports": [
            Source(id="s1", name="S1", url="https://s1.example.com/rss", category="sports", verified=True),
        ],
    }


class TestDefaultSources:
    def test_catalog_sources_are_verified_and_categorized(self) -> None:
        for category, sources in DEFAULT_SOURCES.items():
            assert sources
            for source in sources:
                assert source.category == category
                assert source.verified
                assert not source.is_custom

    def test_source_ids_unique(self) -> None:
        ids = [s.id for sources in DEFAULT_SOURCES.values() for s in sources]
        assert len(ids) == len(set(ids))

    def test_category_display_name(self) -> None:
        assert category_display_name("breaking") == "Breaking News"
        assert category_display_name("gardening") == "gardening"


class TestResolveActiveSources:
    def test_default_preferences(self) -> None:
        result = resolve_active_sources(PreferencesConfig())
        assert [s.id for s in result] == [
            "foxnews-breaking",
            "ndtv",
            "bbc-world",
            "foxnews-world",
            "yahoo-finance",
            "businessstandard-business",
            "techcrunch",
            "theverge",
        ]

    def test_catalog_order_within_category(self) -> None:
        prefs = PreferencesConfig(categories=["world"], sources={"world": ["w3", "w1"]})
        result = resolve_active_sources(prefs, catalog=_catalog())
        assert [s.id for s in result] == ["w1", "w3"]

    def test_category_order_follows_preferences(self) -> None:
        prefs = PreferencesConfig(
            categories=["sports", "world"],
            sources={"world": ["w1"], "sports": ["s1"]},
        )
        result = resolve_active_sources(prefs, catalog=_catalog())
        assert [s.id for s in result] == ["s1", "w1"]

    def test_normalizes_category_keys(self) -> None:
        prefs = PreferencesConfig(categories=[" World "], sources={"WORLD": ["w2"]})
        result = resolve_active_sources(prefs, catalog=_catalog())
        assert [(s.id, s.category) for s in result] == [("w2", "world")]

    def test_unknown_categories_and_sources_skipped(self) -> None:
        prefs = PreferencesConfig(
            categories=["gardening", "world"],
            sources={"world": ["w1", "missing"]},
        )
        result = resolve_active_sources(prefs, catalog=_catalog())
        assert [s.id for s in result] == ["w1"]

    def test_category_without_selection_yields_nothing(self) -> None:
        prefs = PreferencesConfig(categories=["world"], sources={})
        assert resolve_active_sources(prefs, catalog=_catalog()) == []

    def test_limits_sources_per_category(self) -> None:
        prefs = PreferencesConfig(categories=["world"], sources={"world": ["w1", "w2", "w3"]})
        limits = LimitsConfig(max_sources_per_category=2)
        result = resolve_active_sources(prefs, limits, catalog=_catalog())
        assert [s.id for s in result] == ["w1", "w2"]

    def test_limits_categories(self) -> None:
        prefs = PreferencesConfig(
            categories=["world", "sports"],
            sources={"world": ["w1"], "sports": ["s1"]},
        )
        result = resolve_active_sources(prefs, LimitsConfig(max_categories=1), catalog=_catalog())
        assert [s.id for s in result] == ["w1"]

    def test_custom_sources_follow_catalog_sources(self) -> None:
        prefs = PreferencesConfig(
            categories=["world"],
            sources={"world": ["w1"]},
            custom_sources={
                "world": [CustomSourceConfig(id="mine", name="My Feed", url="https://mine.example.com/rss")],
            },
        )
        result = resolve_active_sources(prefs, catalog=_catalog())
        assert [s.id for s in result] == ["w1", "mine"]
        custom = result[1]
        assert custom.is_custom
        assert not custom.verified
        assert custom.category == "world"


class TestNormalizeCategory:
    def test_removes_whitespace_and_lowercases(self) -> None:
        assert normalize_category(" Tech Nology ") == "technology"

"""Configuration loader for aggregate-headlines."""

from dataclasses import dataclass, field
from pathlib import Path

from common.config import ConfigSingleton, find_config_path, load_yaml

CONFIG_DIR = Path(__file__).parent / "configs"
CONFIG_ENV_VAR = "AGGREGATE_HEADLINES_CONFIG"


@dataclass
class LimitsConfig:
    max_articles: int = 50
    max_articles_per_source: int = 2
    max_items_per_feed: int = 10
    max_categories: int = 15
    max_sources_per_category: int = 5


@dataclass
class FetchConfig:
    # Per-fetch deadline; the stagger is multiplied by the source's dispatch index.
    timeout_seconds: float = 10.0
    stagger_seconds: float = 0.2
    user_agent: str = "aggregate-headlines/1.0 (RSS reader)"
    # "httpx" (async) or "requests" (blocking, run on a per-cycle thread pool).
    client: str = "httpx"


@dataclass
class CustomSourceConfig:
    id: str
    name: str
    url: str


@dataclass
class PreferencesConfig:
    categories: list[str] = field(
        default_factory=lambda: ["breaking", "world", "business", "technology"]
    )
    sources: dict[str, list[str]] = field(
        default_factory=lambda: {
            "breaking": ["foxnews-breaking", "ndtv"],
            "world": ["bbc-world", "foxnews-world"],
            "business": ["yahoo-finance", "businessstandard-business"],
            "technology": ["techcrunch", "theverge"],
        }
    )
    custom_sources: dict[str, list[CustomSourceConfig]] = field(default_factory=dict)


@dataclass
class Config:
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    preferences: PreferencesConfig = field(default_factory=PreferencesConfig)


def load_config(config_name: str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        config_name: Name of config file (without .yaml extension) or a path
                    to a YAML file. If None, uses the
                    AGGREGATE_HEADLINES_CONFIG env var or "prod".

    Returns:
        Loaded Config object
    """
    path = find_config_path(config_name, CONFIG_DIR, env_var=CONFIG_ENV_VAR)
    return parse_config(load_yaml(path))


def parse_config(data: dict) -> Config:
    """Parse config dictionary into Config object."""
    defaults = Config()

    limits_data = data.get("limits") or {}
    limits = LimitsConfig(
        max_articles=limits_data.get("max_articles", defaults.limits.max_articles),
        max_articles_per_source=limits_data.get(
            "max_articles_per_source", defaults.limits.max_articles_per_source
        ),
        max_items_per_feed=limits_data.get("max_items_per_feed", defaults.limits.max_items_per_feed),
        max_categories=limits_data.get("max_categories", defaults.limits.max_categories),
        max_sources_per_category=limits_data.get(
            "max_sources_per_category", defaults.limits.max_sources_per_category
        ),
    )

    fetch_data = data.get("fetch") or {}
    fetch = FetchConfig(
        timeout_seconds=fetch_data.get("timeout_seconds", defaults.fetch.timeout_seconds),
        stagger_seconds=fetch_data.get("stagger_seconds", defaults.fetch.stagger_seconds),
        user_agent=fetch_data.get("user_agent", defaults.fetch.user_agent),
        client=fetch_data.get("client", defaults.fetch.client),
    )

    prefs_data = data.get("preferences") or {}
    custom_sources = {
        category: [CustomSourceConfig(**entry) for entry in entries or []]
        for category, entries in (prefs_data.get("custom_sources") or {}).items()
    }
    preferences = PreferencesConfig(
        categories=prefs_data.get("categories", defaults.preferences.categories),
        sources=prefs_data.get("sources", defaults.preferences.sources),
        custom_sources=custom_sources,
    )

    return Config(limits=limits, fetch=fetch, preferences=preferences)


# Global config instance (loaded on first access)
_manager: ConfigSingleton[Config] = ConfigSingleton(load_config)
get_config = _manager.get
set_config = _manager.set
reset_config = _manager.reset

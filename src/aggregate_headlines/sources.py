"""Built-in feed catalog and resolution of the active source list."""

import logging

from aggregate_headlines.config import LimitsConfig, PreferencesConfig
from aggregate_headlines.models import Source

logger = logging.getLogger(__name__)

CATEGORY_METADATA = {
    "breaking": {"name": "Breaking News"},
    "world": {"name": "World"},
    "politics": {"name": "Politics"},
    "business": {"name": "Business"},
    "technology": {"name": "Technology"},
    "sports": {"name": "Sports"},
}

# category -> [(id, name, url)]
RSS_FEEDS = {
    "breaking": [
        ("foxnews-breaking", "Fox News", "https://moxie.foxnews.com/google-publisher/latest.xml"),
        ("ndtv", "NDTV", "https://feeds.feedburner.com/ndtvnews-top-stories"),
        ("bbc-breaking", "BBC News", "https://feeds.bbci.co.uk/news/rss.xml"),
        ("cnn-breaking", "CNN", "http://rss.cnn.com/rss/edition.rss"),
    ],
    "world": [
        ("bbc-world", "BBC World", "https://feeds.bbci.co.uk/news/world/rss.xml"),
        ("foxnews-world", "Fox News", "https://moxie.foxnews.com/google-publisher/world.xml"),
        ("guardian-world", "The Guardian", "https://www.theguardian.com/world/rss"),
        ("firstpost", "First Post", "https://www.firstpost.com/commonfeeds/v1/mfp/rss/world.xml"),
    ],
    "politics": [
        ("politico", "Politico", "https://www.politico.com/rss/politics08.xml"),
        ("foxnews-politics", "Fox News Politics", "https://moxie.foxnews.com/google-publisher/politics.xml"),
        ("npr-politics", "NPR Politics", "https://feeds.npr.org/1014/rss.xml"),
        ("hill-politics", "The Hill", "https://thehill.com/rss/syndicator/19109"),
    ],
    "business": [
        ("yahoo-finance", "Yahoo Finance", "https://feeds.finance.yahoo.com/rss/2.0/headline"),
        ("businessstandard-business", "Business Standard", "https://www.business-standard.com/rss/home_page_top_stories.rss"),
        ("marketwatch", "MarketWatch", "https://feeds.marketwatch.com/marketwatch/topstories/"),
        ("firstpost-business", "First Post", "https://www.firstpost.com/commonfeeds/v1/mfp/rss/business.xml"),
    ],
    "technology": [
        ("techcrunch", "TechCrunch", "https://techcrunch.com/feed/"),
        ("theverge", "The Verge", "https://www.theverge.com/rss/index.xml"),
        ("wired", "Wired", "https://www.wired.com/feed/rss"),
        ("arstechnica", "Ars Technica", "https://feeds.arstechnica.com/arstechnica/index"),
    ],
    "sports": [
        ("espn", "ESPN", "https://www.espn.com/espn/rss/news"),
        ("bbc-sport", "BBC Sport", "https://feeds.bbci.co.uk/sport/rss.xml"),
        ("cbs-sports", "CBS Sports", "https://www.cbssports.com/rss/headlines/"),
    ],
}


def build_catalog(feeds: dict[str, list[tuple[str, str, str]]] = RSS_FEEDS) -> dict[str, list[Source]]:
    """Turn the feed table into verified Source objects keyed by category."""
    return {
        category: [
            Source(id=source_id, name=name, url=url, category=category, verified=True)
            for source_id, name, url in entries
        ]
        for category, entries in feeds.items()
    }


DEFAULT_SOURCES = build_catalog()


def normalize_category(category: str) -> str:
    return "".join(category.split()).lower()


def category_display_name(category: str) -> str:
    metadata = CATEGORY_METADATA.get(category)
    return metadata["name"] if metadata else category


def resolve_active_sources(
    preferences: PreferencesConfig,
    limits: LimitsConfig | None = None,
    catalog: dict[str, list[Source]] | None = None,
) -> list[Source]:
    """Resolve the ordered list of sources to load from user preferences.

    Categories are honored in preference order; within a category, selected
    catalog sources keep catalog order and are followed by custom sources.
    """
    limits = limits or LimitsConfig()
    catalog = DEFAULT_SOURCES if catalog is None else catalog

    categories = []
    for raw_category in preferences.categories:
        category = normalize_category(raw_category)
        if category and category not in categories:
            categories.append(category)

    if len(categories) > limits.max_categories:
        logger.warning(
            "Only the first %d of %d categories are used",
            limits.max_categories,
            len(categories),
        )
        categories = categories[: limits.max_categories]

    selected_by_category = {
        normalize_category(category): ids for category, ids in preferences.sources.items()
    }
    custom_by_category = {
        normalize_category(category): entries
        for category, entries in preferences.custom_sources.items()
    }

    sources = []
    for category in categories:
        available = catalog.get(category, [])
        custom = custom_by_category.get(category, [])
        if not available and not custom:
            logger.warning("Unknown category: %s", category)
            continue

        selected = list(selected_by_category.get(category) or [])
        if len(selected) > limits.max_sources_per_category:
            logger.warning(
                "Only the first %d selected sources are used for %s",
                limits.max_sources_per_category,
                category,
            )
            selected = selected[: limits.max_sources_per_category]

        known_ids = {source.id for source in available}
        for source_id in selected:
            if source_id not in known_ids:
                logger.warning("Invalid source for %s: %s", category, source_id)

        sources.extend(source for source in available if source.id in selected)
        sources.extend(
            Source(
                id=entry.id,
                name=entry.name,
                url=entry.url,
                category=category,
                verified=False,
                is_custom=True,
            )
            for entry in custom
        )

    logger.info("Resolved %d active sources across %d categories", len(sources), len(categories))
    return sources

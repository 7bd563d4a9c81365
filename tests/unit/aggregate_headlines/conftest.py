"""Shared fixtures for aggregate_headlines tests."""

from datetime import datetime, timezone
from typing import Callable, Optional

import pytest

from aggregate_headlines.config import Config, FetchConfig
from aggregate_headlines.models import Article, ArticleSource, Source


def build_item(
    title: Optional[str] = "Title",
    link: Optional[str] = "https://example.com/a",
    description: Optional[str] = "Summary",
    pub_date: Optional[str] = "Mon, 01 Jan 2024 12:00:00 GMT",
    extra: str = "",
) -> str:
    parts = ["<item>"]
    if title is not None:
        parts.append(f"<title>{title}</title>")
    if link is not None:
        parts.append(f"<link>{link}</link>")
    if description is not None:
        parts.append(f"<description><![CDATA[{description}]]></description>")
    if pub_date is not None:
        parts.append(f"<pubDate>{pub_date}</pubDate>")
    parts.append(extra)
    parts.append("</item>")
    return "".join(parts)


def build_rss(items: list[str]) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/">'
        "<channel><title>Test feed</title><link>https://example.com</link>"
        "<description>Test</description>"
        + "".join(items)
        + "</channel></rss>"
    )


@pytest.fixture
def item() -> Callable[..., str]:
    return build_item


@pytest.fixture
def rss() -> Callable[[list[str]], str]:
    return build_rss


@pytest.fixture
def source() -> Source:
    return Source(
        id="bbc-world",
        name="BBC World",
        url="https://feeds.example.com/world.xml",
        category="world",
        verified=True,
    )


@pytest.fixture
def fast_config() -> Config:
    return Config(fetch=FetchConfig(timeout_seconds=2, stagger_seconds=0))


@pytest.fixture
def make_article() -> Callable[..., Article]:
    def _make(
        title: str = "Title",
        published_at: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc),
        category: str = "world",
        source_id: str = "bbc-world",
        url: str = "https://example.com/a",
    ) -> Article:
        return Article(
            id=f"{source_id}:{title}",
            title=title,
            summary=title,
            url=url,
            image_url=None,
            published_at=published_at,
            source=ArticleSource(id=source_id, name=source_id, verified=True, is_custom=False),
            category=category,
            loaded_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )

    return _make

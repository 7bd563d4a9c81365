"""Feed document parsing and per-item field extraction."""

import io
import logging
import re
from datetime import datetime
from typing import Any, Optional, Union
from urllib.parse import urlparse

import feedparser
from lxml import etree
from lxml import html as lxml_html

from aggregate_headlines.models import Article, ArticleSource, Source
from common.datetime import parse_datetime, utc_now
from common.hashing import generate_article_id

logger = logging.getLogger(__name__)

MAX_ITEMS_PER_FEED = 10
MAX_ARTICLES_PER_SOURCE = 2
SUMMARY_FALLBACK_LENGTH = 100
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")

_TAG_RE = re.compile(r"<[^>]*>")
_ENTITY_RE = re.compile(r"&#?\w+;")
_WHITESPACE_RE = re.compile(r"\s+")
_XML_DECLARATION_RE = re.compile(r"^\s*<\?xml[^>]*\?>", re.IGNORECASE)


def clean_text(text: Optional[str]) -> str:
    """Remove markup, replace leftover entities with spaces and collapse whitespace."""
    if not text:
        return ""
    text = _TAG_RE.sub("", text)
    text = _ENTITY_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def generate_summary(title: str) -> str:
    if len(title) > SUMMARY_FALLBACK_LENGTH:
        return title[:SUMMARY_FALLBACK_LENGTH] + "..."
    return title


def sanitize_url(url: Optional[str]) -> Optional[str]:
    """Return the URL if it is absolute http(s), else None."""
    if not url:
        return None
    url = url.strip()
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    if parsed.scheme.lower() not in ("http", "https") or not parsed.netloc:
        return None
    return url


def is_valid_image_url(url: Optional[str]) -> bool:
    """An image URL must be https and end in a known image extension."""
    if not url:
        return False
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return (
        parsed.scheme.lower() == "https"
        and bool(parsed.netloc)
        and parsed.path.lower().endswith(IMAGE_EXTENSIONS)
    )


def _first_inline_image(description: str) -> Optional[str]:
    if "<img" not in description.lower():
        return None
    try:
        fragment = lxml_html.fragment_fromstring(description, create_parent="div")
    except (etree.ParserError, ValueError):
        return None
    sources = fragment.xpath(".//img/@src")
    return str(sources[0]) if sources else None


def extract_image_url(entry: Any, description: str) -> Optional[str]:
    """Pick an image for the entry.

    Order: media content/thumbnail, then an image/* enclosure, then the first
    <img> in the description markup. Each candidate must pass
    is_valid_image_url.
    """
    media = list(entry.get("media_content") or []) + list(entry.get("media_thumbnail") or [])
    for item in media:
        url = item.get("url")
        if is_valid_image_url(url):
            return url.strip()

    for enclosure in entry.get("enclosures") or []:
        if not str(enclosure.get("type") or "").startswith("image/"):
            continue
        url = enclosure.get("href") or enclosure.get("url")
        if is_valid_image_url(url):
            return url.strip()

    if description:
        url = _first_inline_image(description)
        if is_valid_image_url(url):
            return url.strip()

    return None


def _get_date_text(entry: Any) -> Optional[str]:
    return entry.get("published") or entry.get("updated") or entry.get("pubDate")


def extract_article(entry: Any, source: Source, loaded_at: datetime) -> Optional[Article]:
    """Build an Article from one feed entry, or None if title or link is unusable."""
    title = clean_text(entry.get("title"))
    link = entry.get("link") or entry.get("id") or entry.get("guid")
    url = sanitize_url(link)

    if not title or not url:
        logger.debug("Skipping item from %s with missing title or link: title=%r link=%r", source.id, title, link)
        return None

    description = entry.get("summary") or entry.get("description") or ""

    return Article(
        id=generate_article_id(title, url),
        title=title,
        summary=clean_text(description) or generate_summary(title),
        url=url,
        image_url=extract_image_url(entry, description),
        published_at=parse_datetime(_get_date_text(entry)),
        source=ArticleSource.from_source(source),
        category=source.category,
        loaded_at=loaded_at,
    )


def parse_feed(
    raw: Union[str, bytes],
    source: Source,
    max_items: int = MAX_ITEMS_PER_FEED,
    max_articles: int = MAX_ARTICLES_PER_SOURCE,
    loaded_at: datetime | None = None,
) -> list[Article]:
    """Parse an RSS/Atom document into at most max_articles Articles.

    Only the first max_items entries are examined, in document order. An
    unparseable document yields an empty list.
    """
    loaded_at = loaded_at or utc_now()

    if isinstance(raw, str):
        # Already decoded; a declared encoding no longer describes these bytes.
        raw = _XML_DECLARATION_RE.sub("", raw.lstrip("\ufeff"), count=1).encode("utf-8")

    try:
        # A stream is always read as content, never as a URL or file path.
        feed = feedparser.parse(io.BytesIO(raw))
    except Exception as e:
        logger.warning("Failed to parse feed for %s: %s", source.id, e)
        return []

    entries = feed.get("entries") or []
    if not entries:
        if feed.get("bozo"):
            logger.warning("Unparseable feed for %s: %s", source.id, feed.get("bozo_exception"))
        return []

    articles = []
    for entry in entries[:max_items]:
        try:
            article = extract_article(entry, source, loaded_at)
        except Exception as e:
            logger.warning("Failed to parse entry from %s: %s", source.id, e)
            continue
        if article is None:
            continue
        articles.append(article)
        if len(articles) >= max_articles:
            break

    logger.debug("Parsed %d articles from %s", len(articles), source.id)
    return articles

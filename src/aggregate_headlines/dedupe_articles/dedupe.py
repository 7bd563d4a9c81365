"""Near-duplicate removal across sources."""

import logging
import re

from aggregate_headlines.models import Article

logger = logging.getLogger(__name__)

FINGERPRINT_LENGTH = 50

# ASCII word characters only; whitespace stays Unicode-aware.
_NON_WORD_RE = re.compile(r"[^A-Za-z0-9_\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def title_fingerprint(title: str) -> str:
    """Normalized-title key: lowercase, punctuation removed, whitespace collapsed, first 50 chars."""
    key = _NON_WORD_RE.sub("", title.lower())
    key = _WHITESPACE_RE.sub(" ", key).strip()
    return key[:FINGERPRINT_LENGTH]


def dedupe_articles(articles: list[Article]) -> list[Article]:
    """Keep the first article for each title fingerprint, preserving input order."""
    seen = set()
    unique = []
    for article in articles:
        key = title_fingerprint(article.title)
        if key in seen:
            continue
        seen.add(key)
        unique.append(article)

    if len(unique) < len(articles):
        logger.info("Removed %d duplicate articles", len(articles) - len(unique))
    return unique

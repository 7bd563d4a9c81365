"""Helper functions for the aggregate-headlines CLI."""

from __future__ import annotations

import argparse
from datetime import datetime

from aggregate_headlines.models import Article
from aggregate_headlines.rank_articles.rank import ALL_CATEGORIES
from aggregate_headlines.sources import category_display_name
from common.datetime import utc_now


def format_time_ago(published_at: datetime, now: datetime | None = None) -> str:
    '''Render a timestamp as a short relative age ("5m ago", "3h ago").'''
    now = now or utc_now()
    minutes = int((now - published_at).total_seconds() // 60)

    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if minutes < 1440:
        return f"{minutes // 60}h ago"
    return f"{minutes // 1440}d ago"


def format_article_count(count: int) -> str:
    return f"{count} article{'' if count == 1 else 's'}"


def format_article_line(article: Article, now: datetime | None = None) -> str:
    source = article.source.name
    if article.source.verified:
        source += " ✓"
    category = category_display_name(article.category)
    return f"[{category}] {source} · {format_time_ago(article.published_at, now)} · {article.title}"


def parse_aggregate_headlines_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for aggregate-headlines.'''

    parser = argparse.ArgumentParser(
        description="Aggregate, dedupe and rank headlines from RSS/Atom feeds"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config name (prod/test) or path to a YAML file. Defaults to 'prod'",
    )
    parser.add_argument(
        "--categories",
        default=None,
        help="Comma-separated categories to load (default: from preferences).",
    )
    parser.add_argument(
        "--category",
        default=ALL_CATEGORIES,
        help="Only show articles from this category (default: all).",
    )
    parser.add_argument("--load-s3", action="store_true", help="Upload results to S3")
    parser.add_argument("--load-local", action="store_true", help="Save results to local file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)

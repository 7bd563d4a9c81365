"""Recency ranking, capacity selection and category views."""

from aggregate_headlines.models import Article

MAX_ARTICLES = 50
ALL_CATEGORIES = "all"


def select_articles(articles: list[Article], max_articles: int = MAX_ARTICLES) -> list[Article]:
    """Sort newest first and keep at most max_articles.

    The sort is stable, so equal timestamps keep their input order.
    """
    ranked = sorted(articles, key=lambda article: article.published_at, reverse=True)
    return ranked[: max(max_articles, 0)]


def filter_by_category(articles: list[Article], category: str = ALL_CATEGORIES) -> list[Article]:
    if category == ALL_CATEGORIES:
        return list(articles)
    return [article for article in articles if article.category == category]


def count_by_category(articles: list[Article]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for article in articles:
        counts[article.category] = counts.get(article.category, 0) + 1
    return counts

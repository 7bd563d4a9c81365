"""Hashing utilities."""

import hashlib


def generate_article_id(title: str, url: str) -> str:
    """Generate a stable article ID from title and URL."""
    return hashlib.sha256(f"{title}:{url}".encode("utf-8")).hexdigest()[:16]

"""Data models for the headline aggregation pipeline."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from common.serialization import serialize_dataclass


@dataclass(frozen=True)
class Source:
    """A configured feed endpoint, fixed for the duration of a load cycle."""
    id: str
    name: str
    url: str
    category: str
    verified: bool = False
    is_custom: bool = False


@dataclass(frozen=True)
class ArticleSource:
    """The subset of a Source carried on each Article."""
    id: str
    name: str
    verified: bool
    is_custom: bool

    @classmethod
    def from_source(cls, source: Source) -> "ArticleSource":
        return cls(
            id=source.id,
            name=source.name,
            verified=source.verified,
            is_custom=source.is_custom,
        )


@dataclass
class Article:
    """Normalized article extracted from one feed item."""
    id: str
    title: str
    summary: str
    url: str
    image_url: Optional[str]
    published_at: datetime
    source: ArticleSource
    category: str
    loaded_at: datetime

    def to_dict(self) -> dict:
        return serialize_dataclass(self)


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"


@dataclass
class LoadResult:
    """Outcome of one load cycle."""
    articles: list[Article] = field(default_factory=list)
    total_sources: int = 0
    loaded_sources: int = 0
    completed_at: Optional[datetime] = None
    message: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.articles

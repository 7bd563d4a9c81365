"""Load-cycle event listeners."""

import logging
from datetime import datetime

from aggregate_headlines.models import Article

logger = logging.getLogger(__name__)


class LoadListener:
    """Receives progress and completion events for a load cycle.

    All methods are no-ops; subclasses override what they consume.
    """

    def progress(self, fraction: float) -> None:
        pass

    def status(self, message: str) -> None:
        pass

    def completed(self, articles: list[Article], completed_at: datetime) -> None:
        pass

    def completed_empty(self) -> None:
        pass


class LoggingListener(LoadListener):
    """Writes every event to the log."""

    def progress(self, fraction: float) -> None:
        logger.debug("Progress: %.0f%%", fraction * 100)

    def status(self, message: str) -> None:
        logger.info(message)

    def completed(self, articles: list[Article], completed_at: datetime) -> None:
        logger.info("Completed with %d articles at %s", len(articles), completed_at.isoformat())

    def completed_empty(self) -> None:
        logger.warning("Completed with no articles")

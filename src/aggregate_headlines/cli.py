"""CLI for aggregating headlines."""

from __future__ import annotations

import logging
from dataclasses import replace

from dotenv import load_dotenv

from aggregate_headlines.aggregate_headlines import aggregate_headlines
from aggregate_headlines.config import load_config, set_config
from aggregate_headlines.events import LoggingListener
from aggregate_headlines.helpers import (
    format_article_count,
    format_article_line,
    parse_aggregate_headlines_args,
)
from aggregate_headlines.rank_articles.rank import filter_by_category
from common.cli_helpers import parse_csv, setup_logging

logger = logging.getLogger(__name__)

OUTPUT_PREFIX = "headlines"


def main(argv: list[str] | None = None) -> None:
    args = parse_aggregate_headlines_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    load_dotenv()

    config = load_config(args.config)
    categories = parse_csv(args.categories)
    if categories:
        config = replace(config, preferences=replace(config.preferences, categories=categories))
    set_config(config)

    result = aggregate_headlines(config=config, listener=LoggingListener())

    if result.is_empty:
        logger.warning(result.message)
        return

    articles = filter_by_category(result.articles, args.category)
    print(format_article_count(len(articles)))
    for article in articles:
        print(format_article_line(article))

    if args.load_local:
        from common.local_io import save_jsonl_records_local

        save_jsonl_records_local(result.articles, OUTPUT_PREFIX)

    if args.load_s3:
        from common.aws import upload_jsonl_records_to_s3

        upload_jsonl_records_to_s3(result.articles, OUTPUT_PREFIX)


if __name__ == "__main__":
    main()

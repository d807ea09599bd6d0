"""
Feed Fetcher - turn subscribed feeds into stored articles.

Handles:
- Per-feed fetch with entry cap, URL dedup and HTML cleanup
- Trimming each feed back to its newest articles
- Refreshing every active feed in small concurrent batches
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from .database.models import DEFAULT_SETTINGS
from .text import clean_text, create_snippet

if TYPE_CHECKING:
    from .database import Database
    from .feeds import FeedItem, FeedParser

logger = logging.getLogger(__name__)

BATCH_SIZE = 5


@dataclass
class FetchResult:
    """Outcome of fetching one feed."""
    success: bool
    articles_added: int = 0
    error: str | None = None


class FeedFetcher:
    """Fetches feeds and stores their new entries as articles."""

    def __init__(self, db: "Database", feed_parser: "FeedParser"):
        self.db = db
        self.feed_parser = feed_parser

    def _max_articles(self) -> int:
        value = self.db.get_setting("max_articles_per_feed")
        try:
            return max(int(value), 1)
        except (TypeError, ValueError):
            return int(DEFAULT_SETTINGS["max_articles_per_feed"])

    async def fetch_feed(self, feed_id: str) -> FetchResult:
        """
        Fetch one feed and store entries not seen before.

        Never raises; feed-level failures come back as ``success=False``.
        Individual entries that fail to insert are logged and skipped.
        """
        feed = self.db.get_feed(feed_id)
        if not feed or not feed.is_active:
            return FetchResult(success=False, error="Feed not found or inactive")

        try:
            parsed = await self.feed_parser.fetch(feed.url)
            max_articles = self._max_articles()

            articles_added = 0
            for item in parsed.items[:max_articles]:
                if not item.url or not item.title:
                    continue
                if self.db.article_exists(item.url):
                    continue
                try:
                    article_id = self._store_item(feed_id, feed.category, item)
                except Exception as e:
                    logger.error(f"Failed to store article '{item.title}': {e}")
                    continue
                if article_id:
                    articles_added += 1

            self.db.update_feed_fetched(feed_id)

            try:
                removed = self.db.trim_feed_articles(feed_id, max_articles)
                if removed:
                    logger.debug(f"Trimmed {removed} old articles from feed {feed.name}")
            except Exception as e:
                logger.error(f"Failed to trim old articles for feed {feed.name}: {e}")

            logger.info(f"Fetched feed {feed.name}: {articles_added} new articles")
            return FetchResult(success=True, articles_added=articles_added)

        except Exception as e:
            logger.warning(f"Failed to fetch feed {feed.name} ({feed.url}): {e}")
            return FetchResult(success=False, error=str(e) or type(e).__name__)

    def _store_item(self, feed_id: str, category: str | None, item: "FeedItem") -> str | None:
        content = clean_text(item.content or item.content_snippet or item.title)
        snippet = create_snippet(item.content_snippet or item.content or item.title)
        return self.db.add_article(
            feed_id=feed_id,
            url=item.url,
            title=clean_text(item.title),
            content=content,
            snippet=snippet,
            published_at=item.published or datetime.now(timezone.utc),
            author=item.author or None,
            category=category,
        )

    async def fetch_all_feeds(self) -> None:
        """Fetch every active feed, BATCH_SIZE at a time."""
        feeds = self.db.get_feeds(active_only=True)
        logger.info(f"Refreshing {len(feeds)} active feeds")

        for start in range(0, len(feeds), BATCH_SIZE):
            batch = feeds[start:start + BATCH_SIZE]
            results = await asyncio.gather(
                *(self.fetch_feed(feed.id) for feed in batch),
                return_exceptions=True
            )
            for feed, result in zip(batch, results):
                if isinstance(result, BaseException):
                    logger.error(f"Unexpected error refreshing feed {feed.name}: {result}")
                elif not result.success:
                    logger.warning(f"Feed {feed.name} refresh failed: {result.error}")

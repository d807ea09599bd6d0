"""
Feed service: business logic for feed management operations.

Handles subscription, edits, deletion and manual refresh.
"""

import logging
import sqlite3
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from fastapi import BackgroundTasks, HTTPException

from ..database import Database
from ..database.models import DBFeed
from ..exceptions import APIError, require_feed
from ..fetcher import FetchResult
from ..tasks import fetch_new_feed, refresh_all_feeds

if TYPE_CHECKING:
    from ..fetcher import FeedFetcher

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Uncategorized"


def is_valid_feed_url(url: str) -> bool:
    """True for absolute http(s) URLs with a host."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class FeedService:
    """Service for feed-related business logic."""

    def __init__(
        self,
        db: Database,
        feed_fetcher: "FeedFetcher | None" = None,
    ):
        self.db = db
        self.feed_fetcher = feed_fetcher
        # Import state here to avoid circular imports - used for refresh flag
        from ..config import state
        self._state = state

    # ─────────────────────────────────────────────────────────────
    # Feed Management
    # ─────────────────────────────────────────────────────────────

    def list_feeds(self) -> list[DBFeed]:
        """List all feeds ordered by name."""
        return self.db.get_feeds()

    def get_feed(self, feed_id: str) -> DBFeed:
        return require_feed(self.db.get_feed(feed_id))

    def create_feed(
        self,
        name: str | None,
        url: str | None,
        background_tasks: BackgroundTasks,
        category: str | None = None,
        is_active: bool = True,
    ) -> DBFeed:
        """
        Subscribe to a new feed and schedule its first fetch.

        Raises:
            HTTPException: 400 for missing fields or a malformed URL,
                409 if the URL is already subscribed
        """
        name = (name or "").strip()
        url = (url or "").strip()
        if not name or not url:
            raise APIError(400, "Missing required fields", "Name and URL are required")
        if not is_valid_feed_url(url):
            raise APIError(400, "Invalid URL", "Please provide a valid RSS feed URL")

        if self.db.get_feed_by_url(url):
            raise APIError(409, "Feed already exists", "A feed with this URL already exists")

        try:
            feed_id = self.db.add_feed(name, url, (category or "").strip() or DEFAULT_CATEGORY)
        except sqlite3.IntegrityError:
            raise APIError(409, "Feed already exists", "A feed with this URL already exists")

        if not is_active:
            self.db.update_feed(feed_id, {"is_active": False})
        else:
            # First fetch runs after the response; failures are only logged
            background_tasks.add_task(fetch_new_feed, feed_id)

        db_feed = self.db.get_feed(feed_id)
        if not db_feed:
            raise HTTPException(status_code=500, detail="Failed to retrieve feed")
        return db_feed

    def update_feed(self, feed_id: str, fields: dict) -> DBFeed:
        """
        Patch name, url, category or active flag.

        Raises:
            HTTPException: 404 if missing, 400 for a bad URL, 409 for a taken URL
        """
        require_feed(self.db.get_feed(feed_id))

        if "url" in fields:
            url = (fields["url"] or "").strip()
            if not is_valid_feed_url(url):
                raise APIError(400, "Invalid URL", "Please provide a valid RSS feed URL")
            fields["url"] = url
        for key in ("name", "category"):
            if key in fields:
                value = (fields[key] or "").strip()
                if not value:
                    if key == "name":
                        raise APIError(400, "Invalid name", "Feed name cannot be empty")
                    value = DEFAULT_CATEGORY
                fields[key] = value
        if "is_active" in fields and fields["is_active"] is None:
            del fields["is_active"]

        try:
            updated = self.db.update_feed(feed_id, fields)
        except sqlite3.IntegrityError:
            raise APIError(409, "Feed already exists", "A feed with this URL already exists")
        return require_feed(updated)

    def delete_feed(self, feed_id: str) -> None:
        """Delete a feed and everything hanging off its articles."""
        if not self.db.delete_feed(feed_id):
            require_feed(None)

    # ─────────────────────────────────────────────────────────────
    # Refresh
    # ─────────────────────────────────────────────────────────────

    async def refresh_feed(self, feed_id: str) -> FetchResult:
        """Fetch one feed now and report the outcome."""
        require_feed(self.db.get_feed(feed_id))
        if not self.feed_fetcher:
            raise HTTPException(status_code=500, detail="Feed fetcher not initialized")
        return await self.feed_fetcher.fetch_feed(feed_id)

    def refresh_all(self, background_tasks: BackgroundTasks) -> dict:
        """Queue a refresh of every active feed unless one is already running."""
        if self._state.refresh_in_progress:
            return {"success": True, "message": "Refresh already in progress"}

        self._state.refresh_in_progress = True
        background_tasks.add_task(refresh_all_feeds)
        return {"success": True, "message": "Feed refresh started"}

"""
Feed Parser - Fetch and parse RSS/Atom feeds.

Handles:
- RSS 2.0 and Atom 1.0 formats
- Separate full-content and summary fields per entry
- Publication dates normalized to UTC
"""

import calendar
from dataclasses import dataclass
from datetime import datetime, timezone

import aiohttp
import feedparser

USER_AGENT = "Insight Weaver RSS Reader/1.0"
FETCH_TIMEOUT = 30  # seconds


@dataclass
class FeedItem:
    """Represents a single item/entry from a feed."""
    url: str
    title: str
    author: str | None
    published: datetime | None
    content: str | None         # full body (content:encoded / atom content)
    content_snippet: str | None  # summary / description


@dataclass
class Feed:
    """Represents a parsed feed."""
    url: str
    title: str
    description: str | None
    items: list[FeedItem]
    last_fetched: datetime


class FeedParser:
    """Fetches feed documents over HTTP and parses them with feedparser."""

    def __init__(self, timeout: int = FETCH_TIMEOUT, user_agent: str | None = None):
        self.timeout = timeout
        self.user_agent = user_agent or USER_AGENT

    async def fetch(self, url: str) -> Feed:
        """Fetch and parse a feed URL."""
        headers = {"User-Agent": self.user_agent}

        async with aiohttp.ClientSession() as session:
            async with session.get(
                url,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as resp:
                resp.raise_for_status()
                # Raw bytes so feedparser can honour the XML encoding declaration
                content = await resp.read()

        return self._parse(url, content)

    def _parse(self, url: str, content: str | bytes) -> Feed:
        """Parse feed content using feedparser."""
        parsed = feedparser.parse(content)

        # Check for parse errors
        if parsed.bozo and not parsed.entries:
            raise ValueError(f"Failed to parse feed: {parsed.bozo_exception}")

        items = []
        for entry in parsed.entries:
            full_content = None
            if entry.get("content"):
                full_content = entry.content[0].get("value")

            snippet = entry.get("summary") or entry.get("description")

            items.append(FeedItem(
                url=entry.get("link", ""),
                title=entry.get("title", ""),
                author=entry.get("author"),
                published=_entry_date(entry),
                content=full_content,
                content_snippet=snippet,
            ))

        return Feed(
            url=url,
            title=parsed.feed.get("title", "Unknown Feed"),
            description=parsed.feed.get("description") or parsed.feed.get("subtitle"),
            items=items,
            last_fetched=datetime.now(timezone.utc),
        )


def _entry_date(entry) -> datetime | None:
    """Published date, else updated date, as an aware UTC datetime."""
    for key in ("published_parsed", "updated_parsed"):
        struct = entry.get(key)
        if struct:
            try:
                # feedparser normalizes to UTC struct_time
                return datetime.fromtimestamp(calendar.timegm(struct), tz=timezone.utc)
            except (TypeError, ValueError, OverflowError):
                continue
    return None


def parse_feed_sync(content: str | bytes, url: str = "") -> Feed:
    """
    Synchronous feed parsing (for use when content is already fetched).

    Useful for testing or when you already have the feed content.
    """
    parser = FeedParser()
    return parser._parse(url, content)

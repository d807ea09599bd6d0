"""
Pytest fixtures for weaver tests.
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from weaver.config import state
from weaver.database import Database
from weaver.feeds import Feed, parse_feed_sync
from weaver.fetcher import FeedFetcher
from weaver.providers.base import LLMProvider, LLMResponse, ProviderCapabilities
from weaver.search import JaccardIndex
from weaver.server import app
from weaver.summarizer import Summarizer

STATE_FIELDS = (
    "db",
    "provider",
    "embedding_provider",
    "summarizer",
    "feed_parser",
    "feed_fetcher",
    "search_index",
    "scheduler",
    "refresh_in_progress",
)


def make_rss(items: list[dict], title: str = "Test Feed") -> str:
    """Build an RSS 2.0 document from dicts with title/link/description/pubDate."""
    entries = []
    for item in items:
        parts = [f"<title>{item['title']}</title>"] if item.get("title") else []
        if item.get("link"):
            parts.append(f"<link>{item['link']}</link>")
        if item.get("description"):
            parts.append(f"<description><![CDATA[{item['description']}]]></description>")
        if item.get("pubDate"):
            parts.append(f"<pubDate>{item['pubDate']}</pubDate>")
        if item.get("author"):
            parts.append(f"<author>{item['author']}</author>")
        entries.append(f"<item>{''.join(parts)}</item>")

    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel>'
        f"<title>{title}</title><link>https://example.com</link>"
        "<description>Test feed</description>"
        f"{''.join(entries)}"
        "</channel></rss>"
    )


class StubFeedParser:
    """Serves registered feed documents instead of going to the network."""

    def __init__(self):
        self.documents: dict[str, str] = {}
        self.requests: list[str] = []

    def register(self, url: str, document: str):
        self.documents[url] = document

    async def fetch(self, url: str) -> Feed:
        self.requests.append(url)
        if url not in self.documents:
            raise ValueError(f"HTTP 404 for {url}")
        return parse_feed_sync(self.documents[url], url)


class MockProvider(LLMProvider):
    """Mock LLM provider returning queued responses and bag-of-letters embeddings."""

    def __init__(self, fail: bool = False):
        self.calls: list[dict] = []
        self.responses: list[str] = []
        self.embed_calls: list[str] = []
        self.fail = fail

    @property
    def name(self) -> str:
        return "mock"

    @property
    def capabilities(self) -> ProviderCapabilities:
        return ProviderCapabilities(supports_embeddings=True)

    def queue_response(self, text: str):
        self.responses.append(text)

    def complete(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.0,
    ) -> LLMResponse:
        self.calls.append({
            "user_prompt": user_prompt,
            "system_prompt": system_prompt,
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        if self.fail:
            raise RuntimeError("provider unavailable")
        text = self.responses.pop(0) if self.responses else "- Mock summary point"
        return LLMResponse(text=text, model=model or "mock-model")

    def embed(self, text: str, model: str | None = None) -> list[float]:
        self.embed_calls.append(text)
        if self.fail:
            raise RuntimeError("provider unavailable")
        lowered = text.lower()
        return [float(lowered.count(c)) + 0.1 for c in "abcdefghijklmnopqrstuvwxyz"]


@pytest.fixture
def temp_db_path():
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        yield Path(f.name)
    # Cleanup
    if os.path.exists(f.name):
        os.unlink(f.name)


@pytest.fixture
def test_db(temp_db_path):
    """Create a test database instance."""
    db = Database(temp_db_path)
    yield db


@pytest.fixture
def feed_parser():
    return StubFeedParser()


@pytest.fixture
def mock_provider():
    return MockProvider()


def _install_state(db: Database, feed_parser, summarizer=None, provider=None):
    state.db = db
    state.provider = provider
    state.embedding_provider = provider
    state.summarizer = summarizer
    state.feed_parser = feed_parser
    state.feed_fetcher = FeedFetcher(db, feed_parser)
    state.search_index = JaccardIndex(db)
    state.scheduler = None
    state.refresh_in_progress = False


@pytest.fixture
def saved_state():
    """Snapshot shared app state and restore it afterwards."""
    original = {name: getattr(state, name) for name in STATE_FIELDS}
    yield state
    for name, value in original.items():
        setattr(state, name, value)


@pytest.fixture
def client(test_db, feed_parser, saved_state):
    """Test client with an isolated database and no AI provider."""
    _install_state(test_db, feed_parser)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def ai_client(test_db, feed_parser, mock_provider, saved_state):
    """Test client whose summarizer and embeddings go through MockProvider."""
    summarizer = Summarizer(
        provider=mock_provider,
        db=test_db,
        embedding_provider=mock_provider,
        embedding_model="mock-embedding",
    )
    _install_state(test_db, feed_parser, summarizer=summarizer, provider=mock_provider)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def seed_articles(db: Database) -> dict:
    """One feed with three articles, newest first: trade, climate, elections."""
    feed_id = db.add_feed("World News", "https://example.com/world.xml", "World")
    now = datetime.now(timezone.utc)

    trade_id = db.add_article(
        feed_id=feed_id,
        url="https://example.com/trade",
        title="Global trade talks resume",
        content="Ministers met to discuss trade tariffs and export rules.",
        snippet="Ministers met to discuss trade tariffs.",
        published_at=now,
        category="World",
    )
    climate_id = db.add_article(
        feed_id=feed_id,
        url="https://example.com/climate",
        title="Climate summit opens",
        content="Delegates gathered to negotiate emissions targets.",
        snippet="Delegates gathered to negotiate emissions.",
        published_at=now - timedelta(hours=1),
        category="World",
    )
    election_id = db.add_article(
        feed_id=feed_id,
        url="https://example.com/election",
        title="Election results announced",
        content="Voters chose a new parliament after a close race.",
        snippet="Voters chose a new parliament.",
        published_at=now - timedelta(hours=2),
        category="World",
    )

    return {
        "feed_id": feed_id,
        "trade_id": trade_id,
        "climate_id": climate_id,
        "election_id": election_id,
    }


@pytest.fixture
def client_with_data(client, test_db):
    """Test client with one feed and three articles pre-populated."""
    return client, seed_articles(test_db)


@pytest.fixture
def ai_client_with_data(ai_client, test_db):
    return ai_client, seed_articles(test_db)


@pytest.fixture
def rss():
    """Factory for RSS documents (see ``make_rss``)."""
    return make_rss

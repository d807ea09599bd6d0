"""
Tests for the similarity indexes.
"""

from datetime import datetime, timezone

import pytest

from weaver.search import JaccardIndex, VectorIndex, create_index
from weaver.summarizer import Summarizer

from conftest import MockProvider


def _feed_with(db, articles: list[tuple[str, str, str | None]]) -> list[str]:
    """Add (title, content, category) articles to a fresh feed."""
    feed_id = db.add_feed("Feed", "https://example.com/feed.xml")
    ids = []
    for i, (title, content, category) in enumerate(articles):
        ids.append(db.add_article(
            feed_id=feed_id,
            url=f"https://example.com/{i}",
            title=title,
            content=content,
            snippet=content[:50],
            published_at=datetime(2025, 1, 1 + i, tzinfo=timezone.utc),
            category=category,
        ))
    return ids


class TestJaccardIndex:
    """Tests for word-overlap ranking."""

    @pytest.mark.asyncio
    async def test_title_match_ranks_first(self, test_db):
        ids = _feed_with(test_db, [
            ("Markets today", "Stocks and trade volumes fell.", None),
            ("Trade war escalates", "New tariffs announced.", None),
            ("Weather report", "Sunny skies expected.", None),
        ])

        results = await JaccardIndex(test_db).search("trade")

        assert [r.article_id for r in results] == [ids[1], ids[0]]
        assert results[0].score > results[1].score

    @pytest.mark.asyncio
    async def test_trade_relations_outranks_unrelated(self, test_db):
        ids = _feed_with(test_db, [
            ("US-China Trade Relations", "Tariff negotiations continue.", "Economy"),
            ("Local sports roundup", "The home team won again.", "Sport"),
        ])

        results = await JaccardIndex(test_db).search("trade")

        assert results[0].article_id == ids[0]
        assert ids[1] not in [r.article_id for r in results]

    @pytest.mark.asyncio
    async def test_scores_clamped_and_zeros_dropped(self, test_db):
        _feed_with(test_db, [
            ("trade", "trade", "trade"),
            ("Unrelated", "Nothing here.", None),
        ])

        results = await JaccardIndex(test_db).search("trade")

        assert len(results) == 1
        assert results[0].score == 1.0

    @pytest.mark.asyncio
    async def test_category_boost(self, test_db):
        ids = _feed_with(test_db, [
            ("Alpha", "economy news", "Economy"),
            ("Beta", "economy news", None),
        ])

        results = await JaccardIndex(test_db).search("economy")

        assert results[0].article_id == ids[0]
        assert results[0].score == pytest.approx(results[1].score + 0.1)

    @pytest.mark.asyncio
    async def test_archived_excluded(self, test_db):
        ids = _feed_with(test_db, [("Trade news", "trade", None)])
        test_db.update_article(ids[0], {"is_archived": True})

        assert await JaccardIndex(test_db).search("trade") == []

    @pytest.mark.asyncio
    async def test_find_similar_excludes_self(self, test_db):
        ids = _feed_with(test_db, [
            ("Trade talks", "trade tariffs", None),
            ("More trade talks", "trade tariffs again", None),
        ])
        article = test_db.get_article(ids[0])

        results = await JaccardIndex(test_db).find_similar(article, limit=5)

        assert [r.article_id for r in results] == [ids[1]]


class TestVectorIndex:
    """Tests for cosine search over stored embeddings."""

    @pytest.mark.asyncio
    async def test_nearest_vector_first(self, test_db):
        ids = _feed_with(test_db, [
            ("A", "first", None),
            ("B", "second", None),
        ])
        test_db.save_embedding(ids[0], [1.0, 0.0], "m")
        test_db.save_embedding(ids[1], [0.6, 0.8], "m")

        class FixedProvider(MockProvider):
            def embed(self, text, model=None):
                return [0.0, 1.0]

        provider = FixedProvider()
        summarizer = Summarizer(provider=provider, embedding_provider=provider)

        results = await VectorIndex(test_db, summarizer).search("anything")

        assert [r.article_id for r in results] == [ids[1]]
        assert results[0].score == pytest.approx(0.8)

    @pytest.mark.asyncio
    async def test_no_embeddings(self, test_db):
        provider = MockProvider()
        summarizer = Summarizer(provider=provider, embedding_provider=provider)
        assert await VectorIndex(test_db, summarizer).search("x") == []


class TestCreateIndex:
    """Tests for index selection."""

    def test_default_is_jaccard(self, test_db):
        assert create_index("jaccard", test_db).name == "jaccard"

    def test_vector_needs_embedding_provider(self, test_db):
        assert create_index("vector", test_db, Summarizer(provider=MockProvider())).name == "jaccard"

        provider = MockProvider()
        summarizer = Summarizer(provider=provider, embedding_provider=provider)
        assert create_index("vector", test_db, summarizer).name == "vector"
